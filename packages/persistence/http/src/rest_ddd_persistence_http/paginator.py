"""Offset paginator over prepared ``findBy`` / ``listBy`` statements."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from rest_ddd_core.primitives.exceptions import PagingError, UnsupportedError

from .compiler import QueryDescriptor, StatementKeys
from .parser import OperationKind, PagedResult

if TYPE_CHECKING:
    from .adapter import HttpAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PAGEABLE = re.compile(
    rf"^({StatementKeys.FIND_BY.value}|{StatementKeys.LIST_BY.value}"
    rf"|{StatementKeys.PAGE_BY.value})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PageState:
    """Position of a paginator. Advancing produces a new state.

    Attributes:
        descriptor: The original (unpaged) statement.
        size: Page size.
        current_page: Last page fetched; ``0`` before the first fetch.
        bookmark: Opaque continuation token returned by the backend.
        total: Total number of pages reported by the backend.
        count: Total number of records reported by the backend.
    """

    descriptor: QueryDescriptor
    size: int
    current_page: int = 0
    bookmark: Any = None
    total: int | None = None
    count: int | None = None


def prepare(descriptor: QueryDescriptor) -> QueryDescriptor:
    """Turn a ``findBy`` / ``listBy`` statement into its ``pageBy`` form."""
    if not _PAGEABLE.match(descriptor.method):
        raise UnsupportedError(
            f"Method {descriptor.method} is not supported for pagination"
        )
    return descriptor.with_method(
        _PAGEABLE.sub(StatementKeys.PAGE_BY.value, descriptor.method, count=1)
    )


def page_params(state: PageState, page: int) -> dict[str, Any]:
    """Named params for fetching *page* from *state*."""
    if page < 1:
        raise PagingError(f"Page number must be >= 1, got {page}")
    params: dict[str, Any] = {}
    direction = state.descriptor.params.get("direction")
    if direction is not None:
        params["direction"] = direction
    params["limit"] = state.size
    params["offset"] = (page - 1) * state.size + 1
    # a bookmark only continues from the page it was issued with
    if state.bookmark is not None and page == state.current_page + 1:
        params["bookmark"] = state.bookmark
    return params


class HttpPaginator(Generic[T]):
    """
    Fetches pages of a statement one request at a time.

    ``advance`` is the pure step: it never touches the paginator's own
    state. ``page`` / ``next`` / ``previous`` call it and keep the result.
    Calls on one instance must not overlap.

    Example::

        paginator = HttpPaginator(adapter, descriptor, size=20)
        first = await paginator.page()
        while first:
            ...
            first = await paginator.next()
    """

    def __init__(
        self, adapter: HttpAdapter, descriptor: QueryDescriptor, size: int = 10
    ) -> None:
        if size < 1:
            raise PagingError(f"Page size must be >= 1, got {size}")
        self.adapter = adapter
        self.paged = prepare(descriptor)
        self.state = PageState(descriptor=descriptor, size=size)

    @property
    def size(self) -> int:
        return self.state.size

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def total(self) -> int | None:
        return self.state.total

    @property
    def count(self) -> int | None:
        return self.state.count

    async def advance(self, state: PageState, page: int) -> tuple[PageState, list[T]]:
        """Fetch *page* relative to *state* and return ``(new_state, data)``."""
        params = page_params(state, page)
        descriptor = self.paged.with_params(params)
        logger.debug(
            "Fetching page %d of %s (limit=%d, offset=%d)",
            page,
            descriptor.method,
            params["limit"],
            params["offset"],
        )
        result: PagedResult[T] = await self.adapter.request(
            descriptor, OperationKind.PAGE_BY, descriptor.target_type
        )
        new_state = replace(
            state,
            current_page=page,
            bookmark=result.bookmark,
            total=result.total,
            count=result.count,
        )
        return new_state, result.data

    async def page(self, page: int = 1) -> list[T]:
        self.state, data = await self.advance(self.state, page)
        return data

    async def next(self) -> list[T]:
        return await self.page(self.state.current_page + 1)

    async def previous(self) -> list[T]:
        if self.state.current_page <= 1:
            raise PagingError("Already at the first page")
        return await self.page(self.state.current_page - 1)
