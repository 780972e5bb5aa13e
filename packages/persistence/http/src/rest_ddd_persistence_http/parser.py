"""Response parser: raw HTTP responses to typed results."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import ValidationError as PydanticValidationError

from rest_ddd_core.primitives.exceptions import SerializationError

from .errors import classify_error

logger = logging.getLogger("rest_ddd.http")

T = TypeVar("T")


class OperationKind(str, Enum):
    """Closed set of operation categories a response is parsed as."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_ALL = "createAll"
    READ_ALL = "readAll"
    UPDATE_ALL = "updateAll"
    DELETE_ALL = "deleteAll"
    FIND = "find"
    FIND_BY = "findBy"
    LIST_BY = "listBy"
    FIND_ONE_BY = "findOneBy"
    PAGE = "page"
    PAGE_BY = "pageBy"
    COUNT_OF = "countOf"
    MAX_OF = "maxOf"
    MIN_OF = "minOf"
    AVG_OF = "avgOf"
    SUM_OF = "sumOf"
    DISTINCT_OF = "distinctOf"
    GROUP_OF = "groupOf"

    @classmethod
    def resolve(cls, token: OperationKind | str) -> OperationKind | None:
        """Match *token* to the kind with the longest known prefix.

        ``"findByAgeBigger"`` resolves to ``FIND_BY``; ``"createAll"`` to
        ``CREATE_ALL``. Returns ``None`` for tokens no kind prefixes.
        """
        if isinstance(token, cls):
            return token
        best: OperationKind | None = None
        for kind in cls:
            if token.startswith(kind.value) and (
                best is None or len(kind.value) > len(best.value)
            ):
                best = kind
        return best


@dataclass(frozen=True)
class RawResponse:
    """Decoded transport response."""

    status: int
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of a paged envelope ``{current, total, count, data}``."""

    current: int
    total: int
    count: int
    data: list[T]
    bookmark: Any = None


def hydrate(target_type: type[Any] | None, record: Any) -> Any:
    """Build a model from a record; records pass through without a type.

    Pydantic models are validated with ``model_validate``; any other class
    is called with the record's fields as keyword arguments.
    """
    if target_type is None or record is None or isinstance(record, target_type):
        return record
    try:
        validate = getattr(target_type, "model_validate", None)
        if validate is not None:
            return validate(record)
        if not isinstance(record, Mapping):
            raise TypeError(f"expected a mapping, got {type(record).__name__}")
        return target_type(**record)
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise SerializationError(
            f"Cannot build {target_type.__name__} from record: {e}"
        ) from e


def _hydrate_list(target_type: type[Any] | None, body: Any) -> list[Any]:
    if body is None:
        return []
    if not isinstance(body, list):
        raise SerializationError(
            f"Expected a list of records, got {type(body).__name__}"
        )
    return [hydrate(target_type, item) for item in body]


def _passthrough(body: Any, target_type: type[Any] | None) -> Any:  # noqa: ARG001
    return body


def _records(body: Any, target_type: type[Any] | None) -> Any:
    if isinstance(body, dict):
        # statements with a groupBy clause answer with a grouped mapping
        return _grouped(body, target_type)
    return _hydrate_list(target_type, body)


def _single_record(body: Any, target_type: type[Any] | None) -> Any:
    return hydrate(target_type, body)


def _page(body: Any, target_type: type[Any] | None) -> PagedResult[Any]:
    if isinstance(body, list):
        data = _hydrate_list(target_type, body)
        return PagedResult(current=1, total=1, count=len(data), data=data)
    if not isinstance(body, dict):
        raise SerializationError(
            f"Expected a paged envelope, got {type(body).__name__}"
        )
    data = _hydrate_list(target_type, body.get("data"))
    return PagedResult(
        current=int(body.get("current", 1)),
        total=int(body.get("total", 1)),
        count=int(body.get("count", len(data))),
        data=data,
        bookmark=body.get("bookmark"),
    )


def _grouped(body: Any, target_type: type[Any] | None) -> dict[Any, Any]:
    if not isinstance(body, dict):
        raise SerializationError(
            f"Expected a grouped mapping, got {type(body).__name__}"
        )
    return {
        key: _hydrate_list(target_type, value) if isinstance(value, list) else value
        for key, value in body.items()
    }


_DISPATCH: dict[OperationKind, Callable[[Any, type[Any] | None], Any]] = {
    OperationKind.CREATE: _passthrough,
    OperationKind.READ: _passthrough,
    OperationKind.UPDATE: _passthrough,
    OperationKind.DELETE: _passthrough,
    OperationKind.CREATE_ALL: _passthrough,
    OperationKind.READ_ALL: _passthrough,
    OperationKind.UPDATE_ALL: _passthrough,
    OperationKind.DELETE_ALL: _passthrough,
    OperationKind.FIND: _records,
    OperationKind.FIND_BY: _records,
    OperationKind.LIST_BY: _records,
    OperationKind.FIND_ONE_BY: _single_record,
    OperationKind.PAGE: _page,
    OperationKind.PAGE_BY: _page,
    OperationKind.COUNT_OF: _passthrough,
    OperationKind.MAX_OF: _passthrough,
    OperationKind.MIN_OF: _passthrough,
    OperationKind.AVG_OF: _passthrough,
    OperationKind.SUM_OF: _passthrough,
    OperationKind.DISTINCT_OF: _passthrough,
    OperationKind.GROUP_OF: _grouped,
}

_unhandled = set(OperationKind) - set(_DISPATCH)
if _unhandled:  # pragma: no cover
    raise RuntimeError(
        f"ResponseParser has no handler for {sorted(k.value for k in _unhandled)}"
    )


def _error_message(body: Any) -> str:
    if isinstance(body, dict):
        parts = [
            str(body[key]) for key in ("error", "message", "detail") if body.get(key)
        ]
        return ": ".join(parts) if parts else str(body)
    if body is None:
        return ""
    return str(body)


def _embedded_status(body: Any) -> int | None:
    if isinstance(body, dict):
        status = body.get("status")
        if isinstance(status, int) and not isinstance(status, bool) and status >= 400:
            return status
    return None


class ResponseParser:
    """Turns a :class:`RawResponse` into the result for an operation kind.

    Non-success responses (or bodies embedding a ``status`` >= 400) are
    classified and raised. Parsing is pure: the same response parsed twice
    under the same kind yields equal results.
    """

    def parse(
        self,
        kind: OperationKind | str,
        response: RawResponse,
        target_type: type[Any] | None = None,
    ) -> Any:
        self.raise_for_status(response)
        resolved = OperationKind.resolve(kind)
        if resolved is None:
            return response.body
        return _DISPATCH[resolved](response.body, target_type)

    @staticmethod
    def raise_for_status(response: RawResponse) -> None:
        embedded = _embedded_status(response.body)
        if response.ok and embedded is None:
            return
        status = embedded if response.ok else response.status
        message = _error_message(response.body) or f"HTTP {status}"
        error = classify_error(message, status=status)
        logger.warning(
            "Backend returned %s (%s): %s", status, error.token, message
        )
        raise error
