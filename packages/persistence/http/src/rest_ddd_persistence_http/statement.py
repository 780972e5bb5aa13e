"""Fluent statement builder bound to a model type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .paginator import HttpPaginator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rest_ddd_core.domain.specification import ISpecification

    from .adapter import HttpAdapter
    from .compiler import QueryDescriptor

T = TypeVar("T")


class Statement(Generic[T]):
    """
    Fluent query over one model type.

    Example::

        adults = await (
            repo.select("name", "age")
            .where(SpecificationBuilder().where("age", ">=", 18).build())
            .order_by("-age")
            .limit(20)
            .execute()
        )
    """

    def __init__(
        self,
        adapter: HttpAdapter,
        model_cls: type[T],
        fields: tuple[str, ...] = (),
    ) -> None:
        self.adapter = adapter
        self.model_cls = model_cls
        self._select: tuple[str, ...] = tuple(fields)
        self._where: ISpecification | None = None
        self._order_by: tuple[str, ...] = ()
        self._group_by: str | None = None
        self._limit: int | None = None
        self._offset: int | None = None

    def select(self, *fields: str) -> Statement[T]:
        self._select = tuple(fields)
        return self

    def where(self, condition: ISpecification) -> Statement[T]:
        self._where = condition
        return self

    def order_by(self, *fields: str) -> Statement[T]:
        """Order by *fields*; prefix a field with ``-`` for descending."""
        self._order_by = tuple(fields)
        return self

    def group_by(self, field: str) -> Statement[T]:
        self._group_by = field
        return self

    def limit(self, value: int) -> Statement[T]:
        self._limit = value
        return self

    def offset(self, value: int) -> Statement[T]:
        self._offset = value
        return self

    def build(self) -> QueryDescriptor:
        return self.adapter.compiler.compile(
            self.model_cls,
            self._where,
            select=self._select or None,
            order_by=self._order_by or None,
            group_by=self._group_by,
            limit=self._limit,
            offset=self._offset,
        )

    async def execute(self, headers: Mapping[str, str] | None = None) -> Any:
        return await self.adapter.execute(self.build(), headers)

    async def paginate(self, size: int = 10) -> HttpPaginator[T]:
        return HttpPaginator(self.adapter, self.build(), size)
