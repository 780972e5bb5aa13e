"""IRepository: generic repository protocol."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from ..domain.model import Model

T = TypeVar("T", bound=Model)


@runtime_checkable
class IRepository(Protocol[T]):
    """
    Generic Repository interface over a keyed-resource backend.

    Single-instance CRUD returns hydrated models; the ``*_all`` variants
    operate on lists in one round-trip. Structured queries go through
    ``query``, which accepts an ``ISpecification`` and optional
    ``QueryOptions``::

        adults = await repo.query(
            SpecificationBuilder().where("age", ">=", 18).build(),
            QueryOptions(order_by=("name",), limit=20),
        )
    """

    async def create(self, model: T) -> T: ...

    async def read(self, entity_id: Any) -> T: ...

    async def update(self, model: T) -> T: ...

    async def delete(self, entity_id: Any) -> T: ...

    async def create_all(self, models: list[T]) -> list[T]: ...

    async def read_all(self, entity_ids: list[Any]) -> list[T]: ...

    async def update_all(self, models: list[T]) -> list[T]: ...

    async def delete_all(self, entity_ids: list[Any]) -> list[T]: ...

    async def query(self, criteria: Any = None, options: Any = None) -> Any: ...
