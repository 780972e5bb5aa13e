"""RestRepository[T]: generic repository over a REST backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from rest_ddd_core.domain.model import Model
from rest_ddd_core.ports.repository import IRepository
from rest_ddd_specifications.ast import AttributeSpecification
from rest_ddd_specifications.operators import SpecificationOperator
from rest_ddd_specifications.query_options import QueryOptions

from .compiler import StatementKeys, camel_case
from .paginator import HttpPaginator
from .statement import Statement

if TYPE_CHECKING:
    from rest_ddd_core.domain.specification import ISpecification

    from .adapter import HttpAdapter
    from .compiler import QueryDescriptor

T = TypeVar("T", bound=Model)


class RestRepository(IRepository[T], Generic[T]):
    """
    Repository over a keyed-resource REST backend.

    CRUD results are hydrated into ``model_cls``; statements are compiled
    from specifications and sent as prepared statements::

        repo = RestRepository(adapter, Product)
        cheap = await repo.query(
            SpecificationBuilder().where("price", "<", 10).build(),
            QueryOptions(order_by=("name",)),
        )
    """

    def __init__(self, adapter: HttpAdapter, model_cls: type[T]) -> None:
        self.adapter = adapter
        self.model_cls = model_cls

    # -- CRUD ------------------------------------------------------------------

    async def create(self, model: T) -> T:
        record = await self.adapter.create(self.model_cls, model.pk, model.to_record())
        return self._hydrate(record)

    async def read(self, entity_id: Any) -> T:
        return self._hydrate(await self.adapter.read(self.model_cls, entity_id))

    async def update(self, model: T) -> T:
        record = await self.adapter.update(self.model_cls, model.pk, model.to_record())
        return self._hydrate(record)

    async def delete(self, entity_id: Any) -> T:
        return self._hydrate(await self.adapter.delete(self.model_cls, entity_id))

    async def create_all(self, models: list[T]) -> list[T]:
        records = await self.adapter.create_all(
            self.model_cls, [m.to_record() for m in models]
        )
        return self._hydrate_all(records)

    async def read_all(self, entity_ids: list[Any]) -> list[T]:
        return self._hydrate_all(
            await self.adapter.read_all(self.model_cls, entity_ids)
        )

    async def update_all(self, models: list[T]) -> list[T]:
        records = await self.adapter.update_all(
            self.model_cls, [m.to_record() for m in models]
        )
        return self._hydrate_all(records)

    async def delete_all(self, entity_ids: list[Any]) -> list[T]:
        return self._hydrate_all(
            await self.adapter.delete_all(self.model_cls, entity_ids)
        )

    # -- queries ---------------------------------------------------------------

    async def query(
        self,
        criteria: ISpecification | QueryOptions | None = None,
        options: QueryOptions | None = None,
    ) -> list[T] | dict[Any, list[T]]:
        """Run a specification (optionally shaped by ``options``).

        A ``group_by`` option yields a mapping of group key to models.
        """
        return await self.adapter.execute(self._compile(criteria, options))

    async def find_by(self, attr: str, value: Any) -> list[T]:
        """``findBy<Attr>`` with a single equality argument."""
        spec = AttributeSpecification(attr, SpecificationOperator.EQ, value)
        return await self.adapter.execute(
            self.adapter.compiler.compile(self.model_cls, spec)
        )

    async def find_one_by(self, attr: str, value: Any) -> T | None:
        self.adapter.compiler.check_fields(self.model_cls, [attr])
        return await self.adapter.statement(
            self.model_cls, camel_case([StatementKeys.FIND_ONE_BY.value, attr]), value
        )

    async def list_by(self, attr: str, direction: str = "asc") -> list[T]:
        """All records ordered by ``attr`` (``listBy<Attr>``)."""
        self.adapter.compiler.check_fields(self.model_cls, [attr])
        return await self.adapter.statement(
            self.model_cls,
            camel_case([StatementKeys.LIST_BY.value, attr]),
            params={"direction": direction},
        )

    def select(self, *fields: str) -> Statement[T]:
        return Statement(self.adapter, self.model_cls, fields)

    async def paginate(
        self,
        criteria: ISpecification | QueryOptions | None = None,
        options: QueryOptions | None = None,
        *,
        size: int = 10,
    ) -> HttpPaginator[T]:
        return HttpPaginator(self.adapter, self._compile(criteria, options), size)

    # -- aggregations ------------------------------------------------------------

    async def count_of(self, field: str | None = None) -> Any:
        return await self._aggregate(StatementKeys.COUNT_OF, field)

    async def max_of(self, field: str) -> Any:
        return await self._aggregate(StatementKeys.MAX_OF, field)

    async def min_of(self, field: str) -> Any:
        return await self._aggregate(StatementKeys.MIN_OF, field)

    async def avg_of(self, field: str) -> Any:
        return await self._aggregate(StatementKeys.AVG_OF, field)

    async def sum_of(self, field: str) -> Any:
        return await self._aggregate(StatementKeys.SUM_OF, field)

    async def distinct_of(self, field: str) -> list[Any]:
        return await self._aggregate(StatementKeys.DISTINCT_OF, field)

    async def group_of(self, field: str) -> dict[Any, list[T]]:
        return await self._aggregate(StatementKeys.GROUP_OF, field)

    # -- internals ---------------------------------------------------------------

    async def _aggregate(self, key: StatementKeys, field: str | None) -> Any:
        descriptor = self.adapter.compiler.aggregate(self.model_cls, key, field)
        return await self.adapter.execute(descriptor)

    def _compile(
        self,
        criteria: ISpecification | QueryOptions | None,
        options: QueryOptions | None,
    ) -> QueryDescriptor:
        if isinstance(criteria, QueryOptions):
            options = criteria if options is None else criteria.merge(options)
            criteria = None
        base = QueryOptions(specification=criteria)
        if options is not None:
            base = base.merge(options)
        return self.adapter.compiler.compile_options(self.model_cls, base)

    def _hydrate(self, record: Any) -> T:
        return self.model_cls.from_record(record)

    def _hydrate_all(self, records: Any) -> list[T]:
        return [self._hydrate(r) for r in records or []]
