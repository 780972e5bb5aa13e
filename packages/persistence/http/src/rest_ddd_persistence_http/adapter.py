"""HttpAdapter: compiles, renders, sends and parses REST operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from rest_ddd_core.primitives.exceptions import UnsupportedError

from .compiler import QueryDescriptor, StatementCompiler
from .parser import OperationKind, ResponseParser
from .request import CrudIntent, CrudOperation, RequestBuilder
from .transport import HttpxTransport

if TYPE_CHECKING:
    from .config import HttpConfig
    from .transport import ITransport

logger = logging.getLogger("rest_ddd.http")

Headers = Mapping[str, str] | None


class HttpAdapter:
    """
    Wires the request builder, a transport and the response parser.

    CRUD methods return raw records; hydration into models happens in
    :class:`~rest_ddd_persistence_http.repository.RestRepository`.
    Statements are parsed by the kind their method token resolves to.

    Construct one per backend and pass it to the repositories that use it::

        adapter = HttpAdapter(HttpConfig(host="api.local"))
        repo = RestRepository(adapter, Product)
    """

    def __init__(
        self,
        config: HttpConfig,
        transport: ITransport | None = None,
        *,
        builder: RequestBuilder | None = None,
        parser: ResponseParser | None = None,
        compiler: StatementCompiler | None = None,
    ) -> None:
        self.config = config
        self.transport = transport or HttpxTransport(config)
        self.builder = builder or RequestBuilder(config)
        self.parser = parser or ResponseParser()
        self.compiler = compiler or StatementCompiler()

    async def request(
        self,
        item: CrudIntent | QueryDescriptor,
        kind: OperationKind | str,
        target_type: type[Any] | None = None,
        headers: Headers = None,
    ) -> Any:
        """Build *item*, send it, and parse the response as *kind*."""
        request = self.builder.build(item, headers)
        logger.debug("%s %s", request.method, request.url)
        response = await self.transport.submit(request)
        return self.parser.parse(kind, response, target_type)

    # -- single resource -----------------------------------------------------

    async def create(
        self,
        model_cls: type[Any],
        entity_id: Any,
        record: Mapping[str, Any],
        headers: Headers = None,
    ) -> Any:
        return await self._crud(
            CrudOperation.CREATE, model_cls, entity_id, record, headers
        )

    async def read(
        self, model_cls: type[Any], entity_id: Any, headers: Headers = None
    ) -> Any:
        return await self._crud(CrudOperation.READ, model_cls, entity_id, None, headers)

    async def update(
        self,
        model_cls: type[Any],
        entity_id: Any,
        record: Mapping[str, Any],
        headers: Headers = None,
    ) -> Any:
        return await self._crud(
            CrudOperation.UPDATE, model_cls, entity_id, record, headers
        )

    async def delete(
        self, model_cls: type[Any], entity_id: Any, headers: Headers = None
    ) -> Any:
        return await self._crud(
            CrudOperation.DELETE, model_cls, entity_id, None, headers
        )

    # -- bulk ----------------------------------------------------------------

    async def create_all(
        self,
        model_cls: type[Any],
        records: Sequence[Mapping[str, Any]],
        headers: Headers = None,
    ) -> Any:
        return await self._crud(
            CrudOperation.CREATE_ALL, model_cls, None, list(records), headers
        )

    async def read_all(
        self, model_cls: type[Any], entity_ids: Sequence[Any], headers: Headers = None
    ) -> Any:
        return await self._crud(
            CrudOperation.READ_ALL, model_cls, list(entity_ids), None, headers
        )

    async def update_all(
        self,
        model_cls: type[Any],
        records: Sequence[Mapping[str, Any]],
        headers: Headers = None,
    ) -> Any:
        return await self._crud(
            CrudOperation.UPDATE_ALL, model_cls, None, list(records), headers
        )

    async def delete_all(
        self, model_cls: type[Any], entity_ids: Sequence[Any], headers: Headers = None
    ) -> Any:
        return await self._crud(
            CrudOperation.DELETE_ALL, model_cls, list(entity_ids), None, headers
        )

    # -- statements ----------------------------------------------------------

    async def execute(
        self, descriptor: QueryDescriptor, headers: Headers = None
    ) -> Any:
        """Send a compiled statement; results are hydrated into its target type."""
        return await self.request(
            descriptor, descriptor.method, descriptor.target_type, headers
        )

    async def statement(
        self,
        model_cls: type[Any],
        method: str,
        *args: Any,
        params: Mapping[str, Any] | None = None,
        headers: Headers = None,
    ) -> Any:
        """Run a prepared statement by method token, e.g. ``"findByName"``."""
        descriptor = self.compiler.prepared(model_cls, method, *args, params=params)
        return await self.execute(descriptor, headers)

    async def raw(
        self, query: Any, *args: Any, **kwargs: Any  # noqa: ARG002
    ) -> Any:
        raise UnsupportedError(
            "Raw queries are not available over HTTP; use prepared statements"
        )

    async def sequence(
        self, name: str, *args: Any, **kwargs: Any  # noqa: ARG002
    ) -> Any:
        raise UnsupportedError("Sequences are not available over HTTP")

    # -- lifecycle -----------------------------------------------------------

    async def aclose(self) -> None:
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> HttpAdapter:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- internals -----------------------------------------------------------

    async def _crud(
        self,
        operation: CrudOperation,
        model_cls: type[Any],
        entity_id: Any,
        record: Any,
        headers: Headers,
    ) -> Any:
        intent = CrudIntent(
            operation=operation, target_type=model_cls, id=entity_id, record=record
        )
        return await self.request(intent, operation.value, None, headers)
