"""Request builder: CRUD intents and prepared statements to HTTP requests."""

from __future__ import annotations

import datetime
import json
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

from rest_ddd_core.domain.model import to_kebab_case
from rest_ddd_core.primitives.exceptions import SerializationError

from .compiler import QueryDescriptor

if TYPE_CHECKING:
    from .config import HttpConfig

STATEMENT_SEGMENT = "statement"
BULK_SEGMENT = "bulk"


class CrudOperation(str, Enum):
    """Single-resource and bulk CRUD operations."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_ALL = "createAll"
    READ_ALL = "readAll"
    UPDATE_ALL = "updateAll"
    DELETE_ALL = "deleteAll"

    @property
    def is_bulk(self) -> bool:
        return self.value.endswith("All")

    @property
    def verb(self) -> str:
        return _VERBS[self]

    @property
    def has_body(self) -> bool:
        return self in _WITH_BODY


_VERBS: dict[CrudOperation, str] = {
    CrudOperation.CREATE: "POST",
    CrudOperation.READ: "GET",
    CrudOperation.UPDATE: "PUT",
    CrudOperation.DELETE: "DELETE",
    CrudOperation.CREATE_ALL: "POST",
    CrudOperation.READ_ALL: "GET",
    CrudOperation.UPDATE_ALL: "PUT",
    CrudOperation.DELETE_ALL: "DELETE",
}

_WITH_BODY = frozenset(
    {
        CrudOperation.CREATE,
        CrudOperation.UPDATE,
        CrudOperation.CREATE_ALL,
        CrudOperation.UPDATE_ALL,
    }
)


@dataclass(frozen=True)
class CrudIntent:
    """A CRUD operation against one model type.

    ``id`` is a single id for single-resource operations and a list of ids
    for ``READ_ALL`` / ``DELETE_ALL``. ``record`` is the JSON-ready payload
    (a list of records for ``CREATE_ALL`` / ``UPDATE_ALL``).
    """

    operation: CrudOperation
    target_type: type[Any]
    id: Any = None
    record: Any = None


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully rendered HTTP request, ready for a transport."""

    url: str
    method: str
    body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


def render_literal(value: Any) -> str:
    """Render a literal the same way every time it is sent."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return render_literal(value.value)
    if isinstance(value, datetime.date | datetime.time):
        return value.isoformat()
    if isinstance(value, list | tuple | set | frozenset):
        items = sorted(value, key=str) if isinstance(value, set | frozenset) else value
        return ",".join(render_literal(v) for v in items)
    return str(value)


def resource_name(target_type: type[Any]) -> str:
    """Kebab-cased resource for a model class (``TestModel`` -> ``test-model``)."""
    table_name = getattr(target_type, "table_name", None)
    return to_kebab_case(table_name() if table_name else target_type.__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime.date | datetime.time):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, uuid.UUID):
        return str(value)
    if hasattr(value, "to_record"):
        return value.to_record()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_body(payload: Any) -> str:
    try:
        return json.dumps(payload, separators=(",", ":"), default=_json_default)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode request body: {e}") from e


class RequestBuilder:
    """Renders :class:`CrudIntent` and :class:`QueryDescriptor` objects.

    Output depends only on the input and the configuration: building the
    same descriptor twice yields equal :class:`RequestDescriptor` objects.
    """

    def __init__(self, config: HttpConfig) -> None:
        self.config = config

    def build(
        self,
        item: CrudIntent | QueryDescriptor,
        headers: Mapping[str, str] | None = None,
    ) -> RequestDescriptor:
        if isinstance(item, CrudIntent):
            url, method, body = self._crud(item)
        elif isinstance(item, QueryDescriptor):
            url, method, body = self._statement(item)
        else:
            raise TypeError(
                f"Cannot build a request from {type(item).__name__}; "
                "expected CrudIntent or QueryDescriptor"
            )
        return RequestDescriptor(
            url=url,
            method=method,
            body=body,
            headers=self._headers(headers, has_body=body is not None),
        )

    def url(
        self,
        target_type: type[Any],
        segments: list[Any] | tuple[Any, ...] = (),
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """``base_url/resource/seg1/seg2?k=v``; each segment encoded alone."""
        path = "/".join(
            [resource_name(target_type)]
            + [quote(render_literal(s), safe=",") for s in segments]
        )
        url = f"{self.config.base_url}/{path}"
        query = self._query(params)
        return f"{url}?{query}" if query else url

    # -- internals -----------------------------------------------------------

    def _crud(self, intent: CrudIntent) -> tuple[str, str, str | None]:
        op = CrudOperation(intent.operation)
        segments: list[Any] = []
        params: dict[str, Any] = {}
        if op.is_bulk:
            segments.append(BULK_SEGMENT)
            if not op.has_body and intent.id is not None:
                params["ids"] = list(intent.id)
        elif intent.id is not None:
            metadata = getattr(intent.target_type, "metadata", None)
            segments.extend(
                metadata().split_id(intent.id) if metadata else [intent.id]
            )
        body = encode_body(intent.record) if op.has_body else None
        return self.url(intent.target_type, segments, params), op.verb, body

    def _statement(self, descriptor: QueryDescriptor) -> tuple[str, str, None]:
        segments = [STATEMENT_SEGMENT, descriptor.method, *descriptor.args]
        url = self.url(descriptor.target_type, segments, descriptor.params)
        return url, "GET", None

    @staticmethod
    def _query(params: Mapping[str, Any] | None) -> str:
        if not params:
            return ""
        pairs = [(k, render_literal(v)) for k, v in params.items() if v is not None]
        return urlencode(pairs, safe=",", quote_via=quote)

    def _headers(
        self, headers: Mapping[str, str] | None, *, has_body: bool
    ) -> dict[str, str]:
        merged = dict(self.config.headers)
        if headers:
            merged.update(headers)
        if has_body:
            merged.setdefault("Content-Type", "application/json")
        return merged
