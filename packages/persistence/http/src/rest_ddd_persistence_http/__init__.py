"""rest-ddd-persistence-http: REST mapping layer for rest-ddd repositories.

Compiles specifications into prepared statements, renders them (and CRUD
operations) into HTTP requests, pages through results and parses responses
back into models.
"""

from __future__ import annotations

from .adapter import HttpAdapter
from .compiler import QueryDescriptor, StatementCompiler, StatementKeys, camel_case
from .config import HttpConfig
from .errors import classify_error
from .paginator import HttpPaginator, PageState
from .parser import OperationKind, PagedResult, RawResponse, ResponseParser
from .repository import RestRepository
from .request import (
    CrudIntent,
    CrudOperation,
    RequestBuilder,
    RequestDescriptor,
    render_literal,
)
from .statement import Statement
from .transport import HttpxTransport, ITransport

__all__ = [
    # Configuration
    "HttpConfig",
    # Compilation
    "QueryDescriptor",
    "StatementCompiler",
    "StatementKeys",
    "camel_case",
    # Requests
    "CrudIntent",
    "CrudOperation",
    "RequestBuilder",
    "RequestDescriptor",
    "render_literal",
    # Responses
    "OperationKind",
    "PagedResult",
    "RawResponse",
    "ResponseParser",
    "classify_error",
    # Transport
    "ITransport",
    "HttpxTransport",
    # Caller-facing
    "HttpAdapter",
    "HttpPaginator",
    "PageState",
    "RestRepository",
    "Statement",
]
