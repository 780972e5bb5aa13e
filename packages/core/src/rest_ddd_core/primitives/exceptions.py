"""Error hierarchy shared by every rest-ddd package.

Each concrete class carries a ``token``: the name a remote backend uses for
the same failure in its error payloads. Classification of remote failures
scans for these tokens (see ``rest_ddd_persistence_http.errors``).
"""

from __future__ import annotations

from typing import Any, ClassVar


class RestDDDError(Exception):
    """Root exception for the entire rest-ddd toolkit."""

    token: ClassVar[str] = "InternalError"
    status: ClassVar[int | None] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.token,
            "message": str(self),
        }


class DomainError(RestDDDError):
    """Base class for errors about the state of the persisted data."""


class NotFoundError(DomainError):
    """Raised when a resource is not found."""

    token = "NotFoundError"
    status = 404


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class ConflictError(DomainError):
    """Raised when the backend rejects a write that clashes with stored state."""

    token = "ConflictError"
    status = 409


class ValidationError(DomainError):
    """Raised when a request or a record is malformed.

    Carries structured errors: ``{field: [messages]}``.
    """

    token = "ValidationError"
    status = 400

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(
            errors if isinstance(errors, str) else str(self.errors)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.token,
            "message": str(self),
            "errors": self.errors,
        }


class QueryError(RestDDDError):
    """Raised when a query cannot be compiled or is rejected by the backend."""

    token = "QueryError"


class PagingError(QueryError):
    """Raised when a page request is invalid."""

    token = "PagingError"


class UnsupportedError(RestDDDError):
    """Raised when an operation is not available for this backend."""

    token = "UnsupportedError"
    status = 501


class MigrationError(RestDDDError):
    """Raised when the backend reports a schema migration failure."""

    token = "MigrationError"


class ObserverError(RestDDDError):
    """Raised when the backend reports an observer/notification failure."""

    token = "ObserverError"


class AuthorizationError(RestDDDError):
    """Raised when the caller is not authenticated."""

    token = "AuthorizationError"
    status = 401


class ForbiddenError(AuthorizationError):
    """Raised when the caller is authenticated but not allowed."""

    token = "ForbiddenError"
    status = 403


class InfrastructureError(RestDDDError):
    """Base class for all infrastructure-related errors."""


class BackendConnectionError(InfrastructureError):
    """Raised when the backend cannot be reached."""

    token = "ConnectionError"
    status = 503


class SerializationError(InfrastructureError):
    """Raised when a record cannot be encoded or decoded."""

    token = "SerializationError"


class InternalError(InfrastructureError):
    """Fallback for failures that match no known classification."""

    token = "InternalError"
    status = 500
