"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    AuthorizationError,
    BackendConnectionError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    ForbiddenError,
    InfrastructureError,
    InternalError,
    MigrationError,
    NotFoundError,
    ObserverError,
    PagingError,
    QueryError,
    RestDDDError,
    SerializationError,
    UnsupportedError,
    ValidationError,
)

__all__ = [
    "AuthorizationError",
    "BackendConnectionError",
    "ConflictError",
    "DomainError",
    "EntityNotFoundError",
    "ForbiddenError",
    "InfrastructureError",
    "InternalError",
    "MigrationError",
    "NotFoundError",
    "ObserverError",
    "PagingError",
    "QueryError",
    "RestDDDError",
    "SerializationError",
    "UnsupportedError",
    "ValidationError",
]
