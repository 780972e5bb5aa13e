"""rest-ddd-core: Foundation package for the rest-ddd toolkit.

Models with persistence metadata, the repository port, correlation context
and the shared error hierarchy.
"""

from __future__ import annotations

from .correlation import (
    correlation_scope,
    generate_correlation_id,
    get_causation_id,
    get_correlation_id,
    set_causation_id,
    set_correlation_id,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import ISpecification, Model, ModelMetadata, to_kebab_case

# ── Ports ────────────────────────────────────────────────────────
from .ports import IRepository

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
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
    # Correlation
    "correlation_scope",
    "generate_correlation_id",
    "get_causation_id",
    "get_correlation_id",
    "set_causation_id",
    "set_correlation_id",
    # Domain
    "ISpecification",
    "Model",
    "ModelMetadata",
    "to_kebab_case",
    # Ports
    "IRepository",
    # Exceptions
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
