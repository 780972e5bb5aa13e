"""Classification of backend failures into the rest-ddd error hierarchy."""

from __future__ import annotations

from typing import Any

from rest_ddd_core.primitives.exceptions import (
    AuthorizationError,
    BackendConnectionError,
    ConflictError,
    ForbiddenError,
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

# Scan order matters: the first token found in the message wins.
_TOKEN_ORDER: tuple[tuple[tuple[str, ...], type[RestDDDError]], ...] = (
    (("NotFound",), NotFoundError),
    (("Conflict",), ConflictError),
    (("Validation", "BadRequest"), ValidationError),
    (("QueryError",), QueryError),
    (("PagingError",), PagingError),
    (("Unsupported",), UnsupportedError),
    (("Migration",), MigrationError),
    (("Observer",), ObserverError),
    (("Authorization",), AuthorizationError),
    (("Forbidden",), ForbiddenError),
    (("Connection",), BackendConnectionError),
    (("Serialization",), SerializationError),
)

_STATUS_MAP: dict[int, type[RestDDDError]] = {
    400: ValidationError,
    401: AuthorizationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    501: UnsupportedError,
    502: BackendConnectionError,
    503: BackendConnectionError,
    504: BackendConnectionError,
}


def error_type_for_status(status: int | None) -> type[RestDDDError] | None:
    """Return the error class mapped to an HTTP status, if any."""
    if status is None:
        return None
    return _STATUS_MAP.get(status)


def error_type_for_message(message: str) -> type[RestDDDError] | None:
    """Scan *message* for known tokens; the first token found wins."""
    for tokens, error_type in _TOKEN_ORDER:
        if any(token in message for token in tokens):
            return error_type
    return None


def classify_error(
    source: BaseException | int | str | Any,
    *,
    status: int | None = None,
    message: str | None = None,
) -> RestDDDError:
    """
    Map a backend failure onto the rest-ddd error hierarchy.

    *source* may be an exception, an HTTP status code, or a message/payload.
    The text is scanned for known tokens first; a status code (positional
    or keyword) is consulted only when no token matches, and
    ``InternalError`` is the fallback. Errors that are already classified
    are returned unchanged. The original message is preserved and a source
    exception is chained as ``__cause__``.
    """
    if isinstance(source, RestDDDError):
        return source

    cause: BaseException | None = None
    if isinstance(source, BaseException):
        cause = source
        text = message or str(source) or type(source).__name__
        haystack = f"{type(source).__name__} {text}"
    elif isinstance(source, int) and not isinstance(source, bool):
        status = source if status is None else status
        text = message or f"HTTP {source}"
        haystack = text
    else:
        text = message or str(source)
        haystack = text

    error_type = (
        error_type_for_message(haystack)
        or error_type_for_status(status)
        or InternalError
    )
    error = error_type(text)
    if cause is not None:
        error.__cause__ = cause
    return error
