from __future__ import annotations

import pytest

from rest_ddd_core.primitives.exceptions import (
    AuthorizationError,
    BackendConnectionError,
    EntityNotFoundError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    PagingError,
    QueryError,
    RestDDDError,
    ValidationError,
)


def test_entity_not_found_message() -> None:
    err = EntityNotFoundError("Order", "o-1")
    assert isinstance(err, NotFoundError)
    assert str(err) == "Order with id='o-1' not found"
    assert err.to_dict() == {"error": "NotFoundError", "message": str(err)}


def test_validation_error_from_string() -> None:
    err = ValidationError("bad input")
    assert err.errors == {"__root__": ["bad input"]}
    assert str(err) == "bad input"
    assert err.to_dict()["errors"] == {"__root__": ["bad input"]}


def test_validation_error_from_mapping() -> None:
    err = ValidationError({"name": ["required"]})
    assert err.errors == {"name": ["required"]}
    assert err.status == 400


@pytest.mark.parametrize(
    ("exc_type", "token", "status"),
    [
        (PagingError, "PagingError", None),
        (ForbiddenError, "ForbiddenError", 403),
        (AuthorizationError, "AuthorizationError", 401),
        (BackendConnectionError, "ConnectionError", 503),
        (InternalError, "InternalError", 500),
    ],
)
def test_tokens_and_statuses(exc_type: type[RestDDDError], token: str, status) -> None:
    assert exc_type.token == token
    assert exc_type.status == status


def test_hierarchy() -> None:
    assert issubclass(PagingError, QueryError)
    assert issubclass(ForbiddenError, AuthorizationError)
    assert issubclass(InternalError, RestDDDError)
