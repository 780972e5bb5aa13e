from __future__ import annotations

import pytest

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
    SerializationError,
    UnsupportedError,
    ValidationError,
)
from rest_ddd_persistence_http import classify_error


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (400, ValidationError),
        (401, AuthorizationError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, ValidationError),
        (501, UnsupportedError),
        (502, BackendConnectionError),
        (503, BackendConnectionError),
        (504, BackendConnectionError),
        (500, InternalError),
    ],
)
def test_status_codes(status: int, expected: type) -> None:
    assert type(classify_error(status)) is expected


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("NotFoundError: record 1", NotFoundError),
        ("ConflictError: already exists", ConflictError),
        ("BadRequest: missing name", ValidationError),
        ("ValidationError: age", ValidationError),
        ("QueryError: bad token", QueryError),
        ("PagingError: page 0", PagingError),
        ("UnsupportedError", UnsupportedError),
        ("MigrationError: v2", MigrationError),
        ("ObserverError: listener", ObserverError),
        ("AuthorizationError", AuthorizationError),
        ("ForbiddenError", ForbiddenError),
        ("ConnectionError: refused", BackendConnectionError),
        ("SerializationError: bad json", SerializationError),
        ("something odd happened", InternalError),
    ],
)
def test_message_tokens(message: str, expected: type) -> None:
    error = classify_error(message)
    assert type(error) is expected
    assert str(error) == message


def test_first_token_in_fixed_order_wins() -> None:
    error = classify_error("ConflictError caused NotFoundError")
    assert isinstance(error, NotFoundError)


def test_message_token_beats_status() -> None:
    error = classify_error("ConflictError: dup", status=404)
    assert isinstance(error, ConflictError)
    assert str(error) == "ConflictError: dup"


def test_status_used_when_no_token_matches() -> None:
    error = classify_error("record 9 is gone", status=404)
    assert isinstance(error, NotFoundError)
    assert str(error) == "record 9 is gone"


def test_unknown_status_and_text_fall_back_to_internal() -> None:
    assert type(classify_error("teapot", status=418)) is InternalError


def test_exception_is_chained() -> None:
    source = RuntimeError("ConflictError: version mismatch")
    error = classify_error(source)
    assert isinstance(error, ConflictError)
    assert error.__cause__ is source
    assert str(error) == "ConflictError: version mismatch"


def test_builtin_connection_error_by_type_name() -> None:
    error = classify_error(ConnectionError("refused"))
    assert isinstance(error, BackendConnectionError)


def test_already_classified_passes_through() -> None:
    original = NotFoundError("gone")
    assert classify_error(original) is original


def test_to_dict_exposes_token() -> None:
    assert classify_error(409).to_dict() == {
        "error": "ConflictError",
        "message": "HTTP 409",
    }
