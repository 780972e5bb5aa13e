"""Tests for the specification exception types."""

from __future__ import annotations

from rest_ddd_core.primitives.exceptions import RestDDDError
from rest_ddd_specifications.exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)

# -- OperatorNotFoundError ---------------------------------------------------


def test_operator_not_found_fuzzy_suggestion():
    err = OperatorNotFoundError("regx", ["regex", "in", "between"])
    assert "regx" in str(err)
    assert "Did you mean: regex" in str(err)


def test_operator_not_found_no_matches():
    err = OperatorNotFoundError("zzzzz", ["=", ">", "<"])
    d = err.to_dict()
    assert d["error"] == "OPERATOR_NOT_FOUND"
    assert d["suggestions"] == []
    assert d["valid_operators"] == ["<", "=", ">"]


def test_operator_not_found_is_specification_error():
    assert isinstance(OperatorNotFoundError("x", ["="]), SpecificationError)


# -- ValidationError -----------------------------------------------------------


def test_validation_error_to_dict():
    err = ValidationError("bad node", path="<root>.conditions[1]")
    assert err.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "bad node",
        "path": "<root>.conditions[1]",
    }


def test_specification_errors_share_root():
    err = ValidationError("bad")
    assert isinstance(err, RestDDDError)
    assert err.token == "ValidationError"


# -- FieldNotFoundError --------------------------------------------------------


def test_field_not_found_suggests_close_names():
    err = FieldNotFoundError("nmae", ["name", "age", "created_at"], path="<root>")
    assert "Did you mean: name?" in str(err)
    assert err.to_dict() == {
        "error": "FIELD_NOT_FOUND",
        "field": "nmae",
        "path": "<root>",
        "suggestions": ["name"],
    }


def test_field_not_found_is_validation_error():
    err = FieldNotFoundError("zzz", ["name"])
    assert isinstance(err, ValidationError)
    assert err.suggestions == []
