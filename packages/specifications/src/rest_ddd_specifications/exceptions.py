"""
Specification exception hierarchy with fuzzy-match suggestions.

These errors are raised while a condition tree is being built, before any
request exists. They sit under :class:`RestDDDError` with the
``ValidationError`` token so remote and local validation failures are
handled alike, and provide ``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any

from rest_ddd_core.primitives.exceptions import RestDDDError


class SpecificationError(RestDDDError):
    """Base exception for all specification errors."""

    token = "ValidationError"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(SpecificationError):
    """Specification structure validation failed at ``path``."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class FieldNotFoundError(ValidationError):
    """A leaf names a field outside the allowed set.

    Example message::

        Field 'nmae' is not in the allowed fields list. Did you mean: name?
    """

    def __init__(
        self,
        invalid_field: str,
        available_fields: list[str],
        path: str | None = None,
    ) -> None:
        self.invalid_field = invalid_field
        self.available_fields = sorted(available_fields)
        self.suggestions = get_close_matches(
            invalid_field, self.available_fields, n=3, cutoff=0.6
        )
        message = f"Field '{invalid_field}' is not in the allowed fields list."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "path": self.path,
            "suggestions": self.suggestions,
        }


class OperatorNotFoundError(SpecificationError):
    """
    Unknown operator specified.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }
