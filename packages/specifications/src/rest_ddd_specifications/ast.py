from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .base import (
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .exceptions import FieldNotFoundError, OperatorNotFoundError, ValidationError
from .operators import SpecificationOperator
from .utils import cast_value

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rest_ddd_core.domain.specification import ISpecification

# Pre-compute valid operator values for validation
_VALID_OPERATORS: frozenset[str] = frozenset(m.value for m in SpecificationOperator)
_LOGICAL_OPERATORS: frozenset[str] = frozenset(
    {
        SpecificationOperator.AND.value,
        SpecificationOperator.OR.value,
        SpecificationOperator.NOT.value,
    }
)


@dataclass(frozen=True)
class AttributeSpecification(BaseSpecification):
    """
    Leaf condition comparing a single attribute with a literal.

    Evaluation happens on the backend; the leaf only carries the comparison.
    """

    attr: str
    op: SpecificationOperator
    val: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.op, SpecificationOperator):
            try:
                op = SpecificationOperator(str(self.op).lower())
            except ValueError:
                raise OperatorNotFoundError(
                    str(self.op), [m.value for m in SpecificationOperator]
                ) from None
            object.__setattr__(self, "op", op)
        if self.op.is_logical:
            raise ValidationError(
                f"Logical operator '{self.op.value}' cannot be used on a leaf",
                path=self.attr,
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }


class SpecificationFactory:
    """
    Factory for creating specifications from dictionary / JSON representations.

    Supports:
    - ``from_dict(data)``: parse a nested dict tree
    - ``from_json(text)``: parse a JSON string
    - ``validate(data)``: validate without constructing
    - Automatic ``value_type`` casting via :func:`cast_value`

    Logical nodes with more than two ``conditions`` are folded from the
    left: ``and[a, b, c]`` becomes ``(a AND b) AND c``.
    """

    # ------------------------------------------------------------------ #
    # Public API                                                          #
    # ------------------------------------------------------------------ #

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
    ) -> ISpecification:
        """
        Create a specification tree from a dictionary.

        Parameters
        ----------
        data:
            The specification dictionary (potentially nested).
        allowed_fields:
            Optional whitelist of valid field/attribute names.  If
            provided, any ``attr`` not in this list raises
            :class:`ValidationError`.
        """
        SpecificationFactory._validate_node(data, allowed_fields=allowed_fields)
        return SpecificationFactory._build(data)

    @staticmethod
    def from_json(
        text: str,
        *,
        allowed_fields: Sequence[str] | None = None,
    ) -> ISpecification:
        """Parse a JSON string and build a specification tree."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(
                f"Invalid JSON: {exc}",
                path="<root>",
            ) from exc

        if not isinstance(data, dict):
            raise ValidationError(
                "Top-level JSON value must be an object",
                path="<root>",
            )

        return SpecificationFactory.from_dict(data, allowed_fields=allowed_fields)

    @staticmethod
    def validate(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
    ) -> list[str]:
        """
        Validate a specification dict and return a list of error messages.

        Returns an empty list when the structure is valid.
        """
        errors: list[str] = []
        SpecificationFactory._collect_errors(
            data, errors, path="<root>", allowed_fields=allowed_fields
        )
        return errors

    # ------------------------------------------------------------------ #
    # Internal: recursive build                                           #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build(data: dict[str, Any]) -> ISpecification:
        op_str = data.get("op", "").lower()

        if op_str in (SpecificationOperator.AND, SpecificationOperator.OR):
            children = [SpecificationFactory._build(c) for c in data["conditions"]]
            node_cls = (
                AndSpecification
                if op_str == SpecificationOperator.AND
                else OrSpecification
            )
            result = children[0]
            for child in children[1:]:
                result = node_cls(result, child)
            return result
        if op_str == SpecificationOperator.NOT:
            conditions = data.get("conditions")
            inner = conditions[0] if conditions else data["condition"]
            return NotSpecification(SpecificationFactory._build(inner))

        # Leaf node
        val = data.get("val")
        value_type = data.get("value_type")
        if value_type is not None:
            val = cast_value(val, value_type)

        return AttributeSpecification(data["attr"], op_str, val)

    # ------------------------------------------------------------------ #
    # Internal: validation                                                #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate_logical_node(
        data: dict[str, Any],
        op_str: str,
        path: str,
        allowed_fields: Sequence[str] | None,
    ) -> None:
        conditions = data.get("conditions")
        if not conditions and "condition" not in data:
            raise ValidationError(
                f"Logical operator '{op_str}' requires 'conditions' list",
                path=path,
            )
        if conditions is not None:
            if not isinstance(conditions, list):
                raise ValidationError(
                    "'conditions' must be a list",
                    path=path,
                )
            if op_str.lower() == SpecificationOperator.NOT and len(conditions) != 1:
                raise ValidationError(
                    "'not' requires exactly one condition",
                    path=path,
                )
            for idx, child in enumerate(conditions):
                SpecificationFactory._validate_node(
                    child,
                    path=f"{path}.conditions[{idx}]",
                    allowed_fields=allowed_fields,
                )
        else:
            SpecificationFactory._validate_node(
                data["condition"],
                path=f"{path}.condition",
                allowed_fields=allowed_fields,
            )

    @staticmethod
    def _validate_leaf_node(
        data: dict[str, Any],
        op_lower: str,
        path: str,
        allowed_fields: Sequence[str] | None,
    ) -> None:
        if op_lower not in _VALID_OPERATORS:
            raise OperatorNotFoundError(
                op_lower,
                [m.value for m in SpecificationOperator],
            )

        attr = data.get("attr")
        if not attr or not isinstance(attr, str):
            raise ValidationError(
                f"Leaf specification missing 'attr': {data}",
                path=path,
            )

        if allowed_fields is not None and attr not in allowed_fields:
            raise FieldNotFoundError(attr, list(allowed_fields), path=path)

    @staticmethod
    def _validate_node(
        data: dict[str, Any],
        *,
        path: str = "<root>",
        allowed_fields: Sequence[str] | None = None,
    ) -> None:
        """Raise on first validation error (fail-fast)."""
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a dict, got {type(data).__name__}",
                path=path,
            )

        op_str = data.get("op")
        if not op_str or not isinstance(op_str, str):
            raise ValidationError("Missing or empty 'op' key", path=path)

        op_lower = op_str.lower()

        if op_lower in _LOGICAL_OPERATORS:
            SpecificationFactory._validate_logical_node(
                data, op_str, path, allowed_fields
            )
        else:
            SpecificationFactory._validate_leaf_node(
                data, op_lower, path, allowed_fields
            )

    @staticmethod
    def _collect_errors(
        data: Any,
        errors: list[str],
        *,
        path: str,
        allowed_fields: Sequence[str] | None = None,
    ) -> None:
        """Recursive error collection (non-throwing)."""
        if not isinstance(data, dict):
            errors.append(f"{path}: expected dict, got {type(data).__name__}")
            return

        op_str = data.get("op")
        if not op_str or not isinstance(op_str, str):
            errors.append(f"{path}: missing or empty 'op' key")
            return

        op_lower = op_str.lower()

        if op_lower in _LOGICAL_OPERATORS:
            conditions = data.get("conditions")
            if not conditions and "condition" not in data:
                errors.append(f"{path}: logical '{op_str}' requires 'conditions'")
                return
            if conditions is None:
                children = [(f"{path}.condition", data["condition"])]
            elif not isinstance(conditions, list):
                errors.append(f"{path}: 'conditions' must be a list")
                return
            else:
                children = [
                    (f"{path}.conditions[{idx}]", child)
                    for idx, child in enumerate(conditions)
                ]
            for child_path, child in children:
                SpecificationFactory._collect_errors(
                    child, errors, path=child_path, allowed_fields=allowed_fields
                )
            return

        if op_lower not in _VALID_OPERATORS:
            errors.append(f"{path}: unknown operator '{op_lower}'")

        attr = data.get("attr")
        if not attr or not isinstance(attr, str):
            errors.append(f"{path}: missing 'attr'")
            return

        if allowed_fields is not None and attr not in allowed_fields:
            errors.append(f"{path}: field '{attr}' not allowed")
