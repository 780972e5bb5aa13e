from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rest_ddd_core.domain.specification import ISpecification


class BaseSpecification(ISpecification):
    """Base class for specifications with logic operator support."""

    def __and__(self, other: ISpecification) -> AndSpecification:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification) -> OrSpecification:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification:
        return NotSpecification(self)

    def merge(self, other: ISpecification) -> AndSpecification:
        """Merge with another specification using logical AND."""
        return AndSpecification(self, other)

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class AndSpecification(BaseSpecification):
    """Logical AND of two specifications."""

    left: ISpecification
    right: ISpecification

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }


@dataclass(frozen=True)
class OrSpecification(BaseSpecification):
    """Logical OR of two specifications."""

    left: ISpecification
    right: ISpecification

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "or",
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }


@dataclass(frozen=True)
class NotSpecification(BaseSpecification):
    """Logical NOT composite specification."""

    specification: ISpecification

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "not",
            "conditions": [self.specification.to_dict()],
        }
