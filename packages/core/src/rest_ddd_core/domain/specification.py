"""Specification pattern primitives."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ISpecification(Protocol):
    """
    Protocol for the Specification pattern.

    Specifications are evaluated by the backend, never in memory, so the
    only requirement is a serialisable representation.
    """

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the specification.
        Useful for serializing criteria across process boundaries or to DB drivers.
        """
        ...
