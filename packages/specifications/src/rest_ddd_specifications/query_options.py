"""
Query options for projection, ordering, grouping and windowing.

``QueryOptions`` wraps a specification with result-shaping parameters.
The specification defines *what* to filter; ``QueryOptions`` defines
*how* results are returned. Both are compiled together by the persistence
layer into one statement.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from .base import AndSpecification

if TYPE_CHECKING:
    from rest_ddd_core.domain.specification import ISpecification


@dataclass(frozen=True)
class QueryOptions:
    """
    Immutable container for result-shaping parameters.

    Attributes:
        specification: The filter specification (``None`` = no filter).
        limit: Maximum number of results.
        offset: Number of results to skip.
        order_by: Field ordering.
            Prefix with ``-`` for descending, e.g. ``("-created_at", "name")``.
        group_by: Field to group results by.
        select_fields: Specific fields to select (projection).
    """

    specification: ISpecification | None = None
    limit: int | None = None
    offset: int | None = None
    order_by: tuple[str, ...] = ()
    group_by: str | None = None
    select_fields: tuple[str, ...] = ()

    def with_specification(self, spec: ISpecification) -> QueryOptions:
        """Return a copy with the specification replaced."""
        return replace(self, specification=spec)

    def with_pagination(
        self,
        limit: int | None = None,
        offset: int | None = None,
    ) -> QueryOptions:
        """Return a copy with updated window parameters."""
        return replace(
            self,
            limit=limit if limit is not None else self.limit,
            offset=offset if offset is not None else self.offset,
        )

    def with_ordering(self, *fields: str) -> QueryOptions:
        """Return a copy with updated ordering."""
        return replace(self, order_by=tuple(fields))

    def with_grouping(self, field: str | None) -> QueryOptions:
        return replace(self, group_by=field)

    def with_selection(self, *fields: str) -> QueryOptions:
        return replace(self, select_fields=tuple(fields))

    def merge(self, other: QueryOptions) -> QueryOptions:
        """
        Merge two ``QueryOptions`` instances.

        - Specifications are combined with AND.
        - ``other``'s limit/offset/group_by override ``self``'s if set.
        - Ordering and projection are concatenated (``other`` appended).
        """
        merged_spec = self.specification
        if other.specification is not None:
            if merged_spec is not None:
                merged_spec = AndSpecification(merged_spec, other.specification)
            else:
                merged_spec = other.specification

        return QueryOptions(
            specification=merged_spec,
            limit=other.limit if other.limit is not None else self.limit,
            offset=other.offset if other.offset is not None else self.offset,
            order_by=self.order_by + other.order_by,
            group_by=other.group_by if other.group_by is not None else self.group_by,
            select_fields=self.select_fields + other.select_fields,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        result: dict[str, Any] = {}
        if self.specification is not None:
            result["specification"] = self.specification.to_dict()
        if self.limit is not None:
            result["limit"] = self.limit
        if self.offset is not None:
            result["offset"] = self.offset
        if self.order_by:
            result["order_by"] = list(self.order_by)
        if self.group_by is not None:
            result["group_by"] = self.group_by
        if self.select_fields:
            result["select_fields"] = list(self.select_fields)
        return result
