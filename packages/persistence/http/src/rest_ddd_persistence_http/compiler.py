"""Statement compiler: specification trees to prepared REST statements."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from difflib import get_close_matches
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from rest_ddd_core.primitives.exceptions import QueryError
from rest_ddd_specifications.operators import SpecificationOperator

if TYPE_CHECKING:
    from rest_ddd_specifications.query_options import QueryOptions

logger = logging.getLogger(__name__)


class StatementKeys(str, Enum):
    """Leading verbs of a prepared statement method token."""

    FIND_BY = "findBy"
    LIST_BY = "listBy"
    PAGE_BY = "pageBy"
    FIND_ONE_BY = "findOneBy"
    COUNT_OF = "countOf"
    MAX_OF = "maxOf"
    MIN_OF = "minOf"
    AVG_OF = "avgOf"
    SUM_OF = "sumOf"
    DISTINCT_OF = "distinctOf"
    GROUP_OF = "groupOf"


AGGREGATIONS: frozenset[StatementKeys] = frozenset(
    {
        StatementKeys.COUNT_OF,
        StatementKeys.MAX_OF,
        StatementKeys.MIN_OF,
        StatementKeys.AVG_OF,
        StatementKeys.SUM_OF,
        StatementKeys.DISTINCT_OF,
        StatementKeys.GROUP_OF,
    }
)

# Suffix words appended after the attribute for each renderable operator.
_LEAF_WORDS: dict[str, str] = {
    SpecificationOperator.EQ.value: "",
    SpecificationOperator.NE.value: "diff",
    SpecificationOperator.REGEX.value: "matches",
    SpecificationOperator.GT.value: "bigger",
    SpecificationOperator.GE.value: "bigger than equal",
    SpecificationOperator.LT.value: "less",
    SpecificationOperator.LE.value: "less than equal",
    SpecificationOperator.IN.value: "in",
}

_GROUP_OPERATORS = frozenset(
    {SpecificationOperator.AND.value, SpecificationOperator.OR.value}
)

_WORD_SPLIT = re.compile(r"[\s_]+")


@dataclass(frozen=True)
class QueryDescriptor:
    """A compiled, serialisable prepared statement.

    Attributes:
        target_type: Model class results are hydrated into.
        method: Single camelCase token naming the statement.
        args: Positional literals, one per comparison leaf, left to right.
        params: Named parameters (``limit``, ``skip``, ``offset``,
            ``direction``, ``bookmark``) in insertion order.
    """

    target_type: type[Any]
    method: str
    args: tuple[Any, ...] = ()
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryDescriptor):
            return NotImplemented
        return (
            self.target_type is other.target_type
            and self.method == other.method
            and self.args == other.args
            and list(self.params.items()) == list(other.params.items())
        )

    def __hash__(self) -> int:
        return hash((self.target_type, self.method))

    def with_method(self, method: str) -> QueryDescriptor:
        return replace(self, method=method)

    def with_params(self, params: Mapping[str, Any]) -> QueryDescriptor:
        """Return a copy whose params are replaced by *params*."""
        return replace(self, params=params)


def camel_case(words: Sequence[str]) -> str:
    """Collapse a word sequence into one camelCase token.

    Each item may hold several words separated by spaces or underscores
    (``"created_at"`` -> ``CreatedAt``). Words that are already camelCase
    keep their inner capitals.
    """
    parts = [w for item in words for w in _WORD_SPLIT.split(item.strip()) if w]
    if not parts:
        return ""
    head, *tail = parts
    return head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in tail)


def _direction(item: str | tuple[str, str]) -> tuple[str, str]:
    if isinstance(item, tuple):
        name, direction = item[0], str(item[1]).lower()
        return name, "dsc" if direction in ("desc", "dsc") else "asc"
    if item.startswith("-"):
        return item[1:], "dsc"
    return item, "asc"


class StatementCompiler:
    """Compiles specifications and selectors into :class:`QueryDescriptor`.

    Every referenced attribute is checked against the target model's
    declared fields; rendering failures raise :class:`QueryError` before
    anything is sent.
    """

    def compile(
        self,
        target_type: type[Any],
        condition: Any = None,
        *,
        select: Sequence[str] | None = None,
        order_by: Sequence[str | tuple[str, str]] | None = None,
        group_by: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> QueryDescriptor:
        words: list[str] = ["find by"]
        args: list[Any] = []

        if condition is not None:
            data = self._as_dict(condition)
            if data:
                words.append(self._render_node(target_type, data, args))

        if select:
            self.check_fields(target_type, select)
            words.extend(["select", " and ".join(select)])

        if order_by:
            for idx, item in enumerate(order_by):
                name, direction = _direction(item)
                self.check_fields(target_type, [name])
                words.extend(["order by" if idx == 0 else "then by", name, direction])

        if group_by:
            self.check_fields(target_type, [group_by])
            words.extend(["group by", group_by])

        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["skip"] = offset

        descriptor = QueryDescriptor(
            target_type=target_type,
            method=camel_case(words),
            args=tuple(args),
            params=params,
        )
        logger.debug(
            "Compiled %s statement %s with %d arg(s)",
            target_type.__name__,
            descriptor.method,
            len(descriptor.args),
        )
        return descriptor

    def compile_options(
        self, target_type: type[Any], options: QueryOptions
    ) -> QueryDescriptor:
        """Compile a :class:`QueryOptions` bundle."""
        return self.compile(
            target_type,
            options.specification,
            select=options.select_fields or None,
            order_by=options.order_by or None,
            group_by=options.group_by,
            limit=options.limit,
            offset=options.offset,
        )

    def aggregate(
        self,
        target_type: type[Any],
        key: StatementKeys | str,
        field_name: str | None = None,
    ) -> QueryDescriptor:
        """Build an aggregation statement (``countOf``, ``groupOf``, ...)."""
        try:
            verb = StatementKeys(key)
        except ValueError:
            raise QueryError(f"Unknown aggregation {key!r}") from None
        if verb not in AGGREGATIONS:
            raise QueryError(f"{verb.value} is not an aggregation")
        if field_name is not None:
            self.check_fields(target_type, [field_name])
        args = (field_name,) if field_name is not None else ()
        return QueryDescriptor(target_type=target_type, method=verb.value, args=args)

    def prepared(
        self,
        target_type: type[Any],
        method: str,
        *args: Any,
        params: Mapping[str, Any] | None = None,
    ) -> QueryDescriptor:
        """Wrap a caller-supplied method token as a descriptor."""
        if not method or not method.strip():
            raise QueryError("Prepared statement method must not be empty")
        return QueryDescriptor(
            target_type=target_type,
            method=method.strip(),
            args=args,
            params=params or {},
        )

    # -- internals -----------------------------------------------------------

    @staticmethod
    def _as_dict(condition: Any) -> dict[str, Any]:
        if hasattr(condition, "to_dict"):
            try:
                return condition.to_dict()
            except NotImplementedError:
                raise QueryError(
                    f"Unsupported condition node {type(condition).__name__}"
                ) from None
        if isinstance(condition, dict):
            return condition
        raise QueryError(
            "Condition must be a specification or dict, "
            f"got {type(condition).__name__}"
        )

    def _render_node(
        self, target_type: type[Any], data: Any, args: list[Any]
    ) -> str:
        if not isinstance(data, dict):
            raise QueryError(f"Unsupported condition node {type(data).__name__}")
        op = str(data.get("op", "")).lower()

        if op in _GROUP_OPERATORS:
            conditions = data.get("conditions") or []
            if len(conditions) < 2:
                raise QueryError(f"'{op}' group requires at least two conditions")
            rendered = [self._render_node(target_type, c, args) for c in conditions]
            return f" {op} ".join(rendered)

        words = _LEAF_WORDS.get(op)
        if words is None:
            raise QueryError(f"Unsupported operator {op or data.get('op')!r}")
        attr = data.get("attr")
        if not attr:
            raise QueryError(f"Condition missing 'attr': {data}")
        self.check_fields(target_type, [attr])
        args.append(data.get("val"))
        return f"{attr} {words}".strip()

    @staticmethod
    def check_fields(target_type: type[Any], names: Sequence[str]) -> None:
        metadata = getattr(target_type, "metadata", None)
        if metadata is None:
            return
        known = metadata().fields
        for name in names:
            if name in known:
                continue
            suggestions = get_close_matches(name, sorted(known), n=3, cutoff=0.6)
            message = f"Unknown attribute {name!r} for {target_type.__name__}."
            if suggestions:
                message += f" Did you mean: {', '.join(suggestions)}?"
            raise QueryError(message)
