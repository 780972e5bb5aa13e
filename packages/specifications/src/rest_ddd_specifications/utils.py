"""
Value helpers for specifications built from untyped input (JSON, query strings).
"""

from __future__ import annotations

import datetime
import uuid as uuid_module
from typing import Any

# ---------------------------------------------------------------------------
# List parsing
# ---------------------------------------------------------------------------


def parse_list_value(value: Any) -> list[Any]:
    """
    Parse a value into a list.

    Supports:
    - Python collections (list, tuple, set)
    - Comma-separated strings: ``"val1, val2"``
    - Bracketed strings: ``"[val1, val2]"`` or ``"['val1', 'val2']"``
    """
    if isinstance(value, list | tuple | set):
        return list(value)
    if isinstance(value, str):
        content = value.strip()
        if content.startswith("[") and content.endswith("]"):
            content = content[1:-1].strip()
        if not content:
            return []
        return [v.strip().strip("'").strip('"') for v in content.split(",")]
    return [value]


# ---------------------------------------------------------------------------
# Value casting
# ---------------------------------------------------------------------------


def cast_value(value: Any, value_type: str | None = None) -> Any:
    """
    Cast *value* to the Python type named by *value_type*.

    Lists are cast item by item. Without a *value_type*, or with one that
    is not recognised, the value passes through unchanged; so does a value
    that fails to cast.

    Supported *value_type* strings: ``string``, ``str``, ``integer``,
    ``int``, ``float``, ``decimal``, ``boolean``, ``bool``, ``date``,
    ``datetime``, ``uuid``, ``list``.
    """
    if value_type is None:
        return value
    vt = value_type.lower()
    if vt == "list":
        return parse_list_value(value)
    if isinstance(value, list):
        return [cast_value(item, value_type) for item in value]
    try:
        return _cast_explicit(value, vt)
    except (ValueError, TypeError):
        return value


def _cast_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _cast_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    result = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if result.tzinfo is not None:
        result = result.astimezone(datetime.timezone.utc)
    return result


def _cast_explicit(value: Any, vt: str) -> Any:
    if vt in ("string", "text", "str"):
        return str(value)
    if vt in ("integer", "int"):
        return int(value)
    if vt in ("float", "double", "decimal", "numeric"):
        return float(value)
    if vt in ("boolean", "bool"):
        return _cast_boolean(value)
    if vt == "date":
        if isinstance(value, datetime.date):
            return value
        return datetime.date.fromisoformat(str(value))
    if vt == "datetime":
        return _cast_datetime(value)
    if vt == "uuid":
        if isinstance(value, uuid_module.UUID):
            return value
        return uuid_module.UUID(str(value))
    return value
