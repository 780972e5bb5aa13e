"""Model base class carrying persistence metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import SerializationError, ValidationError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_kebab_case(name: str) -> str:
    """``TestModel`` -> ``test-model``; ``order_line`` -> ``order-line``."""
    spaced = _CAMEL_BOUNDARY.sub("-", name.strip())
    return re.sub(r"[\s_\-]+", "-", spaced).lower()


@dataclass(frozen=True)
class ModelMetadata:
    """Persistence metadata resolved from a :class:`Model` subclass.

    Attributes:
        table: Logical table/resource name (not yet case-converted).
        primary_key: Name of the primary-key field.
        composed: Fields the primary key is built from, in declared order.
            Empty for simple keys.
        separator: Joins the ``composed`` values into a single id string.
        fields: Every declared field name.
    """

    table: str
    primary_key: str
    composed: tuple[str, ...]
    separator: str
    fields: frozenset[str]

    @property
    def is_composed(self) -> bool:
        return bool(self.composed)

    def split_id(self, entity_id: Any) -> list[str]:
        """Split a composite id into its components, in declared order."""
        if not self.composed:
            return [entity_id]
        parts = str(entity_id).split(self.separator)
        if len(parts) != len(self.composed):
            raise ValidationError(
                {
                    self.primary_key: [
                        f"expected {len(self.composed)} components separated by "
                        f"{self.separator!r}, got {entity_id!r}"
                    ]
                }
            )
        return parts


class Model(BaseModel):
    """Base class for every model stored through a repository.

    Subclasses declare their primary-key field and may override the
    metadata class variables::

        class Product(Model):
            __table_name__ = "Catalogue"

            id: str
            name: str

        class Stock(Model):
            __composed__ = ("warehouse", "sku")

            id: str | None = None
            warehouse: str
            sku: str

        Stock(warehouse="north", sku="A1").id  # "north_A1"
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    __table_name__: ClassVar[str | None] = None
    __primary_key__: ClassVar[str] = "id"
    __composed__: ClassVar[tuple[str, ...]] = ()
    __key_separator__: ClassVar[str] = "_"

    @model_validator(mode="before")
    @classmethod
    def _compose_primary_key(cls, data: Any) -> Any:
        if not cls.__composed__ or not isinstance(data, dict):
            return data
        if data.get(cls.__primary_key__) is not None:
            return data
        parts = [data.get(name) for name in cls.__composed__]
        if any(part is None for part in parts):
            return data
        return {
            **data,
            cls.__primary_key__: cls.__key_separator__.join(str(p) for p in parts),
        }

    @classmethod
    def metadata(cls) -> ModelMetadata:
        return ModelMetadata(
            table=cls.__table_name__ or cls.__name__,
            primary_key=cls.__primary_key__,
            composed=tuple(cls.__composed__),
            separator=cls.__key_separator__,
            fields=frozenset(cls.model_fields),
        )

    @classmethod
    def table_name(cls) -> str:
        return cls.__table_name__ or cls.__name__

    @classmethod
    def from_record(cls, record: Any) -> Any:
        """Hydrate a model instance from a raw record."""
        if isinstance(record, cls):
            return record
        try:
            return cls.model_validate(record)
        except (PydanticValidationError, TypeError) as e:
            raise SerializationError(
                f"Cannot build {cls.__name__} from record: {e}"
            ) from e

    @property
    def pk(self) -> Any:
        return getattr(self, type(self).__primary_key__)

    def to_record(self) -> dict[str, Any]:
        """Dehydrate into a JSON-compatible record."""
        return self.model_dump(mode="json", by_alias=True)
