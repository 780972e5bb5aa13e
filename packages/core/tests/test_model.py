from __future__ import annotations

import pytest

from rest_ddd_core.domain.model import Model, ModelMetadata, to_kebab_case
from rest_ddd_core.primitives.exceptions import SerializationError, ValidationError

# --- Test Models ---


class TestModel(Model):
    __test__ = False

    id: str
    name: str
    age: int = 0


class Catalogue(Model):
    __table_name__ = "ProductCatalogue"

    id: int
    title: str


class Stock(Model):
    __composed__ = ("warehouse", "sku")

    id: str | None = None
    warehouse: str
    sku: str


# --- Tests ---


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("TestModel", "test-model"),
        ("ProductCatalogue", "product-catalogue"),
        ("order_line", "order-line"),
        ("HTTPResource", "http-resource"),
        ("Item", "item"),
    ],
)
def test_to_kebab_case(name: str, expected: str) -> None:
    assert to_kebab_case(name) == expected


def test_metadata_defaults_to_class_name() -> None:
    meta = TestModel.metadata()
    assert meta == ModelMetadata(
        table="TestModel",
        primary_key="id",
        composed=(),
        separator="_",
        fields=frozenset({"id", "name", "age"}),
    )
    assert meta.is_composed is False


def test_table_name_override() -> None:
    assert Catalogue.table_name() == "ProductCatalogue"


def test_composite_key_is_computed() -> None:
    stock = Stock(warehouse="north", sku="A1")
    assert stock.id == "north_A1"
    assert stock.pk == "north_A1"


def test_composite_key_explicit_id_wins() -> None:
    assert Stock(id="x_y", warehouse="north", sku="A1").id == "x_y"


def test_split_id_composite() -> None:
    assert Stock.metadata().split_id("north_A1") == ["north", "A1"]


def test_split_id_simple_key_is_single_segment() -> None:
    assert TestModel.metadata().split_id("a_1") == ["a_1"]


def test_split_id_component_mismatch_raises() -> None:
    with pytest.raises(ValidationError) as exc_info:
        Stock.metadata().split_id("north_A1_extra")
    assert "id" in exc_info.value.errors


def test_from_record_hydrates() -> None:
    model = TestModel.from_record({"id": "1", "name": "Alice", "age": 30})
    assert model == TestModel(id="1", name="Alice", age=30)


def test_from_record_passes_instances_through() -> None:
    model = TestModel(id="1", name="Alice")
    assert TestModel.from_record(model) is model


def test_from_record_failure_raises_serialization_error() -> None:
    with pytest.raises(SerializationError, match="TestModel"):
        TestModel.from_record({"id": "1", "age": "not a number"})


@pytest.mark.parametrize("record", [["id", "1"], "Alice", 42])
def test_from_record_rejects_non_mapping(record: object) -> None:
    with pytest.raises(SerializationError, match="TestModel"):
        TestModel.from_record(record)


def test_to_record_is_json_compatible() -> None:
    assert Catalogue(id=3, title="Books").to_record() == {"id": 3, "title": "Books"}
