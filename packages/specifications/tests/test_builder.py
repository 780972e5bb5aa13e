"""Tests for the SpecificationBuilder fluent API."""

from __future__ import annotations

import pytest

from rest_ddd_specifications import (
    AndSpecification,
    AttributeSpecification,
    NotSpecification,
    OrSpecification,
    SpecificationBuilder,
    SpecificationOperator,
)

# -- Single condition -------------------------------------------------------


def test_single_where(builder: SpecificationBuilder):
    spec = builder.where("name", "=", "Alice").build()
    assert isinstance(spec, AttributeSpecification)
    assert spec.op is SpecificationOperator.EQ
    assert spec.val == "Alice"


def test_single_where_enum_op(builder: SpecificationBuilder):
    spec = builder.where("name", SpecificationOperator.REGEX, "^Al").build()
    assert spec.to_dict() == {"op": "regex", "attr": "name", "val": "^Al"}


# -- Implicit AND ------------------------------------------------------------


def test_multiple_where_implicit_and(builder: SpecificationBuilder):
    spec = builder.where("age", ">", 21).where("age", "<", 25).build()
    assert isinstance(spec, AndSpecification)
    assert spec.left == AttributeSpecification("age", ">", 21)
    assert spec.right == AttributeSpecification("age", "<", 25)


def test_three_conditions_fold_left(builder: SpecificationBuilder):
    spec = builder.where("a", "=", 1).where("b", "=", 2).where("c", "=", 3).build()
    assert isinstance(spec, AndSpecification)
    assert isinstance(spec.left, AndSpecification)
    assert spec.right == AttributeSpecification("c", "=", 3)


# -- Explicit groups ---------------------------------------------------------


def test_or_group(builder: SpecificationBuilder):
    spec = (
        builder.or_group()
        .where("name", "=", "Alice")
        .where("name", "=", "Bob")
        .end_group()
        .build()
    )
    assert isinstance(spec, OrSpecification)


def test_not_group(builder: SpecificationBuilder):
    spec = builder.not_group().where("status", "=", "inactive").end_group().build()
    assert isinstance(spec, NotSpecification)
    assert spec.to_dict()["conditions"][0]["attr"] == "status"


def test_not_group_with_two_conditions_raises(builder: SpecificationBuilder):
    builder.not_group().where("a", "=", 1).where("b", "=", 2)
    with pytest.raises(ValueError, match="exactly one"):
        builder.end_group()


# -- Nesting -----------------------------------------------------------------


def test_nested_groups(builder: SpecificationBuilder):
    # (name = Alice AND age < 30)  OR  (status = inactive)
    spec = (
        builder.or_group()
        .and_group()
        .where("name", "=", "Alice")
        .where("age", "<", 30)
        .end_group()
        .where("status", "=", "inactive")
        .end_group()
        .build()
    )
    assert isinstance(spec, OrSpecification)
    assert isinstance(spec.left, AndSpecification)
    assert isinstance(spec.right, AttributeSpecification)


# -- .add() / operators --------------------------------------------------------


def test_add_existing_spec(builder: SpecificationBuilder):
    existing = AttributeSpecification("age", SpecificationOperator.GT, 20)
    spec = builder.where("name", "=", "Alice").add(existing).build()
    assert isinstance(spec, AndSpecification)
    assert spec.right is existing


def test_operator_overloads():
    a = AttributeSpecification("age", ">", 21)
    b = AttributeSpecification("age", "<", 25)
    assert (a & b) == AndSpecification(a, b)
    assert (a | b) == OrSpecification(a, b)
    assert ~a == NotSpecification(a)
    assert a.merge(b) == AndSpecification(a, b)


# -- .reset() ---------------------------------------------------------------


def test_reset(builder: SpecificationBuilder):
    builder.where("name", "=", "Bob")
    builder.reset()
    spec = builder.where("name", "=", "Alice").build()
    assert spec == AttributeSpecification("name", "=", "Alice")


# -- Edge cases---------------------------------------------------------------


def test_build_empty_raises(builder: SpecificationBuilder):
    with pytest.raises(ValueError, match="No conditions"):
        builder.build()


def test_end_group_on_root_raises(builder: SpecificationBuilder):
    with pytest.raises(ValueError, match="No open group"):
        builder.end_group()


def test_build_with_unclosed_group_raises(builder: SpecificationBuilder):
    builder.or_group().where("name", "=", "Alice")
    with pytest.raises(ValueError, match="still open"):
        builder.build()


def test_empty_group_raises(builder: SpecificationBuilder):
    builder.and_group()
    with pytest.raises(ValueError, match="empty group"):
        builder.end_group()


def test_to_dict_shape(builder: SpecificationBuilder):
    spec = builder.where("name", "=", "Alice").where("age", ">", 20).build()
    d = spec.to_dict()
    assert d["op"] == "and"
    assert d["conditions"] == [
        {"op": "=", "attr": "name", "val": "Alice"},
        {"op": ">", "attr": "age", "val": 20},
    ]
