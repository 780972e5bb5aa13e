"""Shared fixtures for specifications tests."""

from __future__ import annotations

import pytest

from rest_ddd_specifications import SpecificationBuilder


@pytest.fixture
def builder() -> SpecificationBuilder:
    """Fresh fluent builder for each test."""
    return SpecificationBuilder()
