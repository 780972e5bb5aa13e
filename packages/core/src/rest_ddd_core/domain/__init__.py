"""Domain primitives: models and specifications."""

from __future__ import annotations

from .model import Model, ModelMetadata, to_kebab_case
from .specification import ISpecification

__all__: list[str] = [
    "ISpecification",
    "Model",
    "ModelMetadata",
    "to_kebab_case",
]
