"""rest-ddd-specifications: condition trees evaluated by the backend.

Build trees with :class:`SpecificationBuilder`, operator overloading or
:class:`SpecificationFactory`; shape queries with :class:`QueryOptions`.
"""

from .ast import AttributeSpecification, SpecificationFactory
from .base import (
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .builder import SpecificationBuilder
from .exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)
from .operators import SpecificationOperator
from .query_options import QueryOptions
from .utils import cast_value, parse_list_value

__all__ = [
    # Core types
    "SpecificationOperator",
    "AttributeSpecification",
    "SpecificationFactory",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    # Builder
    "SpecificationBuilder",
    # Query options
    "QueryOptions",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "FieldNotFoundError",
    "OperatorNotFoundError",
    # Utilities
    "cast_value",
    "parse_list_value",
]
