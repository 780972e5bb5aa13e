from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators a condition tree can carry.

    Comparison operators other than ``BETWEEN`` have a statement rendering;
    ``BETWEEN`` and ``NOT`` can be built and serialised but a REST backend
    cannot be asked for them.
    """

    # Comparison
    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    IN = "in"
    REGEX = "regex"
    BETWEEN = "between"

    # Logical
    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def is_logical(self) -> bool:
        return self in (
            SpecificationOperator.AND,
            SpecificationOperator.OR,
            SpecificationOperator.NOT,
        )
