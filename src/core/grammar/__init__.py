"""
Polynomial grammar: validation, building and canonical serialization.

Text flows validator -> builder -> Polynomial; the serializer writes a
Polynomial back as text the validator accepts.
"""

from .builder import (
    coefficient_of_component,
    count_term_components,
    exponent_of_component,
    parse_polynomial,
    populate,
)
from .serializer import format_coefficient, format_polynomial, format_term
from .validator import (
    DECIMAL_CHARS,
    DIGITS,
    INTEGER_CHARS,
    OPERATORS,
    VALID_COMPONENT_CHARS,
    VARIABLE_CHARS,
    InvalidPolynomialSyntax,
    inputs_are_valid_doubles,
    inputs_are_valid_ints,
    is_valid_component,
    is_valid_decimal,
    is_valid_integer,
    is_valid_polynomial,
    parse_doubles,
    parse_ints,
    split_components,
    validate_polynomial,
)

__all__ = [
    # Character tables
    "DIGITS",
    "VARIABLE_CHARS",
    "OPERATORS",
    "VALID_COMPONENT_CHARS",
    "DECIMAL_CHARS",
    "INTEGER_CHARS",
    # Exceptions
    "InvalidPolynomialSyntax",
    # Validation
    "is_valid_polynomial",
    "is_valid_component",
    "is_valid_decimal",
    "is_valid_integer",
    "split_components",
    "validate_polynomial",
    # Number fields
    "inputs_are_valid_doubles",
    "inputs_are_valid_ints",
    "parse_doubles",
    "parse_ints",
    # Building
    "parse_polynomial",
    "populate",
    "coefficient_of_component",
    "exponent_of_component",
    "count_term_components",
    # Serialization
    "format_polynomial",
    "format_term",
    "format_coefficient",
]
