"""
Domain models and value objects.

Contains the polynomial term store and its Term value object.
"""

from src.core.domain.polynomial import (
    EmptyPolynomialError,
    Polynomial,
    PolynomialMovedError,
    TermAllocationError,
)
from src.core.domain.term import Term

__all__ = [
    # Term model
    "Term",
    # Term store
    "Polynomial",
    # Exceptions
    "EmptyPolynomialError",
    "PolynomialMovedError",
    "TermAllocationError",
]
