"""
Core math modules for polycalc

Float primitives that keep polynomial calculus numerically well-defined.
"""

from src.core.math.numerical_safeguards import (
    # NaN/Inf detection
    is_valid_float,
    # Powers and intervals
    interval_contains_zero,
    safe_power,
    # Validation
    validate_finite,
    validate_non_negative_int,
)

__all__ = [
    # NaN/Inf detection
    "is_valid_float",
    # Powers and intervals
    "interval_contains_zero",
    "safe_power",
    # Validation
    "validate_finite",
    "validate_non_negative_int",
]
