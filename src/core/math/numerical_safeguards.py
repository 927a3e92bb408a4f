"""
Numerical Safeguards: Safe Float Primitives for Polynomial Calculus

The module keeps every float that enters or leaves the term store sane:
- NaN/Inf detection before values reach storage
- Integer powers that saturate to ±inf instead of raising OverflowError
- Closed-interval checks used by the domain-error classifier
- Parameter validation helpers with uniform error messages

CRITICAL INVARIANTS:
1. Zero detection for coefficients is exact (coefficients that merge to
   exactly 0.0 are removed, nothing within a tolerance is)
2. NaN/Inf never enter the term store (rejected with ValueError)
3. Zero is never raised to a negative power here (the domain-error
   classifier must reject such calls first)
4. All operations are deterministic and reproducible
"""

import math


# =============================================================================
# NaN/Inf DETECTION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check whether a float is valid (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if the value is finite, False for NaN or ±Inf
    """
    return math.isfinite(value)


# =============================================================================
# SAFE POWER
# =============================================================================


def safe_power(base: float, exponent: int, overflow_to_infinity: bool = True) -> float:
    """
    Integer power of a float that saturates instead of raising on overflow.

    Python's float ``**`` raises OverflowError on overflow. With
    overflow_to_infinity=True the IEEE result is returned instead: the
    result becomes +inf, or -inf for a negative base with an odd exponent.
    Underflow quietly produces 0.0 in both cases.

    Args:
        base: Value of x
        exponent: Integer exponent (may be negative)
        overflow_to_infinity: Saturate to ±inf on overflow (default: True)

    Returns:
        base ** exponent

    Raises:
        OverflowError: If the result overflows and overflow_to_infinity=False
        ZeroDivisionError: If base == 0 and exponent < 0

    Examples:
        >>> safe_power(2.0, 3)
        8.0
        >>> safe_power(2.0, -2)
        0.25
        >>> safe_power(10.0, 400)
        inf
        >>> safe_power(-10.0, 401)
        -inf
    """
    try:
        return float(base) ** exponent
    except OverflowError:
        if not overflow_to_infinity:
            raise
        if base < 0 and exponent % 2:
            return -math.inf
        return math.inf


# =============================================================================
# INTERVALS
# =============================================================================


def interval_contains_zero(lower_bound: float, upper_bound: float) -> bool:
    """
    Check whether the closed interval between two bounds contains 0.

    The bounds may come in either order: (-3, 1) and (1, -3) describe the
    same interval. A bound that is exactly 0 counts as containing zero.

    Args:
        lower_bound: First bound
        upper_bound: Second bound

    Returns:
        True if 0 lies in [min(bounds), max(bounds)]

    Examples:
        >>> interval_contains_zero(-3.0, 1.0)
        True
        >>> interval_contains_zero(1.0, -3.0)
        True
        >>> interval_contains_zero(0.0, 5.0)
        True
        >>> interval_contains_zero(-3.0, -2.0)
        False
    """
    return (lower_bound <= 0 <= upper_bound) or (upper_bound <= 0 <= lower_bound)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Validate that a value is a finite float.

    Args:
        value: Value to check
        name: Parameter name (for the error message)

    Raises:
        ValueError: If value is NaN/Inf
        TypeError: If value is not a real number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")

    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Validate that a value is a non-negative integer.

    Args:
        value: Value to check
        name: Parameter name (for the error message)

    Raises:
        TypeError: If value is not an int
        ValueError: If value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
