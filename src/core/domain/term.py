"""
Term: Model of a single polynomial term

Immutable Pydantic model for one (exponent, coefficient) pair of a
single-variable polynomial. The term store hands these out when it is
iterated; it never stores a Term whose coefficient is zero.
"""

import math

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# TERM MODEL
# =============================================================================


class Term(BaseModel):
    """
    One term ``coefficient * x^exponent`` of a polynomial.

    Immutable model (frozen=True): terms are values, the polynomial that
    produced them is not affected by anything done with them.
    """

    exponent: int = Field(..., description="Integer exponent of x (may be negative)")
    coefficient: float = Field(..., description="Real coefficient (never zero)")

    model_config = {"frozen": True}

    @field_validator("coefficient")
    @classmethod
    def validate_coefficient(cls, v: float) -> float:
        """
        A stored term always has a finite, non-zero coefficient.
        """
        if not math.isfinite(v):
            raise ValueError(f"coefficient must be finite, got {v}")
        if v == 0:
            raise ValueError("coefficient must be non-zero")
        return v

    @property
    def is_constant(self) -> bool:
        """True for a term with exponent 0."""
        return self.exponent == 0

    @property
    def is_log_term(self) -> bool:
        """True for a term with exponent -1 (antiderivative is k*ln|x|)."""
        return self.exponent == -1

    def as_pair(self) -> tuple[int, float]:
        """Return the term as an ``(exponent, coefficient)`` tuple."""
        return (self.exponent, self.coefficient)
