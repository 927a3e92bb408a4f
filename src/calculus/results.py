"""Calculus results: outcome of every calculus engine operation.

Every operation returns a frozen result instead of raising for domain
problems:
- success flag
- failures: set of failure kinds (both domain errors may be present at once)
- operation payload (value, log term, derivative order, ...)
- details string for diagnostics

Flag-style names (poly_has_no_terms, div_by_zero_error, ...) are available
as read-only properties for callers that map flags to messages.
"""

import math
from dataclasses import dataclass
from enum import Enum


# =============================================================================
# FAILURE KINDS
# =============================================================================


class CalculusFailure(str, Enum):
    """Why a calculus operation failed."""

    EMPTY_POLYNOMIAL = "EMPTY_POLYNOMIAL"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    NATURAL_LOG = "NATURAL_LOG"
    ALLOCATION_FAILURE = "ALLOCATION_FAILURE"
    NUMERIC_OVERFLOW = "NUMERIC_OVERFLOW"


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class CalculusResult:
    """Fields shared by all calculus results."""

    success: bool
    failures: frozenset[CalculusFailure]

    # Diagnostics
    details: str

    @property
    def poly_has_no_terms(self) -> bool:
        return CalculusFailure.EMPTY_POLYNOMIAL in self.failures

    @property
    def div_by_zero_error(self) -> bool:
        return CalculusFailure.DIVISION_BY_ZERO in self.failures

    @property
    def nat_log_error(self) -> bool:
        return CalculusFailure.NATURAL_LOG in self.failures

    @property
    def allocation_failed(self) -> bool:
        return CalculusFailure.ALLOCATION_FAILURE in self.failures

    @property
    def numeric_overflow(self) -> bool:
        return CalculusFailure.NUMERIC_OVERFLOW in self.failures


@dataclass(frozen=True)
class EvaluationResult(CalculusResult):
    """Result of evaluating a polynomial at x. value is 0.0 on failure."""

    x: float
    value: float


@dataclass(frozen=True)
class DerivativeResult(CalculusResult):
    """Result of (n-fold) differentiation.

    steps_performed counts the differentiation steps that actually ran;
    it is smaller than order when the polynomial became zero early.
    """

    order: int
    steps_performed: int
    is_zero: bool

    @property
    def nth_deriv_is_zero(self) -> bool:
        return self.is_zero


@dataclass(frozen=True)
class IntegralResult(CalculusResult):
    """Result of indefinite integration.

    The exponent -1 term integrates to log_coefficient * ln|x|, which is not a
    polynomial term; it is removed from the polynomial and reported here.
    The constant of integration is never represented.
    """

    log_term_integrated: bool
    log_coefficient: float

    @property
    def exp_neg_one_integrated(self) -> bool:
        return self.log_term_integrated

    @property
    def coeff_exp_neg_one(self) -> float:
        return self.log_coefficient


@dataclass(frozen=True)
class DefiniteIntegralResult(IntegralResult):
    """Result of definite integration over [lower_bound, upper_bound].

    value is F(upper_bound) - F(lower_bound) of the polynomial part only; when
    log_term_integrated is True the caller adds
    log_coefficient * (ln|upper_bound| - ln|lower_bound|), see log_contribution().
    """

    lower_bound: float
    upper_bound: float
    value: float

    def log_contribution(self) -> float:
        """
        The k*ln|x| part of the integral over the bounds.

        Returns:
            log_coefficient * (ln|upper_bound| - ln|lower_bound|), or 0.0 when
            no log term was integrated

        Raises:
            ValueError: If the integral failed
        """
        if not self.success:
            raise ValueError(f"no log contribution for a failed integral: {self.details}")

        if not self.log_term_integrated:
            return 0.0

        return self.log_coefficient * (
            math.log(abs(self.upper_bound)) - math.log(abs(self.lower_bound))
        )

    def total(self) -> float:
        """value plus the log contribution."""
        return self.value + self.log_contribution()
