"""Domain-error classifier: pre-flight checks for evaluation and integration

Decides, before anything is computed or mutated, whether a calculus
operation would be mathematically undefined:

- Division by zero: a negative exponent met by x == 0 (evaluation), or a
  negative exponent other than -1 with an integration interval containing
  0 (definite integration)
- Natural log of zero: an exponent -1 term with an integration interval
  containing 0 (its antiderivative is k*ln|x|)

Both conditions are reported independently; for definite integration they
may hold at the same time. The classifier must agree exactly with the
numeric computation that follows it: whenever it reports no error, that
computation never divides by zero.
"""

from dataclasses import dataclass

from src.calculus.results import CalculusFailure
from src.core.domain.polynomial import Polynomial
from src.core.math.numerical_safeguards import interval_contains_zero


# =============================================================================
# REPORT
# =============================================================================


@dataclass(frozen=True)
class DomainErrorReport:
    """Domain errors found for one operation."""

    division_by_zero: bool
    natural_log: bool

    @property
    def has_errors(self) -> bool:
        return self.division_by_zero or self.natural_log

    def failures(self) -> frozenset[CalculusFailure]:
        """Failure kinds for a calculus result."""
        kinds = set()
        if self.division_by_zero:
            kinds.add(CalculusFailure.DIVISION_BY_ZERO)
        if self.natural_log:
            kinds.add(CalculusFailure.NATURAL_LOG)
        return frozenset(kinds)


NO_DOMAIN_ERRORS = DomainErrorReport(division_by_zero=False, natural_log=False)


# =============================================================================
# CLASSIFIERS
# =============================================================================


def classify_evaluation(polynomial: Polynomial, x: float) -> DomainErrorReport:
    """
    Domain errors of evaluating the polynomial at x.

    Any negative exponent, -1 included, makes evaluation at 0 a division by
    zero. Evaluation never has a natural-log error.

    Examples:
        >>> classify_evaluation(Polynomial([(-1, 1.0)]), 0.0).division_by_zero
        True
        >>> classify_evaluation(Polynomial([(-1, 1.0)]), 2.0).has_errors
        False
    """
    if x == 0 and polynomial.has_negative_exponent():
        return DomainErrorReport(division_by_zero=True, natural_log=False)
    return NO_DOMAIN_ERRORS


def classify_definite_integral(
    polynomial: Polynomial,
    lower_bound: float,
    upper_bound: float,
) -> DomainErrorReport:
    """
    Domain errors of integrating the polynomial over [lower_bound, upper_bound].

    Only an interval that contains 0 (bounds in either order, a bound of 0
    included) can produce errors:
    - natural_log: a term with exponent exactly -1 exists
    - division_by_zero: a negative exponent exists, unless the only negative
      exponent is exactly -1 (that case is purely a log error)

    Examples:
        >>> p = Polynomial([(-2, 1.0), (-1, 1.0)])
        >>> classify_definite_integral(p, -3.0, 1.0)
        DomainErrorReport(division_by_zero=True, natural_log=True)
        >>> classify_definite_integral(p, -3.0, -2.0).has_errors
        False
    """
    if not interval_contains_zero(lower_bound, upper_bound):
        return NO_DOMAIN_ERRORS

    has_log_term = polynomial.exists(-1)
    negative_count = polynomial.negative_exponent_count()

    # x^-1 alone integrates to ln|x|; anything else negative divides by zero
    division_by_zero = negative_count > 1 or (negative_count == 1 and not has_log_term)

    return DomainErrorReport(division_by_zero=division_by_zero, natural_log=has_log_term)
