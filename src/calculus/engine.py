"""Calculus Engine: evaluation, differentiation and integration of polynomials

Operates on a Polynomial term store:
- evaluate: value at x (never mutates)
- differentiate / differentiate_n: derivative in place, n-fold with early stop
- integrate: antiderivative in place, the exponent -1 term reported apart
- definite_integral: two phases, pre-flight domain-error classification, then
  in-place integration and F(ub) - F(lb)

Integration flow (definite):
1. Empty polynomial -> EMPTY_POLYNOMIAL, no domain flags
2. Domain-error classification -> DIVISION_BY_ZERO and/or NATURAL_LOG,
   polynomial untouched
3. Indefinite integration of a copy
4. value = F(ub) - F(lb) without the k*ln|x| part (returned as log_coefficient)
5. The copy replaces the polynomial only if the value is a number

Failures are returned in the result, never raised. A coefficient overflow or
an undefined sum (inf - inf of two saturated powers) is NUMERIC_OVERFLOW.
Misuse (NaN/Inf points, negative derivative order, moved-from polynomials)
raises, as does power overflow when overflow_to_infinity is disabled.
"""

import math
from dataclasses import dataclass

from src.calculus.domain_errors import (
    DomainErrorReport,
    classify_definite_integral,
    classify_evaluation,
)
from src.calculus.results import (
    CalculusFailure,
    DefiniteIntegralResult,
    DerivativeResult,
    EvaluationResult,
    IntegralResult,
)
from src.core.domain.polynomial import Polynomial, TermAllocationError
from src.core.domain.term import Term
from src.core.log import get_logger
from src.core.math.numerical_safeguards import (
    is_valid_float,
    safe_power,
    validate_finite,
    validate_non_negative_int,
)

logger = get_logger(__name__)

_EMPTY = frozenset({CalculusFailure.EMPTY_POLYNOMIAL})
_ALLOCATION = frozenset({CalculusFailure.ALLOCATION_FAILURE})
_OVERFLOW = frozenset({CalculusFailure.NUMERIC_OVERFLOW})


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class CalculusConfig:
    """Configuration of the calculus engine."""

    # x**n overflow saturates to ±inf instead of raising
    overflow_to_infinity: bool = True

    # Emit structured log events for operations and failures
    log_operations: bool = True


# =============================================================================
# TERM RULES
# =============================================================================


def differentiate_term(term: Term) -> tuple[int, float] | None:
    """
    Derivative of one term: d/dx (k*x^n) = n*k*x^(n-1).

    Returns:
        (exponent, coefficient) of the derivative, or None for a constant

    Raises:
        OverflowError: If the new coefficient overflows

    Examples:
        >>> differentiate_term(Term(exponent=3, coefficient=2.0))
        (2, 6.0)
        >>> differentiate_term(Term(exponent=0, coefficient=5.0)) is None
        True
    """
    if term.is_constant:
        return None

    coefficient = term.coefficient * term.exponent
    if not is_valid_float(coefficient):
        raise OverflowError(
            f"derivative coefficient of {term.coefficient}*x^{term.exponent} overflows"
        )
    return (term.exponent - 1, coefficient)


def integrate_term(term: Term) -> tuple[int, float] | None:
    """
    Antiderivative of one term: integral of k*x^n = k/(n+1) * x^(n+1).

    Returns:
        (exponent, coefficient) of the antiderivative, or None when the
        coefficient underflows to 0. Never called for the exponent -1 term.

    Examples:
        >>> integrate_term(Term(exponent=2, coefficient=3.0))
        (3, 1.0)
        >>> integrate_term(Term(exponent=-3, coefficient=4.0))
        (-2, -2.0)
    """
    coefficient = term.coefficient / (term.exponent + 1)
    if coefficient == 0:
        return None
    return (term.exponent + 1, coefficient)


# =============================================================================
# ENGINE
# =============================================================================


class CalculusEngine:
    """Calculus operations on Polynomial term stores.

    The engine keeps no state between calls; each operation reads or rewrites
    only the polynomial it is given.
    """

    def __init__(self, config: CalculusConfig | None = None):
        """
        Args:
            config: engine configuration (optional, default used otherwise)
        """
        self.config = config or CalculusConfig()

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def evaluate(self, polynomial: Polynomial, x: float) -> EvaluationResult:
        """Value of the polynomial at x.

        Args:
            polynomial: polynomial to evaluate (not modified)
            x: evaluation point

        Returns:
            EvaluationResult; on failure value is 0.0 and failures holds
            EMPTY_POLYNOMIAL, DIVISION_BY_ZERO or NUMERIC_OVERFLOW (saturated
            powers of opposite sign cancel to NaN). A single saturated power
            gives a successful ±inf.

        Raises:
            ValueError: If x is NaN/Inf
            OverflowError: If a power overflows and overflow_to_infinity=False
        """
        validate_finite(x, "x")
        x = float(x)

        if polynomial.is_empty():
            return self._failed_evaluation(x, _EMPTY, "polynomial has no terms")

        report = classify_evaluation(polynomial, x)
        if report.has_errors:
            return self._failed_evaluation(
                x,
                report.failures(),
                "negative exponent evaluated at x = 0",
            )

        value = self._sum_terms(polynomial, x)
        if math.isnan(value):
            return self._failed_evaluation(x, _OVERFLOW, "saturated terms cancel to NaN")

        self._log_debug("polynomial_evaluated", x=x, value=value, terms=polynomial.size())
        return EvaluationResult(
            success=True,
            failures=frozenset(),
            details=f"P({x:g}) = {value:g}",
            x=x,
            value=value,
        )

    # -------------------------------------------------------------------------
    # Differentiation
    # -------------------------------------------------------------------------

    def differentiate(self, polynomial: Polynomial) -> DerivativeResult:
        """First derivative, in place. See differentiate_n()."""
        return self.differentiate_n(polynomial, 1)

    def differentiate_n(self, polynomial: Polynomial, n: int) -> DerivativeResult:
        """n-th derivative, in place.

        Steps stop as soon as the polynomial becomes empty: every further
        derivative of zero is zero, so the remaining steps are skipped and
        is_zero is set.

        Args:
            polynomial: polynomial to differentiate (modified in place)
            n: derivative order (>= 0; 0 leaves the polynomial unchanged)

        Returns:
            DerivativeResult; EMPTY_POLYNOMIAL if there were no terms to begin
            with, ALLOCATION_FAILURE if storage could not be rebuilt or
            NUMERIC_OVERFLOW if a coefficient overflows (the polynomial then
            holds the last completed derivative)

        Raises:
            TypeError: If n is not an int
            ValueError: If n < 0
        """
        validate_non_negative_int(n, "n")

        if polynomial.is_empty():
            return self._failed_derivative(n, 0, _EMPTY, "polynomial has no terms")

        steps = 0
        while steps < n and not polynomial.is_empty():
            try:
                derivative = [
                    pair for pair in map(differentiate_term, polynomial) if pair is not None
                ]
            except OverflowError as exc:
                return self._failed_derivative(n, steps, _OVERFLOW, str(exc))

            try:
                polynomial.replace_terms(derivative)
            except TermAllocationError:
                logger.error("derivative_allocation_failed", order=n, steps=steps)
                return self._failed_derivative(
                    n, steps, _ALLOCATION, f"storage exhausted after {steps} step(s)"
                )
            steps += 1

        is_zero = polynomial.is_empty()
        self._log_debug(
            "polynomial_differentiated",
            order=n,
            steps=steps,
            is_zero=is_zero,
            terms=polynomial.size(),
        )
        return DerivativeResult(
            success=True,
            failures=frozenset(),
            details=f"derivative of order {n}" + (" is zero" if is_zero else ""),
            order=n,
            steps_performed=steps,
            is_zero=is_zero,
        )

    # -------------------------------------------------------------------------
    # Integration
    # -------------------------------------------------------------------------

    def integrate(self, polynomial: Polynomial) -> IntegralResult:
        """Indefinite integral, in place (constant of integration omitted).

        The exponent -1 term is removed and reported as
        (log_term_integrated=True, log_coefficient=k) for k*ln|x|.

        Returns:
            IntegralResult; EMPTY_POLYNOMIAL (with (False, 0.0)) if there were
            no terms, polynomial untouched
        """
        if polynomial.is_empty():
            return IntegralResult(
                success=False,
                failures=_EMPTY,
                details="polynomial has no terms",
                log_term_integrated=False,
                log_coefficient=0.0,
            )

        try:
            log_term_integrated, log_coefficient = self._integrate_in_place(polynomial)
        except TermAllocationError:
            logger.error("integral_allocation_failed", terms=polynomial.size())
            return IntegralResult(
                success=False,
                failures=_ALLOCATION,
                details="storage exhausted",
                log_term_integrated=False,
                log_coefficient=0.0,
            )

        return IntegralResult(
            success=True,
            failures=frozenset(),
            details=_integral_details(log_term_integrated, log_coefficient),
            log_term_integrated=log_term_integrated,
            log_coefficient=log_coefficient,
        )

    def definite_integral(
        self,
        polynomial: Polynomial,
        lower_bound: float,
        upper_bound: float,
    ) -> DefiniteIntegralResult:
        """Definite integral over [lower_bound, upper_bound].

        On success the polynomial holds its antiderivative and value is
        F(upper_bound) - F(lower_bound) without the k*ln|x| contribution of an
        exponent -1 term; that coefficient comes back as log_coefficient.

        Args:
            polynomial: polynomial to integrate (modified in place on success)
            lower_bound: lower bound
            upper_bound: upper bound

        Returns:
            DefiniteIntegralResult; on failure the polynomial is untouched and
            value is 0.0

        Raises:
            ValueError: If a bound is NaN/Inf
            OverflowError: If a power overflows and overflow_to_infinity=False
                (polynomial untouched)
        """
        validate_finite(lower_bound, "lower_bound")
        validate_finite(upper_bound, "upper_bound")
        lower_bound = float(lower_bound)
        upper_bound = float(upper_bound)

        # 1. Empty polynomial
        if polynomial.is_empty():
            return self._failed_definite(
                lower_bound, upper_bound, _EMPTY, "polynomial has no terms"
            )

        # 2. Pre-flight domain-error classification
        report = classify_definite_integral(polynomial, lower_bound, upper_bound)
        if report.has_errors:
            return self._failed_definite(
                lower_bound,
                upper_bound,
                report.failures(),
                _domain_error_details(report),
            )

        # 3. Integration of a copy
        try:
            antiderivative = polynomial.copy()
            log_term_integrated, log_coefficient = self._integrate_in_place(antiderivative)
        except TermAllocationError:
            logger.error("definite_integral_allocation_failed", terms=polynomial.size())
            return self._failed_definite(
                lower_bound, upper_bound, _ALLOCATION, "storage exhausted"
            )

        # 4. F(ub) - F(lb), polynomial part only
        value = self._sum_terms(antiderivative, upper_bound) - self._sum_terms(
            antiderivative, lower_bound
        )
        if math.isnan(value):
            return self._failed_definite(
                lower_bound, upper_bound, _OVERFLOW, "saturated terms cancel to NaN"
            )

        # 5. Commit
        polynomial.move_from(antiderivative)

        self._log_debug(
            "definite_integral_computed",
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            value=value,
            log_term_integrated=log_term_integrated,
        )
        return DefiniteIntegralResult(
            success=True,
            failures=frozenset(),
            details=_integral_details(log_term_integrated, log_coefficient),
            log_term_integrated=log_term_integrated,
            log_coefficient=log_coefficient,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            value=value,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _sum_terms(self, polynomial: Polynomial, x: float) -> float:
        """Sum of the terms at x; 0.0 for an empty polynomial."""
        result = 0.0
        for term in polynomial:
            if term.exponent == 0:
                result += term.coefficient
            else:
                result += term.coefficient * safe_power(
                    x, term.exponent, self.config.overflow_to_infinity
                )
        return result

    def _integrate_in_place(self, polynomial: Polynomial) -> tuple[bool, float]:
        """Replace the polynomial with its antiderivative.

        Returns:
            (log_term_integrated, log_coefficient)
        """
        log_term_integrated = False
        log_coefficient = 0.0
        antiderivative = []

        for term in polynomial:
            if term.is_log_term:
                # Exponents are unique: at most one such term
                log_term_integrated = True
                log_coefficient = term.coefficient
                continue

            pair = integrate_term(term)
            if pair is not None:
                antiderivative.append(pair)

        polynomial.replace_terms(antiderivative)

        self._log_debug(
            "polynomial_integrated",
            terms=polynomial.size(),
            log_term_integrated=log_term_integrated,
        )
        return log_term_integrated, log_coefficient

    def _failed_evaluation(
        self,
        x: float,
        failures: frozenset[CalculusFailure],
        details: str,
    ) -> EvaluationResult:
        self._log_failure("evaluation_failed", failures, x=x)
        return EvaluationResult(success=False, failures=failures, details=details, x=x, value=0.0)

    def _failed_derivative(
        self,
        order: int,
        steps: int,
        failures: frozenset[CalculusFailure],
        details: str,
    ) -> DerivativeResult:
        self._log_failure("differentiation_failed", failures, order=order)
        return DerivativeResult(
            success=False,
            failures=failures,
            details=details,
            order=order,
            steps_performed=steps,
            is_zero=False,
        )

    def _failed_definite(
        self,
        lower_bound: float,
        upper_bound: float,
        failures: frozenset[CalculusFailure],
        details: str,
    ) -> DefiniteIntegralResult:
        self._log_failure(
            "definite_integral_failed",
            failures,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
        )
        return DefiniteIntegralResult(
            success=False,
            failures=failures,
            details=details,
            log_term_integrated=False,
            log_coefficient=0.0,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            value=0.0,
        )

    def _log_debug(self, event: str, **fields) -> None:
        if self.config.log_operations:
            logger.debug(event, **fields)

    def _log_failure(self, event: str, failures: frozenset[CalculusFailure], **fields) -> None:
        if self.config.log_operations:
            logger.info(event, failures=sorted(f.value for f in failures), **fields)


def _integral_details(log_term_integrated: bool, log_coefficient: float) -> str:
    if log_term_integrated:
        return f"integrated; log term {log_coefficient:g}*ln|x| reported separately"
    return "integrated"


def _domain_error_details(report: DomainErrorReport) -> str:
    reasons = []
    if report.division_by_zero:
        reasons.append("negative exponent other than -1 with 0 in the interval")
    if report.natural_log:
        reasons.append("exponent -1 term with 0 in the interval")
    return "; ".join(reasons)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def evaluate(polynomial: Polynomial, x: float, config: CalculusConfig | None = None) -> EvaluationResult:
    """Value of the polynomial at x. See CalculusEngine.evaluate()."""
    return CalculusEngine(config).evaluate(polynomial, x)


def differentiate(polynomial: Polynomial, config: CalculusConfig | None = None) -> DerivativeResult:
    """First derivative in place. See CalculusEngine.differentiate()."""
    return CalculusEngine(config).differentiate(polynomial)


def differentiate_n(
    polynomial: Polynomial,
    n: int,
    config: CalculusConfig | None = None,
) -> DerivativeResult:
    """n-th derivative in place. See CalculusEngine.differentiate_n()."""
    return CalculusEngine(config).differentiate_n(polynomial, n)


def integrate(polynomial: Polynomial, config: CalculusConfig | None = None) -> IntegralResult:
    """Indefinite integral in place. See CalculusEngine.integrate()."""
    return CalculusEngine(config).integrate(polynomial)


def definite_integral(
    polynomial: Polynomial,
    lower_bound: float,
    upper_bound: float,
    config: CalculusConfig | None = None,
) -> DefiniteIntegralResult:
    """Definite integral over the bounds. See CalculusEngine.definite_integral()."""
    return CalculusEngine(config).definite_integral(polynomial, lower_bound, upper_bound)
