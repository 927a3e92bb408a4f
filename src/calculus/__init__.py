"""Calculus: evaluation, differentiation and integration of polynomials.

- CalculusEngine: operations on Polynomial term stores
- Domain-error classifier: division by zero / natural log of zero
- Frozen results carrying success, failure kinds and payload
"""

from .domain_errors import (
    DomainErrorReport,
    classify_definite_integral,
    classify_evaluation,
)
from .engine import (
    CalculusConfig,
    CalculusEngine,
    definite_integral,
    differentiate,
    differentiate_n,
    differentiate_term,
    evaluate,
    integrate,
    integrate_term,
)
from .results import (
    CalculusFailure,
    CalculusResult,
    DefiniteIntegralResult,
    DerivativeResult,
    EvaluationResult,
    IntegralResult,
)

__all__ = [
    # Engine
    "CalculusEngine",
    "CalculusConfig",
    "evaluate",
    "differentiate",
    "differentiate_n",
    "integrate",
    "definite_integral",
    "differentiate_term",
    "integrate_term",
    # Domain errors
    "DomainErrorReport",
    "classify_evaluation",
    "classify_definite_integral",
    # Results
    "CalculusFailure",
    "CalculusResult",
    "EvaluationResult",
    "DerivativeResult",
    "IntegralResult",
    "DefiniteIntegralResult",
]
