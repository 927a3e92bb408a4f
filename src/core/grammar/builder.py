"""
Polynomial Builder: text to term store

Consumes text already accepted by the grammar validator and populates a
Polynomial through its merge-aware insert().

Defaults derived per component:
- no coefficient before x ("x", "x^3")  -> coefficient 1
- "-" before x ("-x")                   -> coefficient -1
- no x ("7", "-2.5")                    -> exponent 0
- x without '^' ("3x")                  -> exponent 1

The sign of a term comes from the most recent operator ('+' before the first
term). A component whose coefficient is exactly 0 ("0x^2", "-0") contributes
nothing at all.
"""

from src.core.domain.polynomial import Polynomial
from src.core.grammar.validator import (
    is_operator,
    partition_component,
    split_components,
    validate_polynomial,
)
from src.core.log import get_logger
from src.core.math.numerical_safeguards import is_valid_float

logger = get_logger(__name__)


# =============================================================================
# COMPONENT DECODING
# =============================================================================


def coefficient_of_component(component: str) -> float:
    """
    Coefficient of a valid term component.

    Raises:
        OverflowError: If the literal is too large for a float

    Examples:
        >>> coefficient_of_component("x^2")
        1.0
        >>> coefficient_of_component("-x")
        -1.0
        >>> coefficient_of_component("-0")
        0.0
    """
    head, _, _ = partition_component(component)
    if not head:
        return 1.0
    if head == "-":
        return -1.0

    coefficient = float(head)
    if not is_valid_float(coefficient):
        raise OverflowError(f"coefficient literal {head!r} is out of float range")

    # -0.0 collapses to 0.0
    return 0.0 if coefficient == 0 else coefficient


def exponent_of_component(component: str) -> int:
    """
    Exponent of a valid term component.

    Examples:
        >>> exponent_of_component("4")
        0
        >>> exponent_of_component("3x")
        1
        >>> exponent_of_component("x^-2")
        -2
    """
    _, variable, tail = partition_component(component)
    if not variable:
        return 0
    if not tail:
        return 1
    return int(tail[1:])


def count_term_components(text: str) -> int:
    """
    Upper bound on the number of terms in polynomial text.

    Every non-operator component is counted; terms that share an exponent are
    counted separately, so the stored size never exceeds this value.

    Examples:
        >>> count_term_components("x^2 + x^2 + 1")
        3
    """
    return sum(1 for component in split_components(text) if not is_operator(component))


# =============================================================================
# BUILDING
# =============================================================================


def populate(polynomial: Polynomial, text: str) -> None:
    """
    Insert every term of valid polynomial text into a polynomial.

    The text must already be validated; existing terms are kept and merged
    with the new ones.

    Raises:
        OverflowError: If a literal or a merged coefficient overflows
        TermAllocationError: If storage cannot grow
    """
    negate = False
    for component in split_components(text):
        if is_operator(component):
            negate = component == "-"
            continue

        coefficient = coefficient_of_component(component)
        if coefficient == 0:
            continue

        if negate:
            coefficient = -coefficient

        polynomial.insert(exponent_of_component(component), coefficient)


def parse_polynomial(text: str) -> Polynomial:
    """
    Validate text and build a new polynomial from it.

    Args:
        text: Polynomial text, e.g. "x^-4 - x + 1 + x^2"

    Returns:
        New Polynomial (possibly empty, e.g. for "0x^2")

    Raises:
        InvalidPolynomialSyntax: If the text is not a valid polynomial
        OverflowError: If a literal or a merged coefficient overflows
        TermAllocationError: If storage cannot grow

    Examples:
        >>> p = parse_polynomial("x^2 + x^2 - 3")
        >>> sorted(t.as_pair() for t in p)
        [(0, -3.0), (2, 2.0)]
    """
    validate_polynomial(text)

    polynomial = Polynomial()
    populate(polynomial, text)

    logger.debug(
        "polynomial_parsed",
        components=count_term_components(text),
        terms=polynomial.size(),
    )
    return polynomial
