"""
Canonical serializer: term store back to grammar text

Produces text that the grammar validator accepts and the builder turns back
into an equal polynomial. Coefficients are written in positional notation
(the grammar has no exponent-notation literals) from Python's shortest
round-trip repr, so parse(format(p)) == p exactly.

This is a round-trip format, not a display renderer: it does not hide
trailing ".0" or apply any presentation rule beyond what the grammar needs.
"""

from decimal import Decimal

from src.core.domain.polynomial import Polynomial
from src.core.domain.term import Term
from src.core.math.numerical_safeguards import is_valid_float


def format_coefficient(value: float) -> str:
    """
    Positional decimal text of a finite float.

    Raises:
        ValueError: If value is NaN/Inf

    Examples:
        >>> format_coefficient(2.0)
        '2.0'
        >>> format_coefficient(1e-05)
        '0.00001'
        >>> format_coefficient(-1.5e20)
        '-150000000000000000000'
    """
    if not is_valid_float(value):
        raise ValueError(f"cannot serialize non-finite coefficient {value}")
    return format(Decimal(repr(value)), "f")


def format_term(term: Term, leading: bool) -> str:
    """
    Text of one term.

    A leading term carries its own sign; a following term is written with
    its absolute coefficient because the separating operator carries the sign.
    Coefficients of magnitude 1 are omitted in front of x.
    """
    coefficient = term.coefficient if leading else abs(term.coefficient)

    if term.exponent == 0:
        return format_coefficient(coefficient)

    if coefficient == 1:
        prefix = ""
    elif coefficient == -1:
        prefix = "-"
    else:
        prefix = format_coefficient(coefficient)

    if term.exponent == 1:
        return f"{prefix}x"
    return f"{prefix}x^{term.exponent}"


def format_polynomial(polynomial: Polynomial) -> str:
    """
    Canonical text of a polynomial, terms by descending exponent.

    The empty polynomial is written as "0", which parses back to an empty
    polynomial.

    Examples:
        >>> format_polynomial(Polynomial([(0, 1.0), (2, -3.0), (1, -1.0)]))
        '-3.0x^2 - x + 1.0'
    """
    terms = polynomial.sorted_terms()
    if not terms:
        return "0"

    parts = [format_term(terms[0], leading=True)]
    for term in terms[1:]:
        parts.append("-" if term.coefficient < 0 else "+")
        parts.append(format_term(term, leading=False))

    return " ".join(parts)
