"""
Polynomial Grammar Validator

Checks that raw text is a polynomial in the accepted grammar before any
object is built:

    polynomial  := term (op term)*
    op          := '+' | '-'
    term        := [coefficient] 'x' ['^' exponent] | coefficient
    coefficient := decimal literal (optional leading '-', optional '.')
    exponent    := signed integer literal

Components (terms and operators) are separated by whitespace, so ``x+1`` is a
single component and is rejected. ``x``/``X`` are both accepted as the
variable.

The module also carries the number-literal validators shared with callers
that read bounds and evaluation points as text.

CRITICAL INVARIANTS:
1. Validation has no side effects and never raises for any str input
2. Character tables are immutable module constants
3. Operators and terms strictly alternate; first and last components are terms
"""

import re
from typing import Callable, Final


# =============================================================================
# CHARACTER TABLES
# =============================================================================

DIGITS: Final[frozenset[str]] = frozenset("0123456789")

VARIABLE_CHARS: Final[frozenset[str]] = frozenset("xX")

OPERATORS: Final[frozenset[str]] = frozenset({"+", "-"})

# Every character that may appear inside a polynomial component
VALID_COMPONENT_CHARS: Final[frozenset[str]] = DIGITS | VARIABLE_CHARS | frozenset("+-.^")

DECIMAL_CHARS: Final[frozenset[str]] = DIGITS | frozenset("-.")

INTEGER_CHARS: Final[frozenset[str]] = DIGITS | frozenset("-")

# ASCII whitespace only: other Unicode whitespace is an invalid character,
# not a separator
_COMPONENT_RE: Final[re.Pattern[str]] = re.compile(r"[^ \t\n\v\f\r]+")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidPolynomialSyntax(ValueError):
    """
    Text does not follow the polynomial grammar.

    No polynomial is constructed; callers re-prompt for input.
    """


# =============================================================================
# NUMBER LITERALS
# =============================================================================


def is_valid_decimal(literal: str) -> bool:
    """
    Check a single decimal literal.

    Rules:
    - only digits, '-' and '.'
    - at most one '-', only first, followed by a digit or '.'
    - at most one '.', followed by a digit and preceded by a digit, '-' or
      nothing

    Examples:
        >>> is_valid_decimal("-2.5")
        True
        >>> is_valid_decimal(".5")
        True
        >>> is_valid_decimal("-.5")
        True
        >>> is_valid_decimal("5.")
        False
        >>> is_valid_decimal("1-2")
        False
    """
    if not literal or not set(literal) <= DECIMAL_CHARS:
        return False

    if literal.count("-") > 1 or literal.count(".") > 1:
        return False

    for i, char in enumerate(literal):
        following = literal[i + 1] if i + 1 < len(literal) else ""
        if char == "-":
            if i != 0 or not (following in DIGITS or following == "."):
                return False
        elif char == ".":
            if following not in DIGITS:
                return False
            if i > 0 and literal[i - 1] not in DIGITS and literal[i - 1] != "-":
                return False

    return True


def is_valid_integer(literal: str) -> bool:
    """
    Check a single signed integer literal: digits with an optional leading '-'.

    Examples:
        >>> is_valid_integer("-3")
        True
        >>> is_valid_integer("+3")
        False
        >>> is_valid_integer("-")
        False
    """
    if not literal or not set(literal) <= INTEGER_CHARS:
        return False

    if literal[0] == "-":
        literal = literal[1:]

    return bool(literal) and set(literal) <= DIGITS


def _inputs_are_valid_numbers(
    text: str,
    expected_count: int,
    is_valid_number: Callable[[str], bool],
) -> bool:
    if expected_count < 1:
        raise ValueError(f"expected_count must be >= 1, got {expected_count}")

    # Numbers are separated by spaces only; tabs/newlines are invalid characters
    numbers = [token for token in text.split(" ") if token]
    if not numbers:
        return False

    return len(numbers) == expected_count and all(is_valid_number(n) for n in numbers)


def inputs_are_valid_doubles(text: str, expected_count: int) -> bool:
    """
    Check that text holds exactly expected_count space-separated decimals.

    Args:
        text: Raw input, e.g. "-3 1.5"
        expected_count: Number of decimals required (>= 1)

    Returns:
        True if every token is a valid decimal and the count matches

    Raises:
        ValueError: If expected_count < 1
    """
    return _inputs_are_valid_numbers(text, expected_count, is_valid_decimal)


def inputs_are_valid_ints(text: str, expected_count: int) -> bool:
    """
    Check that text holds exactly expected_count space-separated integers.

    Raises:
        ValueError: If expected_count < 1
    """
    return _inputs_are_valid_numbers(text, expected_count, is_valid_integer)


def parse_doubles(text: str, expected_count: int) -> tuple[float, ...]:
    """
    Parse exactly expected_count space-separated decimals.

    Raises:
        ValueError: If the text does not hold exactly that many valid decimals

    Examples:
        >>> parse_doubles("-3 1", 2)
        (-3.0, 1.0)
    """
    if not inputs_are_valid_doubles(text, expected_count):
        raise ValueError(f"expected {expected_count} decimal number(s), got {text!r}")
    return tuple(float(token) for token in text.split(" ") if token)


def parse_ints(text: str, expected_count: int) -> tuple[int, ...]:
    """
    Parse exactly expected_count space-separated integers.

    Raises:
        ValueError: If the text does not hold exactly that many valid integers
    """
    if not inputs_are_valid_ints(text, expected_count):
        raise ValueError(f"expected {expected_count} integer(s), got {text!r}")
    return tuple(int(token) for token in text.split(" ") if token)


# =============================================================================
# COMPONENTS
# =============================================================================


def split_components(text: str) -> list[str]:
    """Split text into whitespace-delimited components."""
    return _COMPONENT_RE.findall(text)


def partition_component(component: str) -> tuple[str, str, str]:
    """
    Split a term component at its first variable character.

    Returns:
        (head, variable, tail): head is the coefficient text, variable is
        'x'/'X' or '' for a constant, tail is everything after the variable

    Examples:
        >>> partition_component("-2.5x^3")
        ('-2.5', 'x', '^3')
        >>> partition_component("7")
        ('7', '', '')
    """
    for i, char in enumerate(component):
        if char in VARIABLE_CHARS:
            return component[:i], char, component[i + 1:]
    return component, "", ""


def is_valid_component(component: str) -> bool:
    """
    Check one whitespace-free component (a term or an operator).

    Examples:
        >>> is_valid_component("-x^-2")
        True
        >>> is_valid_component("+")
        True
        >>> is_valid_component("x^")
        False
        >>> is_valid_component("2x3")
        False
    """
    if not component or not set(component) <= VALID_COMPONENT_CHARS:
        return False

    if len(component) == 1:
        return component in VARIABLE_CHARS or component in OPERATORS or component in DIGITS

    head, variable, tail = partition_component(component)

    # "-" alone before x stands for a coefficient of -1
    if head and head != "-" and not is_valid_decimal(head):
        return False

    if not variable:
        return True

    if not tail:
        return True

    if tail[0] != "^":
        return False

    return is_valid_integer(tail[1:])


def is_operator(component: str) -> bool:
    """True if the component is a '+' or '-' operator."""
    return component in OPERATORS


# =============================================================================
# POLYNOMIAL
# =============================================================================


def is_valid_polynomial(text: str) -> bool:
    """
    Check that text is a polynomial in the accepted grammar.

    Args:
        text: Raw polynomial text, e.g. "2x^2 - x + 1"

    Returns:
        True if the text is valid; empty or whitespace-only text is invalid

    Examples:
        >>> is_valid_polynomial("x^2 + x + 1")
        True
        >>> is_valid_polynomial("x^2 + + 1")
        False
        >>> is_valid_polynomial("- x")
        False
        >>> is_valid_polynomial("x +")
        False
    """
    components = split_components(text)
    if not components:
        return False

    previous_was_operator = False
    for index, component in enumerate(components):
        if not is_valid_component(component):
            return False

        current_is_operator = is_operator(component)
        if index == 0:
            if current_is_operator:
                return False
        elif current_is_operator == previous_was_operator:
            return False

        previous_was_operator = current_is_operator

    return not previous_was_operator


def validate_polynomial(text: str) -> None:
    """
    Validate polynomial text.

    Raises:
        InvalidPolynomialSyntax: If the text is not a valid polynomial
    """
    if not is_valid_polynomial(text):
        raise InvalidPolynomialSyntax(f"invalid polynomial: {text!r}")
