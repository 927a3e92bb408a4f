"""
Polynomial payloads: dict/JSON form of the term store

    {"schema_version": "1",
     "terms": [{"exponent": 2, "coefficient": 1.5}, ...]}

Terms are written in storage order. Reading a payload checks the JSON Schema
contract first, then the term-store invariants the schema cannot express
(unique exponents; finite coefficients via the Term model).
"""

from typing import Any, Dict

from src.core.contracts.validators import validate_polynomial_payload
from src.core.domain.polynomial import Polynomial
from src.core.domain.term import Term

SCHEMA_VERSION = "1"


def polynomial_to_payload(polynomial: Polynomial) -> Dict[str, Any]:
    """
    Payload of a polynomial.

    Examples:
        >>> polynomial_to_payload(Polynomial([(2, 1.5)]))
        {'schema_version': '1', 'terms': [{'exponent': 2, 'coefficient': 1.5}]}
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "terms": [term.model_dump() for term in polynomial],
    }


def polynomial_from_payload(data: Dict[str, Any]) -> Polynomial:
    """
    Build a polynomial from a payload.

    Raises:
        jsonschema.ValidationError: If the data does not match the contract
        pydantic.ValidationError: If a coefficient is NaN/Inf
        ValueError: If two terms share an exponent
    """
    validate_polynomial_payload(data)

    terms = [Term.model_validate(item) for item in data["terms"]]

    polynomial = Polynomial()
    polynomial.replace_terms(term.as_pair() for term in terms)
    return polynomial
