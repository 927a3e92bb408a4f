"""
Contract Validation Module

JSON Schema validation and dict/JSON conversion of polynomial payloads.
"""

from .payload import SCHEMA_VERSION, polynomial_from_payload, polynomial_to_payload
from .validators import (
    ContractValidator,
    PolynomialPayloadValidator,
    SchemaLoader,
    validate_polynomial_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PolynomialPayloadValidator",
    # Functions
    "validate_polynomial_payload",
    "polynomial_to_payload",
    "polynomial_from_payload",
    # Constants
    "SCHEMA_VERSION",
]
