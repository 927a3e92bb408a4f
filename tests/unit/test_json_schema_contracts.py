"""
Tests for JSON Schema Contract Validators

- Validity of the shipped schema
- Valid payloads pass
- Required fields, types and constraints are enforced
- Round trip through the term store and the Term model
"""

import json
from pathlib import Path

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.core.contracts import (
    PolynomialPayloadValidator,
    SchemaLoader,
    polynomial_from_payload,
    polynomial_to_payload,
    validate_polynomial_payload,
)
from src.core.domain import Polynomial


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_payload():
    """Payload of 2x^2 + 1 - 3x^-1"""
    return {
        "schema_version": "1",
        "terms": [
            {"exponent": 2, "coefficient": 2.0},
            {"exponent": 0, "coefficient": 1},
            {"exponent": -1, "coefficient": -3.0},
        ],
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Tests for SchemaLoader"""

    def test_load_polynomial_schema(self) -> None:
        schema = SchemaLoader().load_schema("polynomial")
        assert schema["title"] == "polynomial"

    def test_schema_is_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("polynomial") is loader.load_schema("polynomial")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nowhere")

    def test_invalid_schema_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# VALIDATION
# =============================================================================


class TestPolynomialPayloadValidator:
    """Tests for the polynomial contract"""

    def test_valid_payload(self, valid_payload) -> None:
        validate_polynomial_payload(valid_payload)
        assert PolynomialPayloadValidator().is_valid(valid_payload)

    def test_empty_terms_valid(self) -> None:
        validate_polynomial_payload({"schema_version": "1", "terms": []})

    @pytest.mark.parametrize("field", ["schema_version", "terms"])
    def test_missing_required_field(self, valid_payload, field: str) -> None:
        del valid_payload[field]
        with pytest.raises(ValidationError):
            validate_polynomial_payload(valid_payload)

    def test_wrong_schema_version(self, valid_payload) -> None:
        valid_payload["schema_version"] = "2"
        with pytest.raises(ValidationError):
            validate_polynomial_payload(valid_payload)

    def test_additional_property_rejected(self, valid_payload) -> None:
        valid_payload["variable"] = "x"
        with pytest.raises(ValidationError):
            validate_polynomial_payload(valid_payload)

    @pytest.mark.parametrize(
        "term",
        [
            {"exponent": 1.5, "coefficient": 1.0},
            {"exponent": True, "coefficient": 1.0},
            {"exponent": 1, "coefficient": "1.0"},
            {"exponent": 1, "coefficient": 0},
            {"exponent": 1, "coefficient": 0.0},
            {"exponent": 1},
            {"exponent": 1, "coefficient": 1.0, "extra": 1},
        ],
    )
    def test_invalid_term(self, valid_payload, term) -> None:
        valid_payload["terms"].append(term)
        with pytest.raises(ValidationError):
            validate_polynomial_payload(valid_payload)

    def test_iter_errors_reports_each_problem(self) -> None:
        data = {
            "schema_version": "1",
            "terms": [{"exponent": "a", "coefficient": 1.0}, {"exponent": 1, "coefficient": 0}],
        }
        errors = list(PolynomialPayloadValidator().iter_errors(data))
        assert len(errors) == 2


# =============================================================================
# PAYLOAD CONVERSION
# =============================================================================


class TestPayloadConversion:
    """Tests for polynomial_to_payload / polynomial_from_payload"""

    def test_to_payload_keeps_storage_order(self) -> None:
        payload = polynomial_to_payload(Polynomial([(0, 1.0), (2, -3.0)]))
        assert payload == {
            "schema_version": "1",
            "terms": [
                {"exponent": 0, "coefficient": 1.0},
                {"exponent": 2, "coefficient": -3.0},
            ],
        }
        validate_polynomial_payload(payload)

    def test_from_payload(self, valid_payload) -> None:
        p = polynomial_from_payload(valid_payload)
        assert p == Polynomial([(2, 2.0), (0, 1.0), (-1, -3.0)])

    def test_json_round_trip(self) -> None:
        p = Polynomial.from_string("x^-4 - x + 1 + x^2")
        restored = polynomial_from_payload(json.loads(json.dumps(polynomial_to_payload(p))))
        assert restored == p
        assert [t.exponent for t in restored] == [t.exponent for t in p]

    def test_duplicate_exponent_rejected(self) -> None:
        data = {
            "schema_version": "1",
            "terms": [{"exponent": 1, "coefficient": 1.0}, {"exponent": 1, "coefficient": 2.0}],
        }
        with pytest.raises(ValueError, match="duplicate exponent"):
            polynomial_from_payload(data)

    def test_non_finite_coefficient_rejected(self) -> None:
        data = {"schema_version": "1", "terms": [{"exponent": 1, "coefficient": float("inf")}]}
        with pytest.raises(PydanticValidationError):
            polynomial_from_payload(data)

    def test_invalid_payload_raises_schema_error(self) -> None:
        with pytest.raises(ValidationError):
            polynomial_from_payload({"terms": []})
