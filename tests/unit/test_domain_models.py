"""
Tests for the domain models: Term and the Polynomial term store

Checks:
1. Term validation and immutability (frozen=True)
2. Merge-aware insertion, removal and queries
3. Ordering (insertion order, explicit descending sort)
4. Ownership: copy, move, moved-from sentinel, reassignment
5. Bulk replacement used by the calculus engine
6. Storage exhaustion leaves the polynomial in its previous state
"""

import copy

import pytest
from pydantic import ValidationError

import src.core.domain.polynomial as polynomial_module
from src.core.domain import (
    EmptyPolynomialError,
    Polynomial,
    PolynomialMovedError,
    Term,
    TermAllocationError,
)


# =============================================================================
# TERM TESTS
# =============================================================================


class TestTerm:
    """Tests for the Term model"""

    def test_valid_term(self) -> None:
        term = Term(exponent=-2, coefficient=1.5)
        assert term.exponent == -2
        assert term.coefficient == 1.5
        assert term.as_pair() == (-2, 1.5)

    def test_flags(self) -> None:
        assert Term(exponent=0, coefficient=3.0).is_constant
        assert Term(exponent=-1, coefficient=3.0).is_log_term
        assert not Term(exponent=1, coefficient=3.0).is_constant

    def test_immutability(self) -> None:
        """Term is frozen"""
        term = Term(exponent=1, coefficient=2.0)
        with pytest.raises(ValidationError):
            term.coefficient = 3.0  # type: ignore[misc]

    def test_zero_coefficient_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-zero"):
            Term(exponent=1, coefficient=0.0)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_coefficient_rejected(self, value: float) -> None:
        with pytest.raises(ValidationError, match="finite"):
            Term(exponent=1, coefficient=value)

    def test_json_round_trip(self) -> None:
        term = Term(exponent=3, coefficient=-0.25)
        assert Term.model_validate_json(term.model_dump_json()) == term


# =============================================================================
# INSERTION AND QUERIES
# =============================================================================


class TestPolynomialInsert:
    """Tests for Polynomial.insert"""

    def test_new_polynomial_is_empty(self) -> None:
        p = Polynomial()
        assert p.is_empty()
        assert p.size() == 0
        assert len(p) == 0

    def test_insert_appends(self) -> None:
        p = Polynomial()
        p.insert(2, 1.0)
        p.insert(-1, 4.0)
        assert [t.as_pair() for t in p] == [(2, 1.0), (-1, 4.0)]

    def test_insert_merges(self) -> None:
        p = Polynomial([(2, 1.0)])
        p.insert(2, 2.5)
        assert p.coefficient_of(2) == 3.5
        assert p.size() == 1

    def test_merge_to_zero_removes(self) -> None:
        p = Polynomial([(3, 1.0), (2, 2.0), (1, 1.0)])
        p.insert(2, -2.0)
        assert not p.exists(2)
        assert [t.exponent for t in p] == [3, 1]

    def test_zero_coefficient_without_match_ignored(self) -> None:
        p = Polynomial()
        p.insert(5, 0.0)
        assert p.is_empty()

    def test_int_coefficient_stored_as_float(self) -> None:
        p = Polynomial([(1, 2)])
        assert isinstance(p.coefficient_of(1), float)

    def test_non_finite_coefficient_rejected(self) -> None:
        p = Polynomial([(1, 1.0)])
        with pytest.raises(ValueError, match="NaN/Inf"):
            p.insert(1, float("nan"))
        assert p.coefficient_of(1) == 1.0

    def test_non_int_exponent_rejected(self) -> None:
        p = Polynomial()
        with pytest.raises(TypeError):
            p.insert(1.5, 1.0)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            p.insert(True, 1.0)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [1e308, -1e308])
    def test_merge_overflow_rejected(self, value: float) -> None:
        """A merge that overflows leaves the stored coefficient as it was"""
        p = Polynomial([(2, value)])
        with pytest.raises(OverflowError):
            p.insert(2, value)
        assert p.coefficient_of(2) == value
        assert [t.as_pair() for t in p] == [(2, value)]

    def test_merge_near_limit_kept(self) -> None:
        p = Polynomial([(2, 1e308)])
        p.insert(2, -1e308)
        p.insert(3, 8e307)
        p.insert(3, 8e307)
        assert not p.exists(2)
        assert p.coefficient_of(3) == 1.6e308


class TestPolynomialQueries:
    """Tests for the query surface"""

    @pytest.fixture
    def poly(self) -> Polynomial:
        return Polynomial([(2, 1.0), (-3, 2.0), (0, -4.0), (-1, 5.0)])

    def test_exists(self, poly: Polynomial) -> None:
        assert poly.exists(-3)
        assert not poly.exists(1)
        assert -1 in poly

    def test_coefficient_of(self, poly: Polynomial) -> None:
        assert poly.coefficient_of(0) == -4.0
        with pytest.raises(KeyError):
            poly.coefficient_of(7)

    def test_get_coefficient_default(self, poly: Polynomial) -> None:
        assert poly.get_coefficient(7) == 0.0
        assert poly.get_coefficient(2) == 1.0

    def test_degree(self, poly: Polynomial) -> None:
        assert poly.degree() == 2
        assert Polynomial([(-5, 1.0), (-2, 1.0)]).degree() == -2

    def test_degree_of_empty_raises(self) -> None:
        with pytest.raises(EmptyPolynomialError):
            Polynomial().degree()

    def test_negative_exponents(self, poly: Polynomial) -> None:
        assert poly.has_negative_exponent()
        assert poly.negative_exponent_count() == 2
        assert not Polynomial([(2, 1.0)]).has_negative_exponent()

    def test_remove(self, poly: Polynomial) -> None:
        assert poly.remove(-3)
        assert not poly.remove(-3)
        assert [t.exponent for t in poly] == [2, 0, -1]

    def test_reset(self, poly: Polynomial) -> None:
        poly.reset()
        assert poly.is_empty()

    def test_equality_ignores_order(self) -> None:
        assert Polynomial([(1, 1.0), (0, 2.0)]) == Polynomial([(0, 2.0), (1, 1.0)])
        assert Polynomial([(1, 1.0)]) != Polynomial([(1, 2.0)])

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Polynomial())

    def test_iteration_yields_terms(self, poly: Polynomial) -> None:
        assert all(isinstance(term, Term) for term in poly)
        assert poly.terms()[0] == Term(exponent=2, coefficient=1.0)

    def test_repr(self) -> None:
        assert repr(Polynomial([(1, 2.0)])) == "Polynomial([(1, 2.0)])"


class TestPolynomialSort:
    """Tests for ordering"""

    def test_sort_descending(self) -> None:
        p = Polynomial.from_string("x^-4 - x + 1 + x^2")
        p.sort()
        assert [t.exponent for t in p] == [2, 1, 0, -4]

    def test_sorted_terms_does_not_reorder(self) -> None:
        p = Polynomial([(0, 1.0), (3, 1.0)])
        assert [t.exponent for t in p.sorted_terms()] == [3, 0]
        assert [t.exponent for t in p] == [0, 3]

    def test_sort_empty(self) -> None:
        p = Polynomial()
        p.sort()
        assert p.is_empty()


# =============================================================================
# OWNERSHIP
# =============================================================================


class TestPolynomialOwnership:
    """Tests for copy and move semantics"""

    def test_copy_is_independent(self) -> None:
        p = Polynomial([(1, 1.0)])
        q = p.copy()
        q.insert(2, 1.0)
        assert not p.exists(2)
        assert q == Polynomial([(1, 1.0), (2, 1.0)])

    def test_copy_module_support(self) -> None:
        p = Polynomial([(1, 1.0)])
        assert copy.copy(p) == p
        assert copy.deepcopy(p) is not p

    def test_copy_from_replaces_content(self) -> None:
        p = Polynomial([(5, 1.0)])
        p.copy_from(Polynomial([(0, 3.0)]))
        assert p == Polynomial([(0, 3.0)])

    def test_self_copy_is_noop(self) -> None:
        p = Polynomial([(1, 1.0)])
        p.copy_from(p)
        p.move_from(p)
        assert p == Polynomial([(1, 1.0)])

    def test_move_transfers_storage(self) -> None:
        p = Polynomial([(1, 1.0)])
        q = p.move()
        assert q == Polynomial([(1, 1.0)])
        assert p.is_moved
        assert not q.is_moved

    def test_moved_from_rejects_use(self) -> None:
        p = Polynomial([(1, 1.0)])
        p.move()
        with pytest.raises(PolynomialMovedError):
            p.size()
        with pytest.raises(PolynomialMovedError):
            p.insert(0, 1.0)
        with pytest.raises(PolynomialMovedError):
            list(p)
        assert repr(p) == "Polynomial(<moved>)"

    def test_moving_a_moved_polynomial_raises(self) -> None:
        p = Polynomial()
        p.move()
        with pytest.raises(PolynomialMovedError):
            Polynomial().move_from(p)

    def test_reassignment_revives(self) -> None:
        p = Polynomial([(1, 1.0)])
        q = p.move()
        p.copy_from(q)
        assert p == q
        p.move_from(Polynomial([(3, 2.0)]))
        assert p == Polynomial([(3, 2.0)])


# =============================================================================
# BULK REPLACEMENT
# =============================================================================


class TestReplaceTerms:
    """Tests for Polynomial.replace_terms"""

    def test_replaces_in_given_order(self) -> None:
        p = Polynomial([(1, 1.0)])
        p.replace_terms([(0, 2.0), (4, 1.0)])
        assert [t.as_pair() for t in p] == [(0, 2.0), (4, 1.0)]

    def test_empty_replacement(self) -> None:
        p = Polynomial([(1, 1.0)])
        p.replace_terms([])
        assert p.is_empty()

    @pytest.mark.parametrize(
        "terms",
        [
            [(1, 1.0), (1, 2.0)],
            [(1, 0.0)],
            [(1, float("inf"))],
        ],
    )
    def test_invalid_replacement_keeps_state(self, terms: list) -> None:
        p = Polynomial([(2, 1.0)])
        with pytest.raises(ValueError):
            p.replace_terms(terms)
        assert p == Polynomial([(2, 1.0)])


# =============================================================================
# STORAGE EXHAUSTION
# =============================================================================


class _ExhaustedStorage(dict):
    """Term storage that cannot take a new key."""

    def __setitem__(self, key, value):
        if key not in self:
            raise MemoryError
        super().__setitem__(key, value)


class TestTermAllocationError:
    """Storage growth failures surface as TermAllocationError"""

    def test_is_memory_error(self) -> None:
        assert issubclass(TermAllocationError, MemoryError)

    def test_failed_insert_keeps_terms(self) -> None:
        p = Polynomial([(1, 1.0), (0, 2.0)])
        p._terms = _ExhaustedStorage(p._terms)
        with pytest.raises(TermAllocationError):
            p.insert(5, 3.0)
        assert [t.as_pair() for t in p] == [(1, 1.0), (0, 2.0)]

    def test_merge_needs_no_growth(self) -> None:
        p = Polynomial([(1, 1.0)])
        p._terms = _ExhaustedStorage(p._terms)
        p.insert(1, 2.0)
        assert p.coefficient_of(1) == 3.0

    def test_failed_replacement_keeps_terms(self) -> None:
        def exhausting():
            yield (0, 1.0)
            raise MemoryError

        p = Polynomial([(2, 4.0)])
        with pytest.raises(TermAllocationError):
            p.replace_terms(exhausting())
        assert p == Polynomial([(2, 4.0)])

    def test_failed_copy_keeps_target(self, monkeypatch) -> None:
        def exhausted(*args):
            raise MemoryError

        source = Polynomial([(1, 1.0)])
        target = Polynomial([(3, 3.0)])
        monkeypatch.setattr(polynomial_module, "dict", exhausted, raising=False)

        with pytest.raises(TermAllocationError):
            target.copy_from(source)
        with pytest.raises(TermAllocationError):
            source.copy()
        assert target == Polynomial([(3, 3.0)])
