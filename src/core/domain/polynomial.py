"""
Polynomial: Term store for a single-variable polynomial

Owned, mutable collection of (exponent, coefficient) terms with merge-aware
insertion. The calculus engine rewrites it in place; callers read it through
the query surface (iteration, accessors, sorting).

CRITICAL INVARIANTS:
1. Exponents are pairwise distinct (insertion always merges)
2. No stored term has a zero coefficient (a merge that sums to exactly 0
   removes the term)
3. Term order is insertion order until sort() is requested; removal keeps
   the relative order of the remaining terms
4. Every stored coefficient is finite; a merge that overflows is rejected
5. A failed insert or storage growth leaves the polynomial in its pre-call
   state
6. A moved-from polynomial rejects every operation except reassignment
"""

from __future__ import annotations

from typing import Iterable, Iterator

from src.core.domain.term import Term
from src.core.log import get_logger
from src.core.math.numerical_safeguards import is_valid_float

logger = get_logger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TermAllocationError(MemoryError):
    """
    Term storage could not grow.

    Raised instead of the bare MemoryError so that callers can tell a term
    store failure from other memory pressure. The polynomial that raised it
    is unchanged.
    """


class EmptyPolynomialError(ValueError):
    """An operation that needs at least one term was called on an empty polynomial."""


class PolynomialMovedError(RuntimeError):
    """The polynomial was moved from and may only be reassigned or discarded."""


# =============================================================================
# POLYNOMIAL
# =============================================================================


class Polynomial:
    """
    Term store of a single-variable polynomial.

    Storage is an insertion-ordered mapping ``exponent -> coefficient``;
    uniqueness of exponents falls out of the mapping, the zero-coefficient
    rule is enforced by insert().

    Ownership:
        copy()/copy_from() duplicate storage; move()/move_from() transfer it
        and leave the source as a moved sentinel (PolynomialMovedError on any
        use until it is reassigned with copy_from(), move_from() or load()).

    Examples:
        >>> p = Polynomial([(2, 1.0), (0, 1.0)])
        >>> p.insert(2, -1.0)
        >>> [t.exponent for t in p]
        [0]
    """

    def __init__(self, terms: Iterable[tuple[int, float]] | None = None):
        """
        Args:
            terms: Optional ``(exponent, coefficient)`` pairs, inserted in
                order with merge semantics
        """
        self._terms: dict[int, float] | None = {}
        if terms is not None:
            for exponent, coefficient in terms:
                self.insert(exponent, coefficient)

    @classmethod
    def from_string(cls, text: str) -> Polynomial:
        """
        Build a polynomial from its textual form.

        Raises:
            InvalidPolynomialSyntax: If the text does not follow the grammar
            OverflowError: If a coefficient is out of float range
        """
        from src.core.grammar.builder import parse_polynomial

        return parse_polynomial(text)

    # -------------------------------------------------------------------------
    # Storage access
    # -------------------------------------------------------------------------

    def _storage(self) -> dict[int, float]:
        if self._terms is None:
            raise PolynomialMovedError("polynomial was moved from; reassign it before use")
        return self._terms

    @property
    def is_moved(self) -> bool:
        """True if the storage of this handle was transferred by a move."""
        return self._terms is None

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def insert(self, exponent: int, coefficient: float) -> None:
        """
        Add ``coefficient * x^exponent`` to the polynomial.

        - An existing term with the same exponent is merged (coefficients
          summed); if the sum is exactly 0 the term is removed.
        - Otherwise a non-zero coefficient is appended as a new term.
        - A zero coefficient with no matching term changes nothing.

        Args:
            exponent: Integer exponent
            coefficient: Real coefficient

        Raises:
            TypeError: If exponent is not an int
            ValueError: If coefficient is NaN/Inf
            OverflowError: If merging overflows the coefficient (state preserved)
            TermAllocationError: If storage cannot grow (state preserved)
        """
        storage = self._storage()
        exponent = _check_exponent(exponent)
        coefficient = float(coefficient)
        if not is_valid_float(coefficient):
            raise ValueError(f"coefficient must be a valid float (not NaN/Inf), got {coefficient}")

        if exponent in storage:
            total = storage[exponent] + coefficient
            if not is_valid_float(total):
                raise OverflowError(
                    f"merged coefficient for exponent {exponent} overflows: "
                    f"{storage[exponent]} + {coefficient}"
                )
            if total == 0:
                del storage[exponent]
            else:
                storage[exponent] = total
            return

        if coefficient == 0:
            return

        try:
            storage[exponent] = coefficient
        except MemoryError as exc:
            logger.error("term_store_growth_failed", exponent=exponent, size=len(storage))
            raise TermAllocationError(
                f"cannot grow term storage beyond {len(storage)} terms"
            ) from exc

    def remove(self, exponent: int) -> bool:
        """
        Remove the term with the given exponent.

        Returns:
            True if a term was removed, False if no such term exists
        """
        storage = self._storage()
        if exponent in storage:
            del storage[exponent]
            return True
        return False

    def reset(self) -> None:
        """Remove all terms."""
        self._storage().clear()

    def replace_terms(self, terms: Iterable[tuple[int, float]]) -> None:
        """
        Replace the whole content with the given terms, in the given order.

        Used for whole-polynomial transformations (differentiation,
        integration). The new terms must already satisfy the store
        invariants; nothing is merged.

        Raises:
            ValueError: On a duplicate exponent or a zero/NaN/Inf coefficient
            TermAllocationError: If storage cannot be built (state preserved)
        """
        storage = self._storage()
        try:
            replacement: dict[int, float] = {}
            for exponent, coefficient in terms:
                exponent = _check_exponent(exponent)
                if exponent in replacement:
                    raise ValueError(f"duplicate exponent {exponent}")
                if coefficient == 0 or not is_valid_float(coefficient):
                    raise ValueError(
                        f"coefficient for exponent {exponent} must be finite and non-zero, "
                        f"got {coefficient}"
                    )
                replacement[exponent] = float(coefficient)
        except MemoryError as exc:
            logger.error("term_store_rebuild_failed", size=len(storage))
            raise TermAllocationError("cannot allocate replacement term storage") from exc

        self._terms = replacement

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, exponent: int) -> bool:
        """True if a term with the exponent is stored."""
        return exponent in self._storage()

    def coefficient_of(self, exponent: int) -> float:
        """
        Coefficient of the term with the given exponent.

        Raises:
            KeyError: If no term with the exponent exists
        """
        storage = self._storage()
        if exponent not in storage:
            raise KeyError(exponent)
        return storage[exponent]

    def get_coefficient(self, exponent: int, default: float = 0.0) -> float:
        """Coefficient of the term with the exponent, or default if absent."""
        return self._storage().get(exponent, default)

    def degree(self) -> int:
        """
        Maximum exponent present.

        Raises:
            EmptyPolynomialError: If the polynomial has no terms
        """
        storage = self._storage()
        if not storage:
            raise EmptyPolynomialError("degree of an empty polynomial is undefined")
        return max(storage)

    def size(self) -> int:
        """Number of stored terms."""
        return len(self._storage())

    def is_empty(self) -> bool:
        """True if the polynomial has no terms (the zero polynomial)."""
        return not self._storage()

    def has_negative_exponent(self) -> bool:
        """True if any stored term has a negative exponent."""
        return any(exponent < 0 for exponent in self._storage())

    def negative_exponent_count(self) -> int:
        """Number of stored terms with a negative exponent."""
        return sum(1 for exponent in self._storage() if exponent < 0)

    def terms(self) -> tuple[Term, ...]:
        """All terms in current order."""
        return tuple(self)

    def sorted_terms(self) -> tuple[Term, ...]:
        """All terms by descending exponent, without reordering storage."""
        return tuple(sorted(self, key=lambda term: term.exponent, reverse=True))

    def sort(self) -> None:
        """Reorder storage by strictly descending exponent."""
        storage = self._storage()
        self._terms = dict(sorted(storage.items(), key=lambda item: item[0], reverse=True))

    def __iter__(self) -> Iterator[Term]:
        for exponent, coefficient in list(self._storage().items()):
            yield Term(exponent=exponent, coefficient=coefficient)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, exponent: object) -> bool:
        return exponent in self._storage()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._storage() == other._storage()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        if self._terms is None:
            return "Polynomial(<moved>)"
        return f"Polynomial({list(self._terms.items())!r})"

    def __str__(self) -> str:
        from src.core.grammar.serializer import format_polynomial

        return format_polynomial(self)

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def copy(self) -> Polynomial:
        """
        Deep, independent duplicate.

        Raises:
            TermAllocationError: If the duplicate cannot be allocated
        """
        duplicate = Polynomial()
        duplicate.copy_from(self)
        return duplicate

    def copy_from(self, other: Polynomial) -> None:
        """
        Make this polynomial an independent duplicate of another one.

        Also valid on a moved-from polynomial (reassignment).

        Raises:
            TermAllocationError: If storage cannot be allocated (state preserved)
        """
        if other is self:
            return
        source = other._storage()
        try:
            duplicate = dict(source)
        except MemoryError as exc:
            logger.error("term_store_copy_failed", size=len(source))
            raise TermAllocationError(f"cannot copy {len(source)} terms") from exc
        self._terms = duplicate

    def move(self) -> Polynomial:
        """
        Transfer this polynomial's storage to a new handle.

        Returns:
            New Polynomial owning the storage; this handle becomes moved
        """
        target = Polynomial()
        target.move_from(self)
        return target

    def move_from(self, other: Polynomial) -> None:
        """
        Take over another polynomial's storage, discarding the current one.

        Raises:
            PolynomialMovedError: If other was itself already moved from
        """
        if other is self:
            return
        self._terms = other._storage()
        other._terms = None

    def load(self, text: str) -> None:
        """
        Replace the content with the polynomial parsed from text.

        The text is validated first: on invalid syntax the polynomial is left
        untouched. Also valid on a moved-from polynomial (reassignment).

        Raises:
            InvalidPolynomialSyntax: If the text does not follow the grammar
            OverflowError: If a coefficient is out of float range (content kept)
        """
        from src.core.grammar.builder import parse_polynomial

        self.move_from(parse_polynomial(text))

    def __copy__(self) -> Polynomial:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Polynomial:
        return self.copy()


def _check_exponent(exponent: int) -> int:
    if isinstance(exponent, bool) or not isinstance(exponent, int):
        raise TypeError(f"exponent must be an int, got {type(exponent).__name__}")
    return exponent
