"""Polynomial model module.

This module handles:
- Storage of (exponent, coefficient) terms with unique exponents
- Term insertion with coefficient combining, and term removal
- Queries (degree, coefficients, negative exponents)
- One-step differentiation and integration
- Evaluation at an x-value and rendering to the display notation
- Conversion to and from SymPy expressions

Invariants kept by every operation:
- no two terms share an exponent
- no stored term has a coefficient of 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import sympy as sp

from .parser import format_coeff
from .types import ParseError


@dataclass(frozen=True)
class Term:
    """A single ``coeff * x^exp`` term."""

    exp: int
    coeff: float


class Polynomial:
    """Single-variable polynomial with integer (possibly negative) exponents.

    Terms are kept in insertion order; call ``sort()`` before rendering to get
    them in descending order of exponent.

    Example:
        >>> poly = Polynomial.from_string("x^2 + x^2 + 1")
        >>> poly.sort()
        >>> poly.render()
        '2x^2 + 1'
    """

    def __init__(self, terms: Iterable[tuple[int, float]] | None = None):
        self._terms: list[Term] = []
        if terms is not None:
            for exp, coeff in terms:
                self.add_term(exp, coeff)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_string(cls, poly_str: str) -> Polynomial:
        """Build a polynomial from a polynomial string.

        Raises:
            ValidationError: if the string is not a valid polynomial string
        """
        from .parser import parse_poly_str

        return parse_poly_str(poly_str, cls())

    def new_poly(self, poly_str: str) -> None:
        """Replace all terms with the terms of a polynomial string.

        The polynomial is left unchanged if the string is invalid.

        Raises:
            ValidationError: if the string is not a valid polynomial string
        """
        from .parser import parse_poly_str

        parse_poly_str(poly_str, self)

    @classmethod
    def from_sympy(cls, expr: Any, symbol: str = "x") -> Polynomial:
        """Build a polynomial from a SymPy expression in a single symbol.

        Args:
            expr: SymPy expression (or anything ``sympify`` accepts)
            symbol: Name of the variable

        Raises:
            ParseError: if the expression is not a polynomial in ``symbol``
                with integer exponents and real coefficients
        """
        var = sp.Symbol(symbol)
        try:
            expr = sp.sympify(expr)
        except (sp.SympifyError, TypeError) as e:
            raise ParseError(f"Cannot convert {expr!r}: {e}", "SYMPIFY_FAILED") from e

        foreign = expr.free_symbols - {var}
        if foreign:
            names = ", ".join(sorted(str(s) for s in foreign))
            raise ParseError(
                f"Expression contains symbols other than {symbol}: {names}",
                "FOREIGN_SYMBOL",
            )

        poly = cls()
        for part in sp.Add.make_args(sp.expand(expr)):
            coeff, exp = part.as_coeff_exponent(var)
            if not exp.is_Integer or coeff.has(var):
                raise ParseError(f"Not a polynomial term: {part}", "NOT_A_POLYNOMIAL")
            if not coeff.is_real:
                raise ParseError(f"Coefficient is not real: {coeff}", "NOT_A_POLYNOMIAL")
            poly.add_term(int(exp), float(coeff))
        return poly

    def to_sympy(self, symbol: str = "x") -> sp.Expr:
        """Return the polynomial as a SymPy expression."""
        var = sp.Symbol(symbol)
        return sp.Add(*[sp.Float(term.coeff) * var**term.exp for term in self._terms])

    # ------------------------------------------------------------------
    # Copy / move
    # ------------------------------------------------------------------

    def copy(self) -> Polynomial:
        """Return a new polynomial holding duplicates of all terms."""
        dup = Polynomial()
        self.copy_into(dup)
        return dup

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> Polynomial:
        # terms are immutable
        return self.copy()

    def copy_into(self, dest: Polynomial) -> None:
        """Reset ``dest`` and fill it with this polynomial's terms."""
        dest.reset()
        for term in self._terms:
            dest.add_term(term.exp, term.coeff)

    def move(self) -> Polynomial:
        """Transfer the terms to a new polynomial, leaving this one empty."""
        moved = Polynomial()
        self.move_into(moved)
        return moved

    def move_into(self, dest: Polynomial) -> None:
        """Transfer the terms into ``dest``, discarding what it held.

        The term storage itself changes hands; nothing is duplicated.
        """
        if dest is self:
            return
        dest._terms, self._terms = self._terms, []

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_term(self, exp: int, coeff: float) -> None:
        """Add ``coeff * x^exp``, combining with an existing term of that exponent.

        - existing exponent: coefficients are summed; a sum of 0 removes the term
        - new exponent: the term is appended unless ``coeff`` is 0
        """
        exp = int(exp)
        coeff = float(coeff)
        idx = self._index_of(exp)
        if idx is not None:
            total = self._terms[idx].coeff + coeff
            if total == 0:
                self.remove_term_with_exp(exp)
            else:
                self._terms[idx] = Term(exp, total)
        elif coeff != 0:
            self._terms.append(Term(exp, coeff))

    def remove_term_with_exp(self, exp: int) -> bool:
        """Remove the term with the given exponent.

        Returns:
            True if a term was removed, False if no term has that exponent
        """
        idx = self._index_of(exp)
        if idx is None:
            return False
        del self._terms[idx]
        return True

    def reset(self) -> None:
        """Remove all terms."""
        self._terms = []

    def sort(self) -> None:
        """Order terms by descending exponent."""
        self._terms.sort(key=lambda term: term.exp, reverse=True)

    def differentiate(self) -> bool:
        """Differentiate once in place: ``k*x^n`` becomes ``n*k*x^(n-1)``.

        Constant terms vanish.

        Returns:
            False if the polynomial had no terms (nothing is done), True otherwise
        """
        if not self._terms:
            return False
        old_terms = self._terms
        self.reset()
        for term in old_terms:
            if term.exp != 0:
                self.add_term(term.exp - 1, term.coeff * term.exp)
        return True

    def integrate(self) -> tuple[bool, float | None]:
        """Integrate once in place: ``k*x^n`` becomes ``k/(n+1)*x^(n+1)``.

        A term with exponent -1 integrates to ``k*ln|x|``, which is not a
        polynomial term; it is dropped and its coefficient returned instead.
        The constant of integration is not stored.

        Returns:
            (ok, ln_coeff): ok is False if the polynomial had no terms;
            ln_coeff is the coefficient of the exponent -1 term or None
        """
        if not self._terms:
            return False, None
        ln_coeff = None
        old_terms = self._terms
        self.reset()
        for term in old_terms:
            if term.exp == -1:
                ln_coeff = term.coeff
            else:
                self.add_term(term.exp + 1, term.coeff / (term.exp + 1))
        return True, ln_coeff

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _index_of(self, exp: int) -> int | None:
        for i, term in enumerate(self._terms):
            if term.exp == exp:
                return i
        return None

    def exists_term_with_exp(self, exp: int) -> bool:
        return self._index_of(exp) is not None

    def exists_neg_exp(self) -> bool:
        return any(term.exp < 0 for term in self._terms)

    def num_neg_exps(self) -> int:
        return sum(1 for term in self._terms if term.exp < 0)

    def get_coeff_of_exp(self, exp: int) -> float | None:
        """Return the coefficient of the term with ``exp``, or None if absent."""
        idx = self._index_of(exp)
        return None if idx is None else self._terms[idx].coeff

    def get_degree(self) -> int | None:
        """Return the largest exponent, or None for a polynomial with no terms."""
        if not self._terms:
            return None
        return max(term.exp for term in self._terms)

    @property
    def size(self) -> int:
        return len(self._terms)

    @property
    def terms(self) -> tuple[Term, ...]:
        return tuple(self._terms)

    def has_no_terms(self) -> bool:
        return not self._terms

    def evaluate(self, x: float) -> float:
        """Sum ``k*x^n`` over all terms.

        Constant terms contribute their coefficient even when x is 0. The
        caller must not pass x = 0 when a negative exponent is present.
        """
        result = 0.0
        for term in self._terms:
            if term.exp == 0:
                result += term.coeff
            else:
                result += term.coeff * x**term.exp
        return result

    def render(self) -> str | None:
        """Render the terms in stored order, e.g. ``"-2x^2 - x + 3"``.

        Returns:
            The display string, or None if the polynomial has no terms
        """
        if not self._terms:
            return None

        parts: list[str] = []
        for i, term in enumerate(self._terms):
            if i == 0:
                coeff = term.coeff
            else:
                parts.append(" - " if term.coeff < 0 else " + ")
                coeff = abs(term.coeff)

            if term.exp == 0:
                parts.append(format_coeff(coeff))
                continue

            if coeff == -1:
                parts.append("-")
            elif coeff != 1:
                parts.append(format_coeff(coeff))
            parts.append("x")
            if term.exp != 1:
                parts.append(f"^{term.exp}")
        return "".join(parts)

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(tuple(self._terms))

    def __contains__(self, exp: object) -> bool:
        return isinstance(exp, int) and self.exists_term_with_exp(exp)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return {t.exp: t.coeff for t in self._terms} == {
            t.exp: t.coeff for t in other._terms
        }

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.render() or "0"

    def __repr__(self) -> str:
        return f"Polynomial({str(self)!r})"
