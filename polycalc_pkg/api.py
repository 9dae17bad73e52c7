"""Public API for Polycalc - returns structured objects without side effects.

Every function takes a polynomial string, validates it, and returns a result
dataclass. Invalid strings give ``ok=False`` with an error message instead of
raising. Rendered polynomials in results are sorted by descending exponent.
"""

from __future__ import annotations

from .calculus import (
    calc_def_integral,
    calc_indef_integral,
    calc_nth_deriv,
    calc_nth_deriv_x_value,
    calc_x_value,
)
from .logging_config import get_logger
from .polynomial import Polynomial
from .types import (
    DefIntegralResult,
    IndefIntegralResult,
    NthDerivResult,
    NthDerivXValueResult,
    ValidationError,
    XValueResult,
)

logger = get_logger("api")


def _load(poly_str: str) -> tuple[Polynomial, Polynomial]:
    """Parse a polynomial string into (original, working copy), both sorted."""
    try:
        original = Polynomial.from_string(poly_str)
    except ValidationError as e:
        logger.debug("Rejected polynomial %r: %s", poly_str, e, extra={"code": e.code})
        raise
    original.sort()
    return original, original.copy()


def validate_polynomial(poly_str: str) -> tuple[bool, str | None]:
    """Validate a polynomial string without building it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from polycalc_pkg.api import validate_polynomial
        >>> validate_polynomial("3x^2 - x + 1")
        (True, None)
        >>> validate_polynomial("3x^2 - - x")
        (False, "Two operators in a row before '-'")
    """
    from .parser import validate_poly_str

    try:
        validate_poly_str(poly_str)
    except ValidationError as e:
        return False, str(e)
    return True, None


def x_value(poly_str: str, x: float) -> XValueResult:
    """Evaluate a polynomial at an x-value.

    Example:
        >>> from polycalc_pkg.api import x_value
        >>> x_value("x^2 + x + 1", 2).result
        7.0
    """
    try:
        poly, _ = _load(poly_str)
    except ValidationError as e:
        return XValueResult(ok=False, x=x, error=str(e))

    res = calc_x_value(poly, x)
    res.polynomial = str(poly)
    return res


def nth_derivative(poly_str: str, n: int) -> NthDerivResult:
    """Differentiate a polynomial n times.

    Example:
        >>> from polycalc_pkg.api import nth_derivative
        >>> nth_derivative("x^2 + x + 1", 1).derivative
        '2x + 1'
        >>> nth_derivative("x^2 + x + 1", 3).nth_deriv_is_zero
        True
    """
    try:
        original, work = _load(poly_str)
    except ValidationError as e:
        return NthDerivResult(ok=False, n=n, error=str(e))

    res = calc_nth_deriv(work, n)
    res.polynomial = str(original)
    if res.ok:
        work.sort()
        res.derivative = str(work)
    return res


def nth_derivative_x_value(poly_str: str, n: int, x: float) -> NthDerivXValueResult:
    """Evaluate the nth derivative of a polynomial at an x-value."""
    try:
        original, work = _load(poly_str)
    except ValidationError as e:
        return NthDerivXValueResult(ok=False, n=n, x=x, error=str(e))

    res = calc_nth_deriv_x_value(work, n, x)
    res.polynomial = str(original)
    if not res.poly_has_no_terms:
        work.sort()
        res.derivative = str(work)
    return res


def indefinite_integral(poly_str: str) -> IndefIntegralResult:
    """Integrate a polynomial once.

    ``integral`` holds the polynomial part only (None if nothing but the
    natural log part remains); the constant of integration is left to the
    caller to display.

    Example:
        >>> from polycalc_pkg.api import indefinite_integral
        >>> res = indefinite_integral("2x^2 + 1 - 3x^-1")
        >>> res.integral, res.exp_neg_one_integrated, res.coeff_exp_neg_one
        ('0.666667x^3 + x', True, -3.0)
    """
    try:
        original, work = _load(poly_str)
    except ValidationError as e:
        return IndefIntegralResult(ok=False, error=str(e))

    res = calc_indef_integral(work)
    res.polynomial = str(original)
    if res.ok:
        work.sort()
        res.integral = work.render()
    return res


def definite_integral(poly_str: str, lower: float, upper: float) -> DefIntegralResult:
    """Calculate the definite integral of a polynomial from lower to upper.

    Example:
        >>> from polycalc_pkg.api import definite_integral
        >>> definite_integral("x^-2", -3, 1).div_by_zero_error
        True
        >>> definite_integral("3x^2", 0, 2).result
        8.0
    """
    try:
        original, work = _load(poly_str)
    except ValidationError as e:
        return DefIntegralResult(ok=False, lower_bound=lower, upper_bound=upper, error=str(e))

    res = calc_def_integral(work, lower, upper)
    res.polynomial = str(original)
    if res.ok:
        work.sort()
        res.integral = work.render()
    return res
