"""Dedicated calculus operations module.

Each operation checks its error conditions before touching the polynomial,
reports them as flags on the returned result, and otherwise mutates the
polynomial in place (derivative or integral). Nothing is kept between calls.
"""

from __future__ import annotations

from .logging_config import get_logger
from .polynomial import Polynomial
from .types import (
    DefIntegralResult,
    IndefIntegralResult,
    NthDerivResult,
    NthDerivXValueResult,
    XValueResult,
)

logger = get_logger("calculus")

EMPTY_POLY_MSG = "The polynomial has no terms"
X_VALUE_DIV_BY_ZERO_MSG = (
    "A polynomial with at least one negative exponent cannot be evaluated "
    "at x = 0 due to division by zero"
)
DERIV_X_VALUE_DIV_BY_ZERO_MSG = (
    "The nth derivative has at least one negative exponent and cannot be "
    "evaluated at x = 0 due to division by zero"
)
DIV_BY_ZERO_MSG = (
    "The polynomial has a negative exponent other than -1 and the bounds "
    "include 0, so the integral divides by zero"
)
NAT_LOG_MSG = (
    "The polynomial has a term with exponent -1 and the bounds include 0, "
    "so the integral takes the natural log of zero"
)
OVERFLOW_MSG = "The result is too large to represent"


def _zero_in_range(lower: float, upper: float) -> bool:
    return min(lower, upper) <= 0 <= max(lower, upper)


def def_integral_div_by_zero_error(poly: Polynomial, lower: float, upper: float) -> bool:
    """Check whether a definite integral over [lower, upper] divides by zero.

    True when the bounds include 0 and the polynomial has a negative exponent,
    unless its only negative exponent is -1 (that case is a natural log error).
    """
    if not poly.exists_neg_exp() or not _zero_in_range(lower, upper):
        return False
    if poly.num_neg_exps() == 1 and poly.exists_term_with_exp(-1):
        return False
    return True


def def_integral_nat_log_error(poly: Polynomial, lower: float, upper: float) -> bool:
    """Check whether a definite integral over [lower, upper] takes ln(0)."""
    return poly.exists_term_with_exp(-1) and _zero_in_range(lower, upper)


def calc_x_value(poly: Polynomial, x: float) -> XValueResult:
    """Evaluate a polynomial at an x-value.

    Args:
        poly: Polynomial to evaluate (not modified)
        x: x-value

    Returns:
        XValueResult with the value, or with poly_has_no_terms /
        div_by_zero_error set
    """
    if poly.has_no_terms():
        return XValueResult(ok=False, x=x, poly_has_no_terms=True, error=EMPTY_POLY_MSG)
    if x == 0 and poly.exists_neg_exp():
        return XValueResult(
            ok=False, x=x, div_by_zero_error=True, error=X_VALUE_DIV_BY_ZERO_MSG
        )

    try:
        result = poly.evaluate(x)
    except OverflowError:
        logger.debug("Value of %s at x=%r overflowed", poly, x)
        return XValueResult(ok=False, x=x, error=OVERFLOW_MSG)
    logger.debug("Value of %s at x=%r: %r", poly, x, result)
    return XValueResult(ok=True, x=x, result=result)


def calc_nth_deriv(poly: Polynomial, n: int) -> NthDerivResult:
    """Differentiate a polynomial n times in place.

    Differentiation stops early once the polynomial has collapsed to zero.

    Args:
        poly: Polynomial to differentiate (replaced by its nth derivative)
        n: Number of derivatives, at least 1

    Returns:
        NthDerivResult with nth_deriv_is_zero set when the derivative is 0

    Raises:
        ValueError: if n < 1
    """
    if n < 1:
        raise ValueError(f"Number of derivatives must be at least 1, got {n}")
    if poly.has_no_terms():
        return NthDerivResult(ok=False, n=n, poly_has_no_terms=True, error=EMPTY_POLY_MSG)

    for _ in range(n):
        if not poly.differentiate() or poly.has_no_terms():
            break

    nth_deriv_is_zero = poly.has_no_terms()
    logger.debug("Derivative #%d: %s (zero=%s)", n, poly, nth_deriv_is_zero)
    return NthDerivResult(ok=True, n=n, nth_deriv_is_zero=nth_deriv_is_zero)


def calc_nth_deriv_x_value(poly: Polynomial, n: int, x: float) -> NthDerivXValueResult:
    """Differentiate a polynomial n times in place, then evaluate at x.

    A derivative that collapsed to zero evaluates to 0 for every x.
    """
    deriv = calc_nth_deriv(poly, n)
    if not deriv.ok:
        return NthDerivXValueResult(
            ok=False, n=n, x=x, poly_has_no_terms=True, error=deriv.error
        )
    if deriv.nth_deriv_is_zero:
        return NthDerivXValueResult(ok=True, n=n, x=x, result=0.0, nth_deriv_is_zero=True)

    value = calc_x_value(poly, x)
    if not value.ok:
        return NthDerivXValueResult(
            ok=False,
            n=n,
            x=x,
            div_by_zero_error=value.div_by_zero_error,
            error=DERIV_X_VALUE_DIV_BY_ZERO_MSG if value.div_by_zero_error else value.error,
        )
    return NthDerivXValueResult(ok=True, n=n, x=x, result=value.result)


def calc_indef_integral(poly: Polynomial) -> IndefIntegralResult:
    """Integrate a polynomial once in place.

    The constant of integration is not stored. A term with exponent -1 is
    removed and reported through exp_neg_one_integrated / coeff_exp_neg_one.
    """
    if poly.has_no_terms():
        return IndefIntegralResult(ok=False, poly_has_no_terms=True, error=EMPTY_POLY_MSG)

    _, ln_coeff = poly.integrate()
    logger.debug("Indefinite integral: %s (ln coefficient=%r)", poly, ln_coeff)
    return IndefIntegralResult(
        ok=True,
        exp_neg_one_integrated=ln_coeff is not None,
        coeff_exp_neg_one=0.0 if ln_coeff is None else ln_coeff,
    )


def calc_def_integral(poly: Polynomial, lower: float, upper: float) -> DefIntegralResult:
    """Calculate the definite integral of a polynomial from lower to upper.

    Division by zero and natural log of zero are checked independently and
    both reported when both hold; in either case nothing is computed and the
    polynomial is not modified. Otherwise the polynomial is replaced by its
    indefinite integral and ``result = F(upper) - F(lower)``. The
    ``k*ln|x|`` part of an exponent -1 term is not included in ``result``;
    see ``DefIntegralResult.approx_with_natural_logs``.
    """
    if poly.has_no_terms():
        return DefIntegralResult(
            ok=False,
            lower_bound=lower,
            upper_bound=upper,
            poly_has_no_terms=True,
            error=EMPTY_POLY_MSG,
        )

    div_by_zero = def_integral_div_by_zero_error(poly, lower, upper)
    nat_log = def_integral_nat_log_error(poly, lower, upper)
    if div_by_zero or nat_log:
        messages = [
            msg
            for flag, msg in ((div_by_zero, DIV_BY_ZERO_MSG), (nat_log, NAT_LOG_MSG))
            if flag
        ]
        logger.debug(
            "Definite integral of %s over [%r, %r] rejected: div_by_zero=%s nat_log=%s",
            poly,
            lower,
            upper,
            div_by_zero,
            nat_log,
        )
        return DefIntegralResult(
            ok=False,
            lower_bound=lower,
            upper_bound=upper,
            div_by_zero_error=div_by_zero,
            nat_log_error=nat_log,
            error="; ".join(messages),
        )

    _, ln_coeff = poly.integrate()
    try:
        result = poly.evaluate(upper) - poly.evaluate(lower)
    except OverflowError:
        return DefIntegralResult(
            ok=False, lower_bound=lower, upper_bound=upper, error=OVERFLOW_MSG
        )
    logger.debug("Definite integral over [%r, %r]: %r", lower, upper, result)
    return DefIntegralResult(
        ok=True,
        result=result,
        lower_bound=lower,
        upper_bound=upper,
        exp_neg_one_integrated=ln_coeff is not None,
        coeff_exp_neg_one=0.0 if ln_coeff is None else ln_coeff,
    )
