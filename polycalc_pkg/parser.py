"""Input parsing and validation module.

This module handles:
- Validation of polynomial strings against the term/operator grammar
- Decomposition of term tokens into coefficient and exponent
- Construction of polynomials from validated strings
- Validation of numeric console input (x-values, bounds, derivative counts)
- Number formatting for display, and positional coefficients for rendering

Polynomial string grammar (tokens separated by spaces)::

    poly        := term (op term)*
    term        := [coefficient] ['x'|'X' ['^' exponent]]  |  '-' 'x'|'X' ['^' exponent]
    coefficient := real number, optionally negative
    exponent    := integer, optionally negative
    op          := '+' | '-'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

import numpy as np

from . import config
from .config import DOUBLE_RE, INT_RE, OPERATORS, POSITIVE_INT_RE, VALID_POLY_CHARS
from .logging_config import get_logger
from .types import ValidationError

if TYPE_CHECKING:
    from .polynomial import Polynomial

logger = get_logger("parser")


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number, "%g" style
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        text = fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        # Fallback for non-numeric or invalid values
        return str(val)
    return "0" if text == "-0" else text


def format_coeff(val: float, precision: int | None = None) -> str:
    """Format a coefficient for a polynomial string.

    Same significant digits as ``format_number`` but always positional
    (1234567 -> "1234570", 0.00001234 -> "0.00001234"), so the rendered
    polynomial stays within the polynomial string grammar.
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    text = np.format_float_positional(
        float(val), precision=int(precision), unique=False, fractional=False, trim="-"
    )
    return "0" if text == "-0" else text


def format_ln_term(coeff: float, arg: str = "|x|", leading: bool = False) -> str:
    """Format ``coeff * ln(arg)`` for display.

    A coefficient of 1 or -1 is shown as just its sign. When not leading, the
    term is prefixed with " + " or " - " and the coefficient shown unsigned.

    Args:
        coeff: Coefficient of the natural log
        arg: Text placed inside ``ln(...)``
        leading: True if nothing precedes the term

    Returns:
        e.g. "-3ln(|x|)" (leading) or " - 3ln(|x|)" (not leading)
    """
    if leading:
        if coeff == -1:
            prefix = "-"
        elif coeff == 1:
            prefix = ""
        else:
            prefix = format_number(coeff)
    else:
        sign = " - " if coeff < 0 else " + "
        prefix = sign + ("" if abs(coeff) == 1 else format_number(abs(coeff)))
    return f"{prefix}ln({arg})"


def ordinal(num: int) -> str:
    """Return the ordinal form of an integer, e.g. 1st, 2nd, 3rd, 11th, 22nd."""
    if 10 <= num % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")
    return f"{num}{suffix}"


# ----------------------------------------------------------------------
# Numeric input validation
# ----------------------------------------------------------------------


def _split_numbers(text: str) -> list[str] | None:
    """Split space-separated numbers; None if other whitespace is present."""
    if any(char.isspace() and char != " " for char in text):
        return None
    return [part for part in text.split(" ") if part]


def inputs_are_valid_doubles(text: str, expected_nums: int) -> bool:
    """Check that ``text`` holds exactly ``expected_nums`` space-separated reals.

    A real is an optional '-', then digits with an optional fractional part, or
    a fractional part alone (".5"). Exponent notation is not accepted.
    """
    numbers = _split_numbers(text)
    if not numbers:
        return False
    return len(numbers) == expected_nums and all(
        DOUBLE_RE.fullmatch(number) for number in numbers
    )


def inputs_are_valid_ints(text: str, expected_nums: int) -> bool:
    """Check that ``text`` holds exactly ``expected_nums`` space-separated integers."""
    numbers = _split_numbers(text)
    if not numbers:
        return False
    return len(numbers) == expected_nums and all(
        INT_RE.fullmatch(number) for number in numbers
    )


def inputs_are_valid_positive_ints(text: str, expected_nums: int) -> bool:
    """Check that ``text`` holds exactly ``expected_nums`` integers greater than 0."""
    numbers = _split_numbers(text)
    if not numbers:
        return False
    return len(numbers) == expected_nums and all(
        POSITIVE_INT_RE.fullmatch(number) and int(number) > 0 for number in numbers
    )


# ----------------------------------------------------------------------
# Polynomial string validation
# ----------------------------------------------------------------------


def split_components(poly_str: str) -> list[str]:
    """Split a polynomial string into term and operator tokens."""
    return [comp for comp in poly_str.split(" ") if comp]


def _split_at_variable(term: str) -> tuple[str, str, bool]:
    """Split a term at its first x/X.

    Returns:
        (text before x, text after x, whether x was found)
    """
    for i, char in enumerate(term):
        if char in "xX":
            return term[:i], term[i + 1 :], True
    return term, "", False


def is_valid_component(comp: str) -> bool:
    """Check whether a single token is a valid term or operator."""
    if not comp or any(char not in VALID_POLY_CHARS for char in comp):
        return False

    # one character: operator, bare x, or a single digit constant
    if len(comp) == 1:
        return comp in ("x", "X") or comp in OPERATORS or comp.isdigit()

    coeff_str, after_x, has_x = _split_at_variable(comp)
    if coeff_str:
        if coeff_str != "-" and not inputs_are_valid_doubles(coeff_str, 1):
            return False
        if not has_x:
            return coeff_str != "-"

    if not after_x:
        return True
    if not after_x.startswith("^"):
        return False
    return inputs_are_valid_ints(after_x[1:], 1)


def validate_poly_str(poly_str: str) -> None:
    """Validate a polynomial string.

    Raises:
        ValidationError: with one of the codes EMPTY_INPUT, TOO_LONG,
            INVALID_WHITESPACE, INVALID_CHARACTER, INVALID_TERM,
            LEADING_OPERATOR, TRAILING_OPERATOR, CONSECUTIVE_OPERATORS,
            CONSECUTIVE_TERMS, TOO_COMPLEX
    """
    if not isinstance(poly_str, str):
        raise ValidationError("Polynomial must be a string", "INVALID_TYPE")
    if len(poly_str) > config.MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{config.MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    if any(char.isspace() and char != " " for char in poly_str):
        raise ValidationError(
            "Only spaces may separate terms and operators", "INVALID_WHITESPACE"
        )

    components = split_components(poly_str)
    if not components:
        raise ValidationError("Polynomial is empty", "EMPTY_INPUT")

    num_terms = 0
    prev_is_op = False
    for position, comp in enumerate(components):
        bad_chars = sorted({char for char in comp if char not in VALID_POLY_CHARS})
        if bad_chars:
            raise ValidationError(
                f"Invalid character(s) {''.join(bad_chars)!r} in {comp!r}",
                "INVALID_CHARACTER",
            )
        if not is_valid_component(comp):
            raise ValidationError(f"Invalid term: {comp!r}", "INVALID_TERM")

        is_op = comp in OPERATORS
        if position == 0:
            if is_op:
                raise ValidationError(
                    "Polynomial cannot start with an operator", "LEADING_OPERATOR"
                )
        elif is_op and prev_is_op:
            raise ValidationError(
                f"Two operators in a row before {comp!r}", "CONSECUTIVE_OPERATORS"
            )
        elif not is_op and not prev_is_op:
            raise ValidationError(
                f"Missing operator before {comp!r}", "CONSECUTIVE_TERMS"
            )

        if not is_op:
            num_terms += 1
        prev_is_op = is_op

    if prev_is_op:
        raise ValidationError(
            "Polynomial cannot end with an operator", "TRAILING_OPERATOR"
        )
    if num_terms > config.MAX_TERMS:
        raise ValidationError(
            f"Polynomial too complex (>{config.MAX_TERMS} terms)", "TOO_COMPLEX"
        )


def is_valid_poly_str(poly_str: str) -> bool:
    """Return True if ``poly_str`` is a valid polynomial string."""
    try:
        validate_poly_str(poly_str)
    except ValidationError:
        return False
    return True


# ----------------------------------------------------------------------
# Term decomposition and construction
# ----------------------------------------------------------------------


def get_coeff_of_term(term: str) -> float:
    """Extract the coefficient of a validated term token.

    "x" -> 1, "-x^2" -> -1, "2.5x" -> 2.5, "7" -> 7. Zero of either sign is
    returned as 0.0.
    """
    coeff_str, _, _ = _split_at_variable(term)
    if not coeff_str:
        return 1.0
    if coeff_str == "-":
        return -1.0
    coeff = float(coeff_str)
    return 0.0 if coeff == 0 else coeff


def get_exp_of_term(term: str) -> int:
    """Extract the exponent of a validated term token.

    "7" -> 0, "3x" -> 1, "x^-2" -> -2.
    """
    _, after_x, has_x = _split_at_variable(term)
    if not has_x:
        return 0
    if not after_x:
        return 1
    return int(after_x[1:])


def get_max_num_of_terms(poly_str: str) -> int:
    """Count term tokens (operators excluded) before any combining."""
    return sum(1 for comp in split_components(poly_str) if comp not in OPERATORS)


def iter_signed_terms(poly_str: str) -> Iterator[tuple[int, float]]:
    """Yield (exponent, signed coefficient) for each term of a validated string.

    Terms whose coefficient is 0 are skipped.
    """
    negate = False
    for comp in split_components(poly_str):
        if comp in OPERATORS:
            negate = comp == "-"
            continue
        coeff = get_coeff_of_term(comp)
        if coeff == 0:
            continue
        yield get_exp_of_term(comp), -coeff if negate else coeff


def parse_poly_str(poly_str: str, poly: Polynomial | None = None) -> Polynomial:
    """Validate a polynomial string and build a polynomial from it.

    Terms sharing an exponent are combined, and vanish if they cancel.

    Args:
        poly_str: Polynomial string, e.g. "3x^2 - x + 4 - 2x^-1"
        poly: Existing polynomial to reset and fill (a new one if None)

    Returns:
        The filled polynomial

    Raises:
        ValidationError: if the string is invalid; ``poly`` is not modified
    """
    from .polynomial import Polynomial

    validate_poly_str(poly_str)

    if poly is None:
        poly = Polynomial()
    else:
        poly.reset()
    for exp, coeff in iter_signed_terms(poly_str):
        poly.add_term(exp, coeff)

    logger.debug(
        "Parsed %r: %d term token(s) -> %d term(s)",
        poly_str,
        get_max_num_of_terms(poly_str),
        poly.size,
    )
    return poly
