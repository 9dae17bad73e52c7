from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable

from . import config
from .api import (
    definite_integral,
    indefinite_integral,
    nth_derivative,
    nth_derivative_x_value,
    x_value,
)
from .config import VERSION
from .logging_config import get_logger
from .parser import (
    format_ln_term,
    format_number,
    inputs_are_valid_doubles,
    inputs_are_valid_ints,
    inputs_are_valid_positive_ints,
    ordinal,
    validate_poly_str,
)
from .types import (
    DefIntegralResult,
    IndefIntegralResult,
    NthDerivResult,
    NthDerivXValueResult,
    PlotResult,
    ValidationError,
    XValueResult,
)

logger = get_logger("cli")

MENU_OPTIONS = (
    (1, "The value of a polynomial at an x-value"),
    (2, "The nth derivative of a polynomial"),
    (3, "The value of an nth derivative of a polynomial at an x-value"),
    (4, "The indefinite integral of a polynomial"),
    (5, "The definite integral of a polynomial"),
    (6, "Plot a polynomial"),
    (0, "Quit"),
)

POLY_RULES = (
    "Rules:\n"
    "1) Use ^ for exponents.\n"
    "2) Use + and - for addition and subtraction, separated from terms by spaces.\n"
    "3) Coefficients can be any number.\n"
    "4) Exponents must be integers."
)


class _QuitRequested(Exception):
    """Raised when input ends while prompting."""


# ----------------------------------------------------------------------
# Result formatting
# ----------------------------------------------------------------------


def _row(label: str, value: Any, width: int | None = None) -> str:
    if width is None:
        width = config.LABEL_WIDTH
    return f"{label:<{width}}{value}"


def format_indef_integral(
    integral: str | None, exp_neg_one_integrated: bool, coeff: float
) -> str:
    """Format an indefinite integral as ``[terms] [+ kln(|x|)] + C``."""
    text = integral or ""
    if exp_neg_one_integrated:
        text += format_ln_term(coeff, leading=not text)
    return f"{text} + C" if text else "C"


def format_def_integral_with_logs(
    result: float, coeff: float, lower: float, upper: float
) -> str:
    """Format ``result + k*ln(|UB|) - k*ln(|LB|)`` without evaluating the logs.

    ln(1) terms are omitted and equal |UB| and |LB| cancel.
    """
    abs_lower, abs_upper = abs(lower), abs(upper)
    ln_terms: list[tuple[float, str]] = []
    if abs_upper != abs_lower:
        if abs_upper != 1:
            ln_terms.append((coeff, format_number(abs_upper)))
        if abs_lower != 1:
            ln_terms.append((-coeff, format_number(abs_lower)))

    if result != 0:
        text = format_number(result)
    elif ln_terms:
        first_coeff, first_arg = ln_terms.pop(0)
        text = format_ln_term(first_coeff, first_arg, leading=True)
    else:
        return "0"
    return text + "".join(format_ln_term(k, arg) for k, arg in ln_terms)


def _format_human(res: Any) -> list[str]:
    lines = ["", "RESULTS OF CALCULATION"]
    if isinstance(res, XValueResult):
        lines += [
            _row("Polynomial", res.polynomial),
            _row("x-value", format_number(res.x)),
            _row("Result", format_number(res.result)),
        ]
    elif isinstance(res, NthDerivXValueResult):
        lines += [
            _row("Polynomial", res.polynomial),
            _row(f"{ordinal(res.n)} derivative", res.derivative),
            _row("x-value", format_number(res.x)),
            _row("Result", format_number(res.result)),
        ]
    elif isinstance(res, NthDerivResult):
        lines += [
            _row("Polynomial", res.polynomial),
            _row(f"{ordinal(res.n)} derivative", res.derivative),
        ]
    elif isinstance(res, IndefIntegralResult):
        lines += [
            _row("Polynomial", res.polynomial),
            _row(
                "Indefinite integral",
                format_indef_integral(
                    res.integral, res.exp_neg_one_integrated, res.coeff_exp_neg_one
                ),
            ),
        ]
    elif isinstance(res, DefIntegralResult):
        width = config.LABEL_WIDTH_WIDE if res.exp_neg_one_integrated else None
        lines += [
            _row("Polynomial", res.polynomial, width),
            _row("Lower Bound", format_number(res.lower_bound), width),
            _row("Upper Bound", format_number(res.upper_bound), width),
            _row(
                "Indefinite integral",
                format_indef_integral(
                    res.integral, res.exp_neg_one_integrated, res.coeff_exp_neg_one
                ),
                width,
            ),
        ]
        if res.exp_neg_one_integrated:
            lines += [
                _row(
                    "Definite integral (with natural logs)",
                    format_def_integral_with_logs(
                        res.result,
                        res.coeff_exp_neg_one,
                        res.lower_bound,
                        res.upper_bound,
                    ),
                    width,
                ),
                _row(
                    "Definite integral (with natural logs approximated)",
                    format_number(res.approx_with_natural_logs()),
                    width,
                ),
            ]
        else:
            lines.append(_row("Definite integral", format_number(res.result)))
    elif isinstance(res, PlotResult):
        lines = [res.result or ""]
    else:
        lines.append(str(res))
    return lines


def print_result_pretty(res: Any, output_format: str = "human") -> None:
    """Print a calculation result in the requested format.

    Args:
        res: Result dataclass from the api or plotting module
        output_format: "json" for JSON output, "human" for labelled rows
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    print("\n".join(_format_human(res)))


# ----------------------------------------------------------------------
# Interactive prompts
# ----------------------------------------------------------------------


def _read(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        raise _QuitRequested() from None


def _prompt_until(prompt: str, is_valid: Callable[[str], bool], error: str) -> str:
    while True:
        text = _read(prompt)
        if is_valid(text):
            return text
        print(f"Error - {error}")


def prompt_poly_str(purpose: str) -> str:
    """Prompt until a valid polynomial string is entered."""
    while True:
        print(f"\nEnter the polynomial to calculate {purpose}.\n{POLY_RULES}")
        poly_str = _read("")
        try:
            validate_poly_str(poly_str)
        except ValidationError as e:
            print(f"Error - the polynomial entered is not valid: {e}")
            continue
        return poly_str


def prompt_x() -> float:
    text = _prompt_until(
        "Enter the x-value: ",
        lambda s: inputs_are_valid_doubles(s, 1),
        "the x-value entered is not valid. It must be a single number.",
    )
    return float(text)


def prompt_n() -> int:
    text = _prompt_until(
        "Enter the nth derivative: ",
        lambda s: inputs_are_valid_positive_ints(s, 1),
        "the nth derivative entered is not valid. It must be an integer greater than 0.",
    )
    return int(text)


def prompt_bounds() -> tuple[float, float]:
    bounds = []
    for name in ("lower", "upper"):
        text = _prompt_until(
            f"Enter the {name} bound of the definite integral: ",
            lambda s: inputs_are_valid_doubles(s, 1),
            f"the {name} bound entered is not valid. It must be a single number.",
        )
        bounds.append(float(text))
    return bounds[0], bounds[1]


def _run_menu_option(choice: int, output_format: str) -> None:
    """Prompt for the inputs of one calculation, retrying on calculation errors."""
    while True:
        if choice == 1:
            res = x_value(prompt_poly_str("at an x-value"), prompt_x())
        elif choice == 2:
            res = nth_derivative(prompt_poly_str("the nth derivative"), prompt_n())
        elif choice == 3:
            poly_str = prompt_poly_str("the nth derivative at an x-value")
            res = nth_derivative_x_value(poly_str, prompt_n(), prompt_x())
        elif choice == 4:
            res = indefinite_integral(prompt_poly_str("the indefinite integral"))
        elif choice == 5:
            poly_str = prompt_poly_str("the definite integral")
            lower, upper = prompt_bounds()
            res = definite_integral(poly_str, lower, upper)
        else:
            from .plotting import plot_polynomial

            res = plot_polynomial(prompt_poly_str("the plot of"), ascii=True)

        if res.ok or output_format == "json":
            print_result_pretty(res, output_format)
            print("\n")
            return
        print(f"Error - {res.error}.")


def menu_loop(output_format: str = "human") -> None:
    """Interactive menu loop; returns when the user quits or input ends."""
    valid_choices = {option for option, _ in MENU_OPTIONS}
    while True:
        print("-" * 81)
        print("Enter the number of the polynomial calculation to perform or 0 to quit the program.")
        for option, message in MENU_OPTIONS:
            print(f"{option}) {message}")
        try:
            choice = _prompt_until(
                "Enter choice: ",
                lambda s: inputs_are_valid_ints(s, 1) and int(s) in valid_choices,
                f"you must enter an integer between 0 and {len(MENU_OPTIONS) - 1}.",
            )
            if int(choice) == 0:
                return
            _run_menu_option(int(choice), output_format)
        except _QuitRequested:
            return


# ----------------------------------------------------------------------
# Health check and entry point
# ----------------------------------------------------------------------


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Polycalc health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        from .polynomial import Polynomial

        poly = Polynomial.from_string("x^2 + x^2 + 1")
        poly.sort()
        if poly.render() == "2x^2 + 1":
            print("[OK] Polynomial parsing works")
            checks_passed += 1
        else:
            print(f"[FAIL] Parsing check failed: expected '2x^2 + 1', got {poly.render()!r}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Parsing check failed: {e}")
        checks_failed += 1

    try:
        result = x_value("x^2 + x + 1", 2)
        if result.ok and result.result == 7:
            print("[OK] Evaluation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Evaluation check failed: {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Evaluation check failed: {e}")
        checks_failed += 1

    try:
        import sympy as sp

        from .polynomial import Polynomial

        poly = Polynomial.from_string("3x^4 - 2x + 5 - x^-2")
        expected = Polynomial.from_sympy(sp.diff(poly.to_sympy(), sp.Symbol("x")))
        poly.differentiate()
        if poly == expected:
            print("[OK] Differentiation agrees with SymPy")
            checks_passed += 1
        else:
            print(f"[FAIL] Differentiation check failed: {poly} != {expected}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Differentiation check failed: {e}")
        checks_failed += 1

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} available")
        checks_passed += 1
    except ImportError:
        print("[WARN] NumPy not available (plotting disabled)")
        print("  To install: pip install numpy")

    try:
        import matplotlib

        print(f"[OK] Matplotlib {matplotlib.__version__} available")
        checks_passed += 1
    except ImportError:
        print("[WARN] Matplotlib not available (only ASCII plots)")
        print("  To install: pip install matplotlib")

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def _double_arg(text: str) -> float:
    if not inputs_are_valid_doubles(text, 1):
        raise argparse.ArgumentTypeError(f"not a valid number: {text!r}")
    return float(text)


def _positive_int_arg(text: str) -> int:
    if not inputs_are_valid_positive_ints(text, 1):
        raise argparse.ArgumentTypeError(f"not an integer greater than 0: {text!r}")
    return int(text)


def _run_once(args: argparse.Namespace) -> Any:
    """Run the single calculation selected by the command-line flags."""
    if args.plot:
        from .plotting import plot_polynomial

        x_min, x_max = args.range if args.range else (None, None)
        return plot_polynomial(
            args.poly, x_min=x_min, x_max=x_max, ascii=args.ascii, save_path=args.output
        )
    if args.bounds is not None:
        return definite_integral(args.poly, args.bounds[0], args.bounds[1])
    if args.integrate:
        return indefinite_integral(args.poly)
    if args.deriv is not None and args.x is not None:
        return nth_derivative_x_value(args.poly, args.deriv, args.x)
    if args.deriv is not None:
        return nth_derivative(args.poly, args.deriv)
    return x_value(args.poly, args.x)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Polycalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="polycalc",
        description="Evaluate, differentiate and integrate polynomials.",
    )
    parser.add_argument(
        "--poly", type=str, help='Polynomial to calculate with (e.g. "3x^2 - x + 1")'
    )
    parser.add_argument("--x", type=_double_arg, help="Evaluate at this x-value")
    parser.add_argument(
        "--deriv", type=_positive_int_arg, metavar="N", help="Calculate the nth derivative"
    )
    parser.add_argument(
        "--integrate", action="store_true", help="Calculate the indefinite integral"
    )
    parser.add_argument(
        "--bounds",
        type=_double_arg,
        nargs=2,
        metavar=("LB", "UB"),
        help="Calculate the definite integral from LB to UB",
    )
    parser.add_argument("--plot", action="store_true", help="Plot the polynomial")
    parser.add_argument(
        "--range",
        type=_double_arg,
        nargs=2,
        metavar=("XMIN", "XMAX"),
        help="x range for --plot",
    )
    parser.add_argument(
        "--ascii", action="store_true", help="Draw --plot as ASCII text instead of a PNG"
    )
    parser.add_argument("-o", "--output", type=str, help="PNG path for --plot")
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: POLYCALC_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    try:
        if args.poly is None:
            if any(
                value not in (None, False)
                for value in (args.x, args.deriv, args.integrate, args.bounds, args.plot)
            ):
                parser.error("--poly is required with a calculation flag")
            print("Polycalc - polynomial calculus. Enter 0 to quit.")
            menu_loop(args.format)
            return 0

        if args.x is None and args.deriv is None and not (
            args.integrate or args.bounds or args.plot
        ):
            parser.error("choose a calculation: --x, --deriv, --integrate, --bounds or --plot")

        res = _run_once(args)
        print_result_pretty(res, args.format)
        return 0 if res.ok else 1
    except MemoryError:
        logger.critical("Out of memory", exc_info=True)
        print("Fatal error: out of memory.", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main_entry())
