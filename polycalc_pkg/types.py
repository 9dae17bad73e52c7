"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


def _collect(obj: Any, names: tuple[str, ...]) -> dict[str, Any]:
    return {name: getattr(obj, name) for name in names if getattr(obj, name) is not None}


@dataclass
class XValueResult:
    """Result of evaluating a polynomial at an x-value."""

    ok: bool
    x: float | None = None
    result: float | None = None
    poly_has_no_terms: bool = False
    div_by_zero_error: bool = False
    polynomial: str | None = None
    error: str | None = None

    _FIELDS = ("x", "result", "polynomial", "error")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "type": "x_value",
            "poly_has_no_terms": self.poly_has_no_terms,
            "div_by_zero_error": self.div_by_zero_error,
        }
        result_dict.update(_collect(self, self._FIELDS))
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"XValueResult(ok=False, poly_has_no_terms={self.poly_has_no_terms!r}, "
                f"div_by_zero_error={self.div_by_zero_error!r}, error={self.error!r})"
            )
        return f"XValueResult(ok=True, result={self.result!r})"


@dataclass
class NthDerivResult:
    """Result of differentiating a polynomial n times."""

    ok: bool
    n: int = 0
    nth_deriv_is_zero: bool = False
    poly_has_no_terms: bool = False
    polynomial: str | None = None
    derivative: str | None = None
    error: str | None = None

    _FIELDS = ("polynomial", "derivative", "error")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "type": "nth_derivative",
            "n": self.n,
            "nth_deriv_is_zero": self.nth_deriv_is_zero,
            "poly_has_no_terms": self.poly_has_no_terms,
        }
        result_dict.update(_collect(self, self._FIELDS))
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"NthDerivResult(ok=False, n={self.n!r}, error={self.error!r})"
        return (
            f"NthDerivResult(ok=True, n={self.n!r}, "
            f"nth_deriv_is_zero={self.nth_deriv_is_zero!r}, derivative={self.derivative!r})"
        )


@dataclass
class NthDerivXValueResult:
    """Result of evaluating the nth derivative of a polynomial at an x-value."""

    ok: bool
    n: int = 0
    x: float | None = None
    result: float | None = None
    nth_deriv_is_zero: bool = False
    poly_has_no_terms: bool = False
    div_by_zero_error: bool = False
    polynomial: str | None = None
    derivative: str | None = None
    error: str | None = None

    _FIELDS = ("x", "result", "polynomial", "derivative", "error")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "type": "nth_derivative_x_value",
            "n": self.n,
            "nth_deriv_is_zero": self.nth_deriv_is_zero,
            "poly_has_no_terms": self.poly_has_no_terms,
            "div_by_zero_error": self.div_by_zero_error,
        }
        result_dict.update(_collect(self, self._FIELDS))
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"NthDerivXValueResult(ok=False, n={self.n!r}, "
                f"div_by_zero_error={self.div_by_zero_error!r}, error={self.error!r})"
            )
        return f"NthDerivXValueResult(ok=True, n={self.n!r}, result={self.result!r})"


@dataclass
class IndefIntegralResult:
    """Result of integrating a polynomial once.

    When a term with exponent -1 was integrated, its ``k*ln|x|`` part is not
    part of the integrated polynomial and is reported through
    ``exp_neg_one_integrated`` and ``coeff_exp_neg_one`` instead.
    """

    ok: bool
    exp_neg_one_integrated: bool = False
    coeff_exp_neg_one: float = 0.0
    poly_has_no_terms: bool = False
    polynomial: str | None = None
    integral: str | None = None
    error: str | None = None

    _FIELDS = ("polynomial", "integral", "error")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "type": "indefinite_integral",
            "exp_neg_one_integrated": self.exp_neg_one_integrated,
            "coeff_exp_neg_one": self.coeff_exp_neg_one,
            "poly_has_no_terms": self.poly_has_no_terms,
        }
        result_dict.update(_collect(self, self._FIELDS))
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"IndefIntegralResult(ok=False, error={self.error!r})"
        parts = ["ok=True", f"integral={self.integral!r}"]
        if self.exp_neg_one_integrated:
            parts.append(f"coeff_exp_neg_one={self.coeff_exp_neg_one!r}")
        return f"IndefIntegralResult({', '.join(parts)})"


@dataclass
class DefIntegralResult:
    """Result of a definite integral over [lower_bound, upper_bound].

    ``result`` excludes the natural log contribution of an exponent -1 term.
    """

    ok: bool
    result: float | None = None
    lower_bound: float | None = None
    upper_bound: float | None = None
    exp_neg_one_integrated: bool = False
    coeff_exp_neg_one: float = 0.0
    poly_has_no_terms: bool = False
    div_by_zero_error: bool = False
    nat_log_error: bool = False
    polynomial: str | None = None
    integral: str | None = None
    error: str | None = None

    _FIELDS = ("result", "lower_bound", "upper_bound", "polynomial", "integral", "error")

    def approx_with_natural_logs(self) -> float | None:
        """Return the definite integral including ``k*ln|UB| - k*ln|LB|``."""
        if not self.ok or self.result is None:
            return None
        if not self.exp_neg_one_integrated:
            return self.result
        k = self.coeff_exp_neg_one
        return (
            self.result
            + k * math.log(abs(self.upper_bound))
            - k * math.log(abs(self.lower_bound))
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "type": "definite_integral",
            "exp_neg_one_integrated": self.exp_neg_one_integrated,
            "coeff_exp_neg_one": self.coeff_exp_neg_one,
            "poly_has_no_terms": self.poly_has_no_terms,
            "div_by_zero_error": self.div_by_zero_error,
            "nat_log_error": self.nat_log_error,
        }
        result_dict.update(_collect(self, self._FIELDS))
        if self.ok and self.exp_neg_one_integrated:
            result_dict["approx_with_natural_logs"] = self.approx_with_natural_logs()
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"DefIntegralResult(ok=False, div_by_zero_error={self.div_by_zero_error!r}, "
                f"nat_log_error={self.nat_log_error!r}, error={self.error!r})"
            )
        parts = ["ok=True", f"result={self.result!r}"]
        if self.exp_neg_one_integrated:
            parts.append(f"coeff_exp_neg_one={self.coeff_exp_neg_one!r}")
        return f"DefIntegralResult({', '.join(parts)})"


@dataclass
class PlotResult:
    """Result of plotting a polynomial."""

    ok: bool
    result: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "plot"}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        return result_dict


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when converting a foreign expression into a polynomial fails."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

