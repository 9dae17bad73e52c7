"""Tests for failure modes, limits, and invalid input handling."""

import pytest

from polycalc_pkg import config
from polycalc_pkg.api import definite_integral, nth_derivative, x_value
from polycalc_pkg.calculus import calc_nth_deriv_x_value
from polycalc_pkg.parser import parse_poly_str, validate_poly_str
from polycalc_pkg.polynomial import Polynomial
from polycalc_pkg.types import ValidationError


class TestInputValidationFailures:
    """Test input validation failure modes."""

    def test_empty_input(self):
        """Test empty input."""
        with pytest.raises(ValidationError):
            parse_poly_str("")

    def test_whitespace_only(self):
        """Test whitespace-only input."""
        with pytest.raises(ValidationError):
            parse_poly_str("   ")

    def test_too_long_input(self):
        """Test input exceeding maximum length."""
        with pytest.raises(ValidationError):
            parse_poly_str("x" * (config.MAX_INPUT_LENGTH + 1))

    def test_too_many_terms(self, monkeypatch):
        """Test input exceeding the term limit."""
        monkeypatch.setattr(config, "MAX_TERMS", 3)
        validate_poly_str("x + x + x")
        with pytest.raises(ValidationError) as exc_info:
            validate_poly_str("x + x + x + x")
        assert exc_info.value.code == "TOO_COMPLEX"

    def test_exponent_notation_rejected(self):
        """Test that 1e5 style coefficients are not numbers here."""
        with pytest.raises(ValidationError):
            parse_poly_str("1e5x")

    def test_unicode_rejected(self):
        """Test that superscripts and other unicode are rejected."""
        with pytest.raises(ValidationError):
            parse_poly_str("x² + 1")


class TestCalculationFailures:
    """Test calculation error reporting."""

    def test_x_value_division_by_zero(self):
        result = x_value("x^-3 + 1", 0)
        assert result.ok is False
        assert result.div_by_zero_error is True
        assert "division by zero" in result.error

    def test_api_rejects_invalid_string(self):
        result = definite_integral("x x", 0, 1)
        assert result.ok is False
        assert result.lower_bound == 0
        assert result.upper_bound == 1

    def test_nth_derivative_invalid_n(self):
        with pytest.raises(ValueError):
            nth_derivative("x^2", 0)

    def test_nth_deriv_x_value_invalid_n(self):
        with pytest.raises(ValueError):
            calc_nth_deriv_x_value(Polynomial([(2, 1)]), -1, 1.0)

    def test_overflow_reported(self):
        result = x_value("x^300", 1e10)
        assert result.ok is False
        assert result.div_by_zero_error is False
        assert "too large" in result.error

    def test_overflow_in_definite_integral(self):
        result = definite_integral("x^400", 0, 1e10)
        assert result.ok is False
        assert "too large" in result.error
