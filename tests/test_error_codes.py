"""Test error codes raised by validation and conversion."""

import unittest

from polycalc_pkg.parser import validate_poly_str
from polycalc_pkg.polynomial import Polynomial
from polycalc_pkg.types import ParseError, ValidationError


class TestErrorCodes(unittest.TestCase):
    """Test that functions raise appropriate error codes."""

    def assert_code(self, poly_str, code):
        try:
            validate_poly_str(poly_str)
            self.fail("Should have raised ValidationError")
        except ValidationError as e:
            self.assertEqual(e.code, code, f"Expected {code}, got {e.code}")
            self.assertEqual(str(e), e.message)

    def test_too_long_error_code(self):
        """Test that overly long input returns TOO_LONG error code."""
        self.assert_code("x" * 10001, "TOO_LONG")

    def test_invalid_character_error_code(self):
        """Test that characters outside the grammar return INVALID_CHARACTER."""
        self.assert_code("3x^2 + 2y", "INVALID_CHARACTER")

    def test_invalid_term_error_code(self):
        """Test that malformed terms return INVALID_TERM."""
        self.assert_code("3x^2.5", "INVALID_TERM")

    def test_operator_error_codes(self):
        """Test that misplaced operators return distinct codes."""
        self.assert_code("+ x", "LEADING_OPERATOR")
        self.assert_code("x -", "TRAILING_OPERATOR")
        self.assert_code("x + - 1", "CONSECUTIVE_OPERATORS")
        self.assert_code("x 1", "CONSECUTIVE_TERMS")

    def test_error_message_names_component(self):
        """Test that the message shows the offending component."""
        try:
            validate_poly_str("x + 2q")
            self.fail("Should have raised ValidationError")
        except ValidationError as e:
            self.assertIn("'2q'", str(e))

    def test_default_codes(self):
        """Test the default codes of the exception types."""
        self.assertEqual(ValidationError("bad").code, "VALIDATION_ERROR")
        self.assertEqual(ParseError("bad").code, "PARSE_ERROR")

    def test_sympify_failure_code(self):
        """Test that unparseable SymPy input returns SYMPIFY_FAILED."""
        with self.assertRaises(ParseError) as ctx:
            Polynomial.from_sympy("x +* 2")
        self.assertEqual(ctx.exception.code, "SYMPIFY_FAILED")

    def test_not_a_polynomial_code(self):
        """Test that non-polynomial expressions return NOT_A_POLYNOMIAL."""
        with self.assertRaises(ParseError) as ctx:
            Polynomial.from_sympy("exp(x)")
        self.assertEqual(ctx.exception.code, "NOT_A_POLYNOMIAL")


if __name__ == "__main__":
    unittest.main()
