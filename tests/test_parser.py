"""Unit tests for parser module."""

import random
import unittest

from polycalc_pkg.parser import (
    format_coeff,
    format_ln_term,
    format_number,
    get_coeff_of_term,
    get_exp_of_term,
    get_max_num_of_terms,
    inputs_are_valid_doubles,
    inputs_are_valid_ints,
    inputs_are_valid_positive_ints,
    is_valid_component,
    is_valid_poly_str,
    ordinal,
    parse_poly_str,
    validate_poly_str,
)
from polycalc_pkg.polynomial import Polynomial
from polycalc_pkg.types import ValidationError


class TestValidatePolyStr(unittest.TestCase):
    """Test polynomial string validation."""

    def test_valid_strings(self):
        for poly_str in (
            "x",
            "X",
            "7",
            "-x",
            "-3.5x^-2",
            "x^2 + x + 1",
            "2x^2 + 1 - 3x^-1",
            "  x^3   -  .5x  ",
            "3x^0 + 0x^4",
            "x + -5",
        ):
            with self.subTest(poly_str=poly_str):
                self.assertTrue(is_valid_poly_str(poly_str))

    def test_invalid_terms(self):
        for poly_str in ("x^", "2x^2.5", "x2", "2xx", ".", "1.", "3-", "+5", "x^+2", "^2"):
            with self.subTest(poly_str=poly_str):
                self.assertFalse(is_valid_poly_str(poly_str))

    def test_empty_input(self):
        for poly_str in ("", "   "):
            with self.assertRaises(ValidationError) as ctx:
                validate_poly_str(poly_str)
            self.assertEqual(ctx.exception.code, "EMPTY_INPUT")

    def test_invalid_character(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_poly_str("2y + 1")
        self.assertEqual(ctx.exception.code, "INVALID_CHARACTER")
        with self.assertRaises(ValidationError) as ctx:
            validate_poly_str("x*2")
        self.assertEqual(ctx.exception.code, "INVALID_CHARACTER")

    def test_only_spaces_separate_components(self):
        for poly_str in ("x\t+ 1", "x +\n1"):
            with self.assertRaises(ValidationError) as ctx:
                validate_poly_str(poly_str)
            self.assertEqual(ctx.exception.code, "INVALID_WHITESPACE")

    def test_operator_placement(self):
        cases = {
            "- x": "LEADING_OPERATOR",
            "+ x": "LEADING_OPERATOR",
            "x +": "TRAILING_OPERATOR",
            "x - - 5": "CONSECUTIVE_OPERATORS",
            "x 5": "CONSECUTIVE_TERMS",
        }
        for poly_str, code in cases.items():
            with self.subTest(poly_str=poly_str):
                with self.assertRaises(ValidationError) as ctx:
                    validate_poly_str(poly_str)
                self.assertEqual(ctx.exception.code, code)

    def test_operator_must_be_separated(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_poly_str("x+1")
        self.assertEqual(ctx.exception.code, "INVALID_TERM")

    def test_input_length_limit(self):
        from polycalc_pkg.config import MAX_INPUT_LENGTH

        with self.assertRaises(ValidationError) as ctx:
            validate_poly_str("x" * (MAX_INPUT_LENGTH + 1))
        self.assertEqual(ctx.exception.code, "TOO_LONG")

    def test_non_string(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_poly_str(None)
        self.assertEqual(ctx.exception.code, "INVALID_TYPE")


class TestComponents(unittest.TestCase):
    """Test single component checks and term decomposition."""

    def test_single_characters(self):
        for comp in ("x", "X", "+", "-", "0", "9"):
            self.assertTrue(is_valid_component(comp))
        for comp in ("^", "."):
            self.assertFalse(is_valid_component(comp))

    def test_coefficients(self):
        self.assertEqual(get_coeff_of_term("x"), 1.0)
        self.assertEqual(get_coeff_of_term("-X^2"), -1.0)
        self.assertEqual(get_coeff_of_term("2.5x"), 2.5)
        self.assertEqual(get_coeff_of_term("7"), 7.0)
        self.assertEqual(get_coeff_of_term("-.5x^-1"), -0.5)
        self.assertEqual(get_coeff_of_term("-0x"), 0.0)

    def test_exponents(self):
        self.assertEqual(get_exp_of_term("7"), 0)
        self.assertEqual(get_exp_of_term("3x"), 1)
        self.assertEqual(get_exp_of_term("x^-2"), -2)
        self.assertEqual(get_exp_of_term("4X^10"), 10)

    def test_max_num_of_terms(self):
        self.assertEqual(get_max_num_of_terms("x^2 + x^2 + 1"), 3)
        self.assertEqual(get_max_num_of_terms("x"), 1)


class TestParsePolyStr(unittest.TestCase):
    """Test construction of polynomials from strings."""

    def test_combines_like_terms(self):
        poly = parse_poly_str("x^2 + x^2 + 1")
        self.assertEqual(poly.size, 2)
        self.assertEqual(poly.get_coeff_of_exp(2), 2.0)
        self.assertEqual(poly.get_coeff_of_exp(0), 1.0)

    def test_operator_sign_applies(self):
        poly = parse_poly_str("2x^2 + 1 - 3x^-1")
        self.assertEqual(poly, Polynomial([(2, 2), (0, 1), (-1, -3)]))

    def test_minus_negative_coefficient(self):
        self.assertEqual(parse_poly_str("x - -2"), Polynomial([(1, 1), (0, 2)]))

    def test_cancelling_terms(self):
        self.assertTrue(parse_poly_str("x - x").has_no_terms())
        self.assertEqual(parse_poly_str("x^2 + 3 - 3"), Polynomial([(2, 1)]))

    def test_zero_coefficients_skipped(self):
        self.assertEqual(parse_poly_str("0x^4 + x"), Polynomial([(1, 1)]))
        self.assertTrue(parse_poly_str("0").has_no_terms())

    def test_fills_existing_polynomial(self):
        poly = Polynomial([(5, 5)])
        self.assertIs(parse_poly_str("x", poly), poly)
        self.assertEqual(poly, Polynomial([(1, 1)]))

    def test_invalid_leaves_polynomial_untouched(self):
        poly = Polynomial([(5, 5)])
        with self.assertRaises(ValidationError):
            poly.new_poly("x + + 1")
        self.assertEqual(poly, Polynomial([(5, 5)]))

    def test_render_parses_back(self):
        for poly_str in (
            "1234567x^2 + 1",
            "0.00001234x - 250000000x^-3",
            "2x^2 + 1 - 3x^-1",
            "-x^4 + 0.5x - 7",
            "1000000 + x",
        ):
            with self.subTest(poly_str=poly_str):
                poly = parse_poly_str(poly_str)
                poly.sort()
                rendered = poly.render()
                self.assertTrue(is_valid_poly_str(rendered), rendered)
                reparsed = parse_poly_str(rendered)
                self.assertEqual([t.exp for t in reparsed], [t.exp for t in poly])
                for term in poly:
                    self.assertAlmostEqual(
                        reparsed.get_coeff_of_exp(term.exp),
                        term.coeff,
                        delta=abs(term.coeff) * 1e-5,
                    )

    def test_render_parses_back_random(self):
        from test_fuzzing import random_poly_str

        rng = random.Random(2024)
        for _ in range(200):
            poly_str, _ = random_poly_str(rng)
            with self.subTest(poly_str=poly_str):
                poly = parse_poly_str(poly_str)
                poly.sort()
                if poly.has_no_terms():
                    continue
                rendered = poly.render()
                self.assertTrue(is_valid_poly_str(rendered), rendered)
                self.assertEqual(parse_poly_str(rendered), poly)

    def test_render_rounds_to_precision(self):
        poly = parse_poly_str("1234567x^2")
        self.assertEqual(poly.render(), "1234570x^2")
        self.assertEqual(parse_poly_str(poly.render()), Polynomial([(2, 1234570)]))

    def test_from_string(self):
        poly = Polynomial.from_string("X^3 - x")
        poly.sort()
        self.assertEqual(poly.render(), "x^3 - x")


class TestNumericInput(unittest.TestCase):
    """Test console number validation."""

    def test_doubles(self):
        self.assertTrue(inputs_are_valid_doubles("1.5", 1))
        self.assertTrue(inputs_are_valid_doubles(".5", 1))
        self.assertTrue(inputs_are_valid_doubles("-3 4", 2))
        self.assertTrue(inputs_are_valid_doubles("  -3   4  ", 2))
        self.assertFalse(inputs_are_valid_doubles("1.", 1))
        self.assertFalse(inputs_are_valid_doubles("1e5", 1))
        self.assertFalse(inputs_are_valid_doubles("+1", 1))
        self.assertFalse(inputs_are_valid_doubles("1 2", 1))
        self.assertFalse(inputs_are_valid_doubles("1\t2", 2))
        self.assertFalse(inputs_are_valid_doubles("", 1))

    def test_ints(self):
        self.assertTrue(inputs_are_valid_ints("-4", 1))
        self.assertTrue(inputs_are_valid_ints("0 12", 2))
        self.assertFalse(inputs_are_valid_ints("1.0", 1))
        self.assertFalse(inputs_are_valid_ints("-", 1))

    def test_positive_ints(self):
        self.assertTrue(inputs_are_valid_positive_ints("3", 1))
        self.assertTrue(inputs_are_valid_positive_ints("007", 1))
        self.assertFalse(inputs_are_valid_positive_ints("0", 1))
        self.assertFalse(inputs_are_valid_positive_ints("-3", 1))
        self.assertFalse(inputs_are_valid_positive_ints("2.5", 1))


class TestFormatting(unittest.TestCase):
    """Test display formatting helpers."""

    def test_format_number(self):
        self.assertEqual(format_number(7.0), "7")
        self.assertEqual(format_number(2 / 3), "0.666667")
        self.assertEqual(format_number(-0.0), "0")
        self.assertEqual(format_number(3.14159265, precision=3), "3.14")
        self.assertEqual(format_number("abc"), "abc")

    def test_format_coeff_is_positional(self):
        self.assertEqual(format_coeff(2 / 3), "0.666667")
        self.assertEqual(format_coeff(1234567), "1234570")
        self.assertEqual(format_coeff(0.00001234), "0.00001234")
        self.assertEqual(format_coeff(7.0), "7")
        self.assertEqual(format_coeff(-0.0), "0")
        self.assertEqual(format_coeff(1e20), "100000000000000000000")

    def test_format_ln_term(self):
        self.assertEqual(format_ln_term(-3), " - 3ln(|x|)")
        self.assertEqual(format_ln_term(1), " + ln(|x|)")
        self.assertEqual(format_ln_term(-3, leading=True), "-3ln(|x|)")
        self.assertEqual(format_ln_term(1, leading=True), "ln(|x|)")
        self.assertEqual(format_ln_term(-1, leading=True), "-ln(|x|)")
        self.assertEqual(format_ln_term(2.5, arg="|4|"), " + 2.5ln(|4|)")

    def test_ordinal(self):
        expected = {
            1: "1st",
            2: "2nd",
            3: "3rd",
            4: "4th",
            11: "11th",
            12: "12th",
            13: "13th",
            21: "21st",
            22: "22nd",
            101: "101st",
            111: "111th",
        }
        for num, text in expected.items():
            self.assertEqual(ordinal(num), text)


if __name__ == "__main__":
    unittest.main()
