"""Polycalc package: polynomial model, parser, calculus operations, and CLI."""

__version__ = "1.0.0"

from . import api, calculus, cli, config, logging_config, parser, polynomial, types
from .api import (
    definite_integral,
    indefinite_integral,
    nth_derivative,
    nth_derivative_x_value,
    validate_polynomial,
    x_value,
)
from .parser import is_valid_poly_str
from .polynomial import Polynomial, Term
from .types import ParseError, ValidationError

__all__ = [
    "api",
    "calculus",
    "cli",
    "config",
    "logging_config",
    "parser",
    "polynomial",
    "types",
    "Polynomial",
    "Term",
    "ParseError",
    "ValidationError",
    "is_valid_poly_str",
    "validate_polynomial",
    "x_value",
    "nth_derivative",
    "nth_derivative_x_value",
    "indefinite_integral",
    "definite_integral",
]
