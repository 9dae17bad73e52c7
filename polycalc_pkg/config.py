"""Centralized configuration for Polycalc.

This module defines:
- Input validation limits (length, term count)
- Output precision and result table layout
- Plotting defaults
- Default log level
- Regex patterns and character sets for parsing

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with POLYCALC_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("polycalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Output formatting
OUTPUT_PRECISION = int(
    os.getenv("POLYCALC_OUTPUT_PRECISION", "6")
)  # significant digits, same as C's %g
LABEL_WIDTH = int(os.getenv("POLYCALC_LABEL_WIDTH", "20"))
LABEL_WIDTH_WIDE = int(
    os.getenv("POLYCALC_LABEL_WIDTH_WIDE", "60")
)  # used when natural log rows are shown

# Logging
LOG_LEVEL = os.getenv("POLYCALC_LOG_LEVEL", "INFO").upper()

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("POLYCALC_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_TERMS = int(
    os.getenv("POLYCALC_MAX_TERMS", "1000")
)  # term tokens before combining

# Plotting
PLOT_POINTS = int(os.getenv("POLYCALC_PLOT_POINTS", "200"))
PLOT_X_MIN = float(os.getenv("POLYCALC_PLOT_X_MIN", "-10"))
PLOT_X_MAX = float(os.getenv("POLYCALC_PLOT_X_MAX", "10"))

# Characters allowed anywhere in a polynomial string component
VALID_POLY_CHARS = frozenset("0123456789xX+-.^")
OPERATORS = ("+", "-")

DOUBLE_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)")
INT_RE = re.compile(r"-?[0-9]+")
POSITIVE_INT_RE = re.compile(r"[0-9]+")
