"""Main entry point for running polycalc_pkg as a module.

This allows running Polycalc with:
    python -m polycalc_pkg
    python -m polycalc_pkg --health-check
    python -m polycalc_pkg --poly "x^2 + x + 1" --x 2

This is equivalent to running:
    python -m polycalc_pkg.cli
    python polycalc.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
