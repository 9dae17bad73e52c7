#!/usr/bin/env python3
"""
Polycalc - Polynomial Calculus Calculator

Main entry point for the Polycalc application.
This file serves as a thin wrapper that delegates all functionality
to the polycalc_pkg package.

Usage:
    python polycalc.py                                  # Interactive menu
    python polycalc.py --poly "x^2 + x + 1" --x 2       # Value at x = 2
    python polycalc.py --poly "x^-1" --bounds 1 5       # Definite integral
    python polycalc.py --help                           # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Polycalc.

    Delegates all functionality to the polycalc_pkg.cli module,
    which handles argument parsing, calculation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from polycalc_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import polycalc_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
