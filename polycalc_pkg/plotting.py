"""Optional plotting functionality for polynomials."""

from __future__ import annotations

import tempfile

import numpy as np
import sympy as sp

try:
    # Set non-GUI backend before importing pyplot to avoid Tkinter issues
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from . import config
from .logging_config import get_logger
from .polynomial import Polynomial
from .types import PlotResult, ValidationError

logger = get_logger("plotting")

ASCII_ROWS = 20
ASCII_COLS = 60


def sample_polynomial(
    poly: Polynomial, x_min: float, x_max: float, points: int
) -> tuple[np.ndarray, np.ndarray]:
    """Sample a polynomial on an evenly spaced grid.

    Points where the polynomial is undefined (x = 0 with a negative exponent)
    or not finite are NaN.
    """
    var = sp.Symbol("x")
    f = sp.lambdify(var, poly.to_sympy("x"), "numpy")
    x_vals = np.linspace(x_min, x_max, points)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        # a constant polynomial lambdifies to a scalar
        y_vals = np.broadcast_to(np.asarray(f(x_vals), dtype=float), x_vals.shape).copy()
    y_vals[~np.isfinite(y_vals)] = np.nan
    return x_vals, y_vals


def ascii_plot(x_vals: np.ndarray, y_vals: np.ndarray) -> str | None:
    """Render sampled points as an ASCII chart, or None if no point is finite."""
    finite = np.isfinite(y_vals)
    if not finite.any():
        return None

    x_min, x_max = float(x_vals[0]), float(x_vals[-1])
    y_min, y_max = float(np.min(y_vals[finite])), float(np.max(y_vals[finite]))
    y_range = y_max - y_min if y_max != y_min else 1.0

    grid = [[" "] * ASCII_COLS for _ in range(ASCII_ROWS)]

    if y_min <= 0 <= y_max:
        axis_row = int(round((y_max - 0) / y_range * (ASCII_ROWS - 1)))
        for c in range(ASCII_COLS):
            grid[axis_row][c] = "-"
    if x_min <= 0 <= x_max:
        axis_col = int(round((0 - x_min) / (x_max - x_min) * (ASCII_COLS - 1)))
        for r in range(ASCII_ROWS):
            grid[r][axis_col] = "+" if grid[r][axis_col] == "-" else "|"

    for x, y in zip(x_vals[finite], y_vals[finite]):
        col = int(round((x - x_min) / (x_max - x_min) * (ASCII_COLS - 1)))
        row = int(round((y_max - y) / y_range * (ASCII_ROWS - 1)))
        grid[row][col] = "*"

    return "\n".join("".join(line) for line in grid)


def plot_polynomial(
    poly_str: str,
    x_min: float | None = None,
    x_max: float | None = None,
    points: int | None = None,
    ascii: bool = False,
    save_path: str | None = None,
) -> PlotResult:
    """Plot a polynomial.

    Args:
        poly_str: Polynomial string (e.g., "x^3 - 2x + 1")
        x_min: Minimum x value (default: config.PLOT_X_MIN)
        x_max: Maximum x value (default: config.PLOT_X_MAX)
        points: Number of sample points (default: config.PLOT_POINTS)
        ascii: If True, return an ASCII chart instead of an image
        save_path: PNG path for the image (default: a new temporary file)

    Returns:
        PlotResult with the ASCII chart or the path of the saved image
    """
    x_min = config.PLOT_X_MIN if x_min is None else x_min
    x_max = config.PLOT_X_MAX if x_max is None else x_max
    points = config.PLOT_POINTS if points is None else points

    if x_min >= x_max:
        return PlotResult(ok=False, error="x_min must be less than x_max")
    if points < 2:
        return PlotResult(ok=False, error="At least 2 sample points are required")
    if not HAS_MATPLOTLIB and not ascii:
        return PlotResult(
            ok=False, error="matplotlib not installed. Use ascii=True for ASCII plot."
        )

    try:
        poly = Polynomial.from_string(poly_str)
    except ValidationError as e:
        return PlotResult(ok=False, error=str(e))
    poly.sort()

    x_vals, y_vals = sample_polynomial(poly, x_min, x_max, points)

    if ascii:
        chart = ascii_plot(x_vals, y_vals)
        if chart is None:
            return PlotResult(ok=False, error="Cannot plot: function values out of range")
        return PlotResult(ok=True, result=f"ASCII plot of {poly}:\n{chart}")

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        ax.plot(x_vals, y_vals, linewidth=2, color="#2E86AB", label=f"f(x) = {poly}")
        ax.set_xlabel("x", fontsize=12, fontweight="bold")
        ax.set_ylabel("f(x)", fontsize=12, fontweight="bold")
        ax.set_title(f"Plot of {poly}", fontsize=14, fontweight="bold")
        ax.grid(True, alpha=0.3, linestyle="--")
        ax.axhline(y=0, color="k", linewidth=0.8, linestyle="-", alpha=0.3)
        ax.axvline(x=0, color="k", linewidth=0.8, linestyle="-", alpha=0.3)
        ax.legend(loc="best", fontsize=10)
        fig.tight_layout()

        if save_path is None:
            with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as temp_file:
                save_path = temp_file.name
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    except OSError as e:
        logger.error("Failed to save plot: %s", e)
        return PlotResult(ok=False, error=f"Failed to save plot: {e}")
    finally:
        plt.close(fig)

    logger.debug("Plot of %s saved to %s", poly, save_path)
    return PlotResult(ok=True, result=f"Plot saved to: {save_path}")
