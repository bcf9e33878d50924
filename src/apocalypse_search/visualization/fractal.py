"""Fractal spiral drawn by a turtle whose turn angle keeps growing.

Starting at (1, 0), each step turns by an angle that itself increases by
2*pi*s per step, then moves one unit. Irrational s gives the spiralling
fractal curves; rational s closes into a finite figure.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterator

import numpy as np

from apocalypse_search.errors import InvalidParameterError

PHI = (1 + math.sqrt(5)) / 2

NAMED_CONSTANTS = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
    "ℯ": math.e,
    "phi": PHI,
    "φ": PHI,
    "golden": PHI,
    "sqrt2": math.sqrt(2),
}


def parse_constant(text: str) -> float:
    """Value of a named constant (pi, e, phi...) or a plain float.

    Raises:
        InvalidParameterError: If text is neither.
    """
    key = text.strip()
    if key in NAMED_CONSTANTS:
        return NAMED_CONSTANTS[key]
    if key.lower() in NAMED_CONSTANTS:
        return NAMED_CONSTANTS[key.lower()]
    try:
        return float(key)
    except ValueError:
        raise InvalidParameterError(f"unknown constant {text!r}") from None


def spiral_points(s: float, nmax: int) -> Iterator[tuple[float, float]]:
    """Yield the end point of each of the first ``nmax`` segments."""
    if nmax < 1:
        raise InvalidParameterError(f"nmax must be >= 1, got {nmax}")

    two_pi = 2 * math.pi
    x, y = 1.0, 0.0
    angle = rotation = 0.0
    for _ in range(nmax):
        yield x, y
        # Keep both angles in [0, 2pi) to limit round-off
        rotation = math.fmod(rotation + two_pi * s, two_pi)
        angle = math.fmod(angle + rotation, two_pi)
        x += math.cos(angle)
        y += math.sin(angle)


def spiral_coordinates(s: float, nmax: int) -> tuple[np.ndarray, np.ndarray]:
    """Polyline of the spiral, starting at the origin.

    Returns:
        Tuple of (x, y) arrays of length nmax + 1.
    """
    xs = [0.0]
    ys = [0.0]
    for x, y in spiral_points(s, nmax):
        xs.append(x)
        ys.append(y)
    return np.array(xs), np.array(ys)


def plot_spiral(s: float, nmax: int, path: str | Path, label: str | None = None, dpi: int = 100) -> Path:
    """Save a line plot of the spiral to ``path``."""
    import matplotlib.pyplot as plt

    x, y = spiral_coordinates(s, nmax)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.plot(x, y, linewidth=0.5)
    ax.set_aspect("equal")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(f"Fractal Spiral for s={label or s}, {nmax} iterations")
    fig.tight_layout()
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return path
