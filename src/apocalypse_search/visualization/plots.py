"""Plots of sweep and limit-search results."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np

from apocalypse_search.analysis.summary import NonMatchSummary

if TYPE_CHECKING:
    import matplotlib.figure


def render_non_match_deviations(
    summary: NonMatchSummary,
    base: int,
    seq_len: int,
    power: int | None = None,
) -> "matplotlib.figure.Figure":
    """Plot each pattern's non-match count minus the floor mean.

    Args:
        summary: Summary of the sweep.
        base: Number base (also the number of x tick labels).
        seq_len: Pattern length.
        power: Base power for the title; None for random sweeps.

    Returns:
        Matplotlib Figure object.
    """
    import matplotlib.pyplot as plt

    n_patterns = len(summary.patterns)
    x = np.arange(1, n_patterns + 1)

    tick_pos = np.unique(np.linspace(1, n_patterns, base).astype(int))
    tick_labels = [summary.patterns[i - 1] for i in tick_pos]

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(x, summary.deviations)
    ax.set_xticks(tick_pos)
    ax.set_xticklabels(tick_labels)
    ax.set_xlabel(f"Sequence of {seq_len} digits")
    ax.set_ylabel(f"Non-Apocalypse matches - mean ({summary.floor_mean})")
    if power is None:
        ax.set_title(f"Non-Apocalyptic Matches for random numbers, base {base}")
    else:
        ax.set_title(f"Non-Apocalyptic Matches for ${power}^n$, base {base}")

    fig.tight_layout()
    return fig


def plot_non_match_deviations(
    summary: NonMatchSummary,
    path: str | Path,
    base: int,
    seq_len: int,
    power: int | None = None,
    dpi: int = 100,
) -> Path:
    """Save the deviation plot to ``path`` (PDF, PNG, SVG...)."""
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_non_match_deviations(summary, base, seq_len, power)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return path


def density_bins(apocalypse_n: Sequence[int], bin_width: int = 0, n_bins: int = 50) -> np.ndarray:
    """Histogram bin edges for limit-search hits.

    With ``bin_width`` > 0 the bins are that wide and cover up to the last
    hit; otherwise ``n_bins`` equal bins span [0, last hit].
    """
    last = apocalypse_n[-1]
    if bin_width > 0:
        count = int(np.ceil(last / bin_width))
        return np.linspace(0, count * bin_width, count + 1)
    return np.linspace(0, last, n_bins + 1)


def plot_apocalypse_density(
    apocalypse_n: Sequence[int],
    path: str | Path,
    sequence: str,
    power: int = 2,
    bin_width: int = 0,
    dpi: int = 100,
) -> Path:
    """Save a normalised histogram of the indices whose power contains ``sequence``.

    Raises:
        ValueError: If there are no hits to plot.
    """
    import matplotlib.pyplot as plt

    if len(apocalypse_n) == 0:
        raise ValueError("no apocalyptic numbers to plot")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.hist(apocalypse_n, bins=density_bins(apocalypse_n, bin_width), density=True)
    ax.set_xlabel(f"n (power of {power})")
    ax.set_ylabel("Density")
    ax.set_title(f"Density of 'apocalypse' numbers for {sequence}")
    fig.tight_layout()
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return path
