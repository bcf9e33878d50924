"""Summary statistics over the final non-match counts.

Counts are compared against the floor of their mean; a pattern is an
outlier when its deviation exceeds three sample standard deviations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from apocalypse_search.core.universe import PatternUniverse
from apocalypse_search.errors import InvalidParameterError

OUTLIER_SIGMA = 3.0


@dataclass
class NonMatchSummary:
    """Downstream view of a finished sweep.

    Attributes:
        patterns: Universe patterns in canonical order.
        counts: Non-match count per pattern.
        mean: Mean count.
        floor_mean: Mean rounded down; deviations are measured from this.
        std: Sample standard deviation.
        deviations: counts - floor_mean.
        outliers: (pattern, deviation) pairs beyond OUTLIER_SIGMA * std.
    """
    patterns: tuple[str, ...]
    counts: np.ndarray
    mean: float
    floor_mean: int
    std: float
    deviations: np.ndarray
    outliers: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mean": self.mean,
            "floor_mean": self.floor_mean,
            "std": self.std,
            "total": int(self.counts.sum()),
            "outliers": [{"pattern": p, "deviation": d} for p, d in self.outliers],
        }


def summarize(counts, universe: PatternUniverse, sigma: float = OUTLIER_SIGMA) -> NonMatchSummary:
    """Compute mean, spread and outliers of non-match counts.

    Args:
        counts: Per-pattern counts aligned to ``universe``.
        universe: Universe used to produce the counts.
        sigma: Outlier threshold in standard deviations.

    Returns:
        NonMatchSummary.

    Raises:
        InvalidParameterError: If counts and universe differ in length.
    """
    counts = np.asarray(counts, dtype=np.int64)
    if counts.shape != (len(universe),):
        raise InvalidParameterError(
            f"counts have shape {counts.shape}, universe has {len(universe)} patterns"
        )

    mean = float(counts.mean())
    floor_mean = int(math.floor(mean))
    std = float(counts.std(ddof=1))
    deviations = counts - floor_mean

    outliers = [
        (universe[i], int(deviations[i]))
        for i in np.nonzero(np.abs(deviations) > sigma * std)[0]
    ]

    return NonMatchSummary(
        patterns=universe.patterns,
        counts=counts,
        mean=mean,
        floor_mean=floor_mean,
        std=std,
        deviations=deviations,
        outliers=outliers,
    )
