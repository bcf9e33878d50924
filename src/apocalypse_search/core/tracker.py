"""Cumulative per-pattern non-match bookkeeping."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from apocalypse_search.errors import InvalidParameterError


class NonMatchTracker:
    """Counts, per pattern, the samples that did not contain it.

    Counts are stored in a numpy int64 array aligned to the universe order
    and only ever increase. In power mode the tracker also remembers the
    last sample index at which any pattern was absent; this single marker
    is shared by all patterns and drives the safety-margin stop.

    Attributes:
        counts: Per-pattern non-match counts.
        last_any_absent: Last index with at least one absent pattern, or
            None when not tracked.
        samples_recorded: Number of samples recorded by this tracker.
    """

    def __init__(
        self,
        size: int,
        initial_counts: Sequence[int] | np.ndarray | None = None,
        track_last_absent: bool = True,
        last_any_absent: int = 0,
    ):
        if size < 1:
            raise InvalidParameterError(f"tracker size must be >= 1, got {size}")

        if initial_counts is None:
            self.counts = np.zeros(size, dtype=np.int64)
        else:
            counts = np.array(initial_counts, dtype=np.int64)
            if counts.shape != (size,):
                raise InvalidParameterError(
                    f"initial counts have shape {counts.shape}, expected ({size},)"
                )
            if (counts < 0).any():
                raise InvalidParameterError("initial counts must be non-negative")
            self.counts = counts

        self.track_last_absent = track_last_absent
        self.last_any_absent: int | None = last_any_absent if track_last_absent else None
        self.samples_recorded = 0

    def record(self, absent: Sequence[int], sample_index: int) -> None:
        """Add one sample's absences.

        Args:
            absent: Distinct universe indices absent from the sample.
            sample_index: Index of the sample.
        """
        if len(absent):
            self.counts[np.asarray(absent, dtype=np.intp)] += 1
            if self.track_last_absent:
                self.last_any_absent = sample_index
        self.samples_recorded += 1

    @property
    def total(self) -> int:
        """Sum of all non-match counts."""
        return int(self.counts.sum())
