"""Progress reporting for sweeps.

Drivers call a progress callback once per sample as
``progress(sample, n_absent, tracker)``; nothing in the core writes to the
console. :class:`TqdmProgress` is the console implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from tqdm import tqdm

if TYPE_CHECKING:
    from apocalypse_search.core.streams import Sample
    from apocalypse_search.core.tracker import NonMatchTracker


class ProgressCallback(Protocol):
    def __call__(self, sample: "Sample", n_absent: int, tracker: "NonMatchTracker") -> None:
        ...


class TqdmProgress:
    """tqdm progress bar fed by the per-sample callback.

    With a known total (fixed stop, random sweeps) the bar shows a
    percentage; without one (safety margin) it shows a running count with
    the number of absent patterns and the distance from the last absence.
    """

    def __init__(self, total: int | None = None, desc: str = "Searching", universe_size: int = 0):
        self.bar = tqdm(total=total, desc=desc, unit="n", leave=False)
        self.universe_size = universe_size

    def __call__(self, sample: "Sample", n_absent: int, tracker: "NonMatchTracker") -> None:
        self.bar.update(1)
        postfix = {"n": sample.index, "absent": f"{n_absent}/{self.universe_size}"}
        if tracker.last_any_absent is not None:
            postfix["clear"] = sample.index - tracker.last_any_absent
        self.bar.set_postfix(postfix, refresh=False)

    def close(self) -> None:
        self.bar.close()

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
