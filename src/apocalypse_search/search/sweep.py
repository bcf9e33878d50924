"""Sweep drivers: every universe pattern against a stream of samples.

The power sweep walks p**n from ``start`` until the stop controller says
otherwise; the random sweep draws a fixed number of random integers. Both
feed each sample through the same matcher and tracker, one sample at a time.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass

import numpy as np

from apocalypse_search.analysis.summary import NonMatchSummary, summarize
from apocalypse_search.config import RandomParameters, SearchParameters
from apocalypse_search.core.matcher import SlidingWindowMatcher
from apocalypse_search.core.stopping import StopController
from apocalypse_search.core.streams import PowerStream, RandomSampleStream
from apocalypse_search.core.tracker import NonMatchTracker
from apocalypse_search.core.universe import PatternUniverse
from apocalypse_search.errors import CheckpointCorruptError
from apocalypse_search.utils.checkpoint import (
    METHOD_POWER,
    METHOD_RANDOM,
    Checkpoint,
    PeriodicCheckpointer,
)
from apocalypse_search.utils.progress import ProgressCallback

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Outcome of a sweep.

    Attributes:
        universe: Pattern universe the counts are aligned to.
        counts: Cumulative non-match counts (including any resumed counts).
        start: First index of the whole run.
        last_index: Last index processed.
        last_any_absent: Last index with an absent pattern (power sweeps).
        samples: Number of samples processed in this session.
        elapsed: Wall-clock seconds for this session.
    """
    universe: PatternUniverse
    counts: np.ndarray
    start: int
    last_index: int
    last_any_absent: int | None
    samples: int
    elapsed: float

    def summary(self) -> NonMatchSummary:
        return summarize(self.counts, self.universe)


def power_sweep(
    params: SearchParameters,
    initial_counts=None,
    origin: int | None = None,
    progress: ProgressCallback | None = None,
    checkpointer: PeriodicCheckpointer | None = None,
) -> SweepResult:
    """Count, for every pattern, the powers p**n that lack it.

    Args:
        params: Sweep parameters.
        initial_counts: Counts to continue from (resume), in universe order.
        origin: First index of the whole run when resuming.
        progress: Optional per-sample callback.
        checkpointer: Optional periodic saver.

    Returns:
        SweepResult.
    """
    universe = PatternUniverse(params.base, params.seq_len)
    matcher = SlidingWindowMatcher(universe)
    tracker = NonMatchTracker(
        len(universe),
        initial_counts=initial_counts,
        track_last_absent=True,
        last_any_absent=params.start - 1,
    )
    controller = StopController.from_parameters(params)
    stream = PowerStream(params.power, params.base, params.start)

    logger.info(
        "Sweeping %d patterns of length %d over %d^n in base %d from n=%d (%r)",
        len(universe), params.seq_len, params.power, params.base, params.start, controller,
    )

    t0 = time.time()
    last_index = params.start - 1
    for sample in stream:
        absent = matcher.absent_indices(sample.digits)
        tracker.record(absent, sample.index)
        last_index = sample.index
        logger.debug("n=%d: %d patterns absent", sample.index, len(absent))

        if progress is not None:
            progress(sample, len(absent), tracker)
        if checkpointer is not None:
            checkpointer.maybe_save(tracker.counts, sample.index)

        if controller.should_stop(sample.index, tracker.last_any_absent):
            break

    elapsed = time.time() - t0
    logger.info("Last non-matching power was %d", tracker.last_any_absent)
    logger.info("Total non-matches: %d", tracker.total)
    logger.info("Search took %.2fs", elapsed)

    return SweepResult(
        universe=universe,
        counts=tracker.counts,
        start=params.start if origin is None else origin,
        last_index=last_index,
        last_any_absent=tracker.last_any_absent,
        samples=tracker.samples_recorded,
        elapsed=elapsed,
    )


def random_sweep(
    params: RandomParameters,
    rng: random.Random | None = None,
    initial_counts=None,
    origin: int | None = None,
    progress: ProgressCallback | None = None,
    checkpointer: PeriodicCheckpointer | None = None,
) -> SweepResult:
    """Count, for every pattern, the random draws that lack it.

    Args:
        params: Sweep parameters.
        rng: Generator to draw from; a fresh ``random.Random(params.seed)``
            when omitted.
        initial_counts: Counts to continue from (resume).
        origin: First index of the whole run when resuming.
        progress: Optional per-sample callback.
        checkpointer: Optional periodic saver.

    Returns:
        SweepResult.
    """
    universe = PatternUniverse(params.base, params.seq_len)
    matcher = SlidingWindowMatcher(universe)
    tracker = NonMatchTracker(len(universe), initial_counts=initial_counts, track_last_absent=False)
    if rng is None:
        rng = random.Random(params.seed)
    stream = RandomSampleStream(
        params.base, params.length, stop=params.stop, rng=rng, start=params.start,
    )

    logger.info(
        "Matching %d patterns of length %d against %d random %d-digit numbers in base %d",
        len(universe), params.seq_len, len(stream), params.length, params.base,
    )

    t0 = time.time()
    last_index = params.start - 1
    for sample in stream:
        absent = matcher.absent_indices(sample.digits)
        tracker.record(absent, sample.index)
        last_index = sample.index

        if progress is not None:
            progress(sample, len(absent), tracker)
        if checkpointer is not None:
            checkpointer.maybe_save(tracker.counts, sample.index)

    elapsed = time.time() - t0
    logger.info("Total non-matches: %d", tracker.total)
    logger.info("Search took %.2fs", elapsed)

    return SweepResult(
        universe=universe,
        counts=tracker.counts,
        start=params.start if origin is None else origin,
        last_index=last_index,
        last_any_absent=None,
        samples=tracker.samples_recorded,
        elapsed=elapsed,
    )


def resume_sweep(
    checkpoint: Checkpoint,
    stop: int | None = None,
    safety: int | None = None,
    progress: ProgressCallback | None = None,
    checkpointer: PeriodicCheckpointer | None = None,
) -> SweepResult:
    """Continue a sweep from a checkpoint.

    The checkpoint's counts become the starting counts and the sweep picks
    up at ``checkpoint.stop + 1``.

    Args:
        checkpoint: Loaded checkpoint.
        stop: New final index (power) or final sample index (random).
        safety: Safety margin (power only).
        progress: Optional per-sample callback.
        checkpointer: Optional periodic saver; should be built with
            ``origin=checkpoint.start``.
    """
    params = checkpoint.resume_parameters(stop=stop, safety=safety)
    logger.info("Resuming %s sweep at n=%d", checkpoint.method, params.start)

    if checkpoint.method == METHOD_POWER:
        return power_sweep(
            params,
            initial_counts=checkpoint.results,
            origin=checkpoint.start,
            progress=progress,
            checkpointer=checkpointer,
        )
    if checkpoint.method == METHOD_RANDOM:
        return random_sweep(
            params,
            initial_counts=checkpoint.results,
            origin=checkpoint.start,
            progress=progress,
            checkpointer=checkpointer,
        )
    raise CheckpointCorruptError(f"unknown checkpoint method {checkpoint.method!r}")


def power_results_filename(params: SearchParameters, start: int, last_index: int) -> str:
    return (f"n-non-apocalypse-base-{params.base}-power-{params.power}"
            f"-seq-{params.seq_len}-n{start}-{last_index}.json")


def power_checkpoint_filename(params: SearchParameters, start: int) -> str:
    return (f"n-non-apocalypse-base-{params.base}-power-{params.power}"
            f"-seq-{params.seq_len}-n{start}-checkpoint.json")


def random_results_filename(params: RandomParameters) -> str:
    return f"n-non-match-v4-base-{params.base}-length-{params.length}-seq-{params.seq_len}.json"