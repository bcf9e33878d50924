"""Checkpoint persistence for suspending and resuming sweeps.

A checkpoint is one JSON object holding the run parameters and the
cumulative non-match counts in universe order::

    {
      "power": 2, "base": 10, "seq_len": 3,
      "start": 1, "stop": 35000,
      "results": [...],
      "method": "power", "format": "v4"
    }

Random sweeps store ``"power": 0`` and add ``length`` and ``seed``. The
pattern strings are never stored; they are recomputed from ``base`` and
``seq_len`` on load, and the length of ``results`` is checked against that
universe.

Resuming starts at ``stop + 1`` with the stored counts. The exact index of
the last absent pattern is not stored, so a resumed tracker takes ``stop``
as its last-absent marker and a resumed safety-margin search may run up to
``safety`` samples longer than an uninterrupted one would have.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence, Union

import numpy as np

from apocalypse_search.config import RandomParameters, SearchParameters
from apocalypse_search.core.universe import universe_size
from apocalypse_search.errors import CheckpointCorruptError, InvalidParameterError

logger = logging.getLogger(__name__)

CHECKPOINT_FORMAT = "v4"
METHOD_POWER = "power"
METHOD_RANDOM = "random"

_REQUIRED_FIELDS = ("power", "base", "seq_len", "start", "stop", "results")

Parameters = Union[SearchParameters, RandomParameters]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Checkpoint:
    """A complete restart point for a sweep.

    Attributes:
        power: Base power, 0 for random sweeps.
        base: Number base.
        seq_len: Pattern length.
        start: First index of the whole run.
        stop: Last index processed.
        results: Non-match counts in universe order.
        method: "power" or "random".
        length: Digit length of random draws (random sweeps only).
        seed: Generator seed (random sweeps only).
    """
    power: int
    base: int
    seq_len: int
    start: int
    stop: int
    results: np.ndarray
    method: str = METHOD_POWER
    length: int | None = None
    seed: int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "power": self.power,
            "base": self.base,
            "seq_len": self.seq_len,
            "start": self.start,
            "stop": self.stop,
            "results": [int(c) for c in self.results],
            "method": self.method,
            "format": CHECKPOINT_FORMAT,
        }
        if self.method == METHOD_RANDOM:
            d["length"] = self.length
            d["seed"] = self.seed
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Checkpoint":
        """Build and validate a checkpoint from its JSON object.

        Raises:
            CheckpointCorruptError: If fields are missing, mistyped, or the
                results do not match the recomputed universe.
        """
        if not isinstance(d, dict):
            raise CheckpointCorruptError(f"checkpoint must be a JSON object, got {type(d).__name__}")

        missing = [k for k in _REQUIRED_FIELDS if k not in d]
        if missing:
            raise CheckpointCorruptError(f"checkpoint is missing fields: {', '.join(missing)}")

        for key in ("power", "base", "seq_len", "start", "stop"):
            if not _is_int(d[key]):
                raise CheckpointCorruptError(f"checkpoint field {key!r} must be an integer, got {d[key]!r}")

        method = d.get("method", METHOD_POWER)
        if method not in (METHOD_POWER, METHOD_RANDOM):
            raise CheckpointCorruptError(f"unknown checkpoint method {method!r}")
        if method == METHOD_POWER and d["power"] < 2:
            raise CheckpointCorruptError(f"checkpoint power must be >= 2, got {d['power']}")

        try:
            size = universe_size(d["base"], d["seq_len"])
        except InvalidParameterError as e:
            raise CheckpointCorruptError(f"checkpoint base/seq_len are invalid: {e}") from e

        results = d["results"]
        if not isinstance(results, list) or not all(_is_int(c) for c in results):
            raise CheckpointCorruptError("checkpoint results must be a list of integers")
        if len(results) != size:
            raise CheckpointCorruptError(
                f"checkpoint has {len(results)} results but base {d['base']} and "
                f"seq_len {d['seq_len']} give {size} patterns"
            )
        if any(c < 0 for c in results):
            raise CheckpointCorruptError("checkpoint results must be non-negative")
        if d["stop"] < d["start"] - 1:
            raise CheckpointCorruptError(
                f"checkpoint stop ({d['stop']}) is before start ({d['start']})"
            )

        length = d.get("length")
        seed = d.get("seed")
        for key, value in (("length", length), ("seed", seed)):
            if value is not None and not _is_int(value):
                raise CheckpointCorruptError(f"checkpoint field {key!r} must be an integer, got {value!r}")
        if method == METHOD_RANDOM and length is not None and length < 1:
            raise CheckpointCorruptError(f"checkpoint length must be >= 1, got {length}")

        return cls(
            power=d["power"],
            base=d["base"],
            seq_len=d["seq_len"],
            start=d["start"],
            stop=d["stop"],
            results=np.array(results, dtype=np.int64),
            method=method,
            length=length,
            seed=seed,
        )

    @classmethod
    def from_parameters(
        cls,
        counts: Sequence[int] | np.ndarray,
        params: Parameters,
        current_index: int,
        origin: int | None = None,
    ) -> "Checkpoint":
        """Snapshot ``counts`` after processing ``current_index``.

        Args:
            counts: Non-match counts in universe order.
            params: Parameters of the running sweep.
            current_index: Last index processed.
            origin: First index of the whole run; defaults to params.start.
        """
        start = params.start if origin is None else origin
        results = np.array(counts, dtype=np.int64)
        if isinstance(params, RandomParameters):
            return cls(
                power=0,
                base=params.base,
                seq_len=params.seq_len,
                start=start,
                stop=current_index,
                results=results,
                method=METHOD_RANDOM,
                length=params.length,
                seed=params.seed,
            )
        return cls(
            power=params.power,
            base=params.base,
            seq_len=params.seq_len,
            start=start,
            stop=current_index,
            results=results,
        )

    @property
    def next_index(self) -> int:
        """Index of the first sample a resumed run processes."""
        return self.stop + 1

    def resume_parameters(
        self,
        stop: int | None = None,
        safety: int | None = None,
    ) -> Parameters:
        """Parameters that continue this run from ``next_index``.

        Args:
            stop: New final index (power sweeps) or sample count (random).
            safety: Safety margin for power sweeps.

        Raises:
            CheckpointCorruptError: If a random checkpoint lacks length or seed.
            InvalidParameterError: If the new stop is not beyond the checkpoint.
        """
        if self.method == METHOD_RANDOM:
            if self.length is None or self.seed is None:
                raise CheckpointCorruptError("random checkpoint needs 'length' and 'seed' to resume")
            return RandomParameters(
                base=self.base,
                seq_len=self.seq_len,
                length=self.length,
                stop=stop if stop is not None else self.stop,
                seed=self.seed,
                start=self.next_index,
            )
        return SearchParameters(
            power=self.power,
            base=self.base,
            seq_len=self.seq_len,
            start=self.next_index,
            stop=stop,
            safety=safety,
        )


class CheckpointStore:
    """Reads and writes checkpoints at a fixed path."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(
        self,
        counts: Sequence[int] | np.ndarray,
        params: Parameters,
        current_index: int,
        origin: int | None = None,
    ) -> Path:
        """Write a checkpoint, replacing any previous file atomically.

        Returns:
            Path written.
        """
        checkpoint = Checkpoint.from_parameters(counts, params, current_index, origin)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w") as f:
                json.dump(checkpoint.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info(
            "Saved results to %s at n=%d (total non-matches: %d)",
            self.path, current_index, int(checkpoint.results.sum()),
        )
        return self.path

    def load(self) -> Checkpoint:
        """Read and validate the checkpoint.

        Raises:
            CheckpointCorruptError: If the file is not valid JSON or fails validation.
            FileNotFoundError: If the file does not exist.
        """
        logger.info("Loading results from %s", self.path)
        with open(self.path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise CheckpointCorruptError(f"{self.path} is not valid JSON: {e}") from e
        return Checkpoint.from_dict(data)

    def exists(self) -> bool:
        return self.path.exists()


def save_checkpoint(path, counts, params, current_index, origin=None) -> Path:
    """Write a checkpoint to ``path`` (convenience function)."""
    return CheckpointStore(path).save(counts, params, current_index, origin)


def load_checkpoint(path) -> Checkpoint:
    """Load a checkpoint from ``path`` (convenience function)."""
    return CheckpointStore(path).load()


class PeriodicCheckpointer:
    """Time-triggered checkpoint saves inside a sweep loop.

    Saves are best effort: a failed write is logged and the sweep goes on,
    so at most the samples since the last good save are lost.
    """

    def __init__(
        self,
        store: CheckpointStore,
        params: Parameters,
        interval_minutes: float = 0,
        origin: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.params = params
        self.interval_seconds = 60 * interval_minutes
        self.origin = origin
        self.clock = clock
        self.last_save = clock()
        self.saves = 0

    @property
    def enabled(self) -> bool:
        return self.interval_seconds > 0

    def maybe_save(self, counts: np.ndarray, current_index: int) -> bool:
        """Save if the interval has elapsed. Returns True if a save happened."""
        if not self.enabled:
            return False
        now = self.clock()
        if now - self.last_save <= self.interval_seconds:
            return False

        self.last_save = now
        try:
            self.store.save(counts, self.params, current_index, self.origin)
        except OSError:
            logger.exception("Periodic checkpoint to %s failed; continuing search", self.store.path)
            return False
        self.saves += 1
        return True
