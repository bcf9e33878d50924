"""Run configuration for power and random sweeps."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from apocalypse_search.core.universe import universe_size
from apocalypse_search.errors import InvalidParameterError


def _require_int(name: str, value: Any, minimum: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class SearchParameters:
    """Parameters of a power sweep over p**n.

    Attributes:
        power: Base power p (>= 2).
        base: Number base the powers are written in.
        seq_len: Length of the digit patterns.
        start: First exponent n searched.
        stop: Last exponent searched (fixed-stop mode).
        safety: Consecutive fully-matched samples required before stopping.
            Takes precedence over stop when both are given.
    """

    power: int = 2
    base: int = 10
    seq_len: int = 3
    start: int = 1
    stop: int | None = None
    safety: int | None = None

    def __post_init__(self):
        _require_int("power", self.power, 2)
        _require_int("start", self.start, 0)
        universe_size(self.base, self.seq_len)

        if self.stop is None and self.safety is None:
            raise InvalidParameterError("either stop or safety must be given")
        if self.safety is not None:
            _require_int("safety", self.safety, 1)
        if self.stop is not None:
            _require_int("stop", self.stop, 0)
            if self.safety is None and self.stop < self.start:
                raise InvalidParameterError(
                    f"stop ({self.stop}) must be >= start ({self.start})"
                )

    @property
    def mode(self) -> str:
        """"safety" if the safety margin is authoritative, else "fixed"."""
        return "safety" if self.safety is not None else "fixed"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RandomParameters:
    """Parameters of a sweep over uniformly random integers.

    Attributes:
        base: Number base the integers are written in.
        seq_len: Length of the digit patterns.
        length: Digit length D; draws are uniform on [0, base**D - 1].
        stop: Index of the last sample (the sample count for a fresh run).
        seed: Seed of the run's random generator.
        start: Index of the first sample; above 1 when resuming.
    """

    base: int = 10
    seq_len: int = 3
    length: int = 100
    stop: int = 100_000
    seed: int = 123456789
    start: int = 1

    def __post_init__(self):
        universe_size(self.base, self.seq_len)
        _require_int("length", self.length, 1)
        _require_int("start", self.start, 1)
        _require_int("stop", self.stop, self.start)
        if not isinstance(self.seed, int) or isinstance(self.seed, bool):
            raise InvalidParameterError(f"seed must be an integer, got {self.seed!r}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
