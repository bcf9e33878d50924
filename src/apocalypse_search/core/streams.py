"""Sample sources: powers p**n and uniformly random fixed-length integers."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator

from apocalypse_search.core.digits import to_base_string, validate_base
from apocalypse_search.errors import InvalidParameterError


@dataclass(frozen=True)
class Sample:
    """One evaluated integer and its digit rendering.

    Attributes:
        index: Exponent n (power mode) or draw number (random mode).
        value: The integer itself.
        digits: Base-B rendering of value, unpadded.
    """
    index: int
    value: int
    digits: str


class PowerStream:
    """Lazy stream of p**n for n = start, start+1, ...

    The accumulator is seeded once and then advanced by a single
    multiplication per sample.
    """

    def __init__(self, power: int = 2, base: int = 10, start: int = 1):
        if power < 2:
            raise InvalidParameterError(f"power must be >= 2, got {power}")
        if start < 0:
            raise InvalidParameterError(f"start must be >= 0, got {start}")
        validate_base(base)

        self.power = power
        self.base = base
        self.reseed(start)

    def reseed(self, index: int) -> None:
        """Position the stream so the next sample is p**index."""
        if index < 0:
            raise InvalidParameterError(f"index must be >= 0, got {index}")
        self._next_index = index
        self._accumulator = self.power ** index

    @property
    def next_index(self) -> int:
        return self._next_index

    def __iter__(self) -> Iterator[Sample]:
        return self

    def __next__(self) -> Sample:
        sample = Sample(
            index=self._next_index,
            value=self._accumulator,
            digits=to_base_string(self._accumulator, self.base),
        )
        self._next_index += 1
        self._accumulator *= self.power
        return sample


class RandomSampleStream:
    """Uniform draws from [0, base**length - 1] for indices start..stop.

    Draws come from a caller-supplied ``random.Random`` so runs are
    reproducible. When ``start`` is above 1 the first ``start - 1`` draws are
    discarded, which lets a resumed run continue the original sequence.
    Renderings are not padded, so a draw with leading zero digits is shorter
    than ``length``.
    """

    def __init__(
        self,
        base: int = 10,
        length: int = 100,
        stop: int = 100_000,
        rng: random.Random | None = None,
        seed: int | None = None,
        start: int = 1,
    ):
        validate_base(base)
        if length < 1:
            raise InvalidParameterError(f"length must be >= 1, got {length}")
        if start < 1:
            raise InvalidParameterError(f"start must be >= 1, got {start}")
        if rng is not None and seed is not None:
            raise InvalidParameterError("pass either rng or seed, not both")

        self.base = base
        self.length = length
        self.start = start
        self.stop = stop
        self.max_value = base ** length - 1
        self.rng = rng if rng is not None else random.Random(seed)

        for _ in range(start - 1):
            self._draw()

    def _draw(self) -> int:
        return self.rng.randint(0, self.max_value)

    def __len__(self) -> int:
        return max(0, self.stop - self.start + 1)

    def __iter__(self) -> Iterator[Sample]:
        for n in range(self.start, self.stop + 1):
            value = self._draw()
            yield Sample(index=n, value=value, digits=to_base_string(value, self.base))
