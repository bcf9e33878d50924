"""Tests for power and random sample streams."""

import itertools
import random

import pytest

from apocalypse_search.core.streams import PowerStream, RandomSampleStream, Sample
from apocalypse_search.errors import InvalidParameterError


class TestPowerStream:
    """Tests for PowerStream."""

    def test_first_powers_of_two(self):
        samples = list(itertools.islice(PowerStream(2, 10, 1), 5))
        assert [s.index for s in samples] == [1, 2, 3, 4, 5]
        assert [s.digits for s in samples] == ["2", "4", "8", "16", "32"]

    def test_start_zero(self):
        sample = next(PowerStream(5, 10, 0))
        assert sample == Sample(index=0, value=1, digits="1")

    def test_other_base(self):
        sample = next(PowerStream(3, 2, 2))
        assert sample.value == 9
        assert sample.digits == "1001"

    def test_values_match_exponentiation(self):
        stream = PowerStream(7, 10, 3)
        for sample in itertools.islice(stream, 300):
            assert sample.value == 7 ** sample.index

    def test_reseed(self):
        stream = PowerStream(2, 10, 1)
        next(stream)
        stream.reseed(10)
        assert stream.next_index == 10
        assert next(stream).digits == "1024"
        assert next(stream).digits == "2048"

    def test_invalid(self):
        with pytest.raises(InvalidParameterError):
            PowerStream(1, 10, 1)
        with pytest.raises(InvalidParameterError):
            PowerStream(2, 1, 1)
        with pytest.raises(InvalidParameterError):
            PowerStream(2, 10, -1)


class TestRandomSampleStream:
    """Tests for RandomSampleStream."""

    def test_same_seed_same_samples(self):
        a = list(RandomSampleStream(10, 30, stop=20, seed=42))
        b = list(RandomSampleStream(10, 30, stop=20, rng=random.Random(42)))
        assert a == b

    def test_different_seed(self):
        a = [s.value for s in RandomSampleStream(10, 30, stop=20, seed=1)]
        b = [s.value for s in RandomSampleStream(10, 30, stop=20, seed=2)]
        assert a != b

    def test_range_and_rendering(self):
        stream = RandomSampleStream(7, 12, stop=200, seed=3)
        assert len(stream) == 200
        for sample in stream:
            assert 0 <= sample.value <= 7 ** 12 - 1
            assert len(sample.digits) <= 12
            assert not sample.digits.startswith("0") or sample.digits == "0"

    def test_indices(self):
        stream = RandomSampleStream(10, 5, stop=4, seed=0)
        assert [s.index for s in stream] == [1, 2, 3, 4]

    def test_start_skips_draws(self):
        """A stream started at index 3 continues the sequence of a fresh one."""
        full = list(RandomSampleStream(10, 20, stop=6, seed=9))
        tail = list(RandomSampleStream(10, 20, stop=6, seed=9, start=3))
        assert tail == full[2:]

    def test_invalid(self):
        with pytest.raises(InvalidParameterError):
            RandomSampleStream(10, 0, stop=5)
        with pytest.raises(InvalidParameterError):
            RandomSampleStream(10, 5, stop=5, start=0)
        with pytest.raises(InvalidParameterError):
            RandomSampleStream(10, 5, stop=5, rng=random.Random(1), seed=1)
