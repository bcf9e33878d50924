"""Tests for the pattern universe."""

import pytest

from apocalypse_search.core.universe import (
    MAX_UNIVERSE_SIZE,
    PatternUniverse,
    universe_size,
)
from apocalypse_search.errors import InvalidParameterError


class TestPatternUniverse:
    """Tests for PatternUniverse."""

    def test_completeness(self):
        """Every universe has base**seq_len distinct patterns of exact length."""
        for base, seq_len in [(2, 1), (2, 5), (3, 3), (10, 1), (10, 3), (16, 2)]:
            universe = PatternUniverse(base, seq_len)
            assert len(universe) == base ** seq_len
            assert len(set(universe)) == len(universe)
            assert all(len(p) == seq_len for p in universe)

    def test_numeric_order(self):
        universe = PatternUniverse(10, 3)
        assert universe[0] == "000"
        assert universe[1] == "001"
        assert universe[666] == "666"
        assert universe[-1] == "999"
        assert list(universe) == sorted(universe)

    def test_binary(self):
        universe = PatternUniverse(2, 3)
        assert list(universe) == ["000", "001", "010", "011", "100", "101", "110", "111"]

    def test_hex_patterns(self):
        universe = PatternUniverse(16, 2)
        assert universe[255] == "ff"
        assert universe[10] == "0a"

    def test_index_and_contains(self):
        universe = PatternUniverse(10, 2)
        assert universe.index("42") == 42
        assert "07" in universe
        assert "7" not in universe
        with pytest.raises(KeyError):
            universe.index("abc")

    def test_deterministic(self):
        assert PatternUniverse(7, 3).patterns == PatternUniverse(7, 3).patterns

    def test_invalid_parameters(self):
        with pytest.raises(InvalidParameterError):
            PatternUniverse(1, 3)
        with pytest.raises(InvalidParameterError):
            PatternUniverse(10, 0)
        with pytest.raises(InvalidParameterError):
            PatternUniverse(10, -2)

    def test_too_large(self):
        with pytest.raises(InvalidParameterError):
            PatternUniverse(10, 8)

    def test_universe_size(self):
        assert universe_size(10, 3) == 1000
        assert universe_size(2, 24) == MAX_UNIVERSE_SIZE
        with pytest.raises(InvalidParameterError):
            universe_size(2, 25)
