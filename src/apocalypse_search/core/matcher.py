"""Single-pass detection of which universe patterns occur in a digit string.

Checking every pattern with a substring search costs O(D * B**L) per
sample, which scales badly as the base and the sequence length grow.
Instead the matcher sweeps once through the digit string, bumping a
counter for each window it sees, and then reads the counters back in
universe order. The counter table is allocated once and reset in place.
"""

from __future__ import annotations

from apocalypse_search.core.universe import PatternUniverse


class SlidingWindowMatcher:
    """Reports the patterns absent from a digit string.

    Attributes:
        universe: Pattern universe the matcher was built for.
        seq_len: Window width (the pattern length).
    """

    def __init__(self, universe: PatternUniverse):
        self.universe = universe
        self.seq_len = universe.seq_len
        self._patterns = universe.patterns
        self._counts: dict[str, int] = dict.fromkeys(self._patterns, 0)

    def absent_indices(self, digits: str) -> list[int]:
        """Return universe indices of the patterns that do not occur in ``digits``.

        Args:
            digits: Digit string of any length. Patterns with leading zeros
                are ordinary strings, so "007" matches a "007" window.

        Returns:
            Ascending list of indices into the universe. If the string is
            shorter than the pattern length, every index is returned.
        """
        counts = self._counts
        width = self.seq_len

        for j in range(len(digits) - width + 1):
            window = digits[j:j + width]
            if window in counts:
                counts[window] += 1

        absent = []
        for idx, pattern in enumerate(self._patterns):
            if counts[pattern] == 0:
                absent.append(idx)
            else:
                counts[pattern] = 0
        return absent


def brute_force_absent(universe: PatternUniverse, digits: str) -> list[int]:
    """Reference implementation: one substring search per pattern."""
    return [i for i, pattern in enumerate(universe) if pattern not in digits]
