"""The universe of fixed-length digit patterns for a base."""

from __future__ import annotations

from typing import Iterator

from apocalypse_search.core.digits import to_base_string, validate_base
from apocalypse_search.errors import InvalidParameterError

# Largest universe we are willing to materialise (16.7M patterns).
MAX_UNIVERSE_SIZE = 2 ** 24


def universe_size(base: int, seq_len: int) -> int:
    """Return base ** seq_len after validating both parameters.

    Raises:
        InvalidParameterError: If base or seq_len is invalid, or the
            universe would exceed MAX_UNIVERSE_SIZE.
    """
    validate_base(base)
    if not isinstance(seq_len, int) or isinstance(seq_len, bool) or seq_len < 1:
        raise InvalidParameterError(f"sequence length must be >= 1, got {seq_len!r}")
    size = base ** seq_len
    if size > MAX_UNIVERSE_SIZE:
        raise InvalidParameterError(
            f"pattern universe base={base}, seq_len={seq_len} has {size:,} members, "
            f"more than the limit of {MAX_UNIVERSE_SIZE:,}"
        )
    return size


class PatternUniverse:
    """All ``base ** seq_len`` zero-padded digit strings of length ``seq_len``.

    Patterns are stored in ascending numeric order ("000", "001", ...). That
    order is the canonical index for every per-pattern array in the package,
    including the ``results`` list of a checkpoint.

    Attributes:
        base: Number base of the patterns.
        seq_len: Length of every pattern.
        patterns: Tuple of pattern strings in canonical order.
    """

    def __init__(self, base: int = 10, seq_len: int = 3):
        size = universe_size(base, seq_len)
        self.base = base
        self.seq_len = seq_len
        self.patterns: tuple[str, ...] = tuple(
            to_base_string(i, base, pad=seq_len) for i in range(size)
        )
        self._index: dict[str, int] | None = None

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def __getitem__(self, idx: int) -> str:
        return self.patterns[idx]

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._lookup()

    def _lookup(self) -> dict[str, int]:
        if self._index is None:
            self._index = {p: i for i, p in enumerate(self.patterns)}
        return self._index

    def index(self, pattern: str) -> int:
        """Canonical index of ``pattern``.

        Raises:
            KeyError: If pattern is not a member of the universe.
        """
        return self._lookup()[pattern]

    def __repr__(self) -> str:
        return f"PatternUniverse(base={self.base}, seq_len={self.seq_len}, size={len(self)})"
