"""Limit search for a single digit sequence.

Walks p**n upward and stops once the sequence has appeared in ``hits``
consecutive powers. The last power without the sequence is the empirical
limit for that sequence: beyond it every power checked was "apocalyptic".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from apocalypse_search.core.digits import numerals
from apocalypse_search.core.streams import PowerStream
from apocalypse_search.errors import InvalidParameterError

logger = logging.getLogger(__name__)

REPORT_INTERVAL = 1000


@dataclass
class LimitResult:
    """Outcome of a limit search.

    Attributes:
        sequence: The digit sequence searched for.
        apocalypse_n: Indices n whose power contains the sequence.
        last_non_apocalypse: Last index whose power lacks the sequence.
        last_index: Last index examined.
    """
    sequence: str
    last_non_apocalypse: int
    last_index: int
    apocalypse_n: list[int] = field(default_factory=list)


def limit_search(
    sequence: str = "666",
    stop: int = 10_000,
    start: int = 1,
    base: int = 10,
    power: int = 2,
) -> LimitResult:
    """Find the last power p**n that does not contain ``sequence``.

    Args:
        sequence: Literal digit sequence in the given base.
        stop: Number of consecutive hits after which the search ends.
        start: First exponent searched.
        base: Number base.
        power: Base power p.

    Returns:
        LimitResult.

    Raises:
        InvalidParameterError: If the sequence is empty or uses numerals
            outside the base, or stop < 1.
    """
    if not sequence:
        raise InvalidParameterError("sequence must not be empty")
    alphabet = set(numerals(base))
    bad = sorted(set(sequence) - alphabet)
    if bad:
        raise InvalidParameterError(f"sequence {sequence!r} has numerals not valid in base {base}: {bad}")
    if stop < 1:
        raise InvalidParameterError(f"stop must be >= 1, got {stop}")

    logger.info('Searching for limit for "%s", will stop after %d hits', sequence, stop)

    apocalypse_n: list[int] = []
    consecutive = 0
    misses_in_chunk = 0
    last_non_apocalypse = start - 1
    n = start - 1

    for sample in PowerStream(power, base, start):
        n = sample.index
        if n % REPORT_INTERVAL == 0:
            logger.info("Reached %d - %d in last chunk", n, misses_in_chunk)
            misses_in_chunk = 0

        if sequence in sample.digits:
            consecutive += 1
            apocalypse_n.append(n)
            logger.debug("%d is apocalypse (%d consecutive)", n, consecutive)
            if consecutive >= stop:
                break
        else:
            logger.debug("%d is not apocalypse (%d consecutive)", n, consecutive)
            consecutive = 0
            last_non_apocalypse = n
            misses_in_chunk += 1

    logger.info("Searched to n=%d, last non-apocalypse n was n=%d", n, last_non_apocalypse)
    return LimitResult(
        sequence=sequence,
        last_non_apocalypse=last_non_apocalypse,
        last_index=n,
        apocalypse_n=apocalypse_n,
    )
