"""Core matching engine: digit rendering, pattern universe, streams, matcher, tracking, stopping."""

from apocalypse_search.core.digits import to_base_string, numerals, MAX_BASE
from apocalypse_search.core.universe import PatternUniverse, MAX_UNIVERSE_SIZE
from apocalypse_search.core.streams import Sample, PowerStream, RandomSampleStream
from apocalypse_search.core.matcher import SlidingWindowMatcher, brute_force_absent
from apocalypse_search.core.tracker import NonMatchTracker
from apocalypse_search.core.stopping import StopController

__all__ = [
    "to_base_string",
    "numerals",
    "MAX_BASE",
    "PatternUniverse",
    "MAX_UNIVERSE_SIZE",
    "Sample",
    "PowerStream",
    "RandomSampleStream",
    "SlidingWindowMatcher",
    "brute_force_absent",
    "NonMatchTracker",
    "StopController",
]
