"""apocalypse_search - digit-sequence absence search over powers and random integers."""

__version__ = "0.1.0"

from apocalypse_search.config import SearchParameters, RandomParameters
from apocalypse_search.core.universe import PatternUniverse
from apocalypse_search.core.matcher import SlidingWindowMatcher
from apocalypse_search.core.tracker import NonMatchTracker
from apocalypse_search.search.sweep import power_sweep, random_sweep
from apocalypse_search.errors import InvalidParameterError, CheckpointCorruptError

__all__ = [
    "SearchParameters",
    "RandomParameters",
    "PatternUniverse",
    "SlidingWindowMatcher",
    "NonMatchTracker",
    "power_sweep",
    "random_sweep",
    "InvalidParameterError",
    "CheckpointCorruptError",
]
