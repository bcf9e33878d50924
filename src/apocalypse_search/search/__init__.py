"""Search drivers: full-universe sweeps and single-sequence limit search."""

from apocalypse_search.search.sweep import (
    SweepResult,
    power_sweep,
    random_sweep,
    resume_sweep,
)
from apocalypse_search.search.limit import LimitResult, limit_search

__all__ = [
    "SweepResult",
    "power_sweep",
    "random_sweep",
    "resume_sweep",
    "LimitResult",
    "limit_search",
]
