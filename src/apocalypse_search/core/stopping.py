"""Loop termination for open-ended and fixed-length searches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apocalypse_search.errors import InvalidParameterError

if TYPE_CHECKING:
    from apocalypse_search.config import SearchParameters

logger = logging.getLogger(__name__)

FIXED = "fixed"
SAFETY = "safety"


class StopController:
    """Decides after each sample whether the search is finished.

    In ``fixed`` mode the search ends once the sample index reaches
    ``stop``. In ``safety`` mode it ends once ``safety`` consecutive samples
    have passed with no absent pattern, measured against the tracker's
    global last-absent marker. The safety rule is a heuristic: a pattern that
    disappears again after the margin is not caught.
    """

    def __init__(self, stop: int | None = None, safety: int | None = None):
        if stop is None and safety is None:
            raise InvalidParameterError("one of stop or safety is required")
        if safety is not None:
            if safety < 1:
                raise InvalidParameterError(f"safety must be >= 1, got {safety}")
            if stop is not None:
                logger.warning(
                    "Both stop value and safety value given - safety value takes precedence"
                )
            self.mode = SAFETY
            self.stop = None
            self.safety = safety
        else:
            self.mode = FIXED
            self.stop = stop
            self.safety = None

    @classmethod
    def from_parameters(cls, params: "SearchParameters") -> "StopController":
        return cls(stop=params.stop, safety=params.safety)

    def should_stop(self, index: int, last_any_absent: int | None) -> bool:
        """True if the sample at ``index`` is the last one to process."""
        if self.mode == FIXED:
            return index >= self.stop
        return index - last_any_absent >= self.safety

    def __repr__(self) -> str:
        if self.mode == FIXED:
            return f"StopController(stop={self.stop})"
        return f"StopController(safety={self.safety})"
