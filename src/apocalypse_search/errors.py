"""Exceptions raised by the search engine."""

from __future__ import annotations


class InvalidParameterError(ValueError):
    """A search parameter is out of range or inconsistent.

    Raised before any search work begins.
    """


class CheckpointCorruptError(ValueError):
    """A checkpoint file cannot be used to resume a search.

    Covers unreadable JSON, missing or mistyped fields, and result arrays
    that do not line up with the pattern universe recomputed from the
    checkpoint's base and sequence length.
    """
