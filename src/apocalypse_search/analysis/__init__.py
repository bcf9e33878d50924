"""Summary statistics of non-match counts."""

from apocalypse_search.analysis.summary import NonMatchSummary, summarize, OUTLIER_SIGMA

__all__ = ["NonMatchSummary", "summarize", "OUTLIER_SIGMA"]
