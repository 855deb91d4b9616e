"""Pappascan Measure — calibration, statistics, comparison and commentary."""

from pappascan.measure.commentary import (
    Commentary,
    CommentaryProvider,
    SeededCommentary,
    oil_estimate_ml,
)
from pappascan.measure.comparator import (
    ComparisonResult,
    ComparisonScore,
    Comparator,
    compare,
)
from pappascan.measure.metrics import compute_stats, px_per_cm, rating_from_index

__all__ = [
    "Commentary",
    "CommentaryProvider",
    "Comparator",
    "ComparisonResult",
    "ComparisonScore",
    "compare",
    "compute_stats",
    "oil_estimate_ml",
    "px_per_cm",
    "rating_from_index",
    "SeededCommentary",
]
