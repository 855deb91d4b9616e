"""Comparator — rank two frames by a simplified bubble metric."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from pappascan.core.exceptions import FrameError
from pappascan.core.models import Frame, Winner
from pappascan.detect.blob_extractor import BlobExtractor
from pappascan.detect.params import DetectionParams
from pappascan.detect.preprocess import Preprocessor

logger = logging.getLogger(__name__)

# Simplified metric: bubble count scaled by this divisor, no calibration
COMPARISON_SCALE = 100.0


@dataclass(frozen=True)
class ComparisonScore:
    """Simplified score for one frame.

    Attributes:
        count: Number of accepted detections.
        metric: ``count / 100``.
    """

    count: int
    metric: float


@dataclass(frozen=True)
class ComparisonResult:
    """Scores for both frames and the outcome."""

    left: ComparisonScore
    right: ComparisonScore
    winner: Winner


def winner_for(left_metric: float, right_metric: float) -> Winner:
    """Exactly equal metrics tie; otherwise the higher metric wins."""
    if left_metric == right_metric:
        return Winner.TIE
    return Winner.LEFT if left_metric > right_metric else Winner.RIGHT


class Comparator:
    """Score two frames independently and order them.

    No user calibration is involved. The two analyses share no state and
    run concurrently on a two-worker thread pool.

    Args:
        params: Detection parameters for both frames.
    """

    def __init__(self, params: DetectionParams | None = None) -> None:
        self._params = params

    def score(self, frame: Frame) -> ComparisonScore:
        """Preprocess, extract and score a single frame.

        Raises:
            PrimitiveLibraryError: If a primitive is unavailable or fails.
        """
        try:
            mask = Preprocessor(self._params).preprocess(frame)
        except FrameError as exc:
            logger.warning("Comparison frame skipped: %s", exc)
            return ComparisonScore(count=0, metric=0.0)
        count = len(BlobExtractor(self._params).extract(mask))
        return ComparisonScore(count=count, metric=count / COMPARISON_SCALE)

    def compare(self, left: Frame, right: Frame) -> ComparisonResult:
        """Score both frames in parallel and declare a winner."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            left_future = pool.submit(self.score, left)
            right_future = pool.submit(self.score, right)
            left_score = left_future.result()
            right_score = right_future.result()

        winner = winner_for(left_score.metric, right_score.metric)
        logger.debug(
            "Compared %d vs %d bubbles: %s",
            left_score.count, right_score.count, winner.value,
        )
        return ComparisonResult(left=left_score, right=right_score, winner=winner)


def compare(left: Frame, right: Frame, params: DetectionParams | None = None) -> Winner:
    """Convenience wrapper returning only the winner."""
    return Comparator(params).compare(left, right).winner
