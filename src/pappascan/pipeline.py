"""AnalysisPipeline — one frame in, one statistics snapshot out."""

from __future__ import annotations

import logging
import time

from pappascan.core.exceptions import FrameError, PrimitiveLibraryError
from pappascan.core.models import AnalysisResult, CalibrationContext, Detection, Frame
from pappascan.detect.blob_extractor import BlobExtractor
from pappascan.detect.params import DetectionParams
from pappascan.detect.preprocess import Preprocessor
from pappascan.detect.primitives import load_primitives
from pappascan.measure.metrics import compute_stats

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Run Preprocessor -> BlobExtractor -> metrics on a single frame.

    A pass touches only its own locals, so one pipeline may be shared by
    worker threads. The only state is the failure latch: after a primitive
    failure every later pass re-raises the same error until ``reset()``.

    Args:
        params: Detection parameters shared by preprocessor and extractor.

    Raises:
        PrimitiveLibraryError: If the primitive libraries cannot be loaded.
    """

    def __init__(self, params: DetectionParams | None = None) -> None:
        load_primitives()
        self._preprocessor = Preprocessor(params)
        self._extractor = BlobExtractor(params)
        self._failure: PrimitiveLibraryError | None = None

    @property
    def failed(self) -> bool:
        """True once a primitive failure has halted the pipeline."""
        return self._failure is not None

    def reset(self) -> None:
        """Clear the failure latch after the primitive problem is resolved."""
        if self._failure is not None:
            logger.info("Analysis pipeline reset after: %s", self._failure)
        self._failure = None

    def detect(self, frame: Frame) -> tuple[list[Detection], list[str]]:
        """Detect bubbles in a frame.

        Returns:
            Tuple of (detections, warnings). An unavailable or
            uninterpretable frame gives an empty detection list.

        Raises:
            PrimitiveLibraryError: On primitive failure, now or previously.
        """
        if self._failure is not None:
            raise self._failure

        if not frame.is_available:
            return [], []

        try:
            mask = self._preprocessor.preprocess(frame)
            detections = self._extractor.extract(mask)
        except FrameError as exc:
            logger.warning("Frame skipped: %s", exc)
            return [], [str(exc)]
        except PrimitiveLibraryError as exc:
            self._failure = exc
            logger.error("Analysis halted: %s", exc, exc_info=True)
            raise

        return detections, []

    def analyze(self, frame: Frame, calibration: CalibrationContext) -> AnalysisResult:
        """Run a full pass and compute the statistics snapshot.

        Args:
            frame: Source frame.
            calibration: Declared physical disc diameter.

        Returns:
            AnalysisResult with detections and a snapshot derived only from
            (frame, calibration).

        Raises:
            PrimitiveLibraryError: On primitive failure, now or previously.
        """
        start = time.monotonic()
        detections, warnings = self.detect(frame)
        stats = compute_stats(detections, calibration, frame.width, frame.height)
        elapsed = time.monotonic() - start

        logger.debug(
            "Analyzed %dx%d frame: %d bubbles, index %.3f (%s)",
            frame.width, frame.height, stats.count,
            stats.index_metric, stats.quality_rating.value,
        )

        return AnalysisResult(
            detections=detections,
            stats=stats,
            width=frame.width,
            height=frame.height,
            elapsed_seconds=round(elapsed, 4),
            warnings=warnings,
        )


def analyze_frame(
    frame: Frame,
    calibration: CalibrationContext | None = None,
    params: DetectionParams | None = None,
) -> AnalysisResult:
    """One-shot analysis with a fresh pipeline."""
    return AnalysisPipeline(params).analyze(frame, calibration or CalibrationContext())
