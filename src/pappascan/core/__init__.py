"""Pappascan Core — frame, detection and statistics models, exceptions."""

from pappascan.core.exceptions import (
    FrameError,
    ImageReadError,
    PappascanError,
    PrimitiveLibraryError,
)
from pappascan.core.models import (
    AnalysisResult,
    CalibrationContext,
    Detection,
    Frame,
    QualityRating,
    SizeClass,
    StatSnapshot,
    Winner,
)

__all__ = [
    "AnalysisResult",
    "CalibrationContext",
    "Detection",
    "Frame",
    "QualityRating",
    "SizeClass",
    "StatSnapshot",
    "Winner",
    "PappascanError",
    "FrameError",
    "ImageReadError",
    "PrimitiveLibraryError",
]
