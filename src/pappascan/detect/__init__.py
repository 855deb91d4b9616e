"""Pappascan Detect — preprocessing and bubble extraction."""

from __future__ import annotations

from pappascan.core.models import Detection, Frame
from pappascan.detect.blob_extractor import (
    BlobExtractor,
    classify_diameter,
    detection_from_component,
    extract,
)
from pappascan.detect.params import DEFAULT_PARAMS, DetectionParams
from pappascan.detect.preprocess import Preprocessor, preprocess
from pappascan.detect.primitives import load_primitives

__all__ = [
    "BlobExtractor",
    "classify_diameter",
    "DEFAULT_PARAMS",
    "detect_bubbles",
    "detection_from_component",
    "DetectionParams",
    "extract",
    "load_primitives",
    "preprocess",
    "Preprocessor",
]


def detect_bubbles(frame: Frame, params: DetectionParams | None = None) -> list[Detection]:
    """Run preprocessing and extraction on one frame."""
    return extract(preprocess(frame, params), params)
