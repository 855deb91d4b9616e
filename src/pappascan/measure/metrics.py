"""Calibration and aggregate statistics for a detection set."""

from __future__ import annotations

import math
from collections.abc import Iterable

from pappascan.core.models import CalibrationContext, Detection, QualityRating, StatSnapshot

# The disc is assumed to span this fraction of the shorter frame side
DISC_FRAME_FRACTION = 0.8

# Display scaling from density to index metric
INDEX_SCALE = 10.0

EXCELLENT_ABOVE = 2.5
AVERAGE_ABOVE = 1.2


def _floor1(value: float) -> float:
    """``max(1, value)``, treating NaN as below the floor."""
    if math.isnan(value):
        return 1.0
    return max(1.0, value)


def px_per_cm(calibration: CalibrationContext, frame_width: int, frame_height: int) -> float:
    """Pixel-to-centimetre scale for a frame.

    ``(0.8 * min(width, height)) / max(1, declared_diameter_cm)``
    """
    span_px = DISC_FRAME_FRACTION * min(frame_width, frame_height)
    return span_px / _floor1(calibration.declared_diameter_cm)


def disc_area_cm2(calibration: CalibrationContext) -> float:
    """Area of the declared disc in square centimetres."""
    diameter = calibration.declared_diameter_cm
    if not math.isfinite(diameter):
        return 0.0
    radius = diameter / 2.0
    return math.pi * radius * radius


def rating_from_index(index_metric: float) -> QualityRating:
    """Band an index metric. Values exactly on a threshold fall to the lower band."""
    if index_metric > EXCELLENT_ABOVE:
        return QualityRating.EXCELLENT
    if index_metric > AVERAGE_ABOVE:
        return QualityRating.AVERAGE
    return QualityRating.FLAT


def compute_stats(
    detections: Iterable[Detection],
    calibration: CalibrationContext,
    frame_width: int,
    frame_height: int,
) -> StatSnapshot:
    """Derive a StatSnapshot from detections and calibration.

    Every denominator is floored at 1, so the result is always finite and
    this never raises for degenerate calibration or frame sizes.

    Args:
        detections: Detections for one frame; order is irrelevant.
        calibration: Declared physical disc diameter.
        frame_width: Frame width in pixels.
        frame_height: Frame height in pixels.

    Returns:
        A fully populated StatSnapshot.
    """
    diameters = [d.diameter for d in detections]
    count = len(diameters)

    scale = px_per_cm(calibration, frame_width, frame_height)
    avg_px = math.fsum(diameters) / count if count else 0.0
    avg_cm = avg_px / _floor1(scale)

    density = count / _floor1(disc_area_cm2(calibration))
    index_metric = density * INDEX_SCALE

    return StatSnapshot(
        count=count,
        avg_diameter_px=float(avg_px),
        avg_diameter_cm=float(avg_cm),
        density_per_cm2=float(density),
        index_metric=float(index_metric),
        quality_rating=rating_from_index(index_metric),
        px_per_cm=float(scale),
    )
