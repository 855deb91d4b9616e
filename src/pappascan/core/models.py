"""Data models for the Pappascan core module."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np


class SizeClass(str, Enum):
    """Bubble size class, ordered by diameter."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class QualityRating(str, Enum):
    """Crunch quality band derived from the index metric."""

    FLAT = "Flat"
    AVERAGE = "Average"
    EXCELLENT = "Excellent"

    @property
    def rank(self) -> int:
        """Ordinal rank: Flat < Average < Excellent."""
        return _RATING_RANKS[self]


_RATING_RANKS = {
    QualityRating.FLAT: 0,
    QualityRating.AVERAGE: 1,
    QualityRating.EXCELLENT: 2,
}


class Winner(str, Enum):
    """Outcome of comparing two frames."""

    LEFT = "left"
    RIGHT = "right"
    TIE = "tie"

    def mirrored(self) -> Winner:
        """The outcome of the same comparison with the frames swapped."""
        if self is Winner.LEFT:
            return Winner.RIGHT
        if self is Winner.RIGHT:
            return Winner.LEFT
        return Winner.TIE


@dataclass(frozen=True, eq=False)
class Frame:
    """An immutable raster image for one analysis pass.

    Attributes:
        pixels: Read-only array shaped (H, W), (H, W, 3) RGB or (H, W, 4) RGBA.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = np.array(self.pixels, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def empty(cls) -> Frame:
        """A frame with no pixels (source not yet available)."""
        return cls(np.zeros((0, 0), dtype=np.uint8))

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0]) if self.pixels.ndim >= 2 else 0

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1]) if self.pixels.ndim >= 2 else 0

    @property
    def is_available(self) -> bool:
        """True when the frame has usable dimensions."""
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class Detection:
    """A detected bubble reduced to its minimal enclosing circle.

    Attributes:
        x: Circle centre column, in pixels.
        y: Circle centre row, in pixels.
        radius: Circle radius in pixels (always > 0).
        size_class: Classification by diameter.
    """

    x: float
    y: float
    radius: float
    size_class: SizeClass

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise ValueError(f"radius must be a finite value > 0, got {self.radius}")

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def diameter(self) -> float:
        return 2.0 * self.radius


@dataclass(frozen=True)
class CalibrationContext:
    """User-declared physical size of the disc.

    No validation is applied: degenerate values are absorbed by the
    metrics engine's denominator floors.

    Attributes:
        declared_diameter_cm: Physical disc diameter in centimetres.
    """

    declared_diameter_cm: float = 15.0


@dataclass(frozen=True)
class StatSnapshot:
    """Aggregate statistics for one analysis pass.

    Attributes:
        count: Number of detections.
        avg_diameter_px: Mean detection diameter in pixels (0 if none).
        avg_diameter_cm: Mean detection diameter in centimetres.
        density_per_cm2: Detections per square centimetre of disc.
        index_metric: Density scaled for display (the crunch density index).
        quality_rating: Band derived from the index metric.
        px_per_cm: Pixel-to-centimetre scale used for the conversion.
    """

    count: int = 0
    avg_diameter_px: float = 0.0
    avg_diameter_cm: float = 0.0
    density_per_cm2: float = 0.0
    index_metric: float = 0.0
    quality_rating: QualityRating = QualityRating.FLAT
    px_per_cm: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "count": self.count,
            "avg_diameter_px": self.avg_diameter_px,
            "avg_diameter_cm": self.avg_diameter_cm,
            "density_per_cm2": self.density_per_cm2,
            "index_metric": self.index_metric,
            "quality_rating": self.quality_rating.value,
            "px_per_cm": self.px_per_cm,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Result of one preprocess + extract + compute pass.

    Attributes:
        detections: Detected bubbles; order carries no meaning.
        stats: Statistics snapshot for this pass.
        width: Frame width in pixels.
        height: Frame height in pixels.
        elapsed_seconds: Wall-clock time of the pass.
        warnings: Absorbed per-frame problems (e.g. unsupported frame).
    """

    detections: list[Detection]
    stats: StatSnapshot
    width: int
    height: int
    elapsed_seconds: float = 0.0
    warnings: list[str] = field(default_factory=list)
