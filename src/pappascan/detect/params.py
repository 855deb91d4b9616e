"""Detection parameter definitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DetectionParams:
    """Parameters for preprocessing and blob extraction.

    Defaults are the fixed values the pipeline is tuned for; the size-class
    breakpoints are in pixels and assume the default frame resolution.

    Attributes:
        blur_radius: Gaussian kernel radius in pixels (kernel is 2r+1 wide).
        open_size: Side of the square structuring element for opening.
        min_area: Components with fewer pixels are discarded as noise.
        min_radius: Enclosing circles smaller than this are discarded.
        small_max_diameter: Diameters below this are Small.
        medium_max_diameter: Diameters below this (and not Small) are Medium.
    """

    blur_radius: int = 2
    open_size: int = 3
    min_area: float = 50.0
    min_radius: float = 3.0
    small_max_diameter: float = 25.0
    medium_max_diameter: float = 50.0

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.blur_radius < 0:
            raise ValueError(f"blur_radius must be >= 0, got {self.blur_radius}")
        if self.open_size < 1:
            raise ValueError(f"open_size must be >= 1, got {self.open_size}")
        if self.min_area < 0:
            raise ValueError(f"min_area must be >= 0, got {self.min_area}")
        if self.min_radius < 0:
            raise ValueError(f"min_radius must be >= 0, got {self.min_radius}")
        if not (0 < self.small_max_diameter < self.medium_max_diameter):
            raise ValueError(
                "size breakpoints must satisfy 0 < small_max_diameter < medium_max_diameter, "
                f"got {self.small_max_diameter} and {self.medium_max_diameter}"
            )

    @property
    def blur_sigma(self) -> float:
        """Gaussian sigma for the kernel, derived as OpenCV does for sigma=0."""
        ksize = 2 * self.blur_radius + 1
        return 0.3 * ((ksize - 1) * 0.5 - 1) + 0.8

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "blur_radius": self.blur_radius,
            "open_size": self.open_size,
            "min_area": self.min_area,
            "min_radius": self.min_radius,
            "small_max_diameter": self.small_max_diameter,
            "medium_max_diameter": self.medium_max_diameter,
        }


DEFAULT_PARAMS = DetectionParams()
