"""BlobExtractor — connected components to sized enclosing circles."""

from __future__ import annotations

import logging

import numpy as np

from pappascan.core.models import Detection, SizeClass
from pappascan.detect.params import DEFAULT_PARAMS, DetectionParams
from pappascan.detect.primitives import call_primitive, load_primitives

logger = logging.getLogger(__name__)

# 8-connectivity, matching external contour tracing
_CONNECTIVITY = np.ones((3, 3), dtype=bool)


def classify_diameter(
    diameter: float,
    small_max: float = DEFAULT_PARAMS.small_max_diameter,
    medium_max: float = DEFAULT_PARAMS.medium_max_diameter,
) -> SizeClass:
    """Classify a bubble by diameter in pixels.

    Breakpoints are strict: a diameter equal to ``small_max`` is Medium,
    and one equal to ``medium_max`` is Large.
    """
    if diameter < small_max:
        return SizeClass.SMALL
    if diameter < medium_max:
        return SizeClass.MEDIUM
    return SizeClass.LARGE


def detection_from_component(
    area: float,
    x: float,
    y: float,
    radius: float,
    params: DetectionParams | None = None,
) -> Detection | None:
    """Apply the noise floors to one component and build its Detection.

    Args:
        area: Component area in pixels.
        x: Enclosing circle centre column.
        y: Enclosing circle centre row.
        radius: Enclosing circle radius in pixels.
        params: Detection parameters.

    Returns:
        The Detection, or None if the component is below the area or
        radius floor.
    """
    params = params or DEFAULT_PARAMS
    if area < params.min_area:
        return None
    if radius < params.min_radius or radius <= 0:
        return None
    return Detection(
        x=float(x),
        y=float(y),
        radius=float(radius),
        size_class=classify_diameter(
            2.0 * radius, params.small_max_diameter, params.medium_max_diameter,
        ),
    )


class BlobExtractor:
    """Find foreground components in a mask and reduce each to a circle.

    Components touching the frame border are kept like any other.

    Args:
        params: Detection parameters. Defaults to the tuned constants.
    """

    def __init__(self, params: DetectionParams | None = None) -> None:
        self._params = params or DEFAULT_PARAMS

    @property
    def params(self) -> DetectionParams:
        return self._params

    def extract(self, mask: np.ndarray) -> list[Detection]:
        """Convert a binary mask to a list of Detections.

        Args:
            mask: 2D array; nonzero pixels are foreground.

        Returns:
            Detections in no particular order. Empty list if the mask is
            empty or has no component above the noise floors.

        Raises:
            PrimitiveLibraryError: If a primitive is unavailable or fails.
        """
        mask = np.asarray(mask)
        if mask.ndim != 2 or mask.size == 0 or not mask.any():
            return []

        prims = load_primitives()
        labels, n_components = call_primitive(
            "label", prims.label, mask > 0, structure=_CONNECTIVITY,
        )
        props = call_primitive("regionprops", prims.regionprops, labels)

        detections: list[Detection] = []
        for prop in props:
            # Holes count toward the area, as for an external contour
            area = float(prop.area_filled)
            if area < self._params.min_area:
                continue

            # regionprops coords are (row, col); swap to (x, y)
            points = np.ascontiguousarray(prop.coords[:, ::-1], dtype=np.float32)
            (cx, cy), radius = call_primitive(
                "minEnclosingCircle", prims.min_enclosing_circle, points,
            )

            detection = detection_from_component(area, cx, cy, radius, self._params)
            if detection is not None:
                detections.append(detection)

        logger.debug(
            "Extracted %d detections from %d components", len(detections), n_components,
        )
        return detections


def extract(mask: np.ndarray, params: DetectionParams | None = None) -> list[Detection]:
    """Convenience wrapper: ``BlobExtractor(params).extract(mask)``."""
    return BlobExtractor(params).extract(mask)
