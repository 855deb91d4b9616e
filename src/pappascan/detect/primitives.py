"""Loader for the image-processing primitives the detector is built on.

The primitives come from scikit-image, SciPy and OpenCV. They are imported
lazily so that a missing library surfaces as a single
:class:`PrimitiveLibraryError` instead of an ``ImportError`` at package
import time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from pappascan.core.exceptions import PrimitiveLibraryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Primitives:
    """Bundle of third-party callables used by the preprocessor and extractor."""

    img_as_float: Callable[..., Any]
    rgb2gray: Callable[..., Any]
    equalize_hist: Callable[..., Any]
    gaussian: Callable[..., Any]
    threshold_otsu: Callable[..., Any]
    binary_opening: Callable[..., Any]
    label: Callable[..., Any]
    regionprops: Callable[..., Any]
    min_enclosing_circle: Callable[..., Any]


_primitives: Primitives | None = None


def load_primitives() -> Primitives:
    """Import and cache the primitive callables.

    Raises:
        PrimitiveLibraryError: If any backing library cannot be imported.
    """
    global _primitives
    if _primitives is not None:
        return _primitives

    try:
        import cv2
        from scipy import ndimage
        from skimage.color import rgb2gray
        from skimage.exposure import equalize_hist
        from skimage.filters import gaussian, threshold_otsu
        from skimage.measure import regionprops
        from skimage.util import img_as_float
    except ImportError as exc:
        raise PrimitiveLibraryError("import", exc) from exc

    _primitives = Primitives(
        img_as_float=img_as_float,
        rgb2gray=rgb2gray,
        equalize_hist=equalize_hist,
        gaussian=gaussian,
        threshold_otsu=threshold_otsu,
        binary_opening=ndimage.binary_opening,
        label=ndimage.label,
        regionprops=regionprops,
        min_enclosing_circle=cv2.minEnclosingCircle,
    )
    logger.debug("Image-processing primitives loaded (OpenCV %s)", cv2.__version__)
    return _primitives


def call_primitive(name: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Invoke a primitive, converting any failure into PrimitiveLibraryError."""
    try:
        return func(*args, **kwargs)
    except Exception as exc:
        raise PrimitiveLibraryError(name, exc) from exc
