"""Preprocessor — turn a raw frame into a binary bubble mask."""

from __future__ import annotations

import logging

import numpy as np

from pappascan.core.exceptions import FrameError
from pappascan.core.models import Frame
from pappascan.detect.params import DEFAULT_PARAMS, DetectionParams
from pappascan.detect.primitives import call_primitive, load_primitives

logger = logging.getLogger(__name__)


class Preprocessor:
    """Normalize a frame into a foreground mask of candidate bubble interiors.

    Steps, each a pure transform:
    1. Convert to single-channel intensity
    2. Global histogram equalization
    3. Gaussian smoothing (kernel radius ``params.blur_radius``)
    4. Otsu binarization, inverted so darker-than-threshold pixels are foreground
    5. Morphological opening with a square structuring element

    Args:
        params: Detection parameters. Defaults to the tuned constants.
    """

    def __init__(self, params: DetectionParams | None = None) -> None:
        self._params = params or DEFAULT_PARAMS

    @property
    def params(self) -> DetectionParams:
        return self._params

    def preprocess(self, frame: Frame) -> np.ndarray:
        """Produce a boolean mask (H, W) for the frame.

        Args:
            frame: Source frame.

        Returns:
            Boolean array, True where a pixel is candidate bubble interior.
            Shape (0, 0) when the frame has no usable dimensions; all False
            when the frame has a single grey level.

        Raises:
            FrameError: If the pixel array is not (H, W), (H, W, 1), (H, W, 3)
                or (H, W, 4), or holds non-finite values.
            PrimitiveLibraryError: If a primitive is unavailable or fails.
        """
        if not frame.is_available:
            return np.zeros((0, 0), dtype=bool)

        prims = load_primitives()
        gray = self._to_gray(frame.pixels)

        # Otsu has no between-class variance to maximize on a flat image
        if float(gray.min()) == float(gray.max()):
            logger.debug("Flat %dx%d frame, empty mask", frame.width, frame.height)
            return np.zeros(gray.shape, dtype=bool)

        equalized = call_primitive("equalize_hist", prims.equalize_hist, gray)

        sigma = self._params.blur_sigma
        if self._params.blur_radius > 0:
            blurred = call_primitive(
                "gaussian", prims.gaussian, equalized,
                sigma=sigma, truncate=self._params.blur_radius / sigma,
                preserve_range=True,
            )
        else:
            blurred = equalized

        threshold = float(call_primitive("threshold_otsu", prims.threshold_otsu, blurred))
        mask = blurred <= threshold

        return self._open(mask)

    def _to_gray(self, pixels: np.ndarray) -> np.ndarray:
        """Convert pixel data to a float64 intensity image in [0, 1]."""
        prims = load_primitives()

        if pixels.dtype.kind in "fc" and not np.isfinite(pixels).all():
            raise FrameError(tuple(pixels.shape), "pixel data contains NaN or infinite values")

        if pixels.ndim == 3 and pixels.shape[2] == 1:
            pixels = pixels[..., 0]

        if pixels.ndim == 2:
            return np.asarray(
                call_primitive("img_as_float", prims.img_as_float, pixels),
                dtype=np.float64,
            )

        if pixels.ndim == 3 and pixels.shape[2] in (3, 4):
            # Alpha is ignored, as for an RGBA-to-grey conversion
            rgb = call_primitive("img_as_float", prims.img_as_float, pixels[..., :3])
            return np.asarray(call_primitive("rgb2gray", prims.rgb2gray, rgb), dtype=np.float64)

        raise FrameError(tuple(pixels.shape), "expected (H, W), (H, W, 3) or (H, W, 4)")

    def _open(self, mask: np.ndarray) -> np.ndarray:
        """Morphological opening with edge replication at the frame border."""
        size = self._params.open_size
        if size <= 1:
            return mask

        prims = load_primitives()
        structure = np.ones((size, size), dtype=bool)
        pad = size // 2
        padded = np.pad(mask, pad, mode="edge")
        opened = call_primitive(
            "binary_opening", prims.binary_opening, padded, structure=structure,
        )
        return np.asarray(opened[pad:-pad, pad:-pad], dtype=bool)


def preprocess(frame: Frame, params: DetectionParams | None = None) -> np.ndarray:
    """Convenience wrapper: ``Preprocessor(params).preprocess(frame)``."""
    return Preprocessor(params).preprocess(frame)
