"""Decode image files into frames and write annotated images.

TIFF goes through tifffile; other formats through scikit-image's reader.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import tifffile

from pappascan.core.exceptions import ImageReadError
from pappascan.core.models import Frame

TIFF_SUFFIXES = frozenset({".tif", ".tiff"})


def _read_pixels(path: Path) -> np.ndarray:
    if path.suffix.lower() in TIFF_SUFFIXES:
        return tifffile.imread(str(path))

    from skimage.io import imread

    return imread(str(path))


def read_frame(path: Path | str) -> Frame:
    """Read an image file into a Frame.

    Multi-page or stacked images keep only the first plane.

    Args:
        path: Path to the image file.

    Returns:
        Frame holding the decoded pixels.

    Raises:
        ImageReadError: If the file is missing or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageReadError(str(path), "file not found")

    try:
        pixels = np.asarray(_read_pixels(path))
    except Exception as exc:
        raise ImageReadError(str(path), f"{type(exc).__name__}: {exc}") from exc

    # (Z, Y, X) stacks and (Z, Y, X, C) stacks: first plane only
    while pixels.ndim > 3 or (pixels.ndim == 3 and pixels.shape[2] not in (1, 2, 3, 4)):
        pixels = pixels[0]

    # Grey + alpha: alpha is dropped
    if pixels.ndim == 3 and pixels.shape[2] == 2:
        pixels = pixels[..., 0]

    return Frame(pixels)


def write_image(path: Path | str, pixels: np.ndarray) -> Path:
    """Write an RGB uint8 image; the format follows the file suffix."""
    path = Path(path)
    if path.suffix.lower() in TIFF_SUFFIXES:
        tifffile.imwrite(str(path), pixels, photometric="rgb")
        return path

    from skimage.io import imsave

    imsave(str(path), pixels, check_contrast=False)
    return path
