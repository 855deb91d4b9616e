"""Paint render commands onto an RGB image with scikit-image drawing."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from skimage.draw import circle_perimeter, disk

from pappascan.overlay.renderer import BandCommand, CircleCommand, RenderCommand


def to_rgb8(pixels: np.ndarray) -> np.ndarray:
    """Convert grey, RGB or RGBA pixel data to an (H, W, 3) uint8 array."""
    from skimage.util import img_as_ubyte

    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[..., 0]
    if pixels.ndim == 2:
        pixels = np.stack([pixels] * 3, axis=-1)
    elif pixels.ndim == 3 and pixels.shape[2] == 4:
        pixels = pixels[..., :3]
    if pixels.dtype != np.uint8:
        pixels = img_as_ubyte(pixels)
    return np.ascontiguousarray(pixels)


def _blend(canvas: np.ndarray, rr: np.ndarray, cc: np.ndarray, colour, alpha) -> None:
    """Alpha-blend a colour into canvas pixels at (rr, cc)."""
    if rr.size == 0:
        return
    alpha = np.clip(np.asarray(alpha, dtype=np.float64), 0.0, 1.0)
    if alpha.ndim == 1:
        alpha = alpha[:, None]
    colour_arr = np.asarray(colour, dtype=np.float64)
    current = canvas[rr, cc].astype(np.float64)
    canvas[rr, cc] = np.round(current * (1.0 - alpha) + colour_arr * alpha).astype(np.uint8)


def _draw_circle(canvas: np.ndarray, cmd: CircleCommand) -> None:
    shape = canvas.shape[:2]
    if cmd.filled:
        rr, cc = disk((cmd.y, cmd.x), max(cmd.radius, 0.5), shape=shape)
        _blend(canvas, rr, cc, cmd.colour, cmd.alpha)
        return

    centre_r = int(round(cmd.y))
    centre_c = int(round(cmd.x))
    outer = int(round(cmd.radius))
    rings = [
        circle_perimeter(centre_r, centre_c, r, shape=shape)
        for r in range(max(outer - cmd.stroke_width + 1, 1), outer + 1)
    ]
    if not rings:
        return
    rr = np.concatenate([r for r, _ in rings])
    cc = np.concatenate([c for _, c in rings])
    # Overlapping ring pixels are painted once
    flat = np.unique(rr * shape[1] + cc)
    _blend(canvas, flat // shape[1], flat % shape[1], cmd.colour, cmd.alpha)


def _draw_band(canvas: np.ndarray, cmd: BandCommand) -> None:
    height, width = canvas.shape[:2]
    top = max(int(np.floor(cmd.y - cmd.half_height)), 0)
    bottom = min(int(np.ceil(cmd.y + cmd.half_height)), height)
    if top >= bottom or cmd.half_height <= 0:
        return
    cols = min(cmd.width, width)
    for row in range(top, bottom):
        # Linear fade from the centre line to transparent at the edges
        weight = 1.0 - abs(row - cmd.y) / cmd.half_height
        if weight <= 0:
            continue
        rr = np.full(cols, row, dtype=np.intp)
        cc = np.arange(cols, dtype=np.intp)
        _blend(canvas, rr, cc, cmd.colour, cmd.peak_alpha * weight)


def rasterize(commands: Iterable[RenderCommand], background: np.ndarray) -> np.ndarray:
    """Paint commands, in order, onto a copy of the background image.

    Args:
        commands: Render commands from ``OverlayRenderer.advance``.
        background: Grey, RGB or RGBA source pixels.

    Returns:
        New (H, W, 3) uint8 image.
    """
    canvas = to_rgb8(np.asarray(background)).copy()
    for cmd in commands:
        if isinstance(cmd, CircleCommand):
            _draw_circle(canvas, cmd)
        elif isinstance(cmd, BandCommand):
            _draw_band(canvas, cmd)
        else:
            raise TypeError(f"Unknown render command: {type(cmd).__name__}")
    return canvas
