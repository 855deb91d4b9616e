"""Pappascan Overlay — animated detection overlay and its live driver."""

from pappascan.overlay.driver import LiveLoop, analysis_source
from pappascan.overlay.raster import rasterize
from pappascan.overlay.renderer import (
    BandCommand,
    CircleCommand,
    OverlayMode,
    OverlayParams,
    OverlayRenderer,
    OverlayState,
    Particle,
    RenderCommand,
    scan_position,
)

__all__ = [
    "analysis_source",
    "BandCommand",
    "CircleCommand",
    "LiveLoop",
    "OverlayMode",
    "OverlayParams",
    "OverlayRenderer",
    "OverlayState",
    "Particle",
    "rasterize",
    "RenderCommand",
    "scan_position",
]
