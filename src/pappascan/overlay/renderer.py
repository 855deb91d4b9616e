"""OverlayRenderer — per-tick render commands for live detection display."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import numpy as np

from pappascan.core.models import Detection, SizeClass

logger = logging.getLogger(__name__)

Colour = tuple[int, int, int]


def hex_to_rgb(value: str) -> Colour:
    """Parse ``#rrggbb`` into an (r, g, b) tuple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb colour, got {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


class OverlayMode(str, Enum):
    """Renderer state: Idle (no ticks) or Live (ticking every display frame)."""

    IDLE = "idle"
    LIVE = "live"


@dataclass(frozen=True)
class OverlayParams:
    """Animation constants for the overlay.

    Attributes:
        spawn_probability: Chance per spawn slot per tick of emitting a particle.
        max_spawn: Spawn slots per tick (capped by the detection count).
        fade_step: Opacity removed from each particle per tick.
        shrink_factor: Multiplicative radius decay per tick.
        min_particle_radius: Particles smaller than this are removed.
        particle_opacity: Fill opacity multiplied by each particle's alpha.
        scan_period: Seconds for the scan band to sweep down and back up.
        band_half_height: Half the band's thickness in pixels.
        band_alpha: Band opacity at its centre line.
        stroke_width: Outline width for detection circles.
    """

    spawn_probability: float = 0.05
    max_spawn: int = 3
    fade_step: float = 0.005
    shrink_factor: float = 0.997
    min_particle_radius: float = 0.5
    particle_opacity: float = 0.5
    scan_period: float = 2.0
    band_half_height: float = 10.0
    band_alpha: float = 0.6
    stroke_width: int = 2
    small_colour: str = "#22c55e"
    medium_colour: str = "#eab308"
    large_colour: str = "#ef4444"
    particle_colour: str = "#f4c025"
    band_colour: str = "#ffd764"

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not (0.0 <= self.spawn_probability <= 1.0):
            raise ValueError(
                f"spawn_probability must be between 0 and 1, got {self.spawn_probability}"
            )
        if not (0 <= self.max_spawn <= 3):
            raise ValueError(f"max_spawn must be between 0 and 3, got {self.max_spawn}")
        if self.fade_step <= 0:
            raise ValueError(f"fade_step must be > 0, got {self.fade_step}")
        if not (0.0 < self.shrink_factor <= 1.0):
            raise ValueError(f"shrink_factor must be in (0, 1], got {self.shrink_factor}")
        if self.scan_period <= 0:
            raise ValueError(f"scan_period must be > 0, got {self.scan_period}")

    def colour_for(self, size_class: SizeClass) -> Colour:
        """Outline colour for a size class."""
        return hex_to_rgb({
            SizeClass.SMALL: self.small_colour,
            SizeClass.MEDIUM: self.medium_colour,
            SizeClass.LARGE: self.large_colour,
        }[size_class])

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "spawn_probability": self.spawn_probability,
            "max_spawn": self.max_spawn,
            "fade_step": self.fade_step,
            "shrink_factor": self.shrink_factor,
            "min_particle_radius": self.min_particle_radius,
            "scan_period": self.scan_period,
        }


@dataclass
class Particle:
    """A rising, fading vapour particle."""

    x: float
    y: float
    radius: float
    alpha: float
    vy: float


@dataclass
class OverlayState:
    """Mutable animation state owned by one OverlayRenderer.

    Attributes:
        width: Current buffer width, None before the first tick.
        height: Current buffer height, None before the first tick.
        particles: Live particle set.
    """

    width: int | None = None
    height: int | None = None
    particles: list[Particle] = field(default_factory=list)


@dataclass(frozen=True)
class CircleCommand:
    """Draw a circle, outlined or filled, at the given opacity."""

    x: float
    y: float
    radius: float
    colour: Colour
    alpha: float = 1.0
    filled: bool = False
    stroke_width: int = 2


@dataclass(frozen=True)
class BandCommand:
    """Draw a full-width horizontal band fading out from its centre line."""

    y: float
    half_height: float
    width: int
    colour: Colour
    peak_alpha: float


RenderCommand = Union[CircleCommand, BandCommand]


def scan_position(clock: float, height: float, period: float = 2.0) -> float:
    """Ping-pong vertical position of the scan band.

    Sweeps from 0 to ``height`` over the first half period and back over
    the second.
    """
    half = period / 2.0
    phase = (clock % period) / half
    if phase > 1.0:
        phase = 2.0 - phase
    return phase * height


class OverlayRenderer:
    """Frame-rate driven overlay: particles, detection outlines, scan band.

    The renderer never schedules itself. A driver calls ``advance()`` once
    per display refresh while the renderer is Live.

    Args:
        params: Animation constants.
        rng: Random generator for particle spawning. Seed it for
            reproducible animation.
    """

    def __init__(
        self,
        params: OverlayParams | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._params = params or OverlayParams()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._mode = OverlayMode.IDLE
        self._state = OverlayState()
        self._lock = threading.RLock()

    @property
    def params(self) -> OverlayParams:
        return self._params

    @property
    def mode(self) -> OverlayMode:
        return self._mode

    @property
    def is_live(self) -> bool:
        return self._mode is OverlayMode.LIVE

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def lock(self) -> threading.RLock:
        """Serializes ticks with mode changes; held for the whole of ``advance``."""
        return self._lock

    def start_live(self) -> None:
        """Enter Live with a fresh animation state."""
        with self._lock:
            if self._mode is OverlayMode.LIVE:
                self.stop_live()
            self._state = OverlayState()
            self._mode = OverlayMode.LIVE
        logger.debug("Overlay entered Live")

    def stop_live(self) -> None:
        """Enter Idle and drop all particles, waiting for an in-flight tick."""
        with self._lock:
            self._mode = OverlayMode.IDLE
            self._state.particles.clear()
        logger.debug("Overlay entered Idle")

    def advance(
        self,
        clock: float,
        detections: Iterable[Detection],
        width: int | None,
        height: int | None,
    ) -> list[RenderCommand]:
        """Run one animation tick.

        Args:
            clock: Current time in seconds; drives the scan band.
            detections: Current detections; order is irrelevant.
            width: Source width in pixels, None if not yet known.
            height: Source height in pixels, None if not yet known.

        Returns:
            Render commands in paint order: particles, detection outlines,
            scan band. Empty when Idle or when dimensions are unavailable,
            in which case no state changes.
        """
        with self._lock:
            return self._tick(clock, detections, width, height)

    def _tick(
        self,
        clock: float,
        detections: Iterable[Detection],
        width: int | None,
        height: int | None,
    ) -> list[RenderCommand]:
        if self._mode is not OverlayMode.LIVE:
            return []
        if not width or not height or width <= 0 or height <= 0:
            return []

        self._resize(int(width), int(height))
        detections = list(detections)

        self._spawn(detections)
        self._step_particles()

        commands: list[RenderCommand] = []
        particle_colour = hex_to_rgb(self._params.particle_colour)
        for p in self._state.particles:
            commands.append(CircleCommand(
                x=p.x, y=p.y, radius=p.radius, colour=particle_colour,
                alpha=p.alpha * self._params.particle_opacity, filled=True,
            ))

        for d in detections:
            commands.append(CircleCommand(
                x=d.x, y=d.y, radius=d.radius,
                colour=self._params.colour_for(d.size_class),
                stroke_width=self._params.stroke_width,
            ))

        commands.append(BandCommand(
            y=scan_position(clock, height, self._params.scan_period),
            half_height=self._params.band_half_height,
            width=int(width),
            colour=hex_to_rgb(self._params.band_colour),
            peak_alpha=self._params.band_alpha,
        ))
        return commands

    def _resize(self, width: int, height: int) -> None:
        """Match the buffer to the source; a size change resets particles."""
        state = self._state
        if (state.width, state.height) == (width, height):
            return
        if state.width is not None:
            logger.debug(
                "Overlay resized %sx%s -> %dx%d, particles reset",
                state.width, state.height, width, height,
            )
        state.width = width
        state.height = height
        state.particles.clear()

    def _spawn(self, detections: list[Detection]) -> None:
        """Emit up to ``max_spawn`` particles near randomly chosen detections."""
        if not detections:
            return
        params = self._params
        for _ in range(min(params.max_spawn, len(detections))):
            if self._rng.random() >= params.spawn_probability:
                continue
            anchor = detections[int(self._rng.integers(len(detections)))]
            self._state.particles.append(Particle(
                x=anchor.x + (self._rng.random() - 0.5) * anchor.radius,
                y=anchor.y,
                radius=2.0 + self._rng.random() * 4.0,
                alpha=0.5,
                vy=0.3 + self._rng.random() * 0.6,
            ))

    def _step_particles(self) -> None:
        """Rise, fade and shrink every particle; drop the spent ones."""
        params = self._params
        survivors: list[Particle] = []
        for p in self._state.particles:
            p.y -= p.vy
            p.alpha -= params.fade_step
            p.radius *= params.shrink_factor
            if p.alpha > 0 and p.radius >= params.min_particle_radius:
                survivors.append(p)
        self._state.particles[:] = survivors
