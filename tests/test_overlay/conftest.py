"""Shared fixtures for overlay tests."""

from __future__ import annotations

import numpy as np
import pytest

from pappascan.core.models import Detection, SizeClass
from pappascan.overlay.renderer import OverlayParams, OverlayRenderer


@pytest.fixture
def detections() -> list[Detection]:
    """One detection per size class."""
    return [
        Detection(x=20.0, y=30.0, radius=5.0, size_class=SizeClass.SMALL),
        Detection(x=60.0, y=40.0, radius=15.0, size_class=SizeClass.MEDIUM),
        Detection(x=100.0, y=90.0, radius=30.0, size_class=SizeClass.LARGE),
    ]


@pytest.fixture
def quiet_renderer() -> OverlayRenderer:
    """Renderer that never spawns particles."""
    return OverlayRenderer(OverlayParams(spawn_probability=0.0), rng=np.random.default_rng(0))


@pytest.fixture
def eager_renderer() -> OverlayRenderer:
    """Renderer that fills every spawn slot on every tick."""
    return OverlayRenderer(OverlayParams(spawn_probability=1.0), rng=np.random.default_rng(7))
