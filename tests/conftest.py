"""Shared test fixtures for Pappascan."""

from __future__ import annotations

from typing import Callable

import numpy as np
import pytest
from skimage.draw import disk

from pappascan.core.models import Frame

BACKGROUND = 200
BUBBLE = 40

# (row, col, radius): one bubble per size class, well separated
THREE_BUBBLES = [
    (50, 50, 6),
    (60, 140, 15),
    (140, 100, 30),
]


def draw_bubbles(
    bubbles: list[tuple[int, int, int]],
    shape: tuple[int, int] = (200, 200),
    background: int = BACKGROUND,
    value: int = BUBBLE,
) -> np.ndarray:
    """uint8 grey image with dark filled disks on a bright background."""
    image = np.full(shape, background, dtype=np.uint8)
    for row, col, radius in bubbles:
        rr, cc = disk((row, col), radius, shape=shape)
        image[rr, cc] = value
    return image


@pytest.fixture
def three_bubbles() -> list[tuple[int, int, int]]:
    """(row, col, radius) of the bubbles in three_bubble_frame."""
    return list(THREE_BUBBLES)


@pytest.fixture
def bubble_image() -> Callable[..., np.ndarray]:
    """Factory: bubble_image(bubbles, shape=(200, 200)) -> uint8 grey image."""
    return draw_bubbles


@pytest.fixture
def make_frame() -> Callable[..., Frame]:
    """Factory: make_frame(bubbles, shape=(200, 200)) -> Frame."""

    def _make(bubbles: list[tuple[int, int, int]], shape: tuple[int, int] = (200, 200)) -> Frame:
        return Frame(draw_bubbles(bubbles, shape))

    return _make


@pytest.fixture
def three_bubble_frame() -> Frame:
    """200x200 frame with a small, a medium and a large bubble."""
    return Frame(draw_bubbles(THREE_BUBBLES))


@pytest.fixture
def blank_frame() -> Frame:
    """200x200 frame with a single grey level."""
    return Frame(np.full((200, 200), BACKGROUND, dtype=np.uint8))
