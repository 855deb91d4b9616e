"""Shared fixtures for CLI command tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def disc_tiff(tmp_path: Path, bubble_image, three_bubbles) -> Path:
    """TIFF file holding the three-bubble image."""
    path = tmp_path / "disc.tif"
    tifffile.imwrite(str(path), bubble_image(three_bubbles))
    return path


@pytest.fixture
def plain_tiff(tmp_path: Path, bubble_image) -> Path:
    """TIFF file with a single bubble."""
    path = tmp_path / "plain.tif"
    tifffile.imwrite(str(path), bubble_image([(100, 100, 20)]))
    return path


@pytest.fixture
def flat_tiff(tmp_path: Path) -> Path:
    """TIFF file with one grey level and no bubbles."""
    path = tmp_path / "flat.tif"
    tifffile.imwrite(str(path), np.full((50, 50), 128, dtype=np.uint8))
    return path
