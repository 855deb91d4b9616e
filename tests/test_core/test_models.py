"""Tests for core data models."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pappascan.core.models import (
    CalibrationContext,
    Detection,
    Frame,
    QualityRating,
    SizeClass,
    StatSnapshot,
    Winner,
)


class TestFrame:
    def test_dimensions(self) -> None:
        frame = Frame(np.zeros((80, 120), dtype=np.uint8))
        assert frame.width == 120
        assert frame.height == 80
        assert frame.is_available

    def test_rgb_dimensions(self) -> None:
        frame = Frame(np.zeros((30, 40, 3), dtype=np.uint8))
        assert (frame.width, frame.height) == (40, 30)

    def test_empty_frame_unavailable(self) -> None:
        frame = Frame.empty()
        assert frame.width == 0
        assert frame.height == 0
        assert not frame.is_available

    def test_pixels_read_only(self) -> None:
        frame = Frame(np.zeros((4, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            frame.pixels[0, 0] = 1

    def test_source_mutation_does_not_leak(self) -> None:
        """The frame keeps its own copy of the pixel buffer."""
        source = np.zeros((4, 4), dtype=np.uint8)
        frame = Frame(source)
        source[0, 0] = 255
        assert frame.pixels[0, 0] == 0


class TestDetection:
    def test_diameter_and_center(self) -> None:
        d = Detection(x=3.0, y=4.0, radius=5.0, size_class=SizeClass.SMALL)
        assert d.diameter == 10.0
        assert d.center == (3.0, 4.0)

    @pytest.mark.parametrize("radius", [0.0, -1.0, math.nan, math.inf])
    def test_non_positive_radius_rejected(self, radius: float) -> None:
        with pytest.raises(ValueError, match="radius"):
            Detection(x=0.0, y=0.0, radius=radius, size_class=SizeClass.SMALL)

    def test_hashable_for_set_semantics(self) -> None:
        a = Detection(x=1.0, y=2.0, radius=3.0, size_class=SizeClass.SMALL)
        b = Detection(x=1.0, y=2.0, radius=3.0, size_class=SizeClass.SMALL)
        assert {a, b} == {a}


class TestEnums:
    def test_rating_rank_order(self) -> None:
        assert QualityRating.FLAT.rank < QualityRating.AVERAGE.rank < QualityRating.EXCELLENT.rank

    def test_rating_values(self) -> None:
        assert QualityRating.FLAT.value == "Flat"
        assert QualityRating.AVERAGE.value == "Average"
        assert QualityRating.EXCELLENT.value == "Excellent"

    def test_winner_mirrored(self) -> None:
        assert Winner.LEFT.mirrored() is Winner.RIGHT
        assert Winner.RIGHT.mirrored() is Winner.LEFT
        assert Winner.TIE.mirrored() is Winner.TIE


class TestStatSnapshot:
    def test_defaults_are_zeroed(self) -> None:
        snap = StatSnapshot()
        assert snap.count == 0
        assert snap.index_metric == 0.0
        assert snap.quality_rating is QualityRating.FLAT

    def test_to_dict(self) -> None:
        d = StatSnapshot(count=2, quality_rating=QualityRating.AVERAGE).to_dict()
        assert d["count"] == 2
        assert d["quality_rating"] == "Average"
        assert set(d) == {
            "count", "avg_diameter_px", "avg_diameter_cm", "density_per_cm2",
            "index_metric", "quality_rating", "px_per_cm",
        }

    def test_calibration_default(self) -> None:
        assert CalibrationContext().declared_diameter_cm == 15.0
