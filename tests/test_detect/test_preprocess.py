"""Tests for the Preprocessor."""

from __future__ import annotations

import dataclasses
import importlib

import numpy as np
import pytest

from pappascan.core.exceptions import FrameError, PrimitiveLibraryError
from pappascan.core.models import Frame
from pappascan.detect import primitives
from pappascan.detect.params import DetectionParams
from pappascan.detect.preprocess import Preprocessor, preprocess

preprocess_module = importlib.import_module("pappascan.detect.preprocess")


class TestPreprocess:
    def test_mask_shape_and_dtype(self, three_bubble_frame: Frame) -> None:
        mask = preprocess(three_bubble_frame)
        assert mask.shape == (200, 200)
        assert mask.dtype == bool

    def test_bubble_interiors_are_foreground(
        self, three_bubble_frame: Frame, three_bubbles: list,
    ) -> None:
        mask = preprocess(three_bubble_frame)
        for row, col, _ in three_bubbles:
            assert mask[row, col]

    def test_background_is_not_foreground(self, three_bubble_frame: Frame) -> None:
        mask = preprocess(three_bubble_frame)
        assert not mask[5, 195]
        assert not mask[195, 5]
        # Total foreground close to the drawn bubble area
        drawn = int(np.sum(three_bubble_frame.pixels < 100))
        assert abs(int(mask.sum()) - drawn) < drawn * 0.15

    def test_deterministic(self, three_bubble_frame: Frame) -> None:
        assert np.array_equal(preprocess(three_bubble_frame), preprocess(three_bubble_frame))

    def test_isolated_speck_removed(self, three_bubble_frame: Frame) -> None:
        image = three_bubble_frame.pixels.copy()
        image[10, 190] = 40
        mask = preprocess(Frame(image))
        assert not mask[10, 190]

    def test_flat_frame_gives_empty_mask(self, blank_frame: Frame) -> None:
        mask = preprocess(blank_frame)
        assert mask.shape == (200, 200)
        assert not mask.any()

    def test_unavailable_frame_is_noop(self) -> None:
        mask = preprocess(Frame.empty())
        assert mask.shape == (0, 0)

    def test_rgb_and_rgba_match_grey(self, three_bubble_frame: Frame) -> None:
        grey = three_bubble_frame.pixels
        rgb = np.stack([grey] * 3, axis=-1)
        rgba = np.concatenate([rgb, np.full(grey.shape + (1,), 255, dtype=np.uint8)], axis=-1)
        expected = preprocess(three_bubble_frame)
        assert np.array_equal(preprocess(Frame(rgb)), expected)
        assert np.array_equal(preprocess(Frame(rgba)), expected)

    def test_single_channel_axis_accepted(self, three_bubble_frame: Frame) -> None:
        stacked = three_bubble_frame.pixels[..., None]
        assert np.array_equal(preprocess(Frame(stacked)), preprocess(three_bubble_frame))

    def test_uint16_input(self, three_bubble_frame: Frame, three_bubbles: list) -> None:
        image = three_bubble_frame.pixels.astype(np.uint16) * 256
        mask = preprocess(Frame(image))
        for row, col, _ in three_bubbles:
            assert mask[row, col]

    def test_bubble_on_border_kept(self, bubble_image) -> None:
        image = bubble_image([(0, 100, 20)])
        mask = preprocess(Frame(image))
        assert mask[0, 100]
        assert mask[5, 100]

    @pytest.mark.parametrize("shape", [(10, 10, 2), (10, 10, 5), (2, 10, 10, 3)])
    def test_unsupported_shape_raises(self, shape: tuple[int, ...]) -> None:
        with pytest.raises(FrameError):
            preprocess(Frame(np.zeros(shape, dtype=np.uint8)))

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_pixels_raise(self, bad: float) -> None:
        image = np.full((20, 20), 0.5)
        image[3, 4] = bad
        with pytest.raises(FrameError, match="non-finite|NaN"):
            preprocess(Frame(image))


class TestPreprocessorParams:
    def test_params_exposed(self) -> None:
        params = DetectionParams(blur_radius=1)
        assert Preprocessor(params).params is params

    def test_blur_sigma_for_default_kernel(self) -> None:
        assert DetectionParams().blur_sigma == pytest.approx(1.1)

    def test_no_blur_no_opening(self, three_bubble_frame: Frame) -> None:
        params = DetectionParams(blur_radius=0, open_size=1)
        mask = Preprocessor(params).preprocess(three_bubble_frame)
        assert np.array_equal(mask, three_bubble_frame.pixels < 100)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"blur_radius": -1},
            {"open_size": 0},
            {"min_area": -1.0},
            {"min_radius": -1.0},
            {"small_max_diameter": 50.0, "medium_max_diameter": 25.0},
            {"small_max_diameter": 0.0},
        ],
    )
    def test_invalid_params_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            DetectionParams(**kwargs)

    def test_to_dict(self) -> None:
        d = DetectionParams().to_dict()
        assert d["min_area"] == 50.0
        assert d["small_max_diameter"] == 25.0


class TestPrimitiveFailures:
    def test_failing_primitive_raises(
        self, monkeypatch: pytest.MonkeyPatch, three_bubble_frame: Frame,
    ) -> None:
        def boom(*args, **kwargs):
            raise RuntimeError("kernel exploded")

        broken = dataclasses.replace(primitives.load_primitives(), gaussian=boom)
        monkeypatch.setattr(primitives, "_primitives", broken)

        with pytest.raises(PrimitiveLibraryError, match="gaussian") as excinfo:
            preprocess(three_bubble_frame)
        assert isinstance(excinfo.value.cause, RuntimeError)

    def test_missing_library_raises(
        self, monkeypatch: pytest.MonkeyPatch, three_bubble_frame: Frame,
    ) -> None:
        import sys

        monkeypatch.setattr(primitives, "_primitives", None)
        monkeypatch.setitem(sys.modules, "cv2", None)

        with pytest.raises(PrimitiveLibraryError, match="import"):
            preprocess_module.Preprocessor().preprocess(three_bubble_frame)
