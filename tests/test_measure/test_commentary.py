"""Tests for commentary providers."""

from __future__ import annotations

from pappascan.measure.commentary import (
    FORTUNES,
    CommentaryProvider,
    SeededCommentary,
    oil_estimate_ml,
)


class TestSeededCommentary:
    def test_is_provider(self) -> None:
        assert isinstance(SeededCommentary(), CommentaryProvider)

    def test_deterministic(self) -> None:
        provider = SeededCommentary()
        assert provider.describe(12, 18.5) == provider.describe(12, 18.5)

    def test_shape_of_output(self) -> None:
        notes = SeededCommentary().describe(7, 30.0)
        assert " with " in notes.personality
        assert notes.horoscope in FORTUNES

    def test_empty_analysis(self) -> None:
        notes = SeededCommentary().describe(0, 0.0)
        assert notes.personality
        assert notes.horoscope


class TestOilEstimate:
    def test_floor(self) -> None:
        assert oil_estimate_ml(0.0, 0) == 5
        assert oil_estimate_ml(-100.0, 10) == 2

    def test_scales_with_bubbles(self) -> None:
        assert oil_estimate_ml(1.0, 100) == 13
