"""Pluggable commentary providers fed only from summary statistics.

Commentary is presentation glue: it never feeds back into a StatSnapshot.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

VIBES = (
    "Chaotic Crispy", "Zen Cruncher", "Party Popper", "Wise Wafer", "Bubbly Bard",
    "Mellow Muncher", "Rogue Ripple", "Glorious Guffaw", "Serene Snack", "Thunder Crunch",
)

TRAITS = (
    "rebellious bubbles", "a meditative crisp", "audacious sizzles", "symmetry wizardry",
    "wholesome puffery", "quirky pop-patterns", "grandiose curvatures", "dangling dimples",
)

FORTUNES = (
    "Today your snacks uplift spirits. Share one and gain a fan.",
    "Avoid windy places; your crunch may echo rumors.",
    "A golden bubble reveals luck. Dip with confidence.",
    "Your path is crispy and clear; trust the sizzle.",
    "Beware of sogginess; stay close to warm company.",
    "A new chutney arrives with delightful surprises.",
)


@dataclass(frozen=True)
class Commentary:
    """Decorative strings describing one analysis."""

    personality: str
    horoscope: str


class CommentaryProvider(ABC):
    """Abstract commentary source.

    Implementations receive only the bubble count and the average diameter
    in pixels.
    """

    @abstractmethod
    def describe(self, count: int, avg_diameter_px: float) -> Commentary:
        """Produce commentary for the given summary values."""


class SeededCommentary(CommentaryProvider):
    """Deterministic commentary: identical inputs give identical strings."""

    def describe(self, count: int, avg_diameter_px: float) -> Commentary:
        personality_rng = random.Random(round(count * 100 + avg_diameter_px, 6))
        vibe = personality_rng.choice(VIBES)
        trait = personality_rng.choice(TRAITS)

        horoscope_rng = random.Random(round(count * 37 + avg_diameter_px * 13))
        return Commentary(
            personality=f"{vibe} with {trait}",
            horoscope=horoscope_rng.choice(FORTUNES),
        )


def oil_estimate_ml(avg_diameter_cm: float, count: int) -> int:
    """Playful frying-oil estimate in millilitres, never below 2."""
    return max(2, round(avg_diameter_cm * count * 0.08 + 5))
