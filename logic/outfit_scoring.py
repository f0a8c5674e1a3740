"""Deterministic scoring for candidate outfits."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from models.color_theory import HarmonyResult, evaluate_harmony
from models.taxonomy import style_keywords, temperature_bucket
from models.wardrobe_item import WardrobeItem
from tools.weather_provider import WeatherSnapshot

WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "color": 0.3,
        "style": 0.4,
        "weather": 0.3,
    }
)

DEFAULT_WEATHER_SCORE = 0.8
FALLBACK_REASON = "Good outfit choice"
REASON_SEPARATOR = " • "


@dataclass(frozen=True)
class OutfitScore:
    total: float
    color: float
    style: float
    weather: float
    harmony: HarmonyResult


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _matches_occasion(item: WardrobeItem, keywords: Sequence[str]) -> bool:
    name_words = item.name.lower().split()
    for keyword in keywords:
        if keyword in item.style_tags:
            return True
        if any(keyword in word for word in name_words):
            return True
    return False


def style_score(outfit_items: Sequence[WardrobeItem], occasion: str) -> float:
    """Share of items whose tags or name words carry an occasion keyword."""

    if not outfit_items:
        return 0.0
    keywords = style_keywords(occasion)
    matches = sum(1 for item in outfit_items if _matches_occasion(item, keywords))
    return matches / len(outfit_items)


def weather_score(outfit_items: Sequence[WardrobeItem], weather: Optional[WeatherSnapshot]) -> float:
    """Share of items suited to the temperature bucket, or the default without weather."""

    if weather is None:
        return DEFAULT_WEATHER_SCORE
    if not outfit_items:
        return 0.0
    preferred = temperature_bucket(weather.temperature).preferred_seasons
    matches = sum(1 for item in outfit_items if item.season in preferred)
    return matches / len(outfit_items)


def score_outfit(
    outfit_items: Sequence[WardrobeItem],
    occasion: str,
    weather: Optional[WeatherSnapshot] = None,
) -> OutfitScore:
    """Calculate the weighted composite score and its sub scores."""

    harmony = evaluate_harmony([item.color for item in outfit_items])
    style_val = style_score(outfit_items, occasion)
    weather_val = weather_score(outfit_items, weather)

    total = _clamp(
        harmony.score * WEIGHTS["color"]
        + style_val * WEIGHTS["style"]
        + weather_val * WEIGHTS["weather"]
    )
    return OutfitScore(
        total=total,
        color=harmony.score,
        style=style_val,
        weather=weather_val,
        harmony=harmony,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_reason(score: OutfitScore, occasion: str, weather: Optional[WeatherSnapshot] = None) -> str:
    """Human-readable justification assembled from the sub scores."""

    reasons = []
    if score.style > 0.6:
        reasons.append(f"Perfect for {occasion}")
    if weather is not None and score.weather > 0.7:
        reasons.append(f"Suitable for {_round_half_up(weather.temperature)}°F")
    if score.color > 0.8:
        reasons.append("Great color combination")
    return REASON_SEPARATOR.join(reasons) or FALLBACK_REASON


__all__ = [
    "WEIGHTS",
    "DEFAULT_WEATHER_SCORE",
    "OutfitScore",
    "style_score",
    "weather_score",
    "score_outfit",
    "build_reason",
]
