"""Color harmony rules for scoring outfit palettes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from models.taxonomy import COMPLEMENTARY_PAIRS, NEUTRAL_COLORS

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.9
COMPLEMENTARY_SCORE = 0.85
BASELINE_SCORE = 0.7


@dataclass(frozen=True)
class HarmonyResult:
    """Represents the outcome of a harmony evaluation."""

    score: float
    rule_used: str
    matched_pair: Optional[Tuple[str, str]] = None


def _lowered(colors: Iterable[str]) -> List[str]:
    return [str(color).strip().lower() for color in colors if color]


def neutral_count(colors: Iterable[str]) -> int:
    """Count colors that are exactly one of the neutral names."""

    return sum(1 for color in _lowered(colors) if color in NEUTRAL_COLORS)


def complementary_pair(colors: Iterable[str]) -> Optional[Tuple[str, str]]:
    """Return the first complementary pair present in ``colors``.

    Matching is substring containment, so "light blue" and "burnt orange"
    satisfy the blue/orange pair.
    """

    lowered = _lowered(colors)
    for first, second in COMPLEMENTARY_PAIRS:
        if any(first in color for color in lowered) and any(second in color for color in lowered):
            logger.debug("complementary check %s -> (%s, %s)", lowered, first, second)
            return first, second
    return None


def evaluate_harmony(colors: Iterable[str]) -> HarmonyResult:
    """Score an outfit palette: two neutrals, then complementary, then baseline."""

    palette = list(colors)
    if neutral_count(palette) >= 2:
        return HarmonyResult(score=NEUTRAL_SCORE, rule_used="neutral")
    pair = complementary_pair(palette)
    if pair:
        return HarmonyResult(score=COMPLEMENTARY_SCORE, rule_used="complementary", matched_pair=pair)
    return HarmonyResult(score=BASELINE_SCORE, rule_used="none")


__all__ = [
    "neutral_count",
    "complementary_pair",
    "evaluate_harmony",
    "HarmonyResult",
    "NEUTRAL_SCORE",
    "COMPLEMENTARY_SCORE",
    "BASELINE_SCORE",
]
