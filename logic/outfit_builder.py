"""Rule-based outfit generation with transparent diagnostics."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, TypeVar

from logic.outfit_scoring import build_reason, score_outfit
from models.outfit import OutfitCandidate
from models.taxonomy import BOTTOM_CATEGORIES, TOP_CATEGORIES
from models.wardrobe_item import WardrobeItem
from tools.weather_provider import WeatherSnapshot

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 20
MAX_SUGGESTIONS = 10
ACCESSORY_PROBABILITY = 0.5

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the builder relies on."""

    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


@dataclass(frozen=True)
class WardrobePartition:
    tops: List[WardrobeItem]
    bottoms: List[WardrobeItem]
    shoes: List[WardrobeItem]
    accessories: List[WardrobeItem]


@dataclass(frozen=True)
class SuggestionResult:
    candidates: List[OutfitCandidate]
    diagnostics: Dict[str, object]


def partition_wardrobe(items: Sequence[WardrobeItem]) -> WardrobePartition:
    """Split items by role, keeping input order within each group."""

    tops: List[WardrobeItem] = []
    bottoms: List[WardrobeItem] = []
    shoes: List[WardrobeItem] = []
    accessories: List[WardrobeItem] = []
    for item in items:
        if item.category in TOP_CATEGORIES:
            tops.append(item)
        elif item.category in BOTTOM_CATEGORIES:
            bottoms.append(item)
        elif item.category == "shoes":
            shoes.append(item)
        elif item.category == "accessories":
            accessories.append(item)
    return WardrobePartition(tops=tops, bottoms=bottoms, shoes=shoes, accessories=accessories)


def has_required_categories(items: Sequence[WardrobeItem]) -> bool:
    categories = {item.category for item in items}
    return bool(categories & TOP_CATEGORIES) and bool(categories & BOTTOM_CATEGORIES)


def _assemble(
    top: WardrobeItem, bottom: WardrobeItem, partition: WardrobePartition, rng: RandomSource
) -> List[WardrobeItem]:
    outfit = [top, bottom]
    if partition.shoes:
        outfit.append(rng.choice(partition.shoes))
    if partition.accessories and rng.random() > ACCESSORY_PROBABILITY:
        outfit.append(rng.choice(partition.accessories))
    return outfit


def build_suggestions(
    items: Sequence[WardrobeItem],
    occasion: str,
    weather: Optional[WeatherSnapshot] = None,
    rng: Optional[RandomSource] = None,
    *,
    max_candidates: int = MAX_CANDIDATES,
    max_suggestions: int = MAX_SUGGESTIONS,
) -> SuggestionResult:
    """Enumerate top/bottom pairs, score them and keep the best few.

    Enumeration stops after ``max_candidates`` raw candidates, so on large
    wardrobes later pairs are never considered. That bounds the work per call;
    it does not guarantee the globally best combinations.
    """

    source: RandomSource = rng if rng is not None else random.Random()
    partition = partition_wardrobe(items)
    diagnostics: Dict[str, object] = {
        "tops": len(partition.tops),
        "bottoms": len(partition.bottoms),
        "shoes": len(partition.shoes),
        "accessories": len(partition.accessories),
        "pairs_considered": 0,
        "rejected": 0,
        "capped": False,
    }

    candidates: List[OutfitCandidate] = []
    for top in partition.tops:
        for bottom in partition.bottoms:
            diagnostics["pairs_considered"] = int(diagnostics["pairs_considered"]) + 1
            outfit = _assemble(top, bottom, partition, source)
            if not has_required_categories(outfit):
                diagnostics["rejected"] = int(diagnostics["rejected"]) + 1
                logger.warning("Rejected outfit without top and bottom: %s", [i.item_id for i in outfit])
                continue

            score = score_outfit(outfit, occasion, weather)
            candidates.append(
                OutfitCandidate(
                    items=tuple(outfit),
                    score=score.total,
                    reason=build_reason(score, occasion, weather),
                    color_score=score.color,
                    style_score=score.style,
                    weather_score=score.weather,
                )
            )
            if len(candidates) >= max_candidates:
                break
        if len(candidates) >= max_candidates:
            diagnostics["capped"] = True
            break

    ranked = sorted(candidates, key=lambda candidate: candidate.score, reverse=True)[:max_suggestions]
    diagnostics["candidates_generated"] = len(candidates)
    diagnostics["returned"] = len(ranked)
    diagnostics["best_score"] = ranked[0].score if ranked else None
    logger.info(
        "Generated %s candidates for occasion=%s, returning %s",
        len(candidates),
        occasion,
        len(ranked),
    )
    return SuggestionResult(candidates=ranked, diagnostics=diagnostics)


def generate_suggestions(
    items: Sequence[WardrobeItem],
    occasion: str,
    weather: Optional[WeatherSnapshot] = None,
    rng: Optional[RandomSource] = None,
    *,
    max_candidates: int = MAX_CANDIDATES,
    max_suggestions: int = MAX_SUGGESTIONS,
) -> List[OutfitCandidate]:
    """Return up to ``max_suggestions`` outfits ordered by descending score."""

    return build_suggestions(
        items,
        occasion,
        weather,
        rng,
        max_candidates=max_candidates,
        max_suggestions=max_suggestions,
    ).candidates


__all__ = [
    "RandomSource",
    "WardrobePartition",
    "SuggestionResult",
    "partition_wardrobe",
    "has_required_categories",
    "build_suggestions",
    "generate_suggestions",
    "MAX_CANDIDATES",
    "MAX_SUGGESTIONS",
]
