"""Outfit generation: enumeration, caps, ranking and injected randomness."""
from __future__ import annotations

import random
from typing import List, Sequence

import pytest

from logic.outfit_builder import (
    build_suggestions,
    generate_suggestions,
    has_required_categories,
    partition_wardrobe,
)
from models.taxonomy import BOTTOM_CATEGORIES, TOP_CATEGORIES
from models.wardrobe_item import WardrobeItem
from tools.weather_provider import WeatherSnapshot


class ScriptedRandom:
    """Replays fixed draws: ``random()`` values and ``choice`` indexes."""

    def __init__(self, randoms: Sequence[float] = (), choices: Sequence[int] = ()) -> None:
        self._randoms = list(randoms)
        self._choices = list(choices)
        self.calls: List[str] = []

    def random(self) -> float:
        self.calls.append("random")
        return self._randoms.pop(0)

    def choice(self, seq):
        self.calls.append("choice")
        return seq[self._choices.pop(0)]


def _item(item_id: str, category: str, color: str = "black", season: str = "all-season", name: str | None = None, tags=()) -> WardrobeItem:
    return WardrobeItem(
        item_id=item_id,
        name=name or f"Item {item_id}",
        category=category,
        color=color,
        season=season,
        style_tags=tuple(tags),
    )


def _wardrobe(tops: int, bottoms: int) -> List[WardrobeItem]:
    return [_item(f"top{i}", "tops") for i in range(tops)] + [_item(f"bottom{i}", "bottoms") for i in range(bottoms)]


def test_partition_preserves_input_order() -> None:
    items = [_item("t2", "tops"), _item("b1", "bottoms"), _item("o1", "outerwear"), _item("s1", "shoes"), _item("a1", "accessories"), _item("t1", "tops")]
    partition = partition_wardrobe(items)
    assert [i.item_id for i in partition.tops] == ["t2", "o1", "t1"]
    assert [i.item_id for i in partition.bottoms] == ["b1"]
    assert [i.item_id for i in partition.shoes] == ["s1"]
    assert [i.item_id for i in partition.accessories] == ["a1"]


def test_candidate_count_is_tops_times_bottoms() -> None:
    result = build_suggestions(_wardrobe(3, 2), "casual", rng=ScriptedRandom())
    assert len(result.candidates) == 6
    assert result.diagnostics["candidates_generated"] == 6
    assert result.diagnostics["pairs_considered"] == 6
    assert result.diagnostics["capped"] is False


def test_generation_caps_at_twenty_and_returns_ten() -> None:
    result = build_suggestions(_wardrobe(5, 5), "casual", rng=ScriptedRandom())
    assert result.diagnostics["candidates_generated"] == 20
    assert result.diagnostics["pairs_considered"] == 20
    assert result.diagnostics["capped"] is True
    assert len(result.candidates) == 10


def test_caps_are_configurable() -> None:
    suggestions = generate_suggestions(_wardrobe(4, 4), "casual", rng=ScriptedRandom(), max_candidates=5, max_suggestions=3)
    assert len(suggestions) == 3


def test_outerwear_counts_as_a_top() -> None:
    suggestions = generate_suggestions([_item("coat", "outerwear"), _item("jeans", "bottoms")], "casual", rng=ScriptedRandom())
    assert [c.item_ids for c in suggestions] == [["coat", "jeans"]]


def test_shoe_and_accessory_draws_come_from_the_random_source() -> None:
    items = [
        _item("top", "tops"),
        _item("bottom", "bottoms"),
        _item("shoe0", "shoes"),
        _item("shoe1", "shoes"),
        _item("acc0", "accessories"),
        _item("acc1", "accessories"),
    ]
    rng = ScriptedRandom(randoms=[0.9], choices=[1, 1])
    suggestions = generate_suggestions(items, "casual", rng=rng)
    assert suggestions[0].item_ids == ["top", "bottom", "shoe1", "acc1"]
    assert rng.calls == ["choice", "random", "choice"]


def test_accessory_needs_a_draw_above_one_half() -> None:
    items = [_item("top", "tops"), _item("bottom", "bottoms"), _item("acc", "accessories")]
    assert generate_suggestions(items, "casual", rng=ScriptedRandom(randoms=[0.5]))[0].item_ids == ["top", "bottom"]
    assert generate_suggestions(items, "casual", rng=ScriptedRandom(randoms=[0.51], choices=[0]))[0].item_ids == ["top", "bottom", "acc"]


def test_no_random_draws_without_shoes_or_accessories() -> None:
    rng = ScriptedRandom()
    generate_suggestions(_wardrobe(2, 2), "casual", rng=rng)
    assert rng.calls == []


def test_invariants_hold_for_a_mixed_wardrobe() -> None:
    items = [
        _item("tee", "tops", color="white", name="White T-Shirt", season="summer"),
        _item("blouse", "tops", color="red", name="Silk Blouse", season="spring"),
        _item("coat", "outerwear", color="camel", season="winter"),
        _item("jeans", "bottoms", color="blue", name="Blue Jeans"),
        _item("skirt", "bottoms", color="green", season="summer"),
        _item("slacks", "bottoms", color="gray", name="Gray Slacks", season="fall"),
        _item("sneakers", "shoes", color="white", name="White Sneakers"),
        _item("heels", "shoes", color="black", name="Black Heels"),
        _item("scarf", "accessories", color="orange", season="winter"),
        _item("belt", "accessories", color="brown"),
    ]
    suggestions = generate_suggestions(items, "date", WeatherSnapshot(temperature=58.0), rng=random.Random(3))

    assert 1 <= len(suggestions) <= 9
    scores = [candidate.score for candidate in suggestions]
    assert scores == sorted(scores, reverse=True)
    for candidate in suggestions:
        categories = [item.category for item in candidate.items]
        assert 0.0 <= candidate.score <= 1.0
        assert 2 <= len(candidate.items) <= 4
        assert any(category in TOP_CATEGORIES for category in categories)
        assert sum(1 for category in categories if category in BOTTOM_CATEGORIES) == 1
        assert has_required_categories(candidate.items)


def test_without_weather_the_weather_score_is_always_default() -> None:
    items = [_item("parka", "outerwear", season="winter"), _item("shorts", "bottoms", season="summer")]
    suggestions = generate_suggestions(items, "casual", rng=ScriptedRandom())
    assert suggestions[0].weather_score == 0.8


def test_black_top_white_bottom_casual_scenario() -> None:
    items = [_item("top", "tops", color="black", name="Black T-Shirt"), _item("bottom", "bottoms", color="white", name="White Jeans")]
    [candidate] = generate_suggestions(items, "casual", rng=ScriptedRandom())
    assert candidate.color_score == 0.9
    assert candidate.score == pytest.approx(0.3 * 0.9 + 0.4 * candidate.style_score + 0.3 * 0.8)
    assert candidate.score == pytest.approx(0.91)
    assert candidate.reason == "Perfect for casual • Great color combination"


@pytest.mark.parametrize(
    "items",
    [
        [],
        [_item("top", "tops"), _item("shoe", "shoes")],
        [_item("bottom", "bottoms"), _item("acc", "accessories")],
    ],
)
def test_missing_tops_or_bottoms_yields_nothing(items: List[WardrobeItem]) -> None:
    assert generate_suggestions(items, "casual", rng=ScriptedRandom()) == []


def test_unknown_occasion_scores_like_casual() -> None:
    items = [_item("tee", "tops", name="Old T-Shirt"), _item("slacks", "bottoms", name="Wool Slacks")]
    unknown = generate_suggestions(items, "unknown", rng=ScriptedRandom())
    casual = generate_suggestions(items, "casual", rng=ScriptedRandom())
    assert unknown[0].score == casual[0].score
    assert unknown[0].style_score == 0.5


def test_ties_keep_generation_order() -> None:
    items = [_item("first", "tops"), _item("second", "tops"), _item("bottom", "bottoms")]
    suggestions = generate_suggestions(items, "casual", rng=ScriptedRandom())
    assert suggestions[0].score == suggestions[1].score
    assert [c.item_ids[0] for c in suggestions] == ["first", "second"]


def test_higher_scores_rank_first() -> None:
    items = [
        _item("plain", "tops", color="red", name="Plain Top"),
        _item("tee", "tops", color="black", name="Black T-Shirt"),
        _item("jeans", "bottoms", color="white", name="White Jeans"),
    ]
    suggestions = generate_suggestions(items, "casual", rng=ScriptedRandom())
    assert [c.item_ids[0] for c in suggestions] == ["tee", "plain"]


def test_seeded_random_source_is_reproducible() -> None:
    items = _wardrobe(3, 3) + [_item(f"shoe{i}", "shoes") for i in range(4)] + [_item(f"acc{i}", "accessories") for i in range(4)]
    first = generate_suggestions(items, "casual", rng=random.Random(42))
    second = generate_suggestions(items, "casual", rng=random.Random(42))
    assert [c.item_ids for c in first] == [c.item_ids for c in second]
