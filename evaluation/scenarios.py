"""Evaluation scenarios exercising occasions, temperatures and sparse wardrobes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tools.weather_provider import WeatherSnapshot


@dataclass
class EvaluationScenario:
    name: str
    description: str
    occasion: str
    location: Optional[str]
    weather: Optional[WeatherSnapshot]
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    seed: int = 7
    tags: List[str] = field(default_factory=list)


def _item(item_id: str, name: str, category: str, color: str, season: str, *tags: str) -> Dict[str, object]:
    return {
        "item_id": item_id,
        "name": name,
        "category": category,
        "color": color,
        "season": season,
        "style_tags": list(tags),
    }


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="office_neutrals",
        description="Business day in mild weather should favour the button-up, slacks and loafers.",
        occasion="business",
        location="Chicago",
        weather=WeatherSnapshot(temperature=65.0, condition="clear"),
        wardrobe_items=[
            _item("shirt", "White Button-Up Shirt", "tops", "white", "all-season", "button-up"),
            _item("tee", "Gray T-Shirt", "tops", "gray", "summer", "casual"),
            _item("slacks", "Navy Slacks", "bottoms", "navy", "fall"),
            _item("jeans", "Light Jeans", "bottoms", "light blue", "all-season", "casual"),
            _item("loafers", "Black Loafers", "shoes", "black", "all-season"),
        ],
        expectations={
            "min_outfits": 4,
            "max_outfits": 4,
            "top_contains": ["shirt", "slacks", "loafers"],
            "reason_contains": "Perfect for business",
        },
        tags=["weather", "business"],
    ),
    EvaluationScenario(
        name="summer_heat_casual",
        description="A hot day should push summer pieces above the wool sweater.",
        occasion="casual",
        location="Phoenix",
        weather=WeatherSnapshot(temperature=92.0, condition="clear"),
        wardrobe_items=[
            _item("linen_tee", "Linen T-Shirt", "tops", "white", "summer", "casual"),
            _item("sweater", "Wool Sweater", "tops", "burgundy", "winter"),
            _item("shorts", "Denim Shorts", "bottoms", "blue", "summer"),
            _item("black_jeans", "Black Jeans", "bottoms", "black", "all-season"),
            _item("sneakers", "Canvas Sneakers", "shoes", "white", "summer"),
        ],
        expectations={
            "min_outfits": 4,
            "top_contains": ["linen_tee", "black_jeans"],
            "reason_contains": "Suitable for 92°F",
        },
        tags=["weather", "hot"],
    ),
    EvaluationScenario(
        name="unknown_occasion_without_weather",
        description="Unlisted occasions fall back to casual keywords; no location means no weather.",
        occasion="brunch",
        location=None,
        weather=None,
        wardrobe_items=[
            _item("graphic_tee", "Graphic T-Shirt", "tops", "red", "spring"),
            _item("relaxed_jeans", "Relaxed Jeans", "bottoms", "blue", "all-season"),
            _item("trail_sneakers", "Trail Sneakers", "shoes", "forest green", "fall"),
        ],
        expectations={
            "min_outfits": 1,
            "max_outfits": 1,
            "top_contains": ["graphic_tee", "relaxed_jeans", "trail_sneakers"],
            "reason_contains": "Perfect for brunch",
        },
        tags=["fallback"],
    ),
    EvaluationScenario(
        name="no_bottoms",
        description="Without bottoms there is nothing to suggest and nothing should fail.",
        occasion="formal",
        location="Oslo",
        weather=WeatherSnapshot(temperature=30.0, condition="snowy"),
        wardrobe_items=[
            _item("blazer", "Charcoal Blazer", "outerwear", "gray", "winter", "blazer"),
            _item("oxfords", "Dress-Shoes Oxford", "shoes", "brown", "all-season"),
        ],
        expectations={"min_outfits": 0, "max_outfits": 0},
        tags=["empty"],
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
