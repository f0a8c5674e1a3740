"""Outfit candidate and saved-outfit schemas."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from models.wardrobe_item import WardrobeItem


@dataclass(frozen=True)
class OutfitCandidate:
    """A scored combination of wardrobe items proposed by the recommender."""

    items: Tuple[WardrobeItem, ...]
    score: float
    reason: str
    color_score: float = 0.0
    style_score: float = 0.0
    weather_score: float = 0.0

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "item_ids": self.item_ids,
            "score": self.score,
            "reason": self.reason,
            "sub_scores": {
                "color": self.color_score,
                "style": self.style_score,
                "weather": self.weather_score,
            },
        }


@dataclass
class SavedOutfit:
    outfit_id: str
    user_id: str
    name: str
    occasion: str
    season: str
    item_ids: List[str] = field(default_factory=list)
    score: float = 0.0
    reason: str = ""
    is_favorite: bool = False
    created_at: str = ""


@dataclass
class SharedOutfit:
    share_token: str
    outfit_id: str
    user_id: str
    created_at: str = ""


__all__ = ["OutfitCandidate", "SavedOutfit", "SharedOutfit"]
