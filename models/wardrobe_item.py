"""Wardrobe item data model and helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from models.taxonomy import normalise_tags, validate_category, validate_season


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class WardrobeItem:
    """A single piece of clothing owned by a user.

    Instances are immutable; ``dataclasses.replace`` produces an updated copy
    and re-runs validation.
    """

    item_id: str
    name: str
    category: str
    color: str
    season: str = "all-season"
    style_tags: Tuple[str, ...] = field(default_factory=tuple)
    user_id: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        name = "" if self.name is None else str(self.name).strip()
        if not name:
            raise ValueError("WardrobeItem name must not be blank")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "category", validate_category(self.category))
        object.__setattr__(self, "season", validate_season(self.season))
        object.__setattr__(self, "color", "" if self.color is None else str(self.color).strip())
        object.__setattr__(self, "style_tags", normalise_tags(_ensure_list(self.style_tags)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "category": self.category,
            "color": self.color,
            "season": self.season,
            "style_tags": list(self.style_tags),
            "user_id": self.user_id,
            "image_url": self.image_url,
        }


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose row or payload data.

    Accepts ``id`` as an alias for ``item_id`` and assigns a fresh id when
    neither is present.
    """

    required_fields = ["name", "category", "color"]
    missing = [key for key in required_fields if not metadata.get(key)]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    item_id = metadata.get("item_id") or metadata.get("id") or uuid.uuid4().hex
    return WardrobeItem(
        item_id=str(item_id),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        color=str(metadata["color"]),
        season=str(metadata.get("season") or "all-season"),
        style_tags=tuple(_ensure_list(metadata.get("style_tags"))),
        user_id=metadata.get("user_id"),
        image_url=metadata.get("image_url"),
    )


__all__ = ["WardrobeItem", "from_raw_metadata"]
