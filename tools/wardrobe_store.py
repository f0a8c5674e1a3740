"""Wardrobe item persistence: the store interface and its SQLite backend."""
from __future__ import annotations

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from models.taxonomy import normalise_tags, validate_category, validate_season
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

_COLUMNS: Tuple[str, ...] = ("user_id", "item_id", "name", "category", "color", "season", "style_tags", "image_url")
_UPDATABLE_FIELDS = frozenset(_COLUMNS[2:])

_SCHEMA = """
CREATE TABLE IF NOT EXISTS wardrobe_items (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    item_id TEXT NOT NULL,
    name TEXT NOT NULL,
    category TEXT NOT NULL,
    color TEXT NOT NULL DEFAULT '',
    season TEXT NOT NULL DEFAULT 'all-season',
    style_tags TEXT NOT NULL DEFAULT '[]',
    image_url TEXT,
    UNIQUE (user_id, item_id)
);
"""

_UPSERT = (
    f"INSERT INTO wardrobe_items ({', '.join(_COLUMNS)}) VALUES ({', '.join('?' for _ in _COLUMNS)}) "
    "ON CONFLICT (user_id, item_id) DO UPDATE SET "
    + ", ".join(f"{column} = excluded.{column}" for column in _COLUMNS[2:])
)


class WardrobeStore(ABC):
    """Where the wardrobe lives. Implementations keep items in insertion order."""

    @abstractmethod
    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        """Insert ``item``, replacing an existing item with the same id."""

    @abstractmethod
    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        ...

    @abstractmethod
    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        ...

    @abstractmethod
    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[WardrobeItem]:
        """Apply ``updated_fields`` and re-validate; ``None`` when the item is unknown."""

    @abstractmethod
    def delete_item(self, user_id: str, item_id: str) -> bool:
        ...

    def search_items(self, user_id: str, filters: Dict[str, object]) -> List[WardrobeItem]:
        """Filter the user's wardrobe by category, season, color and style tags.

        Category and season must be exact (after normalisation); color matches
        by substring and style tags match on any overlap. An unsupported
        category or season matches nothing.
        """

        filters = filters or {}
        try:
            category = validate_category(str(filters["category"])) if filters.get("category") else None
            season = validate_season(str(filters["season"])) if filters.get("season") else None
        except ValueError:
            return []
        color = str(filters.get("color") or "").strip().lower()
        wanted_tags = set(normalise_tags(filters.get("style_tags") or []))

        return [
            item
            for item in self.list_items_for_user(user_id)
            if (category is None or item.category == category)
            and (season is None or item.season == season)
            and color in item.color.lower()
            and (not wanted_tags or wanted_tags.intersection(item.style_tags))
        ]


class SQLiteWardrobeStore(WardrobeStore):
    """Wardrobe items in a local SQLite file.

    Rows carry an autoincrement ``seq`` so listing follows insertion order and
    outfit generation over an unchanged wardrobe enumerates pairs identically.
    """

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(_SCHEMA)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _to_row(item: WardrobeItem) -> Tuple[object, ...]:
        return (
            item.user_id,
            item.item_id,
            item.name,
            item.category,
            item.color,
            item.season,
            json.dumps(list(item.style_tags)),
            item.image_url,
        )

    @staticmethod
    def _from_row(row: sqlite3.Row) -> WardrobeItem:
        return WardrobeItem(
            item_id=row["item_id"],
            user_id=row["user_id"],
            name=row["name"],
            category=row["category"],
            color=row["color"],
            season=row["season"],
            style_tags=tuple(json.loads(row["style_tags"] or "[]")),
            image_url=row["image_url"],
        )

    def _valid_items(self, rows: Iterable[sqlite3.Row]) -> List[WardrobeItem]:
        items = []
        for row in rows:
            try:
                items.append(self._from_row(row))
            except ValueError as exc:
                logger.warning("Ignoring stored item %s: %s", row["item_id"], exc)
        return items

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        if not item.user_id:
            raise ValueError("WardrobeItem.user_id is required for storage")
        with self._connect() as conn:
            conn.execute(_UPSERT, self._to_row(item))
        logger.debug("Stored wardrobe item %s (%s)", item.item_id, item.category)
        return item

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM wardrobe_items WHERE user_id = ? AND item_id = ?", (user_id, item_id)
            ).fetchone()
        return self._from_row(row) if row else None

    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM wardrobe_items WHERE user_id = ? ORDER BY seq", (user_id,)).fetchall()
        return self._valid_items(rows)

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[WardrobeItem]:
        current = self.get_item(user_id, item_id)
        if current is None:
            return None

        changes = {key: value for key, value in updated_fields.items() if key in _UPDATABLE_FIELDS}
        if "style_tags" in changes:
            changes["style_tags"] = tuple(changes["style_tags"] or ())
        # replace() runs __post_init__, so bad categories or seasons raise here
        return self.create_item(replace(current, **changes))

    def delete_item(self, user_id: str, item_id: str) -> bool:
        with self._connect() as conn:
            deleted = conn.execute(
                "DELETE FROM wardrobe_items WHERE user_id = ? AND item_id = ?", (user_id, item_id)
            ).rowcount
        return deleted > 0


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
