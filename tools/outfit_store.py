"""Saved-outfit storage with favorites and share links."""
from __future__ import annotations

import json
import secrets
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from models.outfit import SavedOutfit, SharedOutfit
from models.taxonomy import ALL_SEASON, validate_season


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def default_outfit_name(occasion: str) -> str:
    occasion = occasion.strip()
    return f"{occasion[:1].upper()}{occasion[1:]} Outfit"


class OutfitStore:
    """Persistence interface for saved outfits."""

    def save_outfit(
        self,
        user_id: str,
        item_ids: Sequence[str],
        score: float,
        reason: str,
        occasion: str,
        season: str | None = None,
        name: str | None = None,
    ) -> SavedOutfit:
        raise NotImplementedError

    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[SavedOutfit]:
        raise NotImplementedError

    def list_outfits(self, user_id: str, occasion: str | None = None) -> List[SavedOutfit]:
        raise NotImplementedError

    def set_favorite(self, user_id: str, outfit_id: str, is_favorite: bool) -> Optional[SavedOutfit]:
        raise NotImplementedError

    def toggle_favorite(self, user_id: str, outfit_id: str) -> Optional[SavedOutfit]:
        current = self.get_outfit(user_id, outfit_id)
        if not current:
            return None
        return self.set_favorite(user_id, outfit_id, not current.is_favorite)

    def delete_outfit(self, user_id: str, outfit_id: str) -> bool:
        raise NotImplementedError

    def share_outfit(self, user_id: str, outfit_id: str) -> Optional[SharedOutfit]:
        raise NotImplementedError

    def get_shared_outfit(self, share_token: str) -> Optional[SavedOutfit]:
        raise NotImplementedError


class SQLiteOutfitStore(OutfitStore):
    """Local SQLite-backed store for saved and shared outfits."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS outfits (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    outfit_id TEXT NOT NULL UNIQUE,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    occasion TEXT NOT NULL,
                    season TEXT NOT NULL,
                    item_ids TEXT NOT NULL,
                    score REAL NOT NULL,
                    reason TEXT,
                    is_favorite INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS shared_outfits (
                    share_token TEXT PRIMARY KEY,
                    outfit_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                """
            )

    @staticmethod
    def _row_to_outfit(row: sqlite3.Row) -> SavedOutfit:
        return SavedOutfit(
            outfit_id=row["outfit_id"],
            user_id=row["user_id"],
            name=row["name"],
            occasion=row["occasion"],
            season=row["season"],
            item_ids=list(json.loads(row["item_ids"])),
            score=float(row["score"]),
            reason=row["reason"] or "",
            is_favorite=bool(row["is_favorite"]),
            created_at=row["created_at"],
        )

    def save_outfit(
        self,
        user_id: str,
        item_ids: Sequence[str],
        score: float,
        reason: str,
        occasion: str,
        season: str | None = None,
        name: str | None = None,
    ) -> SavedOutfit:
        outfit = SavedOutfit(
            outfit_id=uuid.uuid4().hex,
            user_id=user_id,
            name=name or default_outfit_name(occasion),
            occasion=occasion,
            season=validate_season(season) if season else ALL_SEASON,
            item_ids=list(item_ids),
            score=float(score),
            reason=reason,
            is_favorite=False,
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO outfits (
                    outfit_id, user_id, name, occasion, season, item_ids, score, reason, is_favorite, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    outfit.outfit_id,
                    outfit.user_id,
                    outfit.name,
                    outfit.occasion,
                    outfit.season,
                    json.dumps(outfit.item_ids),
                    outfit.score,
                    outfit.reason,
                    int(outfit.is_favorite),
                    outfit.created_at,
                ),
            )
        return outfit

    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[SavedOutfit]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM outfits WHERE user_id = ? AND outfit_id = ?",
                (user_id, outfit_id),
            ).fetchone()
            return self._row_to_outfit(row) if row else None

    def list_outfits(self, user_id: str, occasion: str | None = None) -> List[SavedOutfit]:
        query = "SELECT * FROM outfits WHERE user_id = ?"
        params: list = [user_id]
        if occasion and occasion != "all":
            query += " AND occasion = ?"
            params.append(occasion)
        query += " ORDER BY seq DESC"
        with self._connect() as conn:
            return [self._row_to_outfit(row) for row in conn.execute(query, params).fetchall()]

    def set_favorite(self, user_id: str, outfit_id: str, is_favorite: bool) -> Optional[SavedOutfit]:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE outfits SET is_favorite = ? WHERE user_id = ? AND outfit_id = ?",
                (int(is_favorite), user_id, outfit_id),
            )
            if cursor.rowcount == 0:
                return None
        return self.get_outfit(user_id, outfit_id)

    def delete_outfit(self, user_id: str, outfit_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM outfits WHERE user_id = ? AND outfit_id = ?",
                (user_id, outfit_id),
            )
            if cursor.rowcount == 0:
                return False
            conn.execute("DELETE FROM shared_outfits WHERE outfit_id = ?", (outfit_id,))
            return True

    def share_outfit(self, user_id: str, outfit_id: str) -> Optional[SharedOutfit]:
        if not self.get_outfit(user_id, outfit_id):
            return None
        shared = SharedOutfit(
            share_token=secrets.token_urlsafe(16),
            outfit_id=outfit_id,
            user_id=user_id,
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO shared_outfits (share_token, outfit_id, user_id, created_at) VALUES (?, ?, ?, ?)",
                (shared.share_token, shared.outfit_id, shared.user_id, shared.created_at),
            )
        return shared

    def get_shared_outfit(self, share_token: str) -> Optional[SavedOutfit]:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT outfits.* FROM shared_outfits
                JOIN outfits ON outfits.outfit_id = shared_outfits.outfit_id
                WHERE shared_outfits.share_token = ?
                """,
                (share_token,),
            ).fetchone()
            return self._row_to_outfit(row) if row else None


__all__ = ["OutfitStore", "SQLiteOutfitStore", "default_outfit_name"]
