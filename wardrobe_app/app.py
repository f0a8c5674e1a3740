"""Application bootstrap wiring stores, weather and the recommender."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from logic.outfit_builder import RandomSource, build_suggestions
from logic.validation import (
    InvalidRequestError,
    ProfileUpdate,
    SaveOutfitRequest,
    SuggestionRequest,
    WardrobeItemInput,
    WardrobeItemUpdate,
    validate_payload,
)
from memory.user_profile import StyleProfileService
from models.outfit import SavedOutfit
from models.wardrobe_item import WardrobeItem, from_raw_metadata
from tools.observability import instrument_call
from tools.outfit_store import OutfitStore, SQLiteOutfitStore
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.weather_provider import OpenMeteoProvider, WeatherProvider, WeatherSnapshot
from wardrobe_app.config import AppConfig
from wardrobe_app.logging_config import configure_logging, get_logger, log_event, operation_context


LOGGER = get_logger(__name__)


class NotFoundError(LookupError):
    """Raised when an item, outfit or share token does not exist."""


class WardrobeApp:
    """Wires together configuration, storage, weather lookups and the recommender."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        wardrobe_store: WardrobeStore | None = None,
        outfit_store: OutfitStore | None = None,
        weather_provider: WeatherProvider | None = None,
        profile_service: StyleProfileService | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging(self.config.log_level)

        self.wardrobe_store = wardrobe_store or SQLiteWardrobeStore(self.config.database_path)
        self.outfit_store = outfit_store or SQLiteOutfitStore(self.config.database_path)
        self.weather_provider = weather_provider or OpenMeteoProvider(
            timeout_seconds=self.config.weather_timeout_seconds
        )
        self.profile_service = profile_service or StyleProfileService(self.config.profile_dir)
        self.rng: RandomSource = rng or random.Random()

    # Wardrobe items

    @instrument_call("add_item")
    def add_item(self, *, user_id: str, payload: Dict[str, Any]) -> WardrobeItem:
        data = validate_payload(WardrobeItemInput, payload, "Invalid wardrobe item")
        item = from_raw_metadata({**data.model_dump(), "user_id": user_id})
        return self.wardrobe_store.create_item(item)

    @instrument_call("list_items")
    def list_items(self, *, user_id: str, category: str | None = None) -> List[WardrobeItem]:
        if category and category != "all":
            return self.wardrobe_store.search_items(user_id, {"category": category})
        return self.wardrobe_store.list_items_for_user(user_id)

    @instrument_call("update_item")
    def update_item(self, *, user_id: str, item_id: str, payload: Dict[str, Any]) -> WardrobeItem:
        data = validate_payload(WardrobeItemUpdate, payload, "Invalid wardrobe item update")
        try:
            updated = self.wardrobe_store.update_item(user_id, item_id, data.model_dump(exclude_unset=True))
        except ValueError as exc:
            raise InvalidRequestError(str(exc)) from exc
        if updated is None:
            raise NotFoundError(f"Wardrobe item {item_id} not found")
        return updated

    @instrument_call("delete_item")
    def delete_item(self, *, user_id: str, item_id: str) -> None:
        if not self.wardrobe_store.delete_item(user_id, item_id):
            raise NotFoundError(f"Wardrobe item {item_id} not found")

    # Suggestions

    def _resolve_location(self, user_id: str, location: Optional[str]) -> Optional[str]:
        if location:
            return location
        profile = self.profile_service.get_profile(user_id)
        return profile.location or self.config.default_location

    def _lookup_weather(self, location: Optional[str]) -> Optional[WeatherSnapshot]:
        if not location:
            return None
        return self.weather_provider.get_current(location)

    @instrument_call("suggest_outfits")
    def suggest_outfits(self, *, user_id: str, payload: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Generate ranked outfits from the user's wardrobe.

        Weather is looked up for the requested location, then the profile
        location, then the configured default. A failed lookup means scoring
        without weather.
        """

        data = validate_payload(SuggestionRequest, payload or {}, "Invalid suggestion request")
        with operation_context("app:suggest_outfits") as correlation_id:
            items = self.wardrobe_store.list_items_for_user(user_id)
            location = self._resolve_location(user_id, data.location)
            weather = self._lookup_weather(location)
            rng = random.Random(data.seed) if data.seed is not None else self.rng

            result = build_suggestions(
                items,
                data.occasion,
                weather,
                rng,
                max_candidates=self.config.max_candidates,
                max_suggestions=self.config.max_suggestions,
            )
            log_event(
                LOGGER,
                level=logging.INFO,
                event="suggestions_generated",
                correlation_id=correlation_id,
                occasion=data.occasion,
                wardrobe_size=len(items),
                weather_available=weather is not None,
                returned=len(result.candidates),
            )
            return {
                "occasion": data.occasion,
                "weather": asdict(weather) if weather else None,
                "suggestions": [candidate.to_dict() for candidate in result.candidates],
                "diagnostics": result.diagnostics,
            }

    # Saved outfits

    def resolve_outfit_items(self, user_id: str, outfit: SavedOutfit) -> List[WardrobeItem]:
        """Return the outfit's items that still exist in the wardrobe, in saved order."""

        by_id = {item.item_id: item for item in self.wardrobe_store.list_items_for_user(user_id)}
        return [by_id[item_id] for item_id in outfit.item_ids if item_id in by_id]

    def _outfit_view(self, outfit: SavedOutfit) -> Dict[str, Any]:
        view = asdict(outfit)
        view["items"] = [item.to_dict() for item in self.resolve_outfit_items(outfit.user_id, outfit)]
        return view

    @instrument_call("save_outfit")
    def save_outfit(self, *, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = validate_payload(SaveOutfitRequest, payload, "Invalid outfit")
        wardrobe = {item.item_id: item for item in self.wardrobe_store.list_items_for_user(user_id)}
        missing = [item_id for item_id in data.item_ids if item_id not in wardrobe]
        if missing:
            raise InvalidRequestError(f"Unknown wardrobe items: {missing}")

        season = data.season or wardrobe[data.item_ids[0]].season
        outfit = self.outfit_store.save_outfit(
            user_id,
            data.item_ids,
            data.score,
            data.reason,
            data.occasion,
            season=season,
            name=data.name,
        )
        return self._outfit_view(outfit)

    @instrument_call("list_outfits")
    def list_outfits(self, *, user_id: str, occasion: str | None = None) -> List[Dict[str, Any]]:
        return [self._outfit_view(outfit) for outfit in self.outfit_store.list_outfits(user_id, occasion)]

    @instrument_call("toggle_favorite")
    def toggle_favorite(self, *, user_id: str, outfit_id: str) -> Dict[str, Any]:
        outfit = self.outfit_store.toggle_favorite(user_id, outfit_id)
        if outfit is None:
            raise NotFoundError(f"Outfit {outfit_id} not found")
        return self._outfit_view(outfit)

    @instrument_call("delete_outfit")
    def delete_outfit(self, *, user_id: str, outfit_id: str) -> None:
        if not self.outfit_store.delete_outfit(user_id, outfit_id):
            raise NotFoundError(f"Outfit {outfit_id} not found")

    @instrument_call("share_outfit")
    def share_outfit(self, *, user_id: str, outfit_id: str) -> Dict[str, str]:
        shared = self.outfit_store.share_outfit(user_id, outfit_id)
        if shared is None:
            raise NotFoundError(f"Outfit {outfit_id} not found")
        return {
            "share_token": shared.share_token,
            "outfit_id": shared.outfit_id,
            "share_path": f"/shared/{shared.share_token}",
        }

    @instrument_call("get_shared_outfit")
    def get_shared_outfit(self, *, share_token: str) -> Dict[str, Any]:
        outfit = self.outfit_store.get_shared_outfit(share_token)
        if outfit is None:
            raise NotFoundError("Shared outfit not found")
        view = self._outfit_view(outfit)
        view.pop("user_id", None)
        return view

    # Profile

    @instrument_call("get_profile")
    def get_profile(self, *, user_id: str) -> Dict[str, Any]:
        return asdict(self.profile_service.get_profile(user_id))

    @instrument_call("update_profile")
    def update_profile(self, *, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = validate_payload(ProfileUpdate, payload, "Invalid profile update")
        return asdict(self.profile_service.update_profile(user_id, data.model_dump(exclude_unset=True)))


__all__ = ["WardrobeApp", "NotFoundError"]
