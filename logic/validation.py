"""Pydantic schemas for validating facade and HTTP payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.taxonomy import validate_category, validate_season

Category = Literal["tops", "bottoms", "shoes", "accessories", "outerwear"]
Season = Literal["spring", "summer", "fall", "winter", "all-season"]


class InvalidRequestError(ValueError):
    """Raised when a payload fails schema validation."""

    def __init__(self, message: str, details: List[Dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class WardrobeItemInput(BaseModel):
    """Input contract for adding an item to a wardrobe."""

    name: str = Field(min_length=1)
    category: Category
    color: str = Field(min_length=1)
    season: Season = "all-season"
    style_tags: List[str] = []
    image_url: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _normalise_category(cls, value: Any) -> Any:
        return validate_category(value) if isinstance(value, str) else value

    @field_validator("season", mode="before")
    @classmethod
    def _normalise_season(cls, value: Any) -> Any:
        return validate_season(value) if isinstance(value, str) else value

    @field_validator("name", "color")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class WardrobeItemUpdate(BaseModel):
    """Partial update; only provided fields are applied."""

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[Category] = None
    color: Optional[str] = Field(default=None, min_length=1)
    season: Optional[Season] = None
    style_tags: Optional[List[str]] = None
    image_url: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _normalise_category(cls, value: Any) -> Any:
        return validate_category(value) if isinstance(value, str) else value

    @field_validator("season", mode="before")
    @classmethod
    def _normalise_season(cls, value: Any) -> Any:
        return validate_season(value) if isinstance(value, str) else value

    # Omitting a field leaves it unchanged; an explicit null would blank a required attribute.
    @field_validator("name", "category", "color", "season")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


class SuggestionRequest(BaseModel):
    """Shared envelope for outfit suggestion requests."""

    occasion: str = Field(default="casual", min_length=1)
    location: Optional[str] = None
    seed: Optional[int] = None


class SaveOutfitRequest(BaseModel):
    """Persist a suggestion the user liked."""

    item_ids: List[str] = Field(min_length=2, max_length=4)
    score: float = Field(ge=0.0, le=1.0)
    reason: str = ""
    occasion: str = Field(default="casual", min_length=1)
    name: Optional[str] = None
    season: Optional[Season] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    location: Optional[str] = None
    style_preferences: Optional[Dict[str, Any]] = None


def validate_payload(model: type[BaseModel], payload: Dict[str, Any], message: str) -> BaseModel:
    """Validate ``payload`` or raise :class:`InvalidRequestError` with pydantic details."""

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        details = exc.errors(include_url=False, include_context=False, include_input=False)
        raise InvalidRequestError(message, details=details) from exc


__all__ = [
    "InvalidRequestError",
    "WardrobeItemInput",
    "WardrobeItemUpdate",
    "SuggestionRequest",
    "SaveOutfitRequest",
    "ProfileUpdate",
    "validate_payload",
]
