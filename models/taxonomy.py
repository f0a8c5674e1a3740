"""Canonical wardrobe taxonomy and the fixed outfit rule tables.

Everything here is module-level constant data built once at import time.
The mappings are wrapped in :class:`types.MappingProxyType` and the sequences
are tuples or frozensets so no caller can mutate the rules between requests.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Tuple


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    if not isinstance(value, str):
        raise ValueError(f"Expected a string, got {value!r}")
    return value.strip().lower()


CATEGORIES: Tuple[str, ...] = ("tops", "bottoms", "shoes", "accessories", "outerwear")
TOP_CATEGORIES = frozenset({"tops", "outerwear"})
BOTTOM_CATEGORIES = frozenset({"bottoms"})

SEASONS: Tuple[str, ...] = ("spring", "summer", "fall", "winter", "all-season")
ALL_SEASON = "all-season"

# Occasions offered to users; only the STYLE_RULES keys carry dedicated keywords.
OCCASIONS: Tuple[str, ...] = ("casual", "work", "formal", "date", "workout", "party", "weekend")
DEFAULT_OCCASION = "casual"

STYLE_RULES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "formal": ("dress-shirt", "blazer", "slacks", "dress-shoes", "suit"),
        "casual": ("t-shirt", "jeans", "sneakers", "hoodie", "jacket"),
        "business": ("button-up", "slacks", "blazer", "loafers", "dress"),
        "sporty": ("athletic", "joggers", "sneakers", "tank", "shorts"),
        "date": ("dress", "blouse", "nice-top", "heels", "dress-shoes"),
    }
)

NEUTRAL_COLORS = frozenset({"black", "white", "gray", "beige", "navy", "brown"})
COMPLEMENTARY_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("blue", "orange"),
    ("red", "green"),
    ("yellow", "purple"),
)


class WeatherBucket(NamedTuple):
    name: str
    upper_bound: float
    preferred_seasons: frozenset


# Ordered by upper bound (exclusive, °F); the last bucket is open-ended.
WEATHER_BUCKETS: Tuple[WeatherBucket, ...] = (
    WeatherBucket("cold", 50.0, frozenset({"fall", "winter", ALL_SEASON})),
    WeatherBucket("mild", 70.0, frozenset({"spring", "fall", ALL_SEASON})),
    WeatherBucket("warm", 85.0, frozenset({"spring", "summer", ALL_SEASON})),
    WeatherBucket("hot", float("inf"), frozenset({"summer", ALL_SEASON})),
)


def temperature_bucket(temperature: float) -> WeatherBucket:
    """Return the weather bucket for a temperature in °F."""

    for bucket in WEATHER_BUCKETS:
        if temperature < bucket.upper_bound:
            return bucket
    return WEATHER_BUCKETS[-1]


def style_keywords(occasion: str | None) -> Tuple[str, ...]:
    """Keywords for an occasion, falling back to the casual list."""

    key = _normalize_key(occasion or "")
    return STYLE_RULES.get(key, STYLE_RULES[DEFAULT_OCCASION])


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(value)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {list(CATEGORIES)}")
    return key


def validate_season(value: str) -> str:
    """Validate a season, accepting ``all season`` and ``all_season`` spellings."""

    key = _normalize_key(value).replace("_", "-").replace(" ", "-")
    if key not in SEASONS:
        raise ValueError(f"Unsupported season '{value}'. Allowed: {list(SEASONS)}")
    return key


def normalise_tags(values: Iterable[str]) -> Tuple[str, ...]:
    """Strip, lower-case and deduplicate free-text tags, keeping first-seen order."""

    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return tuple(normalised)


__all__ = [
    "CATEGORIES",
    "TOP_CATEGORIES",
    "BOTTOM_CATEGORIES",
    "SEASONS",
    "ALL_SEASON",
    "OCCASIONS",
    "DEFAULT_OCCASION",
    "STYLE_RULES",
    "NEUTRAL_COLORS",
    "COMPLEMENTARY_PAIRS",
    "WEATHER_BUCKETS",
    "WeatherBucket",
    "temperature_bucket",
    "style_keywords",
    "validate_category",
    "validate_season",
    "normalise_tags",
]
