"""Weather provider abstractions and the Open-Meteo implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

import requests
from pydantic import BaseModel, ValidationError


LOGGER = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# Inclusive WMO weather-code ranges checked in order; anything else is "clear".
_CONDITION_RANGES = (
    (61, 67, "rainy"),
    (71, 77, "snowy"),
    (80, 82, "stormy"),
    (45, 48, "foggy"),
    (51, 57, "drizzle"),
)


class _GeocodeResult(BaseModel):
    latitude: float
    longitude: float
    name: str = ""


class _GeocodeResponse(BaseModel):
    results: List[_GeocodeResult] = []


class _CurrentWeather(BaseModel):
    temperature: float
    weathercode: int = 0


class _ForecastResponse(BaseModel):
    current_weather: _CurrentWeather


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions at a location; temperature is in °F."""

    temperature: float
    condition: str = "clear"


def condition_from_code(weather_code: int) -> str:
    """Map a WMO weather code to a coarse condition label."""

    for low, high, label in _CONDITION_RANGES:
        if low <= weather_code <= high:
            return label
    return "clear"


class WeatherProvider(ABC):
    """Abstract weather provider interface.

    Implementations return ``None`` instead of raising when no reading is
    available; callers treat that as "no weather constraint".
    """

    @abstractmethod
    def get_current(self, location: str) -> Optional[WeatherSnapshot]:
        """Return current weather for a location, or ``None``."""


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo provider with schema validation and graceful fallbacks."""

    def __init__(self, timeout_seconds: float = 5.0, session: requests.Session | None = None) -> None:
        self.timeout_seconds = timeout_seconds
        self.session = session

    def _get_json(self, url: str, params: dict) -> object:
        getter = self.session.get if self.session is not None else requests.get
        response = getter(url, params=params, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.json()

    def get_current(self, location: str) -> Optional[WeatherSnapshot]:
        if not location or not location.strip():
            LOGGER.warning("Skipping weather lookup", extra={"reason": "missing_location"})
            return None

        LOGGER.info("Fetching current weather")
        try:
            geocode = _GeocodeResponse.model_validate(
                self._get_json(GEOCODING_URL, {"name": location.strip(), "count": 1})
            )
            if not geocode.results:
                LOGGER.warning("Weather lookup failed", extra={"reason": "unknown_location"})
                return None

            place = geocode.results[0]
            forecast = _ForecastResponse.model_validate(
                self._get_json(
                    FORECAST_URL,
                    {
                        "latitude": place.latitude,
                        "longitude": place.longitude,
                        "current_weather": "true",
                        "temperature_unit": "fahrenheit",
                    },
                )
            )
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return None
        except ValidationError as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return None
        except ValueError as exc:
            LOGGER.error("Weather payload was not valid JSON", exc_info=exc)
            return None

        current = forecast.current_weather
        return WeatherSnapshot(
            temperature=current.temperature,
            condition=condition_from_code(current.weathercode),
        )


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests and local runs."""

    def __init__(self, snapshot: WeatherSnapshot | None = None) -> None:
        self.snapshot = snapshot
        self.requested_locations: List[str] = []

    def get_current(self, location: str) -> Optional[WeatherSnapshot]:
        LOGGER.info("Returning mock weather")
        self.requested_locations.append(location)
        return self.snapshot


__all__ = [
    "WeatherSnapshot",
    "WeatherProvider",
    "OpenMeteoProvider",
    "MockWeatherProvider",
    "condition_from_code",
]
