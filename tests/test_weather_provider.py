"""Weather lookups against a faked Open-Meteo API."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from tools import weather_provider
from tools.weather_provider import (
    FORECAST_URL,
    GEOCODING_URL,
    MockWeatherProvider,
    OpenMeteoProvider,
    WeatherSnapshot,
    condition_from_code,
)


class _FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self) -> Any:
        return self._payload


def _install_fake_api(monkeypatch: pytest.MonkeyPatch, responses: Dict[str, _FakeResponse]) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def fake_get(url: str, params: Dict[str, Any] | None = None, timeout: float | None = None) -> _FakeResponse:
        calls.append({"url": url, "params": params, "timeout": timeout})
        return responses[url]

    monkeypatch.setattr(weather_provider.requests, "get", fake_get)
    return calls


GEOCODE_OK = _FakeResponse({"results": [{"latitude": 48.85, "longitude": 2.35, "name": "Paris"}]})


@pytest.mark.parametrize(
    "code,condition",
    [
        (0, "clear"),
        (3, "clear"),
        (45, "foggy"),
        (48, "foggy"),
        (51, "drizzle"),
        (57, "drizzle"),
        (61, "rainy"),
        (67, "rainy"),
        (71, "snowy"),
        (77, "snowy"),
        (80, "stormy"),
        (82, "stormy"),
        (95, "clear"),
    ],
)
def test_condition_from_code(code: int, condition: str) -> None:
    assert condition_from_code(code) == condition


def test_open_meteo_returns_snapshot_in_fahrenheit(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_api(
        monkeypatch,
        {
            GEOCODING_URL: GEOCODE_OK,
            FORECAST_URL: _FakeResponse({"current_weather": {"temperature": 55.4, "weathercode": 63}}),
        },
    )
    provider = OpenMeteoProvider(timeout_seconds=2.0)

    snapshot = provider.get_current("Paris")

    assert snapshot == WeatherSnapshot(temperature=55.4, condition="rainy")
    assert calls[0]["params"] == {"name": "Paris", "count": 1}
    assert calls[1]["params"]["temperature_unit"] == "fahrenheit"
    assert calls[1]["params"]["latitude"] == 48.85
    assert all(call["timeout"] == 2.0 for call in calls)


def test_unknown_location_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_api(monkeypatch, {GEOCODING_URL: _FakeResponse({"results": []})})
    assert OpenMeteoProvider().get_current("Atlantis") is None
    assert len(calls) == 1


def test_missing_results_key_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake_api(monkeypatch, {GEOCODING_URL: _FakeResponse({"generationtime_ms": 0.5})})
    assert OpenMeteoProvider().get_current("Nowhere") is None


def test_http_error_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake_api(
        monkeypatch,
        {GEOCODING_URL: GEOCODE_OK, FORECAST_URL: _FakeResponse({}, status_code=503)},
    )
    assert OpenMeteoProvider().get_current("Paris") is None


def test_network_failure_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_get(*_: Any, **__: Any) -> _FakeResponse:
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(weather_provider.requests, "get", failing_get)
    assert OpenMeteoProvider().get_current("Paris") is None


def test_schema_violation_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake_api(
        monkeypatch,
        {GEOCODING_URL: GEOCODE_OK, FORECAST_URL: _FakeResponse({"current_weather": {"weathercode": 1}})},
    )
    assert OpenMeteoProvider().get_current("Paris") is None


def test_blank_location_skips_http(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_api(monkeypatch, {})
    assert OpenMeteoProvider().get_current("   ") is None
    assert calls == []


def test_mock_provider_records_requests() -> None:
    snapshot = WeatherSnapshot(temperature=61.0, condition="foggy")
    provider = MockWeatherProvider(snapshot)
    assert provider.get_current("Lisbon") is snapshot
    assert provider.requested_locations == ["Lisbon"]
    assert MockWeatherProvider().get_current("Lisbon") is None
