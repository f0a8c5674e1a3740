from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from server.api import create_app
from tools.weather_provider import MockWeatherProvider, WeatherSnapshot
from wardrobe_app.app import WardrobeApp
from wardrobe_app.config import AppConfig


@pytest.fixture()
def client(tmp_path: Path) -> TestClient:
    config = AppConfig(
        database_path=str(tmp_path / "api.db"),
        profile_dir=str(tmp_path / "profiles"),
        environment="test",
    )
    service = WardrobeApp(config, weather_provider=MockWeatherProvider(WeatherSnapshot(temperature=92.0)))
    return TestClient(create_app(service))


def _add(client: TestClient, **payload) -> dict:
    response = client.post("/users/demo/items", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "wardrobe-stylist", "environment": "test"}


def test_item_lifecycle(client: TestClient) -> None:
    tee = _add(client, name="Linen T-Shirt", category="tops", color="white", season="summer")
    _add(client, name="Black Jeans", category="bottoms", color="black")

    listed = client.get("/users/demo/items").json()
    assert [item["name"] for item in listed] == ["Linen T-Shirt", "Black Jeans"]
    assert [item["name"] for item in client.get("/users/demo/items", params={"category": "tops"}).json()] == ["Linen T-Shirt"]

    patched = client.patch(f"/users/demo/items/{tee['item_id']}", json={"color": "ivory"})
    assert patched.status_code == 200
    assert patched.json()["color"] == "ivory"

    assert client.delete(f"/users/demo/items/{tee['item_id']}").status_code == 204
    assert client.delete(f"/users/demo/items/{tee['item_id']}").status_code == 404


def test_invalid_item_returns_422_with_details(client: TestClient) -> None:
    response = client.post("/users/demo/items", json={"name": "Cape", "category": "capes", "color": "black"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["message"] == "Invalid wardrobe item"
    assert detail["errors"][0]["loc"] == ["category"]


def test_suggestions_endpoint(client: TestClient) -> None:
    _add(client, name="Linen T-Shirt", category="tops", color="white", season="summer")
    _add(client, name="Black Jeans", category="bottoms", color="black")

    response = client.post("/users/demo/suggestions", json={"occasion": "casual", "location": "Austin", "seed": 3})
    assert response.status_code == 200
    body = response.json()
    assert body["weather"] == {"temperature": 92.0, "condition": "clear"}
    [suggestion] = body["suggestions"]
    assert suggestion["reason"] == "Perfect for casual • Suitable for 92°F • Great color combination"
    assert suggestion["score"] == pytest.approx(0.97)


@pytest.mark.parametrize("payload", [{"category": None}, {"season": None}, {"name": None}, {"color": None}])
def test_patch_with_null_required_field_returns_422(client: TestClient, payload: dict) -> None:
    tee = _add(client, name="Linen T-Shirt", category="tops", color="white")

    response = client.patch(f"/users/demo/items/{tee['item_id']}", json=payload)

    assert response.status_code == 422
    assert client.get("/users/demo/items").json()[0]["name"] == "Linen T-Shirt"


def test_suggestions_ignore_unknown_body_keys(client: TestClient) -> None:
    _add(client, name="Linen T-Shirt", category="tops", color="white")
    _add(client, name="Black Jeans", category="bottoms", color="black")

    response = client.post(
        "/users/demo/suggestions",
        json={"occasion": "casual", "operation": 1, "self": 2, "payload": 3, "user_id": "other"},
    )

    assert response.status_code == 200
    assert len(response.json()["suggestions"]) == 1


def test_suggestions_without_body_default_to_casual(client: TestClient) -> None:
    response = client.post("/users/demo/suggestions")
    assert response.status_code == 200
    assert response.json()["occasion"] == "casual"
    assert response.json()["suggestions"] == []


def test_saved_outfit_favorite_share_flow(client: TestClient) -> None:
    tee = _add(client, name="Linen T-Shirt", category="tops", color="white")
    jeans = _add(client, name="Black Jeans", category="bottoms", color="black")

    created = client.post(
        "/users/demo/outfits",
        json={"item_ids": [tee["item_id"], jeans["item_id"]], "score": 0.91, "occasion": "weekend"},
    )
    assert created.status_code == 201
    outfit = created.json()
    assert outfit["name"] == "Weekend Outfit"

    favorite = client.post(f"/users/demo/outfits/{outfit['outfit_id']}/favorite")
    assert favorite.json()["is_favorite"] is True
    assert [o["outfit_id"] for o in client.get("/users/demo/outfits", params={"occasion": "weekend"}).json()] == [outfit["outfit_id"]]

    share = client.post(f"/users/demo/outfits/{outfit['outfit_id']}/share")
    assert share.status_code == 201
    shared = client.get(share.json()["share_path"])
    assert shared.status_code == 200
    assert [item["name"] for item in shared.json()["items"]] == ["Linen T-Shirt", "Black Jeans"]
    assert "user_id" not in shared.json()

    assert client.delete(f"/users/demo/outfits/{outfit['outfit_id']}").status_code == 204
    assert client.get(share.json()["share_path"]).status_code == 404
    assert client.post(f"/users/demo/outfits/{outfit['outfit_id']}/favorite").status_code == 404


def test_save_outfit_with_unknown_items_is_rejected(client: TestClient) -> None:
    response = client.post("/users/demo/outfits", json={"item_ids": ["a", "b"], "score": 0.5})
    assert response.status_code == 422


def test_profile_round_trip(client: TestClient) -> None:
    assert client.get("/users/demo/profile").json()["location"] is None

    response = client.put("/users/demo/profile", json={"location": "Austin", "style_preferences": {"fit": "slim"}})
    assert response.status_code == 200
    assert response.json()["location"] == "Austin"
    assert client.get("/users/demo/profile").json()["style_preferences"] == {"fit": "slim"}


def test_occasions_lists_the_offered_choices(client: TestClient) -> None:
    body = client.get("/occasions").json()
    assert body["default"] == "casual"
    assert body["occasions"][0] == "casual"
    assert {"formal", "date", "work"} <= set(body["occasions"])
