from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from config import Configuration
from main import create_app

SITA_RAM = {"latitude": 28.6562, "longitude": 77.2410}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Configuration(seed_on_startup=True, log_level="WARNING")))


def test_healthz(client: TestClient) -> None:
    resp = client.get("/api/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"status": "ok"}}


def test_translate_to_english(client: TestClient) -> None:
    resp = client.post("/api/translate/to-english", json={"text": "jugaad"})
    body = resp.json()

    assert resp.status_code == 200
    assert body["success"] is True
    assert body["data"]["translated_text"] == "innovative solution"
    assert body["data"]["alternatives"][0]["text"] == "makeshift fix"


def test_translate_unknown_is_not_an_error(client: TestClient) -> None:
    resp = client.post("/api/translate", json={"text": "qwertyuiop"})
    assert resp.status_code == 200
    assert resp.json()["data"]["is_unknown"] is True


def test_translate_to_hindi(client: TestClient) -> None:
    resp = client.post("/api/translate/to-hindi", json={"text": "awesome", "region": "delhi"})
    assert resp.json()["data"]["translated_text"] == "fundoo"


def test_request_validation_maps_to_400(client: TestClient) -> None:
    resp = client.post("/api/translate/to-english", json={})
    body = resp.json()

    assert resp.status_code == 400
    assert body["success"] is False
    assert body["error"] == "VALIDATION_ERROR"


def test_term_lifecycle(client: TestClient) -> None:
    payload = {
        "term": "jhakaas",
        "region": "mumbai",
        "translations": [{"text": "excellent", "confidence": 0.9, "context": "slang"}],
        "popularity": 65,
    }
    created = client.post("/api/translate/terms", json=payload)
    assert created.status_code == 201
    term_id = created.json()["data"]["id"]

    duplicate = client.post("/api/translate/terms", json={**payload, "region": "Mumbai"})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "CONFLICT"

    updated = client.put(f"/api/translate/terms/{term_id}", json={"popularity": 70})
    assert updated.json()["data"]["popularity"] == 70

    assert client.delete(f"/api/translate/terms/{term_id}").status_code == 200
    missing = client.get(f"/api/translate/terms/{term_id}")
    assert missing.status_code == 404
    assert missing.json()["success"] is False


def test_food_recommendations(client: TestClient) -> None:
    resp = client.post("/api/food/recommendations", json={"location": SITA_RAM, "filters": {"radius_km": 2}})
    data = resp.json()["data"]

    assert [r["name"] for r in data] == ["Chole Bhature"]
    assert data[0]["vendor_name"] == "Sita Ram Diwan Chand"


def test_food_recommendations_reject_bad_latitude(client: TestClient) -> None:
    resp = client.post("/api/food/recommendations", json={"location": {"latitude": 100, "longitude": 0}})
    assert resp.status_code == 400


def test_food_hubs_and_safety(client: TestClient) -> None:
    hubs = client.get("/api/food/hubs/mumbai").json()["data"]
    assert hubs[0]["name"] == "Mumbai Food Hub"
    assert hubs[0]["popular_items"] == ["Vada Pav", "Pav Bhaji"]

    assert client.get("/api/food/hubs/atlantis").json()["data"] == []
    assert client.get("/api/food/vendors/nope/safety").status_code == 404


def test_culture_routes(client: TestClient) -> None:
    assert client.get("/api/culture/region/delhi").json()["data"]["region"] == "Delhi"
    assert client.get("/api/culture/festival/onam").status_code == 404
    tips = client.get("/api/culture/bargaining", params={"city": "Jaipur"}).json()["data"]
    assert tips[0]["context"] == "Auto-rickshaw"
    results = client.get("/api/culture/search", params={"q": "holi"}).json()["data"]
    assert results[0]["title"] == "Holi"


def test_admin_content_submission(client: TestClient) -> None:
    ok = client.post(
        "/api/admin/content",
        json={"kind": "cultural", "category": "custom", "title": "Touching feet", "description": "Greeting elders"},
    )
    assert ok.status_code == 201
    assert ok.json()["data"]["status"] == "pending"

    bad = client.post("/api/admin/content", json={"kind": "poem", "title": "x"})
    assert bad.status_code == 400
    assert bad.json()["details"]


def test_user_flow(client: TestClient) -> None:
    user = client.post("/api/users", json={}).json()["data"]
    fav = client.post(f"/api/users/{user['id']}/favorites", json={"type": "food", "item_id": "abc"})
    assert fav.status_code == 201

    client.post(f"/api/users/{user['id']}/history", json={"type": "slang", "query": "acha"})
    history = client.get(f"/api/users/{user['id']}/history").json()["data"]
    assert [h["query"] for h in history] == ["acha"]

    gone = client.delete(f"/api/users/{user['id']}/favorites/{fav.json()['data']['id']}")
    assert gone.status_code == 200
    assert client.get("/api/users/nobody").status_code == 404


def test_unknown_route_uses_envelope(client: TestClient) -> None:
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_ratings_below_one_rejected(client: TestClient) -> None:
    rating = {"overall": 0, "hygiene": 4, "freshness": 4, "popularity": 4}
    assert client.put("/api/food/vendors/any/safety", json=rating).status_code == 400

    resp = client.post("/api/food/recommendations", json={"location": SITA_RAM, "filters": {"min_rating": 0}})
    assert resp.status_code == 400
