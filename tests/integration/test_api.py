"""HTTP adapter tests."""

from fastapi.testclient import TestClient

from poi_extractor.api.main import app

client = TestClient(app)

_ACTIVITIES = [
    {"title": "Visit the Imperial City (Dai Noi) in Hue", "category": "cultural"},
    {"title": "Lunch at Quan An Ngon restaurant", "category": "food"},
    {"title": "Rest and relax"},
]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_extract_pois():
    r = client.post(
        "/pois/extract",
        json={"activities": _ACTIVITIES, "tripContext": {"city": "Hue", "country": "Vietnam"}},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 2
    assert data["confidence_threshold"] == 0.5
    categories = {row["name"]: row["category"] for row in data["pois"]}
    assert categories == {"Imperial City (Dai Noi)": "cultural", "Quan An Ngon restaurant": "food"}


def test_extract_skips_malformed_entries():
    r = client.post("/pois/extract", json={"activities": [None, 7, {"title": None}], "trip_context": None})
    assert r.status_code == 200
    assert r.json()["pois"] == []


def test_stats_use_camel_case():
    r = client.get("/pois/stats")
    assert r.status_code == 200
    data = r.json()
    assert data["confidenceThreshold"] == 0.5
    assert "categoryKeywords" in data and "locationIndicators" in data


def test_patch_config_then_stats():
    r = client.patch("/pois/config", json={"confidenceThreshold": 0.8, "excludeWords": ["Tourist"]})
    assert r.status_code == 200
    assert r.json() == {"confidence_threshold": 0.8, "exclude_words": ["tourist"]}
    assert client.get("/pois/stats").json()["confidenceThreshold"] == 0.8


def test_patch_config_invalid_value():
    r = client.patch("/pois/config", json={"confidenceThreshold": 3})
    assert r.status_code == 422
    body = r.json()
    assert body["error"] is True
    assert body["code"] == "INVALID_CONFIG"
    assert body["details"] == ["confidenceThreshold"]
    assert client.get("/pois/stats").json()["confidenceThreshold"] == 0.5


def test_patch_config_unknown_key():
    r = client.patch("/pois/config", json={"maxResults": 10})
    assert r.status_code == 422
    assert r.json()["details"] == ["maxResults"]


def test_metrics_count_calls():
    client.post("/pois/extract", json={"activities": _ACTIVITIES})
    data = client.get("/metrics").json()
    assert data["total_calls"] == 1
    assert data["activities"] == 3
    assert data["pois"] == 2
