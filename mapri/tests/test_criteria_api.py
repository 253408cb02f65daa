from __future__ import annotations

from fastapi.testclient import TestClient

from mapri.app import app, reset_state
from mapri.places.geo import distance_meters

PARIS = {"lat": 48.8566, "lng": 2.3522}


def _fresh_client() -> TestClient:
    reset_state()
    return TestClient(app)


def _ids(c, now: str = "12:00") -> list[str]:
    return [p["id"] for p in c.get("/places", params={"now": now}).json()["places"]]


def test_criteria_defaults():
    c = _fresh_client()
    body = c.get("/criteria").json()
    assert body == {
        "typeFilter": None,
        "tagFilters": [],
        "priceCeiling": None,
        "openOnly": False,
        "sortByDistance": True,
        "userPosition": None,
    }


def test_type_filter():
    c = _fresh_client()
    resp = c.put("/criteria/type", json={"type": "cafe"})
    assert resp.json()["typeFilter"] == "cafe"
    assert _ids(c) == ["p-flore"]

    c.put("/criteria/type", json={"type": None})
    assert len(_ids(c)) == 6


def test_tag_filters_narrow():
    c = _fresh_client()
    c.post("/criteria/tags/historique/toggle")
    assert _ids(c) == ["p-flore", "p-bouillon"]

    c.post("/criteria/tags/terrasse/toggle")
    assert _ids(c) == ["p-flore"]

    c.post("/criteria/tags/historique/toggle")
    assert _ids(c) == ["p-luxembourg", "p-flore"]

    c.delete("/criteria/tags")
    assert len(_ids(c)) == 6


def test_type_change_clears_tags():
    c = _fresh_client()
    c.post("/criteria/tags/cocktails/toggle")
    body = c.put("/criteria/type", json={"type": "bar"}).json()
    assert body["tagFilters"] == []
    assert body["typeFilter"] == "bar"


def test_price_ceiling():
    c = _fresh_client()
    c.put("/criteria/price", json={"priceRange": "€€"})
    ids = _ids(c)
    assert "p-flore" not in ids
    assert "p-luxembourg" in ids
    assert "p-canal" in ids
    assert len(ids) == 5

    c.put("/criteria/price", json={"priceRange": "€"})
    assert _ids(c) == ["p-luxembourg", "p-bouillon", "p-canal"]

    c.put("/criteria/price", json={"priceRange": None})
    assert len(_ids(c)) == 6


def test_open_only():
    c = _fresh_client()
    c.put("/criteria/open-only", json={"enabled": True})
    assert "p-candelaria" not in _ids(c, "12:00")
    assert _ids(c, "03:00") == ["p-canal"]
    assert set(_ids(c, "23:30")) == {"p-flore", "p-candelaria", "p-bouillon", "p-canal"}


def test_sort_by_distance_with_position():
    c = _fresh_client()
    c.put("/position", json=PARIS)
    places = c.get("/places", params={"now": "12:00"}).json()["places"]

    distances = [
        distance_meters(PARIS["lat"], PARIS["lng"], p["lat"], p["lng"]) for p in places
    ]
    assert distances == sorted(distances)
    assert all(p["distanceLabel"] for p in places)
    assert all(p["distance"] is not None for p in places)


def test_sort_toggle_and_position_clear_restore_order():
    c = _fresh_client()
    original = _ids(c)
    c.put("/position", json=PARIS)
    sorted_ids = _ids(c)
    assert sorted(sorted_ids) == sorted(original)

    c.put("/criteria/sort-by-distance", json={"enabled": False})
    assert _ids(c) == original

    c.put("/criteria/sort-by-distance", json={"enabled": True})
    assert _ids(c) == sorted_ids

    c.delete("/position")
    assert _ids(c) == original


def test_position_validation():
    c = _fresh_client()
    assert c.put("/position", json={"lat": 95.0, "lng": 2.0}).status_code == 422


def test_criteria_persist_across_reloads():
    c = _fresh_client()
    c.post("/profile", json={"username": "jules", "avatarUrl": "https://a/1.svg"})
    c.put("/criteria/type", json={"type": "bar"})
    c.post("/places", json={"name": "Le Syndicat", "type": "bar", "lat": 48.87, "lng": 2.35})
    assert len(_ids(c)) == 2
    assert c.get("/criteria").json()["typeFilter"] == "bar"


def test_criteria_are_per_session():
    c1 = _fresh_client()
    c2 = TestClient(app)
    c1.put("/criteria/type", json={"type": "park"})
    assert _ids(c1) == ["p-luxembourg"]
    assert len(_ids(c2)) == 6


def test_reset_criteria():
    c = _fresh_client()
    c.put("/criteria/open-only", json={"enabled": True})
    assert c.delete("/criteria").json()["openOnly"] is False
    assert c.get("/criteria").json()["openOnly"] is False


def test_available_tags_follow_type_only():
    c = _fresh_client()
    c.put("/criteria/type", json={"type": "cafe"})
    assert c.get("/tags/available").json() == {"type": "cafe", "tags": ["historique", "terrasse"]}

    c.put("/criteria/price", json={"priceRange": "€"})
    c.put("/criteria/open-only", json={"enabled": True})
    assert c.get("/tags/available").json()["tags"] == ["historique", "terrasse"]
