from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from mapri.places.collection import PlaceCollectionStore
from mapri.places.models import Place, PlaceCreate, PlaceUpdate, Tag
from mapri.places.repository import InMemoryPlaceRepository


def _place(pid: str, **kwargs) -> Place:
    return Place(id=pid, name=pid.title(), type="park", lat=48.85, lng=2.35, **kwargs)


def _store(*places: Place) -> PlaceCollectionStore:
    store = PlaceCollectionStore(InMemoryPlaceRepository(list(places)))
    store.initialize()
    return store


def test_initialize_loads_places():
    store = _store(_place("a"), _place("b"))
    assert [p.id for p in store.places] == ["a", "b"]
    assert store.error is None
    assert store.is_loading is False


def test_add_generates_id_and_reloads():
    store = _store(_place("a"))
    seen: list[list[Place]] = []
    store.listen(seen.append)

    added = store.add(PlaceCreate(name="Canal", type="other", lat=48.87, lng=2.36))

    assert added is not None
    assert added.id
    assert added.id != "a"
    assert [p.id for p in store.places] == ["a", added.id]
    assert len(seen) == 1


def test_update_merges_partial_fields():
    store = _store(_place("a", price_range="€", tags=[Tag(id="t1", name="jardin")]))
    updated = store.update("a", PlaceUpdate(name="Renamed", price_range=None))

    assert updated is not None
    assert updated.name == "Renamed"
    assert updated.price_range is None
    assert updated.tag_names == ["jardin"]


def test_update_refuses_to_clear_required_fields():
    with pytest.raises(ValidationError, match="name"):
        PlaceUpdate(name=None)
    with pytest.raises(ValidationError, match="lat, lng"):
        PlaceUpdate.model_validate({"lat": None, "lng": None})
    assert PlaceUpdate(opening_time=None).model_fields_set == {"opening_time"}


def test_update_unknown_place_sets_error():
    store = _store(_place("a"))
    assert store.update("missing", PlaceUpdate(name="X")) is None
    assert store.error == "Place not found"


def test_delete_reloads_and_clears_selection():
    store = _store(_place("a"), _place("b"))
    store.select("a")
    assert store.current_place is not None

    assert store.delete("a") is True
    assert [p.id for p in store.places] == ["b"]
    assert store.current_place_id is None


def test_delete_unknown_place():
    store = _store(_place("a"))
    assert store.delete("missing") is False
    assert store.error == "Place not found"


def test_add_photo_appends():
    store = _store(_place("a", photos=["https://img/1.jpg"]))
    updated = store.add_photo("a", "https://img/2.jpg")
    assert updated is not None
    assert updated.photos == ["https://img/1.jpg", "https://img/2.jpg"]


def test_snapshot_is_replaced_not_patched():
    store = _store(_place("a"))
    before = store.places
    store.add(PlaceCreate(name="New", type="bar", lat=1.0, lng=1.0))
    assert [p.id for p in before] == ["a"]
    assert len(store.places) == 2


def test_load_failure_keeps_previous_snapshot():
    repo = MagicMock()
    repo.load.return_value = [_place("a")]
    store = PlaceCollectionStore(repo)
    store.initialize()

    repo.load.side_effect = RuntimeError("network down")
    assert store.load() is False
    assert store.error == "Failed to load places"
    assert [p.id for p in store.places] == ["a"]
    assert store.is_loading is False


def test_initialize_failure_sets_error():
    repo = MagicMock()
    repo.load.side_effect = RuntimeError("network down")
    store = PlaceCollectionStore(repo)
    assert store.initialize() is False
    assert store.error == "Failed to initialize application data"
    assert store.places == []


def test_create_rejected_sets_error():
    repo = MagicMock()
    repo.load.return_value = []
    repo.create.return_value = False
    store = PlaceCollectionStore(repo)

    assert store.add(PlaceCreate(name="X", type="bar", lat=1.0, lng=1.0)) is None
    assert store.error == "Failed to add place in database"


def test_update_exception_sets_error():
    repo = MagicMock()
    repo.load.return_value = [_place("a")]
    repo.update.side_effect = RuntimeError("timeout")
    store = PlaceCollectionStore(repo)
    store.load()

    assert store.update("a", PlaceUpdate(name="B")) is None
    assert store.error == "Failed to update place"
    assert store.places[0].name == "A"
