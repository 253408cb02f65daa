from __future__ import annotations

import logging
import uuid
from typing import Callable

from .models import Place, PlaceCreate, PlaceUpdate
from .repository import PlaceNotFoundError, PlaceRepository

logger = logging.getLogger(__name__)

CollectionListener = Callable[[list[Place]], None]


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


class PlaceCollectionStore:
    """
    Authoritative in-memory snapshot of the place collection.

    Mutations go through the repository and are always followed by a full
    ``load()``; the snapshot is replaced wholesale, never patched. Repository
    failures are logged and surfaced through ``error`` instead of raised.
    """

    def __init__(self, repository: PlaceRepository) -> None:
        self._repository = repository
        self._places: list[Place] = []
        self._listeners: list[CollectionListener] = []
        self.is_loading: bool = False
        self.error: str | None = None
        self.current_place_id: str | None = None

    @property
    def places(self) -> list[Place]:
        return list(self._places)

    def listen(self, callback: CollectionListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _publish(self, places: list[Place]) -> None:
        self._places = places
        for listener in list(self._listeners):
            listener(self.places)

    def get(self, place_id: str) -> Place | None:
        return next((p for p in self._places if p.id == place_id), None)

    def select(self, place_id: str | None) -> None:
        self.current_place_id = place_id

    @property
    def current_place(self) -> Place | None:
        return self.get(self.current_place_id) if self.current_place_id else None

    # ── Loading ──────────────────────────────────────────────────────────

    def initialize(self) -> bool:
        loaded = self.load()
        if loaded:
            logger.info("Place store initialized with %d places", len(self._places))
        else:
            self.error = "Failed to initialize application data"
        return loaded

    def load(self) -> bool:
        try:
            self.is_loading = True
            self.error = None
            places = self._repository.load()
        except Exception:
            logger.exception("Error loading places")
            self.error = "Failed to load places"
            return False
        finally:
            self.is_loading = False

        logger.debug("Reloaded %d places", len(places))
        self._publish(places)
        return True

    # ── Mutations ────────────────────────────────────────────────────────

    def _mutate(self, action: str, operation: Callable[[], bool]) -> bool:
        try:
            self.is_loading = True
            self.error = None
            success = operation()
        except PlaceNotFoundError:
            self.error = "Place not found"
            return False
        except Exception:
            logger.exception("Error trying to %s place", action)
            self.error = f"Failed to {action} place"
            return False
        finally:
            self.is_loading = False

        if not success:
            self.error = f"Failed to {action} place in database"
            return False
        return self.load()

    def add(self, data: PlaceCreate) -> Place | None:
        place = Place(id=generate_id(), **data.model_dump())
        if self._mutate("add", lambda: self._repository.create(place)):
            return self.get(place.id)
        return None

    def update(self, place_id: str, data: PlaceUpdate) -> Place | None:
        existing = self.get(place_id)
        if existing is None:
            self.error = "Place not found"
            return None

        updated = Place.model_validate({
            **existing.model_dump(),
            **data.model_dump(exclude_unset=True),
        })
        if self._mutate("update", lambda: self._repository.update(updated)):
            return self.get(place_id)
        return None

    def delete(self, place_id: str) -> bool:
        if self.get(place_id) is None:
            self.error = "Place not found"
            return False
        deleted = self._mutate("delete", lambda: self._repository.delete(place_id))
        if deleted and self.current_place_id == place_id:
            self.current_place_id = None
        return deleted

    def add_photo(self, place_id: str, url: str) -> Place | None:
        existing = self.get(place_id)
        if existing is None:
            self.error = "Place not found"
            return None

        photos = [*(existing.photos or []), url]
        updated = existing.model_copy(update={"photos": photos}, deep=True)
        if self._mutate("update", lambda: self._repository.update(updated)):
            return self.get(place_id)
        return None
