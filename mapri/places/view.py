from __future__ import annotations

from datetime import datetime, time
from typing import Callable

from .collection import PlaceCollectionStore
from .criteria import CriteriaStore
from .derivation import derive_available_tags, derive_visible_places
from .models import FilterCriteria, Place

Clock = Callable[[], time | datetime | str]
ViewListener = Callable[[list[Place], list[str]], None]


class PlaceView:
    """
    Derived view over a collection store and a criteria store.

    Any change in either store re-runs both derivations against fresh
    snapshots and pushes the results to subscribers. Consumers get a new
    list on every emission and should re-render fully.
    """

    def __init__(
        self,
        collection: PlaceCollectionStore,
        criteria: CriteriaStore,
        clock: Clock | None = None,
    ) -> None:
        self._collection = collection
        self._criteria = criteria
        self._clock = clock
        self._subscribers: list[ViewListener] = []
        self._visible: list[Place] = []
        self._available_tags: list[str] = []
        self._unsubscribe = [
            collection.listen(lambda _places: self.refresh()),
            criteria.listen(self._on_criteria),
        ]
        self._last_type_filter = criteria.snapshot().type_filter
        self.refresh()

    @property
    def visible(self) -> list[Place]:
        return list(self._visible)

    @property
    def available_tags(self) -> list[str]:
        return list(self._available_tags)

    def subscribe(self, callback: ViewListener) -> Callable[[], None]:
        self._subscribers.append(callback)
        callback(self.visible, self.available_tags)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _on_criteria(self, criteria: FilterCriteria) -> None:
        # Tag vocabulary depends on the type filter only
        recompute_tags = criteria.type_filter != self._last_type_filter
        self._last_type_filter = criteria.type_filter
        self.refresh(recompute_tags=recompute_tags)

    def refresh(self, recompute_tags: bool = True) -> None:
        places = self._collection.places
        criteria = self._criteria.snapshot()
        now = self._clock() if self._clock else None

        self._visible = derive_visible_places(places, criteria, now)
        if recompute_tags:
            self._available_tags = derive_available_tags(places, criteria.type_filter)

        for subscriber in list(self._subscribers):
            subscriber(self.visible, self.available_tags)

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        self._subscribers.clear()
