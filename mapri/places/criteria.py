from __future__ import annotations

import logging
from typing import Any, Callable

from .models import FilterCriteria, PlaceType, PriceRange, UserPosition

logger = logging.getLogger(__name__)

CriteriaListener = Callable[[FilterCriteria], None]


class CriteriaStore:
    """Holds the filter/sort settings; each setter changes exactly one field.

    Every change replaces the held ``FilterCriteria`` with a fresh copy, so a
    snapshot handed out earlier never changes underneath its reader.
    """

    def __init__(self, criteria: FilterCriteria | None = None) -> None:
        self._criteria = criteria.model_copy(deep=True) if criteria else FilterCriteria()
        self._listeners: list[CriteriaListener] = []

    @classmethod
    def from_snapshot(cls, data: dict[str, Any] | None) -> CriteriaStore:
        """Rebuild a store from a ``dump()`` dict (e.g. a session entry)."""
        return cls(FilterCriteria.model_validate(data) if data else None)

    def dump(self) -> dict[str, Any]:
        return self._criteria.model_dump(mode="json")

    def snapshot(self) -> FilterCriteria:
        return self._criteria.model_copy(deep=True)

    def listen(self, callback: CriteriaListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set(self, **changes: Any) -> None:
        if all(getattr(self._criteria, k) == v for k, v in changes.items()):
            return
        self._criteria = self._criteria.model_copy(update=changes, deep=True)
        for listener in list(self._listeners):
            listener(self.snapshot())

    # ── Setters ──────────────────────────────────────────────────────────

    def set_type_filter(self, type_filter: PlaceType | None, clear_tags: bool = False) -> None:
        # Tag selections are scoped to a type, so callers usually clear them
        if clear_tags:
            self._set(type_filter=type_filter, tag_filters=[])
        else:
            self._set(type_filter=type_filter)

    def add_tag_filter(self, tag: str) -> None:
        current = self._criteria.tag_filters
        if tag not in current:
            self._set(tag_filters=[*current, tag])

    def remove_tag_filter(self, tag: str) -> None:
        self._set(tag_filters=[t for t in self._criteria.tag_filters if t != tag])

    def toggle_tag_filter(self, tag: str) -> None:
        if tag in self._criteria.tag_filters:
            self.remove_tag_filter(tag)
        else:
            self.add_tag_filter(tag)

    def clear_tag_filters(self) -> None:
        self._set(tag_filters=[])

    def set_price_ceiling(self, price_ceiling: PriceRange | None) -> None:
        self._set(price_ceiling=price_ceiling)

    def set_open_only(self, value: bool) -> None:
        self._set(open_only=value)

    def set_sort_by_distance(self, value: bool) -> None:
        self._set(sort_by_distance=value)

    def set_user_position(self, position: UserPosition | None) -> None:
        if position is not None:
            logger.debug("User position: %.5f, %.5f", position.lat, position.lng)
        self._set(user_position=position)
