"""
Derived place views.

Responsibilities:
- Narrow a place collection with the type, tag, price and open-now filters.
- Order the survivors by distance from the user when asked to.
- Collect the tag vocabulary offered by the tag filter for a given type.

Both derivations are pure: they read the snapshots passed in and return new
lists, so they can be re-run on every state change.
"""
from __future__ import annotations

from datetime import datetime, time
from typing import Iterable

from .geo import distance_meters
from .hours import format_time_of_day, is_open_now
from .models import FilterCriteria, Place, PlaceType, PriceRange


def _matches_type(place: Place, type_filter: PlaceType | None) -> bool:
    return type_filter is None or place.type == type_filter


def _matches_tags(place: Place, tag_filters: list[str]) -> bool:
    if not tag_filters:
        return True
    # Untagged places never satisfy an active tag filter
    if not place.tags:
        return False
    names = set(place.tag_names)
    return all(tag in names for tag in tag_filters)


def _matches_price(place: Place, price_ceiling: PriceRange | None) -> bool:
    if price_ceiling is None:
        return True
    if place.price_range is None:
        # Places without price data are never excluded
        return True
    return place.price_range.rank <= price_ceiling.rank


def place_matches(place: Place, criteria: FilterCriteria, now: str) -> bool:
    """Run the filter chain for a single place; ``now`` is ``HH:MM``."""
    if not _matches_type(place, criteria.type_filter):
        return False
    if not _matches_tags(place, criteria.tag_filters):
        return False
    if not _matches_price(place, criteria.price_ceiling):
        return False
    if criteria.open_only and not is_open_now(place, now):
        return False
    return True


def derive_visible_places(
    places: Iterable[Place],
    criteria: FilterCriteria,
    now: time | datetime | str | None = None,
) -> list[Place]:
    """Return the filtered, optionally distance-sorted subset of ``places``."""
    current = format_time_of_day(now)
    visible = [p for p in places if place_matches(p, criteria, current)]

    position = criteria.user_position
    if criteria.sort_by_distance and position is not None:
        # sorted() is stable: equal distances keep collection order
        visible = sorted(
            visible,
            key=lambda p: distance_meters(position.lat, position.lng, p.lat, p.lng),
        )

    return visible


def derive_available_tags(
    places: Iterable[Place],
    type_filter: PlaceType | None = None,
) -> list[str]:
    """Distinct tag names across places of ``type_filter`` (or all places)."""
    names: set[str] = set()
    for place in places:
        if _matches_type(place, type_filter):
            names.update(place.tag_names)
    return sorted(names)
