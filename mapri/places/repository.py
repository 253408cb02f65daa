from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import pandas as pd

from .models import Place, Tag

logger = logging.getLogger(__name__)

REQUIRED_SEED_COLUMNS: tuple[str, ...] = ("id", "name", "type", "lat", "lng")


class PlaceNotFoundError(KeyError):
    pass


class PlaceRepository(Protocol):
    def load(self) -> list[Place]: ...

    def create(self, place: Place) -> bool: ...

    def update(self, place: Place) -> bool: ...

    def delete(self, place_id: str) -> bool: ...


class InMemoryPlaceRepository:
    """Dict-backed place storage; ``load`` returns copies in insertion order."""

    def __init__(self, places: list[Place] | None = None) -> None:
        self._places: dict[str, Place] = {}
        self.reset(places)

    def reset(self, places: list[Place] | None = None) -> None:
        self._places.clear()
        for place in places or []:
            self._places[place.id] = place.model_copy(deep=True)

    def load(self) -> list[Place]:
        return [p.model_copy(deep=True) for p in self._places.values()]

    def create(self, place: Place) -> bool:
        if place.id in self._places:
            return False
        self._places[place.id] = place.model_copy(deep=True)
        return True

    def update(self, place: Place) -> bool:
        if place.id not in self._places:
            raise PlaceNotFoundError(place.id)
        self._places[place.id] = place.model_copy(deep=True)
        return True

    def delete(self, place_id: str) -> bool:
        if place_id not in self._places:
            raise PlaceNotFoundError(place_id)
        del self._places[place_id]
        return True


# ── CSV seed ─────────────────────────────────────────────────────────────


def _split(value: object) -> list[str]:
    if value is None or pd.isna(value):
        return []
    return [part.strip() for part in str(value).split("|") if part.strip()]


def _optional(value: object) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _row_to_place(row: pd.Series) -> Place:
    tag_names = _split(row.get("tags"))
    photos = _split(row.get("photos"))
    return Place(
        id=str(row["id"]),
        name=str(row["name"]),
        type=str(row["type"]),
        lat=float(row["lat"]),
        lng=float(row["lng"]),
        address=_optional(row.get("address")) or "",
        tags=[Tag(id=f"{row['id']}-{i}", name=n) for i, n in enumerate(tag_names)] or None,
        opening_time=_optional(row.get("opening_time")),
        closing_time=_optional(row.get("closing_time")),
        price_range=_optional(row.get("price_range")),
        username=_optional(row.get("username")),
        avatar_url=_optional(row.get("avatar_url")),
        photos=photos or None,
    )


def load_seed_places(path: Path) -> list[Place]:
    """Read seed places from a CSV file with ``|``-separated tags and photos."""
    df = pd.read_csv(path, dtype={"id": str, "opening_time": str, "closing_time": str})
    missing = [c for c in REQUIRED_SEED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Seed file {path} is missing columns: {', '.join(missing)}")

    places = [_row_to_place(row) for _, row in df.iterrows()]
    logger.info("Loaded %d seed places from %s", len(places), path)
    return places
