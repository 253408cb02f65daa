from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

HOUR_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
REQUIRED_PLACE_FIELDS = ("name", "type", "lat", "lng", "address")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlaceType(str, Enum):
    restaurant = "restaurant"
    bar = "bar"
    cafe = "cafe"
    park = "park"
    attraction = "attraction"
    other = "other"


PLACE_TYPE_LABELS: dict[PlaceType, str] = {
    PlaceType.restaurant: "Restaurant",
    PlaceType.bar: "Bar",
    PlaceType.cafe: "Café",
    PlaceType.park: "Parc",
    PlaceType.attraction: "Attraction",
    PlaceType.other: "Autre",
}


class PriceRange(str, Enum):
    """Price tier, one to three euro symbols."""

    low = "€"
    medium = "€€"
    high = "€€€"

    @property
    def rank(self) -> int:
        # Each tier repeats the same symbol, so the symbol count is the ordinal.
        return len(self.value)


class Tag(_CamelModel):
    id: str
    name: str = Field(..., min_length=1)


class UserPosition(_CamelModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class PlaceCreate(_CamelModel):
    name: str = Field(..., min_length=1)
    type: PlaceType
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    address: str = ""
    tags: list[Tag] | None = None
    opening_time: str | None = Field(default=None, pattern=HOUR_PATTERN)
    closing_time: str | None = Field(default=None, pattern=HOUR_PATTERN)
    price_range: PriceRange | None = None
    username: str | None = None
    avatar_url: str | None = None
    photos: list[str] | None = None


class Place(PlaceCreate):
    id: str = Field(..., min_length=1)

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags or []]


class PlaceUpdate(_CamelModel):
    """Partial update; only fields explicitly sent are merged."""

    name: str | None = Field(default=None, min_length=1)
    type: PlaceType | None = None
    lat: float | None = Field(default=None, ge=-90.0, le=90.0)
    lng: float | None = Field(default=None, ge=-180.0, le=180.0)
    address: str | None = None
    tags: list[Tag] | None = None
    opening_time: str | None = Field(default=None, pattern=HOUR_PATTERN)
    closing_time: str | None = Field(default=None, pattern=HOUR_PATTERN)
    price_range: PriceRange | None = None

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> PlaceUpdate:
        cleared = [
            name for name in REQUIRED_PLACE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"Cannot clear required fields: {', '.join(cleared)}")
        return self


class FilterCriteria(_CamelModel):
    type_filter: PlaceType | None = None
    tag_filters: list[str] = Field(default_factory=list)
    price_ceiling: PriceRange | None = None
    open_only: bool = False
    sort_by_distance: bool = True
    user_position: UserPosition | None = None


# ── Request / response bodies ────────────────────────────────────────────


class TypeFilterRequest(_CamelModel):
    type: PlaceType | None = None


class PriceCeilingRequest(_CamelModel):
    price_range: PriceRange | None = None


class ToggleRequest(_CamelModel):
    enabled: bool


class PhotoRequest(_CamelModel):
    url: str = Field(..., min_length=1)


class PlaceOut(Place):
    distance: float | None = None
    distance_label: str | None = None
    is_open: bool = True


class PlaceListResponse(_CamelModel):
    places: list[PlaceOut]
    total: int
    total_unfiltered: int
    criteria: FilterCriteria
