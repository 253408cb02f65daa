from __future__ import annotations

import time

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import EventType, get_events, record_event
from .comments.models import Comment, CommentCreate, CommentRequest
from .comments.repository import InMemoryCommentRepository
from .comments.store import CommentStore
from .config import DEFAULT_APP_CONFIG, configure_logging
from .places.collection import PlaceCollectionStore
from .places.criteria import CriteriaStore
from .places.derivation import derive_available_tags, derive_visible_places
from .places.geo import distance_meters, format_distance
from .places.hours import format_time_of_day, is_open_now
from .places.models import (
    HOUR_PATTERN,
    PLACE_TYPE_LABELS,
    FilterCriteria,
    PhotoRequest,
    Place,
    PlaceCreate,
    PlaceListResponse,
    PlaceOut,
    PlaceUpdate,
    PriceCeilingRequest,
    PriceRange,
    ToggleRequest,
    TypeFilterRequest,
    UserPosition,
)
from .places.repository import InMemoryPlaceRepository, load_seed_places
from .users.dependencies import require_user
from .users.directory import UserDirectory
from .users.models import ProfileCodeRequest, ProfileCodeResponse, User
from .users.profile import generate_profile_code, parse_profile_code

config = DEFAULT_APP_CONFIG
configure_logging(config)

app = FastAPI(title="Mapri Places API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=config.session_secret)


def _seed_places() -> list[Place]:
    if not config.seed_enabled or not config.seed_path.exists():
        return []
    return load_seed_places(config.seed_path)


place_repository = InMemoryPlaceRepository(_seed_places())
place_store = PlaceCollectionStore(place_repository)
place_store.initialize()

comment_repository = InMemoryCommentRepository()
comment_store = CommentStore(comment_repository)

user_directory = UserDirectory()


def reset_state() -> None:
    """Restore the seeded collection and drop comments and saved users."""
    place_repository.reset(_seed_places())
    place_store.select(None)
    place_store.load()
    comment_repository.clear()
    user_directory.clear()


def session_criteria(request: Request) -> CriteriaStore:
    """Criteria store for this session; every change is written back."""
    store = CriteriaStore.from_snapshot(request.session.get("criteria"))

    def persist(_criteria: FilterCriteria) -> None:
        request.session["criteria"] = store.dump()

    store.listen(persist)
    return store


def _get_place_or_404(place_id: str) -> Place:
    place = place_store.get(place_id)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


def _store_failure() -> HTTPException:
    return HTTPException(status_code=500, detail=place_store.error or "Place store error")


def _to_out(place: Place, position: UserPosition | None, now: str) -> PlaceOut:
    distance = None
    if position is not None:
        distance = distance_meters(position.lat, position.lng, place.lat, place.lng)
    return PlaceOut(
        **place.model_dump(),
        distance=round(distance, 1) if distance is not None else None,
        distance_label=format_distance(distance) if distance is not None else None,
        is_open=is_open_now(place, now),
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "types": [{"value": t.value, "label": label} for t, label in PLACE_TYPE_LABELS.items()],
        "price_ranges": [p.value for p in PriceRange],
        "tags": derive_available_tags(place_store.places),
    }


# ── Profile endpoints ────────────────────────────────────────────────────


@app.post("/profile")
def choose_profile(body: User, request: Request) -> dict:
    request.session["user"] = body.model_dump()
    user_directory.save(body)
    return {"status": "ok", "user": body.model_dump(by_alias=True)}


@app.get("/profile")
def profile(user: User = Depends(require_user)) -> dict:
    return user.model_dump(by_alias=True)


@app.get("/profile/code", response_model=ProfileCodeResponse)
def profile_code(user: User = Depends(require_user)) -> ProfileCodeResponse:
    return ProfileCodeResponse(code=generate_profile_code(user))


@app.post("/profile/import")
def import_profile(body: ProfileCodeRequest, request: Request) -> dict:
    user = parse_profile_code(body.code)
    if user is None:
        raise HTTPException(status_code=400, detail="Invalid profile code")
    request.session["user"] = user.model_dump()
    user_directory.save(user)
    return {"status": "ok", "user": user.model_dump(by_alias=True)}


@app.get("/users")
def users() -> list[dict]:
    return [u.model_dump(by_alias=True) for u in user_directory.list_users(place_store.places)]


# ── Places ───────────────────────────────────────────────────────────────


@app.get("/places", response_model=PlaceListResponse)
def list_places(
    now: str | None = Query(default=None, pattern=HOUR_PATTERN),
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> PlaceListResponse:
    start_time = time.time()

    places = place_store.places
    criteria = criteria_store.snapshot()
    current = format_time_of_day(now)
    visible = derive_visible_places(places, criteria, current)
    items = [_to_out(p, criteria.user_position, current) for p in visible]

    elapsed_ms = round((time.time() - start_time) * 1000, 3)
    record_event(EventType.view, {
        "type_filter": criteria.type_filter.value if criteria.type_filter else None,
        "tag_filters": list(criteria.tag_filters),
        "price_ceiling": criteria.price_ceiling.value if criteria.price_ceiling else None,
        "open_only": criteria.open_only,
        "sorted_by_distance": criteria.sort_by_distance and criteria.user_position is not None,
        "results": len(items),
        "response_time_ms": elapsed_ms,
    })

    return PlaceListResponse(
        places=items,
        total=len(items),
        total_unfiltered=len(places),
        criteria=criteria,
    )


@app.get("/places/{place_id}", response_model=Place)
def get_place(place_id: str) -> Place:
    return _get_place_or_404(place_id)


@app.post("/places", response_model=Place, status_code=201)
def add_place(body: PlaceCreate, user: User = Depends(require_user)) -> Place:
    data = body.model_copy(update={
        "username": body.username or user.username,
        "avatar_url": body.avatar_url or user.avatar_url,
    })
    place = place_store.add(data)
    if place is None:
        raise _store_failure()
    record_event(EventType.place_change, {"action": "add", "place_id": place.id})
    return place


@app.patch("/places/{place_id}", response_model=Place)
def update_place(
    place_id: str,
    body: PlaceUpdate,
    user: User = Depends(require_user),
) -> Place:
    _get_place_or_404(place_id)
    place = place_store.update(place_id, body)
    if place is None:
        raise _store_failure()
    record_event(EventType.place_change, {"action": "update", "place_id": place_id})
    return place


@app.delete("/places/{place_id}")
def delete_place(place_id: str, user: User = Depends(require_user)) -> dict:
    _get_place_or_404(place_id)
    if not place_store.delete(place_id):
        raise _store_failure()
    comment_repository.delete_for_location(place_id)
    record_event(EventType.place_change, {"action": "delete", "place_id": place_id})
    return {"status": "deleted"}


@app.post("/places/{place_id}/photos", response_model=Place)
def add_photo(
    place_id: str,
    body: PhotoRequest,
    user: User = Depends(require_user),
) -> Place:
    _get_place_or_404(place_id)
    place = place_store.add_photo(place_id, body.url)
    if place is None:
        raise _store_failure()
    return place


# ── Comments ─────────────────────────────────────────────────────────────


@app.get("/places/{place_id}/comments", response_model=list[Comment])
def list_comments(place_id: str) -> list[Comment]:
    _get_place_or_404(place_id)
    return comment_store.load(place_id)


@app.post("/places/{place_id}/comments", response_model=Comment, status_code=201)
def add_comment(
    place_id: str,
    body: CommentRequest,
    user: User = Depends(require_user),
) -> Comment:
    _get_place_or_404(place_id)
    comment = comment_store.add(CommentCreate(
        location_id=place_id,
        username=user.username,
        avatar_url=user.avatar_url,
        content=body.content,
    ))
    if comment is None:
        raise HTTPException(status_code=500, detail=comment_store.error)
    return comment


@app.delete("/places/{place_id}/comments/{comment_id}")
def delete_comment(
    place_id: str,
    comment_id: str,
    user: User = Depends(require_user),
) -> dict:
    _get_place_or_404(place_id)
    if not comment_store.delete(comment_id, place_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"status": "deleted"}


# ── Criteria ─────────────────────────────────────────────────────────────


@app.get("/criteria", response_model=FilterCriteria)
def get_criteria(criteria_store: CriteriaStore = Depends(session_criteria)) -> FilterCriteria:
    return criteria_store.snapshot()


@app.delete("/criteria", response_model=FilterCriteria)
def reset_criteria(request: Request) -> FilterCriteria:
    request.session.pop("criteria", None)
    return FilterCriteria()


@app.put("/criteria/type", response_model=FilterCriteria)
def set_type(
    body: TypeFilterRequest,
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> FilterCriteria:
    # Tags only make sense within one type
    criteria_store.set_type_filter(body.type, clear_tags=True)
    return criteria_store.snapshot()


@app.post("/criteria/tags/{name}/toggle", response_model=FilterCriteria)
def toggle_tag(
    name: str,
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> FilterCriteria:
    criteria_store.toggle_tag_filter(name)
    return criteria_store.snapshot()


@app.delete("/criteria/tags", response_model=FilterCriteria)
def clear_tags(criteria_store: CriteriaStore = Depends(session_criteria)) -> FilterCriteria:
    criteria_store.clear_tag_filters()
    return criteria_store.snapshot()


@app.put("/criteria/price", response_model=FilterCriteria)
def set_price(
    body: PriceCeilingRequest,
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> FilterCriteria:
    criteria_store.set_price_ceiling(body.price_range)
    return criteria_store.snapshot()


@app.put("/criteria/open-only", response_model=FilterCriteria)
def set_open_only(
    body: ToggleRequest,
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> FilterCriteria:
    criteria_store.set_open_only(body.enabled)
    return criteria_store.snapshot()


@app.put("/criteria/sort-by-distance", response_model=FilterCriteria)
def set_sort_by_distance(
    body: ToggleRequest,
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> FilterCriteria:
    criteria_store.set_sort_by_distance(body.enabled)
    return criteria_store.snapshot()


@app.put("/position", response_model=FilterCriteria)
def set_position(
    body: UserPosition,
    criteria_store: CriteriaStore = Depends(session_criteria),
) -> FilterCriteria:
    criteria_store.set_user_position(body)
    return criteria_store.snapshot()


@app.delete("/position", response_model=FilterCriteria)
def clear_position(criteria_store: CriteriaStore = Depends(session_criteria)) -> FilterCriteria:
    criteria_store.set_user_position(None)
    return criteria_store.snapshot()


@app.get("/tags/available")
def available_tags(criteria_store: CriteriaStore = Depends(session_criteria)) -> dict:
    criteria = criteria_store.snapshot()
    return {
        "type": criteria.type_filter.value if criteria.type_filter else None,
        "tags": derive_available_tags(place_store.places, criteria.type_filter),
    }


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: User = Depends(require_user)) -> dict:
    return compute_analytics(get_events())
