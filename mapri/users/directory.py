from __future__ import annotations

from typing import Iterable

from ..places.models import Place
from .models import User


class UserDirectory:
    """Known users, keyed by username (last save wins)."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def save(self, user: User) -> None:
        self._users[user.username] = user.model_copy()

    def list_users(self, places: Iterable[Place] = ()) -> list[User]:
        """
        Saved users, or users derived from place attribution when none
        were saved yet (deduplicated by username, first seen wins).
        """
        if self._users:
            return list(self._users.values())

        derived: dict[str, User] = {}
        for place in places:
            if place.username and place.avatar_url and place.username not in derived:
                derived[place.username] = User(
                    username=place.username, avatar_url=place.avatar_url,
                )
        return list(derived.values())

    def clear(self) -> None:
        self._users.clear()
