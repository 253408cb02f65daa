from __future__ import annotations

from typing import Protocol

from .models import Comment


class CommentRepository(Protocol):
    def get(self, comment_id: str) -> Comment | None: ...

    def list_for_location(self, location_id: str) -> list[Comment]: ...

    def create(self, comment: Comment) -> bool: ...

    def delete(self, comment_id: str) -> bool: ...

    def delete_for_location(self, location_id: str) -> None: ...


class InMemoryCommentRepository:
    def __init__(self) -> None:
        self._comments: dict[str, Comment] = {}

    def get(self, comment_id: str) -> Comment | None:
        comment = self._comments.get(comment_id)
        return comment.model_copy() if comment is not None else None

    def list_for_location(self, location_id: str) -> list[Comment]:
        return [
            c.model_copy() for c in self._comments.values()
            if c.location_id == location_id
        ]

    def create(self, comment: Comment) -> bool:
        if comment.id in self._comments:
            return False
        self._comments[comment.id] = comment.model_copy()
        return True

    def delete(self, comment_id: str) -> bool:
        return self._comments.pop(comment_id, None) is not None

    def delete_for_location(self, location_id: str) -> None:
        for cid in [c.id for c in self._comments.values() if c.location_id == location_id]:
            del self._comments[cid]

    def clear(self) -> None:
        self._comments.clear()
