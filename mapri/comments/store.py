from __future__ import annotations

import logging
import uuid

from .models import Comment, CommentCreate
from .repository import CommentRepository

logger = logging.getLogger(__name__)


class CommentStore:
    """Comments of the place being viewed; reloaded after each change."""

    def __init__(self, repository: CommentRepository) -> None:
        self._repository = repository
        self.comments: list[Comment] = []
        self.location_id: str | None = None
        self.error: str | None = None

    def load(self, location_id: str) -> list[Comment]:
        self.error = None
        try:
            comments = self._repository.list_for_location(location_id)
        except Exception:
            logger.exception("Error loading comments for %s", location_id)
            self.error = "Failed to load comments"
            return self.comments

        self.location_id = location_id
        self.comments = comments
        return list(comments)

    def add(self, data: CommentCreate) -> Comment | None:
        self.error = None
        comment = Comment(id=uuid.uuid4().hex[:12], **data.model_dump())
        try:
            success = self._repository.create(comment)
        except Exception:
            logger.exception("Error adding comment")
            self.error = "Failed to add comment"
            return None

        if not success:
            self.error = "Failed to add comment to database"
            return None
        self.load(data.location_id)
        return comment

    def delete(self, comment_id: str, location_id: str) -> bool:
        self.error = None
        try:
            existing = self._repository.get(comment_id)
            if existing is None or existing.location_id != location_id:
                self.error = "Comment not found"
                return False
            success = self._repository.delete(comment_id)
        except Exception:
            logger.exception("Error deleting comment %s", comment_id)
            self.error = "Failed to delete comment"
            return False

        if not success:
            self.error = "Failed to delete comment from database"
            return False
        self.load(location_id)
        return True
