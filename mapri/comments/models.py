from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommentCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    location_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    avatar_url: str | None = None
    content: str = Field(..., min_length=1, max_length=2000)


class Comment(CommentCreate):
    id: str = Field(..., min_length=1)


class CommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
