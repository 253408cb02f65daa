from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=50)
    avatar_url: str = Field(..., min_length=1)


class ProfileCodeRequest(BaseModel):
    code: str = Field(..., min_length=1)


class ProfileCodeResponse(BaseModel):
    code: str
