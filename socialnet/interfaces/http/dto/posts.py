from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreatePostRequestDTO(BaseModel):
    # Length and blankness are checked by the use case against ContentConfig.
    text: str | None = Field(default=None, max_length=20_000)


class CommentRequestDTO(BaseModel):
    text: str | None = Field(default=None, max_length=20_000)


class LikeDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    created_at: datetime


class CommentDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: int
    text: str
    name: str | None = None
    avatar: str | None = None
    created_at: datetime


class PostDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    text: str
    name: str | None = None
    avatar: str | None = None
    created_at: datetime
    likes: list[LikeDTO] = Field(default_factory=list)
    comments: list[CommentDTO] = Field(default_factory=list)


class DeletedDTO(BaseModel):
    success: bool = True
