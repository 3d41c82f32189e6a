# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Post aggregate with its embedded likes and comments.

Every mutator returns a new ``Post``; persistence decides whether the new
state wins by comparing ``version`` with what is stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from socialnet.domain.exceptions import InvariantViolation

from .exceptions import AlreadyLikedError, CommentNotFoundError, NotLikedError


@dataclass(slots=True, frozen=True)
class Like:
    user_id: int
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Comment:
    id: str
    user_id: int
    text: str
    name: str | None
    avatar: str | None
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Post:
    id: int
    user_id: int
    text: str
    name: str | None
    avatar: str | None
    created_at: datetime
    likes: tuple[Like, ...] = field(default_factory=tuple)
    comments: tuple[Comment, ...] = field(default_factory=tuple)
    version: int = 0

    def __post_init__(self) -> None:
        liked_by = [like.user_id for like in self.likes]
        if len(liked_by) != len(set(liked_by)):
            raise InvariantViolation("a user can like a post only once", field="likes")
        comment_ids = [comment.id for comment in self.comments]
        if len(comment_ids) != len(set(comment_ids)):
            raise InvariantViolation("comment ids must be unique", field="comments")

    def is_liked_by(self, user_id: int) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def find_comment(self, comment_id: str) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def with_like(self, user_id: int, at: datetime) -> Post:
        if self.is_liked_by(user_id):
            raise AlreadyLikedError(context={"post_id": self.id, "user_id": user_id})
        return replace(self, likes=(Like(user_id=user_id, created_at=at), *self.likes))

    def without_like(self, user_id: int) -> Post:
        if not self.is_liked_by(user_id):
            raise NotLikedError(context={"post_id": self.id, "user_id": user_id})
        return replace(self, likes=tuple(like for like in self.likes if like.user_id != user_id))

    def with_comment(self, comment: Comment) -> Post:
        if self.find_comment(comment.id) is not None:
            raise InvariantViolation("comment id already present", field="comments")
        return replace(self, comments=(comment, *self.comments))

    def without_comment(self, comment_id: str) -> Post:
        if self.find_comment(comment_id) is None:
            raise CommentNotFoundError(context={"post_id": self.id, "comment_id": comment_id})
        return replace(self, comments=tuple(c for c in self.comments if c.id != comment_id))

    def can_remove_comment(self, comment: Comment, requester_id: int) -> bool:
        return requester_id in (comment.user_id, self.user_id)
