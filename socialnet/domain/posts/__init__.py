# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Comment, Like, Post
from .exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    CommentRemovalForbiddenError,
    NotLikedError,
    NotPostAuthorError,
    PostNotFoundError,
)
from .repositories import PostRepository

__all__ = [
    "AlreadyLikedError",
    "Comment",
    "CommentNotFoundError",
    "CommentRemovalForbiddenError",
    "Like",
    "NotLikedError",
    "NotPostAuthorError",
    "Post",
    "PostNotFoundError",
    "PostRepository",
]
