# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from socialnet.shared.errors.base import AuthorizationError, ConflictError, NotFoundError


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: int) -> None:
        super().__init__("post", post_id)


class AlreadyLikedError(ConflictError):
    code = "already_liked"


class NotLikedError(ConflictError):
    code = "not_liked"


class CommentNotFoundError(ConflictError):
    code = "comment_not_found"
    status = HTTPStatus.NOT_FOUND


class NotPostAuthorError(AuthorizationError):
    pass


class CommentRemovalForbiddenError(AuthorizationError):
    pass
