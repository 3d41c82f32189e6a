# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid

from socialnet.application.services.post_mutator import PostMutator
from socialnet.application.services.token_service import Clock, utc_now
from socialnet.domain.auth import Identity
from socialnet.domain.posts.entities import Comment, Post
from socialnet.domain.posts.exceptions import CommentNotFoundError, CommentRemovalForbiddenError
from socialnet.shared.config import ContentConfig

from .validation import clean_text


class AddCommentUseCase:
    def __init__(
        self,
        *,
        mutator: PostMutator,
        content: ContentConfig,
        clock: Clock = utc_now,
    ) -> None:
        self._mutator = mutator
        self._content = content
        self._clock = clock

    def execute(
        self, post_id: int, author: Identity, text: str, *, deadline: float | None = None
    ) -> Post:
        body = clean_text(text, field="text", max_length=self._content.comment_max_length)
        comment = Comment(
            id=uuid.uuid4().hex,
            user_id=author.user_id,
            text=body,
            name=author.name,
            avatar=author.avatar,
            created_at=self._clock(),
        )
        return self._mutator.apply(
            "comment",
            post_id,
            lambda post: post.with_comment(comment),
            deadline=deadline,
        )


class RemoveCommentUseCase:
    """Remove a comment; allowed for the comment's author and the post's author."""

    def __init__(self, *, mutator: PostMutator) -> None:
        self._mutator = mutator

    def execute(
        self,
        post_id: int,
        comment_id: str,
        requester_id: int,
        *,
        deadline: float | None = None,
    ) -> Post:
        def change(post: Post) -> Post:
            comment = post.find_comment(comment_id)
            if comment is None:
                raise CommentNotFoundError(context={"post_id": post_id, "comment_id": comment_id})
            if not post.can_remove_comment(comment, requester_id):
                raise CommentRemovalForbiddenError(
                    context={"post_id": post_id, "comment_id": comment_id}
                )
            return post.without_comment(comment_id)

        return self._mutator.apply("uncomment", post_id, change, deadline=deadline)
