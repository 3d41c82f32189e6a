# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.domain.posts.exceptions import NotPostAuthorError, PostNotFoundError
from socialnet.domain.posts.repositories import PostRepository
from socialnet.shared.logging import logger


class DeletePostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, post_id: int, requester_id: int) -> bool:
        post = self._posts.get(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        # The author never changes, so checking before the delete is race free.
        if post.user_id != requester_id:
            logger.warning(f"posts.delete: denied (post_id={post_id}, requester={requester_id})")
            raise NotPostAuthorError(context={"post_id": post_id})
        if not self._posts.delete(post_id):
            raise PostNotFoundError(post_id)
        logger.info(f"posts.delete: ok (post_id={post_id}, user_id={requester_id})")
        return True
