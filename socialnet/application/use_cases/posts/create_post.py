# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.application.services.token_service import Clock, utc_now
from socialnet.domain.auth import Identity
from socialnet.domain.posts.entities import Post
from socialnet.domain.posts.repositories import PostRepository
from socialnet.shared.config import ContentConfig
from socialnet.shared.logging import logger

from .validation import clean_text


class CreatePostUseCase:
    def __init__(
        self,
        *,
        posts: PostRepository,
        content: ContentConfig,
        clock: Clock = utc_now,
    ) -> None:
        self._posts = posts
        self._content = content
        self._clock = clock

    def execute(self, author: Identity, text: str) -> Post:
        body = clean_text(text, field="text", max_length=self._content.post_max_length)
        post = self._posts.add(
            Post(
                id=0,
                user_id=author.user_id,
                text=body,
                name=author.name,
                avatar=author.avatar,
                created_at=self._clock(),
            )
        )
        logger.info(f"posts.create: ok (post_id={post.id}, user_id={author.user_id})")
        return post
