# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from socialnet.domain.posts.entities import Post
from socialnet.domain.posts.exceptions import PostNotFoundError
from socialnet.domain.posts.repositories import PostRepository


class ListPostsUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self) -> Sequence[Post]:
        return self._posts.list_recent()


class GetPostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, post_id: int) -> Post:
        post = self._posts.get(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post
