# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.application.services.post_mutator import PostMutator
from socialnet.application.services.token_service import Clock, utc_now
from socialnet.domain.posts.entities import Post


class LikePostUseCase:
    def __init__(self, *, mutator: PostMutator, clock: Clock = utc_now) -> None:
        self._mutator = mutator
        self._clock = clock

    def execute(self, post_id: int, user_id: int, *, deadline: float | None = None) -> Post:
        return self._mutator.apply(
            "like",
            post_id,
            lambda post: post.with_like(user_id, self._clock()),
            deadline=deadline,
        )


class UnlikePostUseCase:
    def __init__(self, *, mutator: PostMutator) -> None:
        self._mutator = mutator

    def execute(self, post_id: int, user_id: int, *, deadline: float | None = None) -> Post:
        return self._mutator.apply(
            "unlike",
            post_id,
            lambda post: post.without_like(user_id),
            deadline=deadline,
        )
