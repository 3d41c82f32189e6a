# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Optimistic-concurrency driver for post documents."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_before_delay,
    wait_random_exponential,
)

from socialnet.domain.posts.entities import Post
from socialnet.domain.posts.exceptions import PostNotFoundError
from socialnet.domain.posts.repositories import PostRepository
from socialnet.infrastructure.observability import POST_CONFLICTS, POST_MUTATIONS
from socialnet.shared.config import StoreConfig
from socialnet.shared.errors.base import AppError, MutationTimeoutError
from socialnet.shared.logging import logger

PostChange = Callable[[Post], Post]


class StaleWriteError(Exception):
    def __init__(self, post_id: int, version: int) -> None:
        super().__init__(f"post {post_id} changed since version {version}")
        self.post_id = post_id
        self.version = version


class PostMutator:
    """Apply a change to one post, re-reading and retrying on version conflicts.

    ``change`` receives the freshly loaded post and returns the next state,
    or raises a domain error which is final and never retried. The write is
    a single conditional replace, so an exhausted budget leaves the stored
    post exactly as another writer left it.
    """

    def __init__(self, *, posts: PostRepository, config: StoreConfig) -> None:
        self._posts = posts
        self._config = config

    def apply(
        self,
        operation: str,
        post_id: int,
        change: PostChange,
        *,
        deadline: float | None = None,
    ) -> Post:
        budget = deadline if deadline is not None else self._config.mutation_deadline
        retrying = Retrying(
            stop=stop_after_attempt(self._config.max_attempts) | stop_before_delay(budget),
            wait=wait_random_exponential(
                multiplier=self._config.backoff_base,
                max=self._config.backoff_cap,
            ),
            retry=retry_if_exception_type(StaleWriteError),
            reraise=False,
        )

        try:
            for attempt in retrying:
                with attempt:
                    return self._attempt(operation, post_id, change)
        except RetryError as exc:
            attempts = exc.last_attempt.attempt_number
            POST_MUTATIONS.labels(operation=operation, outcome="timeout").inc()
            logger.warning(
                f"posts.{operation}: gave up (post_id={post_id}, attempts={attempts}, budget_s={budget})"
            )
            raise MutationTimeoutError(operation, attempts) from exc
        except AppError as exc:
            POST_MUTATIONS.labels(operation=operation, outcome=exc.code).inc()
            raise

        raise RuntimeError("post_mutator: reached unexpected branch")

    def _attempt(self, operation: str, post_id: int, change: PostChange) -> Post:
        current = self._posts.get(post_id)
        if current is None:
            raise PostNotFoundError(post_id)

        updated = change(current)
        if not self._posts.replace(updated, expected_version=current.version):
            POST_CONFLICTS.labels(operation=operation).inc()
            logger.debug(f"posts.{operation}: conflict (post_id={post_id}, version={current.version})")
            raise StaleWriteError(post_id, current.version)

        POST_MUTATIONS.labels(operation=operation, outcome="ok").inc()
        return replace(updated, version=current.version + 1)


__all__ = ["PostChange", "PostMutator", "StaleWriteError"]
