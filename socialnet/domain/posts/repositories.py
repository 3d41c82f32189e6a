# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Post


class PostRepository(Protocol):
    def list_recent(self) -> Sequence[Post]: ...
    def get(self, post_id: int) -> Post | None: ...
    def add(self, post: Post) -> Post: ...

    def replace(self, post: Post, *, expected_version: int) -> bool:
        """Store ``post`` only if the stored version still equals ``expected_version``.

        Implementations bump the version on success and return False when
        another writer got there first or the post no longer exists.
        """
        ...

    def delete(self, post_id: int) -> bool: ...
