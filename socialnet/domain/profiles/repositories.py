# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Profile


class ProfileRepository(Protocol):
    def find_by_user(self, user_id: int) -> Profile | None: ...
    def find_by_handle(self, handle: str) -> Profile | None: ...
    def list_all(self) -> Sequence[Profile]: ...
    def save(self, profile: Profile) -> Profile: ...
    def delete_for_user(self, user_id: int) -> bool: ...
