# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from socialnet.domain.profiles.entities import Profile
from socialnet.domain.profiles.exceptions import ProfileNotFoundError
from socialnet.domain.profiles.repositories import ProfileRepository


class GetProfileUseCase:
    def __init__(self, *, profiles: ProfileRepository) -> None:
        self._profiles = profiles

    def by_user(self, user_id: int) -> Profile:
        profile = self._profiles.find_by_user(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    def by_handle(self, handle: str) -> Profile:
        profile = self._profiles.find_by_handle(handle.lower())
        if profile is None:
            raise ProfileNotFoundError(handle)
        return profile


class ListProfilesUseCase:
    def __init__(self, *, profiles: ProfileRepository) -> None:
        self._profiles = profiles

    def execute(self) -> Sequence[Profile]:
        return self._profiles.list_all()
