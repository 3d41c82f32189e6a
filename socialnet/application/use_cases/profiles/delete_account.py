# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.domain.profiles.repositories import ProfileRepository
from socialnet.domain.users.exceptions import UserNotFoundError
from socialnet.domain.users.repositories import UserRepository
from socialnet.shared.logging import logger


class DeleteAccountUseCase:
    def __init__(self, *, users: UserRepository, profiles: ProfileRepository) -> None:
        self._users = users
        self._profiles = profiles

    def execute(self, user_id: int) -> None:
        self._profiles.delete_for_user(user_id)
        if not self._users.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info(f"profiles.delete_account: ok (user_id={user_id})")
