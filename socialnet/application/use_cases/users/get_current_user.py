"""Use-case for resolving the caller behind a verified token."""

from __future__ import annotations

from socialnet.domain.auth import Identity
from socialnet.domain.users.entities import User
from socialnet.domain.users.exceptions import UserNotFoundError
from socialnet.domain.users.repositories import UserRepository


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, identity: Identity) -> User:
        user = self._users.find_by_id(identity.user_id)
        if user is None:
            raise UserNotFoundError(identity.user_id)
        return user
