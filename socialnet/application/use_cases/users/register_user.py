# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
from datetime import UTC, datetime

from socialnet.application.services.credentials import normalize_email
from socialnet.domain.users.entities import User
from socialnet.domain.users.exceptions import EmailAlreadyTakenError
from socialnet.domain.users.repositories import PasswordHasher, UserRepository
from socialnet.shared.logging import logger


def gravatar_url(email: str, *, size: int = 200) -> str:
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()  # noqa: S324
    return f"https://www.gravatar.com/avatar/{digest}?s={size}&r=pg&d=mm"


class RegisterUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str, avatar: str | None = None) -> User:
        email = normalize_email(email)
        if self._users.find_by_email(email):
            raise EmailAlreadyTakenError(context={"field": "email"})

        user = User(
            id=0,
            email=email,
            name=name.strip(),
            avatar=avatar or gravatar_url(email),
            password_hash=self._password_hasher.hash(password),
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        logger.info(f"users.register: ok (user_id={persisted.id})")
        return persisted
