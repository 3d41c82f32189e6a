# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from functools import cached_property

from werkzeug.security import check_password_hash, generate_password_hash

from socialnet.domain.users.entities import User
from socialnet.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from socialnet.domain.users.repositories import PasswordHasher, UserRepository
from socialnet.shared.logging import logger


def normalize_email(email: str) -> str:
    return email.strip().lower()


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted PBKDF2/scrypt hashes in werkzeug's self-describing format."""

    def hash(self, password: str) -> str:
        return generate_password_hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return check_password_hash(hashed, password)


class CredentialStore:
    """User lookup and password checks.

    A password check costs one hash comparison whether or not the account
    exists, so response timing does not reveal registered e-mails.
    """

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    @cached_property
    def _dummy_hash(self) -> str:
        return self._password_hasher.hash(secrets.token_urlsafe(16))

    def find_by_identity(self, email: str) -> User:
        user = self._users.find_by_email(normalize_email(email))
        if user is None:
            raise UserNotFoundError(normalize_email(email))
        return user

    def verify_password(self, email: str, candidate: str) -> bool:
        return self._check(email, candidate) is not None

    def authenticate(self, email: str, candidate: str) -> User:
        user = self._check(email, candidate)
        if user is None:
            raise InvalidCredentialsError()
        return user

    def _check(self, email: str, candidate: str) -> User | None:
        user = self._users.find_by_email(normalize_email(email))
        hashed = user.password_hash if user else self._dummy_hash
        matches = self._password_hasher.verify(candidate, hashed)
        if user is None or not matches:
            logger.debug("credentials.check: rejected")
            return None
        return user
