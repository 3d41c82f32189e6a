# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import User
from .exceptions import EmailAlreadyTakenError, InvalidCredentialsError, UserNotFoundError
from .repositories import PasswordHasher, UserRepository

__all__ = [
    "EmailAlreadyTakenError",
    "InvalidCredentialsError",
    "PasswordHasher",
    "User",
    "UserNotFoundError",
    "UserRepository",
]
