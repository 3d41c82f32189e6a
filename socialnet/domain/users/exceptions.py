# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.shared.errors.base import AuthenticationError, AuthReason, ConflictError, NotFoundError


class EmailAlreadyTakenError(ConflictError):
    code = "email_taken"


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(AuthReason.INVALID_CREDENTIALS)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int | str) -> None:
        super().__init__("user", user_id)
