# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from socialnet.application.services.credentials import CredentialStore, normalize_email
from socialnet.application.services.token_service import JwtTokenService
from socialnet.domain.auth import IssuedToken
from socialnet.domain.users.exceptions import InvalidCredentialsError
from socialnet.infrastructure.auth.login_attempts import LoginAttemptsTracker
from socialnet.shared.errors.base import AppError


class AccountLockedError(AppError):
    def __init__(self, lockout_remaining: float = 0) -> None:
        super().__init__(
            code="account_locked",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context={"lockout_remaining_seconds": round(lockout_remaining, 1)},
        )


class LoginUserUseCase:
    """Exchange credentials for a signed access token."""

    def __init__(
        self,
        *,
        credentials: CredentialStore,
        tokens: JwtTokenService,
        attempts: LoginAttemptsTracker,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._attempts = attempts

    def execute(self, email: str, password: str, ip_address: str | None = None) -> IssuedToken:
        identity = normalize_email(email)
        remaining = self._attempts.lockout_remaining(identity)
        if remaining > 0:
            raise AccountLockedError(lockout_remaining=remaining)

        try:
            user = self._credentials.authenticate(identity, password)
        except InvalidCredentialsError:
            self._attempts.record(identity, success=False, ip_address=ip_address)
            raise

        self._attempts.record(identity, success=True, ip_address=ip_address)
        return self._tokens.issue(user)
