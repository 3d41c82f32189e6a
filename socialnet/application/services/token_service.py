# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed access tokens (JWT)."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from socialnet.domain.auth import (
    Identity,
    IssuedToken,
    RejectionReason,
    SessionState,
    TokenClaims,
    TokenRejection,
    strip_bearer,
)
from socialnet.domain.users.entities import User
from socialnet.infrastructure.observability import TOKEN_VERIFICATIONS
from socialnet.shared.logging import logger

Clock = Callable[[], datetime]

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def utc_now() -> datetime:
    return datetime.now(UTC)


def _claims_from_payload(payload: Mapping[str, Any]) -> TokenClaims:
    return TokenClaims(
        subject=str(payload["sub"]),
        issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
        expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
        name=payload.get("name"),
        avatar=payload.get("avatar"),
    )


def read_claims(token: str | None) -> TokenClaims | None:
    """Decode claims without checking the signature.

    Meant for clients deciding whether a stored token is worth sending;
    never use the result for authorization.
    """

    raw = strip_bearer(token)
    if not raw:
        return None
    try:
        payload = jwt.decode(
            raw,
            options={"verify_signature": False, "verify_exp": False, "verify_iat": False},
        )
        return _claims_from_payload(payload)
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError, OverflowError):
        return None


def evaluate_session(token: str | None, now: datetime) -> SessionState:
    """Classify a locally stored token as valid, expired or absent.

    An ``EXPIRED`` result means the client should drop the current user and
    any cached profile and show the login screen.
    """

    claims = read_claims(token)
    if claims is None:
        return SessionState.ABSENT
    if claims.is_expired(now):
        return SessionState.EXPIRED
    return SessionState.VALID


class JwtTokenService:
    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Clock = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user: User) -> IssuedToken:
        now = self._clock()
        issued_at = datetime.fromtimestamp(math.floor(now.timestamp()), UTC)
        # Round up so the token never dies before a full TTL has elapsed.
        expires_at = datetime.fromtimestamp(math.ceil((now + self._ttl).timestamp()), UTC)
        payload = {
            "sub": str(user.id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "name": user.name,
            "avatar": user.avatar,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        logger.info(f"tokens.issue: ok (user_id={user.id}, exp={expires_at.isoformat()})")
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def verify(self, token: str | None) -> Identity | TokenRejection:
        raw = strip_bearer(token)
        if not raw:
            return self._reject(RejectionReason.MISSING)

        try:
            payload = jwt.decode(
                raw,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
            claims = _claims_from_payload(payload)
            user_id = int(claims.subject)
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError, OverflowError) as exc:
            logger.warning(f"tokens.verify: bad signature ({type(exc).__name__})")
            return self._reject(RejectionReason.BAD_SIGNATURE)

        if claims.is_expired(self._clock()):
            logger.info(f"tokens.verify: expired (user_id={user_id})")
            return self._reject(RejectionReason.EXPIRED, expires_at=claims.expires_at)

        TOKEN_VERIFICATIONS.labels(outcome="ok").inc()
        return Identity(
            user_id=user_id,
            name=claims.name,
            avatar=claims.avatar,
            issued_at=claims.issued_at,
            expires_at=claims.expires_at,
        )

    @staticmethod
    def _reject(reason: RejectionReason, *, expires_at: datetime | None = None) -> TokenRejection:
        TOKEN_VERIFICATIONS.labels(outcome=reason.value).inc()
        return TokenRejection(reason=reason, expires_at=expires_at)


__all__ = ["Clock", "JwtTokenService", "evaluate_session", "read_claims", "utc_now"]
