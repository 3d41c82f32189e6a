# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Value objects exchanged between the token service and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from socialnet.shared.errors.base import AuthReason

BEARER_PREFIX = "Bearer "


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Claims carried by an access token, readable without the signing key."""

    subject: str
    issued_at: datetime
    expires_at: datetime
    name: str | None = None
    avatar: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(slots=True, frozen=True)
class Identity:
    """Authenticated caller, reconstructed from a verified token."""

    user_id: int
    name: str | None
    avatar: str | None
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class IssuedToken:
    token: str
    issued_at: datetime
    expires_at: datetime

    @property
    def bearer(self) -> str:
        return f"{BEARER_PREFIX}{self.token}"


class RejectionReason(str, Enum):
    MISSING = "missing"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"

    def as_auth_reason(self) -> AuthReason:
        return _AUTH_REASONS[self]


_AUTH_REASONS = {
    RejectionReason.MISSING: AuthReason.MISSING,
    RejectionReason.BAD_SIGNATURE: AuthReason.BAD_SIGNATURE,
    RejectionReason.EXPIRED: AuthReason.EXPIRED,
}


@dataclass(slots=True, frozen=True)
class TokenRejection:
    reason: RejectionReason
    expires_at: datetime | None = None


class SessionState(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    ABSENT = "absent"


def strip_bearer(raw: str | None) -> str:
    if not raw:
        return ""
    value = raw.strip()
    if value[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
        value = value[len(BEARER_PREFIX) :]
    return value.strip()
