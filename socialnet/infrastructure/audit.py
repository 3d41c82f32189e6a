# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum
from typing import Any

from socialnet.shared.logging import logger


class AuditAction(str, Enum):
    # Authentication
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_LOCKED = "login_locked"
    ACCESS_DENIED = "access_denied"

    # Accounts
    PROFILE_SAVED = "profile_saved"
    ACCOUNT_DELETED = "account_deleted"

    # Content
    POST_DELETED = "post_deleted"
    COMMENT_REMOVED = "comment_removed"


_SENSITIVE_KEYS = ("password", "token", "secret", "hash", "key")


def _sanitize_details(details: dict[str, Any]) -> dict[str, Any]:
    sanitized = {}
    for key, value in details.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value
    return sanitized


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    message = f"AUDIT: {action.value} | user_id={user_id} | ip={ip_address} | success={success}"
    if details:
        message += f" | details={_sanitize_details(details)}"

    if success:
        logger.info(message)
    else:
        logger.warning(message)


__all__ = ["AuditAction", "audit_log"]
