# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, jsonify, request

from socialnet.application.services.token_service import JwtTokenService
from socialnet.domain.auth import Identity, RejectionReason, TokenRejection
from socialnet.infrastructure.audit import AuditAction, audit_log
from socialnet.shared.errors.base import AuthenticationError
from socialnet.shared.logging import logger


def client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def current_identity() -> Identity:
    """Identity attached by :meth:`AccessGuard.protect` to the running request."""

    identity = g.get("identity")
    if identity is None:
        raise RuntimeError("current_identity() called outside a protected view")
    return identity


class AccessGuard:
    """Admits a request only when it carries a valid bearer token."""

    def __init__(self, tokens: JwtTokenService) -> None:
        self._tokens = tokens

    def protect(self, view: Callable) -> Callable:
        @wraps(view)
        def inner(*args, **kwargs):
            outcome = self._tokens.verify(request.headers.get("Authorization", ""))
            if isinstance(outcome, TokenRejection):
                return self._deny(outcome)

            g.identity = outcome
            g.user_id = outcome.user_id
            logger.debug(f"Auth OK: user={outcome.user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return inner

    @staticmethod
    def _deny(rejection: TokenRejection):
        logger.warning(
            f"Auth failed ({rejection.reason.value}) on {request.method} {request.path}"
        )
        if rejection.reason is RejectionReason.BAD_SIGNATURE:
            audit_log(
                AuditAction.ACCESS_DENIED,
                ip_address=client_ip(),
                details={"path": request.path, "reason": rejection.reason.value},
                success=False,
            )

        context = None
        if rejection.expires_at is not None:
            context = {"expired_at": rejection.expires_at.isoformat()}
        error = AuthenticationError(rejection.reason.as_auth_reason(), context=context)
        response = jsonify(error.to_dict())
        response.headers["WWW-Authenticate"] = f'Bearer error="invalid_token", error_description="{error.code}"'
        return response, error.status


__all__ = ["AccessGuard", "client_ip", "current_identity"]
