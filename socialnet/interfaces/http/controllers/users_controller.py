# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from socialnet.application.services.token_service import JwtTokenService
from socialnet.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from socialnet.application.use_cases.users.login_user import AccountLockedError, LoginUserUseCase
from socialnet.application.use_cases.users.register_user import RegisterUserUseCase
from socialnet.domain.auth import TokenRejection
from socialnet.infrastructure.audit import AuditAction, audit_log
from socialnet.interfaces.http.dto.auth import (
    IdentityDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    TokenDTO,
    TokenVerifyRequestDTO,
    UserDTO,
)
from socialnet.interfaces.http.guard import AccessGuard, client_ip, current_identity
from socialnet.shared.config import SecurityConfig
from socialnet.shared.errors.base import AuthenticationError
from socialnet.shared.errors.validation import parse_body
from socialnet.shared.logging import logger
from socialnet.shared.middleware.rate_limit import rate_limit


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        tokens: JwtTokenService,
        guard: AccessGuard,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._current_user_use_case = current_user_use_case
        self._tokens = tokens
        self._guard = guard
        self._security = security

    def register(self) -> tuple[Response, int]:
        dto = parse_body(RegisterRequestDTO, request.get_json(silent=True))

        user = self._register_use_case.execute(dto.name, dto.email, dto.password, dto.avatar)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=client_ip(),
            details={"email": dto.email},
            success=True,
        )
        return jsonify(UserDTO.model_validate(user).model_dump(mode="json")), 201

    def login(self) -> tuple[Response, int]:
        dto = parse_body(LoginRequestDTO, request.get_json(silent=True))
        ip_address = client_ip()

        try:
            issued = self._login_use_case.execute(dto.email, dto.password, ip_address)
        except AccountLockedError:
            audit_log(
                AuditAction.LOGIN_LOCKED,
                ip_address=ip_address,
                details={"email": dto.email},
                success=False,
            )
            raise
        except AuthenticationError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email, "error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            ip_address=ip_address,
            details={"email": dto.email},
            success=True,
        )
        payload = TokenDTO(
            token=issued.bearer,
            issued_at=issued.issued_at,
            expires_at=issued.expires_at,
        )
        logger.info("users.login: ok")
        return jsonify(payload.model_dump(mode="json")), 200

    def verify_token(self) -> tuple[Response, int]:
        dto = parse_body(TokenVerifyRequestDTO, request.get_json(silent=True))
        outcome = self._tokens.verify(dto.token)
        if isinstance(outcome, TokenRejection):
            context = None
            if outcome.expires_at is not None:
                context = {"expired_at": outcome.expires_at.isoformat()}
            raise AuthenticationError(outcome.reason.as_auth_reason(), context=context)
        return jsonify(IdentityDTO.model_validate(outcome).model_dump(mode="json")), 200

    def current(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(current_identity())
        return jsonify(UserDTO.model_validate(user).model_dump(mode="json")), 200

    def as_blueprint(self) -> Blueprint:
        limited = rate_limit(self._security)

        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("/register", view_func=limited(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=limited(self.login), methods=["POST"])
        bp.add_url_rule("/token/verify", view_func=self.verify_token, methods=["POST"])
        bp.add_url_rule("/current", view_func=self._guard.protect(self.current), methods=["GET"])
        return bp
