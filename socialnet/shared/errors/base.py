# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, status=resolved_status, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )

    @classmethod
    def for_field(cls, field: str, reason: str, **extra: Any) -> ValidationError:
        return cls(context={"field": field, "reason": reason, **extra})


class AuthReason(str, Enum):
    MISSING = "token_missing"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "token_expired"
    INVALID_CREDENTIALS = "invalid_credentials"


class AuthenticationError(AppError):
    def __init__(self, reason: AuthReason, *, context: Mapping[str, Any] | None = None) -> None:
        self.reason = reason
        super().__init__(
            code=reason.value,
            status=HTTPStatus.UNAUTHORIZED,
            context={"reason": reason.value, **(context or {})},
        )


class AuthorizationError(DomainError):
    code = "not_authorized"
    status = HTTPStatus.FORBIDDEN


class NotFoundError(AppError):
    def __init__(self, kind: str, resource_id: Any) -> None:
        super().__init__(
            code=f"{kind}_not_found",
            status=HTTPStatus.NOT_FOUND,
            context={"kind": kind, "id": resource_id},
        )


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT


class MutationTimeoutError(InfrastructureError):
    def __init__(self, operation: str, attempts: int) -> None:
        super().__init__(
            "mutation_timeout",
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            context={"operation": operation, "attempts": attempts, "retryable": True},
        )
