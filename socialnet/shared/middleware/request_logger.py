# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping
from typing import Any

from flask import Flask, Response, g, request

from socialnet.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key", "x-auth-token"}
SENSITIVE_PARAMS = {"password", "token", "key", "secret", "auth"}


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def _masked_params(params: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: "<redacted>" if any(s in key.lower() for s in SENSITIVE_PARAMS) else value
        for key, value in params.items()
    }


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """Tag every request with a correlation id and log its start and outcome."""

    @app.before_request
    def _begin() -> None:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.correlation_id = correlation_id
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"http.request: start (method={request.method}, path={request.path}, "
                f"ip={_client_ip()}, query={_masked_params(request.args)}, "
                f"headers={_masked_headers(request.headers)}, body_size={request.content_length or 0})"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000.0
        outcome = "ok" if response.status_code < 400 else "rejected"
        if response.status_code >= 500:
            outcome = "failed"
        logger.info(
            f"http.request: {outcome} (method={request.method}, path={request.path}, "
            f"status={response.status_code}, ms={elapsed_ms:.1f}, user_id={g.get('user_id')})"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _cleanup(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"http.request: error (method={request.method}, path={request.path}, "
                f"type={type(exc).__name__})"
            )
        clear_correlation_id()


__all__ = ["configure_request_logging"]
