# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import Request, jsonify, request

from socialnet.shared.config import SecurityConfig
from socialnet.shared.logging import logger


class InMemoryRateLimiter:
    """Sliding-window limiter keyed by arbitrary strings."""

    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._last_sweep = time.monotonic()
        self._lock = Lock()

    def allow(self, key: str) -> bool:
        now = time.monotonic()
        with self._lock:
            hits = self._hits[key]
            while hits and (now - hits[0]) > self._window:
                hits.popleft()
            if len(hits) >= self._limit:
                return False
            hits.append(now)
            self._sweep(now)
            return True

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self._window:
            return
        self._last_sweep = now
        for key in [k for k, hits in self._hits.items() if not hits or now - hits[-1] > self._window]:
            del self._hits[key]


def _client_key(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (req.remote_addr or "unknown")


def rate_limit(
    config: SecurityConfig,
    *,
    limit: int | None = None,
    window_seconds: float | None = None,
) -> Callable[[Callable], Callable]:
    limiter = InMemoryRateLimiter(
        limit or config.rate_limit_requests,
        window_seconds or config.rate_limit_window,
    )

    def decorator(f: Callable) -> Callable:
        if not config.enable_rate_limit:
            return f

        @wraps(f)
        def wrapper(*args, **kwargs):
            key = f"{request.path}:{_client_key(request)}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                return jsonify({"error": "rate_limited"}), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
