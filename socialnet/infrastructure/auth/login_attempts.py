# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from dataclasses import dataclass
from threading import Lock

from socialnet.shared.config import AuthConfig
from socialnet.shared.logging import logger


@dataclass
class LoginAttempt:
    timestamp: float
    success: bool
    ip_address: str | None = None


class LoginAttemptsTracker:
    """Counts failed logins per identity and locks it out for a while."""

    def __init__(
        self,
        *,
        max_failures: int = 5,
        lockout_seconds: float = 15 * 60,
        attempt_window: float = 60 * 60,
    ) -> None:
        self._max_failures = max_failures
        self._lockout_seconds = lockout_seconds
        self._attempt_window = attempt_window
        self._attempts: dict[str, deque[LoginAttempt]] = defaultdict(
            lambda: deque(maxlen=self._max_failures * 2)
        )
        self._lockouts: dict[str, float] = {}  # identity -> unlock time
        self._last_sweep = time.time()
        self._lock = Lock()

    @classmethod
    def from_config(cls, config: AuthConfig) -> LoginAttemptsTracker:
        return cls(
            max_failures=config.login_max_failures,
            lockout_seconds=config.login_lockout_seconds,
            attempt_window=config.login_attempt_window,
        )

    def record(self, identity: str, success: bool, ip_address: str | None = None) -> None:
        with self._lock:
            self._attempts[identity].append(
                LoginAttempt(timestamp=time.time(), success=success, ip_address=ip_address)
            )
            if success:
                self._attempts.pop(identity, None)
                if self._lockouts.pop(identity, None) is not None:
                    logger.info("login_attempts: cleared lockout")
            else:
                self._check_and_lock(identity)
            self._sweep()

    def lockout_remaining(self, identity: str) -> float:
        """Seconds until ``identity`` may log in again; 0 when not locked."""

        with self._lock:
            unlock_time = self._lockouts.get(identity)
            if unlock_time is None:
                return 0.0
            remaining = unlock_time - time.time()
            if remaining <= 0:
                del self._lockouts[identity]
                logger.info("login_attempts: lockout expired")
                return 0.0
            return remaining

    def _check_and_lock(self, identity: str) -> None:
        now = time.time()
        cutoff = now - self._attempt_window

        failed = [a for a in self._attempts[identity] if not a.success and a.timestamp > cutoff]
        if len(failed) >= self._max_failures:
            self._lockouts[identity] = now + self._lockout_seconds
            ips = {a.ip_address for a in failed if a.ip_address}
            logger.warning(
                f"login_attempts: ACCOUNT LOCKED failed_attempts={len(failed)} "
                f"lockout_duration={self._lockout_seconds}s "
                f"ip_addresses={sorted(ips) if ips else 'unknown'}"
            )

    def _sweep(self) -> None:
        """Drop identities with no recent failures and expired lockouts."""

        now = time.time()
        if now - self._last_sweep < self._attempt_window:
            return
        self._last_sweep = now
        cutoff = now - self._attempt_window
        for identity in [k for k, v in self._attempts.items() if not v or v[-1].timestamp <= cutoff]:
            del self._attempts[identity]
        for identity in [k for k, until in self._lockouts.items() if until <= now]:
            del self._lockouts[identity]


__all__ = ["LoginAttempt", "LoginAttemptsTracker"]
