# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.shared.errors.base import ConflictError, NotFoundError


class ProfileNotFoundError(NotFoundError):
    def __init__(self, key: int | str) -> None:
        super().__init__("profile", key)


class HandleTakenError(ConflictError):
    code = "handle_taken"
