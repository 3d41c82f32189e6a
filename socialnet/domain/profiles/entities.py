# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from socialnet.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Profile:
    """Public developer profile, one per user."""

    id: int
    user_id: int
    handle: str
    status: str
    created_at: datetime
    skills: tuple[str, ...] = field(default_factory=tuple)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.handle:
            raise InvariantViolation("handle is required", field="handle")
        if not self.status:
            raise InvariantViolation("status is required", field="status")
