# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from socialnet.domain.profiles.entities import Profile
from socialnet.domain.profiles.exceptions import HandleTakenError
from socialnet.domain.profiles.repositories import ProfileRepository
from socialnet.shared.logging import logger


@dataclass(slots=True)
class ProfileInput:
    handle: str
    status: str
    skills: Sequence[str] = ()
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: Mapping[str, str] = field(default_factory=dict)


class SaveProfileUseCase:
    """Create the caller's profile or overwrite the editable fields of it."""

    def __init__(self, *, profiles: ProfileRepository) -> None:
        self._profiles = profiles

    def execute(self, user_id: int, data: ProfileInput) -> Profile:
        handle = data.handle.strip().lower()
        holder = self._profiles.find_by_handle(handle)
        if holder is not None and holder.user_id != user_id:
            raise HandleTakenError(context={"field": "handle"})

        existing = self._profiles.find_by_user(user_id)
        profile = Profile(
            id=existing.id if existing else 0,
            user_id=user_id,
            handle=handle,
            status=data.status.strip(),
            created_at=existing.created_at if existing else datetime.now(UTC),
            skills=tuple(s.strip() for s in data.skills if s.strip()),
            company=data.company,
            website=data.website,
            location=data.location,
            bio=data.bio,
            github_username=data.github_username,
            social=dict(data.social),
        )
        saved = self._profiles.save(profile)
        logger.info(
            f"profiles.save: ok (user_id={user_id}, created={existing is None})"
        )
        return saved
