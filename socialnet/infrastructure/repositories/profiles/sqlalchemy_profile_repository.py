# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from socialnet.domain.profiles.entities import Profile as DomainProfile
from socialnet.domain.profiles.exceptions import HandleTakenError
from socialnet.domain.profiles.repositories import ProfileRepository
from socialnet.infrastructure.db import Database
from socialnet.infrastructure.db.models import Profile, as_utc


def _to_domain(row: Profile) -> DomainProfile:
    return DomainProfile(
        id=row.id,
        user_id=row.user_id,
        handle=row.handle,
        status=row.status,
        created_at=as_utc(row.created_at),
        skills=tuple(row.skills or ()),
        company=row.company,
        website=row.website,
        location=row.location,
        bio=row.bio,
        github_username=row.github_username,
        social=dict(row.social or {}),
    )


class SqlAlchemyProfileRepository(ProfileRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_user(self, user_id: int) -> DomainProfile | None:
        with self._db.session_scope() as session:
            row = session.query(Profile).filter(Profile.user_id == user_id).first()
            return _to_domain(row) if row else None

    def find_by_handle(self, handle: str) -> DomainProfile | None:
        with self._db.session_scope() as session:
            row = session.query(Profile).filter(Profile.handle == handle).first()
            return _to_domain(row) if row else None

    def list_all(self) -> Sequence[DomainProfile]:
        with self._db.session_scope() as session:
            rows = session.query(Profile).order_by(Profile.id.asc()).all()
            return [_to_domain(row) for row in rows]

    def save(self, profile: DomainProfile) -> DomainProfile:
        try:
            with self._db.session_scope() as session:
                row = session.query(Profile).filter(Profile.user_id == profile.user_id).first()
                if row is None:
                    row = Profile(user_id=profile.user_id, created_at=profile.created_at)
                    session.add(row)
                row.handle = profile.handle
                row.status = profile.status
                row.skills = list(profile.skills)
                row.company = profile.company
                row.website = profile.website
                row.location = profile.location
                row.bio = profile.bio
                row.github_username = profile.github_username
                row.social = dict(profile.social)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise HandleTakenError(context={"field": "handle"}) from exc

    def delete_for_user(self, user_id: int) -> bool:
        with self._db.session_scope() as session:
            result = session.execute(delete(Profile).where(Profile.user_id == user_id))
            return bool(result.rowcount)
