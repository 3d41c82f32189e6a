# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from socialnet.domain.users.entities import User as DomainUser
from socialnet.domain.users.exceptions import EmailAlreadyTakenError
from socialnet.domain.users.repositories import UserRepository
from socialnet.infrastructure.db import Database
from socialnet.infrastructure.db.models import User, as_utc


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        name=row.name,
        avatar=row.avatar,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_email(self, email: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(
                    email=user.email,
                    name=user.name,
                    avatar=user.avatar,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise EmailAlreadyTakenError(context={"field": "email"}) from exc

    def delete(self, user_id: int) -> bool:
        with self._db.session_scope() as session:
            result = session.execute(delete(User).where(User.id == user_id))
            return bool(result.rowcount)
