# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import delete, update

from socialnet.domain.posts.entities import Comment, Like
from socialnet.domain.posts.entities import Post as DomainPost
from socialnet.domain.posts.repositories import PostRepository
from socialnet.infrastructure.db import Database
from socialnet.infrastructure.db.models import Post, as_utc


def _like_to_doc(like: Like) -> dict[str, Any]:
    return {"user_id": like.user_id, "created_at": like.created_at.isoformat()}


def _comment_to_doc(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "user_id": comment.user_id,
        "text": comment.text,
        "name": comment.name,
        "avatar": comment.avatar,
        "created_at": comment.created_at.isoformat(),
    }


def _like_from_doc(doc: dict[str, Any]) -> Like:
    return Like(
        user_id=int(doc["user_id"]),
        created_at=as_utc(datetime.fromisoformat(doc["created_at"])),
    )


def _comment_from_doc(doc: dict[str, Any]) -> Comment:
    return Comment(
        id=str(doc["id"]),
        user_id=int(doc["user_id"]),
        text=doc["text"],
        name=doc.get("name"),
        avatar=doc.get("avatar"),
        created_at=as_utc(datetime.fromisoformat(doc["created_at"])),
    )


def _to_domain(row: Post) -> DomainPost:
    return DomainPost(
        id=row.id,
        user_id=row.user_id,
        text=row.text,
        name=row.name,
        avatar=row.avatar,
        created_at=as_utc(row.created_at),
        likes=tuple(_like_from_doc(doc) for doc in row.likes or ()),
        comments=tuple(_comment_from_doc(doc) for doc in row.comments or ()),
        version=row.version,
    )


class SqlAlchemyPostRepository(PostRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def list_recent(self) -> Sequence[DomainPost]:
        with self._db.session_scope() as session:
            rows = session.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()
            return [_to_domain(row) for row in rows]

    def get(self, post_id: int) -> DomainPost | None:
        with self._db.session_scope() as session:
            row = session.get(Post, post_id)
            return _to_domain(row) if row else None

    def add(self, post: DomainPost) -> DomainPost:
        with self._db.session_scope() as session:
            row = Post(
                user_id=post.user_id,
                text=post.text,
                name=post.name,
                avatar=post.avatar,
                likes=[_like_to_doc(like) for like in post.likes],
                comments=[_comment_to_doc(comment) for comment in post.comments],
                version=0,
                created_at=post.created_at,
            )
            session.add(row)
            session.flush()
            return _to_domain(row)

    def replace(self, post: DomainPost, *, expected_version: int) -> bool:
        # Only the embedded arrays are mutable; author and text stay as created.
        with self._db.session_scope() as session:
            result = session.execute(
                update(Post)
                .where(Post.id == post.id, Post.version == expected_version)
                .values(
                    likes=[_like_to_doc(like) for like in post.likes],
                    comments=[_comment_to_doc(comment) for comment in post.comments],
                    version=expected_version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1

    def delete(self, post_id: int) -> bool:
        with self._db.session_scope() as session:
            result = session.execute(delete(Post).where(Post.id == post_id))
            return bool(result.rowcount)
