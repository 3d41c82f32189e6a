from __future__ import annotations

from datetime import timedelta

import pytest

from socialnet.domain.exceptions import InvariantViolation
from socialnet.domain.posts.entities import Comment, Like, Post
from socialnet.domain.posts.exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    NotLikedError,
)

from conftest import T0


def _post(**overrides) -> Post:
    fields = {
        "id": 1,
        "user_id": 10,
        "text": "hello",
        "name": "Alice",
        "avatar": None,
        "created_at": T0,
    }
    fields.update(overrides)
    return Post(**fields)


def _comment(comment_id: str, user_id: int, text: str = "hi") -> Comment:
    return Comment(
        id=comment_id,
        user_id=user_id,
        text=text,
        name=None,
        avatar=None,
        created_at=T0,
    )


def test_like_prepends_newest_first() -> None:
    post = _post().with_like(1, T0).with_like(2, T0 + timedelta(seconds=1))

    assert [like.user_id for like in post.likes] == [2, 1]
    assert post.is_liked_by(1)


def test_like_twice_is_rejected_and_leaves_post_alone() -> None:
    post = _post().with_like(1, T0)

    with pytest.raises(AlreadyLikedError):
        post.with_like(1, T0)

    assert len(post.likes) == 1


def test_unlike_removes_by_author_not_position() -> None:
    post = _post().with_like(1, T0).with_like(2, T0).with_like(3, T0)

    updated = post.without_like(2)

    assert [like.user_id for like in updated.likes] == [3, 1]


def test_unlike_without_like_is_rejected() -> None:
    with pytest.raises(NotLikedError):
        _post().without_like(1)


def test_like_then_unlike_restores_likes() -> None:
    original = _post(likes=(Like(user_id=5, created_at=T0),))

    assert original.with_like(6, T0).without_like(6).likes == original.likes


def test_comments_prepend_and_remove_by_id() -> None:
    post = _post().with_comment(_comment("a", 1)).with_comment(_comment("b", 2))

    assert [c.id for c in post.comments] == ["b", "a"]
    assert [c.id for c in post.without_comment("b").comments] == ["a"]


def test_remove_unknown_comment_is_rejected() -> None:
    post = _post().with_comment(_comment("a", 1))

    with pytest.raises(CommentNotFoundError) as exc_info:
        post.without_comment("zzz")

    assert exc_info.value.status == 404
    assert [c.id for c in post.comments] == ["a"]


def test_comment_removal_permission() -> None:
    comment = _comment("a", user_id=2)
    post = _post(user_id=10).with_comment(comment)

    assert post.can_remove_comment(comment, 2)
    assert post.can_remove_comment(comment, 10)
    assert not post.can_remove_comment(comment, 3)


def test_duplicate_likes_violate_invariant() -> None:
    with pytest.raises(InvariantViolation):
        _post(likes=(Like(1, T0), Like(1, T0)))


def test_duplicate_comment_ids_violate_invariant() -> None:
    with pytest.raises(InvariantViolation):
        _post(comments=(_comment("a", 1), _comment("a", 2)))
