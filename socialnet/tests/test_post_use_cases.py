from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from socialnet.application.services.post_mutator import PostMutator
from socialnet.application.use_cases.posts.comments import AddCommentUseCase, RemoveCommentUseCase
from socialnet.application.use_cases.posts.create_post import CreatePostUseCase
from socialnet.application.use_cases.posts.delete_post import DeletePostUseCase
from socialnet.application.use_cases.posts.like_post import LikePostUseCase, UnlikePostUseCase
from socialnet.application.use_cases.posts.list_posts import GetPostUseCase, ListPostsUseCase
from socialnet.domain.posts.exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    CommentRemovalForbiddenError,
    NotLikedError,
    NotPostAuthorError,
    PostNotFoundError,
)
from socialnet.shared.config import ContentConfig, StoreConfig
from socialnet.shared.errors.base import MutationTimeoutError, ValidationError

from conftest import FrozenClock, InMemoryPostRepository

ALICE, BOB, CAROL = 1, 2, 3


class PostsApi:
    """Bundle of use cases over one in-memory store."""

    def __init__(
        self,
        posts: InMemoryPostRepository,
        mutator: PostMutator,
        content: ContentConfig,
        clock: FrozenClock,
    ) -> None:
        self.create = CreatePostUseCase(posts=posts, content=content, clock=clock)
        self.get = GetPostUseCase(posts=posts)
        self.list = ListPostsUseCase(posts=posts)
        self.delete = DeletePostUseCase(posts=posts)
        self.like = LikePostUseCase(mutator=mutator, clock=clock)
        self.unlike = UnlikePostUseCase(mutator=mutator)
        self.comment = AddCommentUseCase(mutator=mutator, content=content, clock=clock)
        self.uncomment = RemoveCommentUseCase(mutator=mutator)


@pytest.fixture()
def api(
    posts: InMemoryPostRepository,
    mutator: PostMutator,
    content_config: ContentConfig,
    clock: FrozenClock,
) -> PostsApi:
    return PostsApi(posts, mutator, content_config, clock)


def test_social_scenario(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE, "Alice"), "first post")
    assert post.likes == () and post.comments == ()

    liked = api.like.execute(post.id, BOB)
    assert [like.user_id for like in liked.likes] == [BOB]

    with pytest.raises(AlreadyLikedError):
        api.like.execute(post.id, BOB)
    assert [like.user_id for like in api.get.execute(post.id).likes] == [BOB]

    assert api.unlike.execute(post.id, BOB).likes == ()

    commented = api.comment.execute(post.id, identity_for(CAROL, "Carol"), "hi")
    assert [(c.user_id, c.text, c.name) for c in commented.comments] == [(CAROL, "hi", "Carol")]

    comment_id = commented.comments[0].id
    assert api.uncomment.execute(post.id, comment_id, ALICE).comments == ()


def test_like_then_unlike_restores_likes(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")
    api.like.execute(post.id, CAROL)
    before = api.get.execute(post.id).likes

    api.like.execute(post.id, BOB)
    api.unlike.execute(post.id, BOB)

    assert api.get.execute(post.id).likes == before


def test_unlike_without_like(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")

    with pytest.raises(NotLikedError):
        api.unlike.execute(post.id, BOB)


def test_like_missing_post(api: PostsApi) -> None:
    with pytest.raises(PostNotFoundError) as exc_info:
        api.like.execute(404, BOB)

    assert exc_info.value.code == "post_not_found"


def test_remove_unknown_comment_leaves_comments_unchanged(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")
    api.comment.execute(post.id, identity_for(BOB), "one")
    before = api.get.execute(post.id).comments

    with pytest.raises(CommentNotFoundError):
        api.uncomment.execute(post.id, "does-not-exist", ALICE)

    assert api.get.execute(post.id).comments == before


def test_comment_author_may_remove_own_comment(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")
    comment = api.comment.execute(post.id, identity_for(BOB), "mine").comments[0]

    assert api.uncomment.execute(post.id, comment.id, BOB).comments == ()


def test_stranger_may_not_remove_comment(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")
    comment = api.comment.execute(post.id, identity_for(BOB), "mine").comments[0]

    with pytest.raises(CommentRemovalForbiddenError) as exc_info:
        api.uncomment.execute(post.id, comment.id, CAROL)

    assert exc_info.value.status == 403
    assert [c.id for c in api.get.execute(post.id).comments] == [comment.id]


def test_comment_ids_are_unique(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")
    for _ in range(5):
        api.comment.execute(post.id, identity_for(BOB), "again")

    comments = api.get.execute(post.id).comments
    assert len({c.id for c in comments}) == 5


def test_delete_by_non_author_keeps_post(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")

    with pytest.raises(NotPostAuthorError) as exc_info:
        api.delete.execute(post.id, BOB)

    assert exc_info.value.code == "not_authorized"
    assert api.get.execute(post.id).id == post.id


def test_delete_by_author(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "text")

    assert api.delete.execute(post.id, ALICE) is True
    with pytest.raises(PostNotFoundError):
        api.get.execute(post.id)
    with pytest.raises(PostNotFoundError):
        api.delete.execute(post.id, ALICE)


def test_list_is_newest_first(api: PostsApi, clock: FrozenClock, identity_for) -> None:
    first = api.create.execute(identity_for(ALICE), "first")
    clock.advance(5)
    second = api.create.execute(identity_for(BOB), "second")

    assert [p.id for p in api.list.execute()] == [second.id, first.id]


@pytest.mark.parametrize(
    ("text", "reason"),
    [("", "empty"), ("   ", "empty"), ("x" * 1001, "too_long")],
)
def test_create_post_validates_text(api: PostsApi, identity_for, text: str, reason: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        api.create.execute(identity_for(ALICE), text)

    assert exc_info.value.status == 422
    assert exc_info.value.context["field"] == "text"
    assert exc_info.value.context["reason"] == reason


def test_comment_is_validated_before_loading(
    api: PostsApi, posts: InMemoryPostRepository, identity_for
) -> None:
    with pytest.raises(ValidationError):
        api.comment.execute(404, identity_for(BOB), "x" * 301)

    assert posts.replace_calls == 0


def test_create_post_strips_text(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE, "Alice"), "  spaced  ")

    assert post.text == "spaced"
    assert post.name == "Alice"


def test_conflicting_write_is_retried(
    api: PostsApi, posts: InMemoryPostRepository, identity_for
) -> None:
    post = api.create.execute(identity_for(ALICE), "text")
    interfered: list[int] = []

    def interfere(_post) -> None:
        if not interfered:
            interfered.append(1)
            posts.bump(post.id)

    posts.before_replace = interfere

    updated = api.like.execute(post.id, BOB)

    assert [like.user_id for like in updated.likes] == [BOB]
    assert posts.replace_calls == 2


def test_concurrent_likes_by_distinct_users_are_all_kept(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "popular")
    user_ids = list(range(100, 140))
    barrier = threading.Barrier(len(user_ids))

    def like(user_id: int) -> None:
        barrier.wait()
        api.like.execute(post.id, user_id)

    with ThreadPoolExecutor(max_workers=len(user_ids)) as pool:
        for future in [pool.submit(like, uid) for uid in user_ids]:
            future.result()

    likes = api.get.execute(post.id).likes
    assert sorted(like.user_id for like in likes) == user_ids


def test_concurrent_identical_likes_yield_one_like(api: PostsApi, identity_for) -> None:
    post = api.create.execute(identity_for(ALICE), "popular")
    barrier = threading.Barrier(2)

    def like() -> str:
        barrier.wait()
        try:
            api.like.execute(post.id, BOB)
        except AlreadyLikedError:
            return "already_liked"
        return "ok"

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = sorted(pool.map(lambda _: like(), range(2)))

    assert outcomes == ["already_liked", "ok"]
    assert [like.user_id for like in api.get.execute(post.id).likes] == [BOB]


def test_exhausted_attempts_raise_timeout_and_leave_post_untouched(
    posts: InMemoryPostRepository, identity_for, clock: FrozenClock, content_config: ContentConfig
) -> None:
    config = StoreConfig(max_attempts=3, backoff_base=0.0, backoff_cap=0.0, mutation_deadline=5.0)
    api = PostsApi(posts, PostMutator(posts=posts, config=config), content_config, clock)
    post = api.create.execute(identity_for(ALICE), "contended")
    posts.before_replace = lambda _post: posts.bump(post.id)

    with pytest.raises(MutationTimeoutError) as exc_info:
        api.like.execute(post.id, BOB)

    assert exc_info.value.status == 503
    assert exc_info.value.context["retryable"] is True
    assert exc_info.value.context["attempts"] == 3
    assert api.get.execute(post.id).likes == ()


def test_deadline_bounds_retries(
    posts: InMemoryPostRepository, identity_for, clock: FrozenClock, content_config: ContentConfig
) -> None:
    config = StoreConfig(max_attempts=1000, backoff_base=0.01, backoff_cap=0.02, mutation_deadline=5.0)
    api = PostsApi(posts, PostMutator(posts=posts, config=config), content_config, clock)
    post = api.create.execute(identity_for(ALICE), "contended")
    posts.before_replace = lambda _post: posts.bump(post.id)

    with pytest.raises(MutationTimeoutError):
        api.comment.execute(post.id, identity_for(BOB), "hi", deadline=0.05)

    assert posts.replace_calls < 1000
    assert api.get.execute(post.id).comments == ()


def test_backoff_never_sleeps_past_the_deadline(
    posts: InMemoryPostRepository, identity_for, clock: FrozenClock, content_config: ContentConfig
) -> None:
    config = StoreConfig(max_attempts=1000, backoff_base=0.5, backoff_cap=2.0, mutation_deadline=5.0)
    api = PostsApi(posts, PostMutator(posts=posts, config=config), content_config, clock)
    post = api.create.execute(identity_for(ALICE), "contended")
    posts.before_replace = lambda _post: posts.bump(post.id)

    started = time.monotonic()
    with pytest.raises(MutationTimeoutError):
        api.like.execute(post.id, BOB, deadline=0.1)
    elapsed = time.monotonic() - started

    assert elapsed < 0.1 + 0.05
    assert api.get.execute(post.id).likes == ()
