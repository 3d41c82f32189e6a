from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from socialnet.application.services.post_mutator import PostMutator
from socialnet.domain.auth import Identity
from socialnet.domain.posts.entities import Post
from socialnet.domain.posts.repositories import PostRepository
from socialnet.domain.profiles.entities import Profile
from socialnet.domain.profiles.exceptions import HandleTakenError
from socialnet.domain.profiles.repositories import ProfileRepository
from socialnet.domain.users.entities import User
from socialnet.domain.users.exceptions import EmailAlreadyTakenError
from socialnet.domain.users.repositories import PasswordHasher, UserRepository
from socialnet.shared.config import ContentConfig, StoreConfig

SECRET = "test-secret-key-that-is-long-enough-for-hs256"
T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


class FrozenClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        if self.find_by_email(user.email):
            raise EmailAlreadyTakenError(context={"field": "email"})
        stored = replace(user, id=self._seq)
        self._seq += 1
        self._users[stored.id] = stored
        return stored

    def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None


class InMemoryPostRepository(PostRepository):
    """Versioned store; ``replace`` is an atomic compare-and-set."""

    def __init__(self) -> None:
        self._posts: dict[int, Post] = {}
        self._seq = 1
        self._lock = threading.Lock()
        self.replace_calls = 0
        self.before_replace: Callable[[Post], None] | None = None

    def list_recent(self) -> Sequence[Post]:
        with self._lock:
            return sorted(self._posts.values(), key=lambda p: (p.created_at, p.id), reverse=True)

    def get(self, post_id: int) -> Post | None:
        with self._lock:
            return self._posts.get(post_id)

    def add(self, post: Post) -> Post:
        with self._lock:
            stored = replace(post, id=self._seq, version=0)
            self._seq += 1
            self._posts[stored.id] = stored
            return stored

    def replace(self, post: Post, *, expected_version: int) -> bool:
        if self.before_replace is not None:
            self.before_replace(post)
        with self._lock:
            self.replace_calls += 1
            current = self._posts.get(post.id)
            if current is None or current.version != expected_version:
                return False
            self._posts[post.id] = replace(post, version=expected_version + 1)
            return True

    def delete(self, post_id: int) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None

    def bump(self, post_id: int) -> None:
        """Simulate a concurrent writer committing in between."""
        with self._lock:
            current = self._posts[post_id]
            self._posts[post_id] = replace(current, version=current.version + 1)


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self) -> None:
        self._profiles: dict[int, Profile] = {}
        self._seq = 1

    def find_by_user(self, user_id: int) -> Profile | None:
        return self._profiles.get(user_id)

    def find_by_handle(self, handle: str) -> Profile | None:
        return next((p for p in self._profiles.values() if p.handle == handle), None)

    def list_all(self) -> Sequence[Profile]:
        return sorted(self._profiles.values(), key=lambda p: p.id)

    def save(self, profile: Profile) -> Profile:
        holder = self.find_by_handle(profile.handle)
        if holder is not None and holder.user_id != profile.user_id:
            raise HandleTakenError(context={"field": "handle"})
        existing = self._profiles.get(profile.user_id)
        if existing is None:
            profile = replace(profile, id=self._seq)
            self._seq += 1
        else:
            profile = replace(profile, id=existing.id)
        self._profiles[profile.user_id] = profile
        return profile

    def delete_for_user(self, user_id: int) -> bool:
        return self._profiles.pop(user_id, None) is not None


def _identity(user_id: int, name: str | None = None) -> Identity:
    return Identity(
        user_id=user_id,
        name=name or f"user-{user_id}",
        avatar=f"https://example.com/{user_id}.png",
        issued_at=T0,
        expires_at=T0 + timedelta(hours=1),
    )


@pytest.fixture()
def identity_for() -> Callable[..., Identity]:
    return _identity


@pytest.fixture()
def secret() -> str:
    return SECRET


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def posts() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture()
def profiles() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def store_config() -> StoreConfig:
    return StoreConfig(
        max_attempts=50,
        backoff_base=0.0005,
        backoff_cap=0.005,
        mutation_deadline=10.0,
    )


@pytest.fixture()
def content_config() -> ContentConfig:
    return ContentConfig(post_max_length=1000, comment_max_length=300)


@pytest.fixture()
def mutator(posts: InMemoryPostRepository, store_config: StoreConfig) -> PostMutator:
    return PostMutator(posts=posts, config=store_config)


@pytest.fixture(autouse=True)
def _no_log_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_TO_FILE", "0")
