from __future__ import annotations

import pytest
from pydantic import ValidationError

from socialnet.application.use_cases.profiles.delete_account import DeleteAccountUseCase
from socialnet.application.use_cases.profiles.get_profile import GetProfileUseCase, ListProfilesUseCase
from socialnet.application.use_cases.profiles.save_profile import ProfileInput, SaveProfileUseCase
from socialnet.domain.profiles.exceptions import HandleTakenError, ProfileNotFoundError
from socialnet.domain.users.entities import User
from socialnet.domain.users.exceptions import UserNotFoundError
from socialnet.interfaces.http.dto.profiles import ProfileRequestDTO

from conftest import T0, InMemoryProfileRepository, InMemoryUserRepository


def test_save_creates_then_updates(profiles: InMemoryProfileRepository) -> None:
    save = SaveProfileUseCase(profiles=profiles)

    created = save.execute(1, ProfileInput(handle=" Alice ", status="Developer", skills=["python", " "]))
    updated = save.execute(1, ProfileInput(handle="alice", status="Lead", skills=["go"]))

    assert created.handle == "alice"
    assert created.skills == ("python",)
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.status == "Lead"


def test_handle_must_be_unique(profiles: InMemoryProfileRepository) -> None:
    save = SaveProfileUseCase(profiles=profiles)
    save.execute(1, ProfileInput(handle="alice", status="Developer"))

    with pytest.raises(HandleTakenError) as exc_info:
        save.execute(2, ProfileInput(handle="ALICE", status="Developer"))

    assert exc_info.value.code == "handle_taken"


def test_lookup_and_list(profiles: InMemoryProfileRepository) -> None:
    save = SaveProfileUseCase(profiles=profiles)
    save.execute(1, ProfileInput(handle="alice", status="Developer"))
    save.execute(2, ProfileInput(handle="bob", status="Student"))
    get = GetProfileUseCase(profiles=profiles)

    assert get.by_handle("Bob").user_id == 2
    assert get.by_user(1).handle == "alice"
    assert [p.handle for p in ListProfilesUseCase(profiles=profiles).execute()] == ["alice", "bob"]
    with pytest.raises(ProfileNotFoundError):
        get.by_user(3)


def test_delete_account_removes_profile_and_user(
    users: InMemoryUserRepository, profiles: InMemoryProfileRepository
) -> None:
    user = users.add(
        User(
            id=0,
            email="alice@example.com",
            name="Alice",
            avatar=None,
            password_hash="hashed:pw",
            created_at=T0,
        )
    )
    SaveProfileUseCase(profiles=profiles).execute(user.id, ProfileInput(handle="alice", status="Dev"))
    delete = DeleteAccountUseCase(users=users, profiles=profiles)

    delete.execute(user.id)

    assert users.find_by_id(user.id) is None
    assert profiles.find_by_user(user.id) is None
    with pytest.raises(UserNotFoundError):
        delete.execute(user.id)


def test_profile_request_requires_handle_status_and_skills() -> None:
    with pytest.raises(ValidationError) as exc_info:
        ProfileRequestDTO.model_validate({})

    assert {e["loc"][0] for e in exc_info.value.errors()} == {"handle", "status", "skills"}


def test_profile_request_rejects_bad_handle_characters() -> None:
    with pytest.raises(ValidationError):
        ProfileRequestDTO.model_validate({"handle": "al ice", "status": "Dev", "skills": ["x"]})


def test_profile_request_collects_social_links() -> None:
    dto = ProfileRequestDTO.model_validate(
        {
            "handle": "alice",
            "status": "Dev",
            "skills": "a,b",
            "youtube": "",
            "linkedin": "https://linkedin.com/in/alice",
        }
    )

    assert dto.skills == ["a", "b"]
    assert dto.social() == {"linkedin": "https://linkedin.com/in/alice"}
