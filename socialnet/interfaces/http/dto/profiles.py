from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from socialnet.shared.errors.validation_types import ValidationErrorType

_HANDLE_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_URL_RE = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def _check_url(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not _URL_RE.match(value):
        raise PydanticCustomError(
            ValidationErrorType.URL_INVALID,
            "Not a valid URL",
            {},
        )
    return value


class ProfileRequestDTO(BaseModel):
    handle: str = Field(min_length=2, max_length=40)
    status: str = Field(min_length=1, max_length=100)
    skills: list[str] = Field(min_length=1, max_length=50)
    company: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=512)
    location: str | None = Field(default=None, max_length=100)
    bio: str | None = Field(default=None, max_length=2000)
    github_username: str | None = Field(default=None, max_length=39)
    youtube: str | None = Field(default=None, max_length=512)
    twitter: str | None = Field(default=None, max_length=512)
    facebook: str | None = Field(default=None, max_length=512)
    linkedin: str | None = Field(default=None, max_length=512)
    instagram: str | None = Field(default=None, max_length=512)

    @field_validator("handle")
    @classmethod
    def validate_handle(cls, value: str) -> str:
        value = value.strip()
        if not _HANDLE_RE.match(value):
            raise PydanticCustomError(
                ValidationErrorType.HANDLE_INVALID_CHARS,
                "Handle may contain only letters, digits, '_' and '-'",
                {},
            )
        return value

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, value: Any) -> Any:
        # Accept the comma separated form sent by simple forms.
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("website", "youtube", "twitter", "facebook", "linkedin", "instagram")
    @classmethod
    def validate_url(cls, value: str | None) -> str | None:
        return _check_url(value)

    def social(self) -> dict[str, str]:
        links = {name: getattr(self, name) for name in SOCIAL_NETWORKS}
        return {name: url for name, url in links.items() if url}


class ProfileDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    handle: str
    status: str
    skills: list[str] = Field(default_factory=list)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str] = Field(default_factory=dict)
    created_at: datetime
