from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from socialnet.shared.errors.validation_types import ValidationErrorType

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


def _check_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_RE.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID,
            "Email is invalid",
            {},
        )
    return value.lower()


class RegisterRequestDTO(BaseModel):
    name: str = Field(min_length=2, max_length=30)
    email: str = Field(max_length=254)
    password: str = Field(min_length=6, max_length=128)
    password2: str = Field(min_length=1, max_length=128)
    avatar: str | None = Field(default=None, max_length=512)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise PydanticCustomError(
                ValidationErrorType.NAME_INVALID,
                "Name must be between 2 and 30 characters",
                {"min_length": 2, "max_length": 30},
            )
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        if not re.search(r"[A-Za-z]", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_LETTER,
                "Password must contain at least one letter",
                {},
            )

        if not re.search(r"\d", value):
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_NO_DIGIT,
                "Password must contain at least one digit",
                {},
            )

        return value

    @model_validator(mode="after")
    def passwords_match(self) -> RegisterRequestDTO:
        if self.password != self.password2:
            raise PydanticCustomError(
                "password_mismatch",
                "Passwords must match",
                {},
            )
        return self


class LoginRequestDTO(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(min_length=1, max_length=128)  # No strength check on login

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)


class TokenVerifyRequestDTO(BaseModel):
    token: str = Field(min_length=1, max_length=4096)


class TokenDTO(BaseModel):
    success: bool = True
    token: str
    issued_at: datetime
    expires_at: datetime


class UserDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime


class IdentityDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: str | None = None
    avatar: str | None = None
    issued_at: datetime
    expires_at: datetime
