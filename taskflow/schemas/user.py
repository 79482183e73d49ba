"""Pydantic schemas for users."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

from taskflow.schemas.base import BaseResponse, PageResponse, ensure_aware

FULL_NAME_PATTERN = re.compile(r"^[a-zA-Z ]+$")
PASSWORD_SYMBOLS = "@$!%*?&"

_PASSWORD_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"[A-Z]"), "Must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Must contain at least one lowercase letter"),
    (re.compile(r"\d"), "Must contain at least one number"),
    (
        re.compile(f"[{re.escape(PASSWORD_SYMBOLS)}]"),
        f"Must contain at least one special character ({PASSWORD_SYMBOLS})",
    ),
]


def check_password_complexity(password: str) -> str:
    """Return the password unchanged or raise with every rule it breaks."""
    problems = [message for pattern, message in _PASSWORD_RULES if not pattern.search(password)]
    if problems:
        raise ValueError("; ".join(problems))
    return password


def normalize_email(email: str) -> str:
    """Emails are stored and looked up trimmed and lowercased."""
    return email.strip().lower()


def check_full_name(full_name: str) -> str:
    if not full_name.strip():
        raise ValueError("Full name is required")
    if not FULL_NAME_PATTERN.match(full_name):
        raise ValueError("Full name must contain only letters and spaces")
    return full_name


FullName = Annotated[str, Field(max_length=255)]
NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]
Age = Annotated[int | None, Field(ge=0, le=120)]


class UserCreate(BaseModel):
    """Schema for registering a user."""

    full_name: FullName
    age: Age = None
    email: NormalizedEmail
    password: Annotated[str, Field(min_length=1, max_length=128)]

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        return check_full_name(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_complexity(v)


class UserUpdate(BaseModel):
    """Schema for updating a user.

    Profile fields are replaced as given. A blank or missing password keeps
    the stored hash.
    """

    full_name: FullName
    age: Age = None
    email: NormalizedEmail
    password: Annotated[str | None, Field(max_length=128)] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        return check_full_name(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return check_password_complexity(v)


class UserSummary(BaseResponse):
    """Minimal user projection returned alongside an access token."""

    id: int
    full_name: str
    email: str


class UserResponse(BaseResponse):
    """Schema for user response."""

    id: int
    full_name: str
    age: int | None = None
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime fields are timezone-aware."""
        return ensure_aware(v)


UserPageResponse = PageResponse[UserResponse]
