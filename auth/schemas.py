"""
Pydantic request / response schemas for the users, auth and profile routes.

Request validators raise ``PydanticCustomError`` so the client sees the
plain field message (e.g. "Please include a valid email").  Fields default
to empty so a missing field reports the same message as an empty one.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from auth.password import MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 6

# mirror the column widths in database.models
NAME_MAX = 128
EMAIL_MAX = 255
PROFILE_FIELD_MAX = {
    "status": 128,
    "company": 255,
    "website": 512,
    "location": 255,
    "github_username": 128,
}


def _check_email(value: str) -> str:
    try:
        info = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email_invalid", "Please include a valid email")
    email = info.normalized.lower()
    if len(email) > EMAIL_MAX:
        raise PydanticCustomError("email_too_long", "Email must be 255 characters or fewer")
    return email


def _check_length(value: str, field: str, label: str) -> str:
    limit = PROFILE_FIELD_MAX[field]
    if len(value) > limit:
        raise PydanticCustomError(
            f"{field}_too_long",
            "{label} must be {limit} characters or fewer",
            {"label": label, "limit": limit},
        )
    return value


# ── Request schemas ────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: str = Field(default="", validate_default=True)
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("name_required", "Name is required")
        if len(v) > NAME_MAX:
            raise PydanticCustomError("name_too_long", "Name must be 128 characters or fewer")
        return v

    @field_validator("email")
    @classmethod
    def _email_valid(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Please enter a password with 6 or more characters",
            )
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "Please enter a password of 72 bytes or fewer",
            )
        return v


class LoginRequest(BaseModel):
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("email")
    @classmethod
    def _email_valid(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def _password_present(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("password_required", "Password is required")
        return v


class ProfileRequest(BaseModel):
    status: str = Field(default="", validate_default=True)
    skills: Union[str, List[str]] = Field(default="", validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    github_username: Optional[str] = Field(default=None, alias="githubusername")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("status")
    @classmethod
    def _status_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("status_required", "Status is required")
        return _check_length(v, "status", "Status")

    @field_validator("company", "website", "location", "github_username")
    @classmethod
    def _fits_column(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None:
            return v
        label = info.field_name.replace("_", " ").capitalize()
        return _check_length(v.strip(), info.field_name, label)

    @field_validator("skills")
    @classmethod
    def _split_skills(cls, v: Union[str, List[str]]) -> List[str]:
        raw = v.split(",") if isinstance(v, str) else v
        skills = [s.strip() for s in raw if s and s.strip()]
        if not skills:
            raise PydanticCustomError("skills_required", "Skills is required")
        return skills


# ── Response schemas ───────────────────────────────────────────────────


class TokenResponse(BaseModel):
    token: str


class UserOut(BaseModel):
    """A user record as returned to clients; the password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[datetime] = None


class ProfileUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    avatar: Optional[str] = None


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user: ProfileUser
    status: str
    skills: List[str] = Field(default_factory=list)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    github_username: Optional[str] = None
    date: Optional[datetime] = None
