"""
Malls API Backend — User & Auth Schemas
=========================================

What:  Request bodies for registration/login and the public user profile.
Why:   The profile schema never carries the password hash.
"""

import uuid

from pydantic import EmailStr, Field, field_validator

from mallsapi.schemas.common import ApiModel

EMAIL_MIN_LENGTH = 5
EMAIL_MAX_LENGTH = 255


class _Credentials(ApiModel):
    email: EmailStr
    password: str = Field(min_length=5, max_length=255)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        if not EMAIL_MIN_LENGTH <= len(v) <= EMAIL_MAX_LENGTH:
            raise ValueError(
                f"email length must be between {EMAIL_MIN_LENGTH} and {EMAIL_MAX_LENGTH}"
            )
        return v


class UserCreate(_Credentials):
    """POST /api/users body."""

    name: str = Field(min_length=5, max_length=50)


class AuthRequest(_Credentials):
    """POST /api/auth body."""


class UserResponse(ApiModel):
    """`{_id, name, email}` returned by registration and login."""

    id: uuid.UUID = Field(alias="_id")
    name: str
    email: str


class UserProfile(UserResponse):
    """GET /api/users/me: everything except the password."""

    is_admin: bool
