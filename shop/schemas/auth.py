"""Request/response schemas for auth endpoints."""

import re
import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shop.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PASSWORD_PATTERN,
    PASSWORD_PATTERN_MESSAGE,
)
from shop.models.user import User

_PASSWORD_RE = re.compile(PASSWORD_PATTERN)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="User email")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )

    @field_validator("password")
    @classmethod
    def validate_password_pattern(cls, v: str) -> str:
        # Lookaheads are not supported by pydantic's pattern=, so match with re.
        if not _PASSWORD_RE.match(v):
            raise ValueError(PASSWORD_PATTERN_MESSAGE)
        return v


class CreateUserRequest(LoginRequest):
    """Registration payload."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("fullName must not be blank")
        return v.strip()


class UserPublic(BaseModel):
    """Read-facing user projection. Has no password field by construction."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    email: str
    full_name: str = Field(..., alias="fullName")
    is_active: bool = Field(..., alias="isActive")
    roles: list[str]

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            is_active=user.is_active,
            roles=list(user.roles or []),
        )


class AuthResponse(BaseModel):
    """Session returned by register, login and check-status."""

    user: UserPublic
    token: str = Field(..., description="JWT access token (Authorization: Bearer <token>)")


class PrivateRouteResponse(BaseModel):
    """Echo of the resolved principal and request headers (GET /auth/private)."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    message: str
    user: UserPublic
    user_email: str = Field(..., alias="userEmail")
    raw_headers: list[str] = Field(..., alias="rawHeaders")
    headers: dict[str, str]


class RoleCheckResponse(BaseModel):
    ok: bool = True
    user: UserPublic
