# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas for the staff directory, user accounts and authentication."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, model_validator

from school_portal.models.common import CamelModel

UserRole = Literal["admin", "editor", "member"]

MIN_PASSWORD_LENGTH = 6


class StaffMemberSchema(CamelModel):
    """Entry of the staff directory."""

    id: str | None = None
    full_name: str = Field(..., min_length=1, max_length=255)
    position: str | None = Field(None, max_length=255)
    party_date: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=255)
    avatar_url: str | None = None
    order: int = Field(default=0, ge=0)


class UserResponse(CamelModel):
    """Portal account profile."""

    id: str
    username: str
    email: str
    full_name: str
    role: UserRole
    avatar_url: str | None = None
    is_active: bool = True
    last_login_at: datetime | None = None
    created_at: datetime | None = None


class UserUpdateRequest(CamelModel):
    """Admin changes to an account. Omitted fields are left unchanged."""

    full_name: str | None = Field(None, min_length=1, max_length=255)
    role: UserRole | None = None
    avatar_url: str | None = None
    is_active: bool | None = None


class RegisterRequest(CamelModel):
    """Self-service sign-up."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        """Reject a confirmation that differs from the password."""
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(CamelModel):
    """Email and password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    """Exchange a refresh token for a new token pair."""

    refresh_token: str


class TokenResponse(CamelModel):
    """Issued JWT pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginResponse(CamelModel):
    """Successful sign-in: tokens plus the signed-in profile."""

    tokens: TokenResponse
    user: UserResponse
