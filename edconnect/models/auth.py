# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication request and response schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import EmailStr, Field

from edconnect.domains.auth.jwt import TokenPair
from edconnect.models.common import AdminLevel, CamelModel, ORMModel, UserRole


class RegisterRequest(CamelModel):
    """Self-service account creation. Admin accounts are created by admins."""

    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    role: Literal["student", "educator"] = "student"
    school_id: int | None = None
    district_id: int | None = None
    department_id: int | None = None
    grade: str | None = Field(default=None, max_length=20)
    date_of_birth: date | None = None
    subject_specialty: str | None = Field(default=None, max_length=100)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class UpdateProfileRequest(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None


class UserResponse(ORMModel):
    """Public view of an account; never includes the password hash."""

    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    role: UserRole
    school_id: int | None = None
    district_id: int | None = None
    department_id: int | None = None
    admin_level: AdminLevel | None = None
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None


class AuthResponse(CamelModel):
    """User plus freshly issued tokens."""

    user: UserResponse
    tokens: TokenPair
