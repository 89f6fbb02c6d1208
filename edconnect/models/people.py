# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User administration, student and educator profile schemas."""

from datetime import date

from pydantic import EmailStr, Field

from edconnect.models.common import AdminLevel, CamelModel, ORMModel, UserRole


class UserCreate(CamelModel):
    """Account creation by an admin; the only way to create admin accounts."""

    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    role: UserRole
    school_id: int | None = None
    district_id: int | None = None
    department_id: int | None = None
    admin_level: AdminLevel | None = None


class StudentCreate(CamelModel):
    user_id: int
    school_id: int | None = None
    grade: str | None = None
    date_of_birth: date | None = None
    student_number: str | None = None
    guardian_name: str | None = None
    guardian_email: EmailStr | None = None
    guardian_phone: str | None = None


class StudentResponse(ORMModel):
    id: int
    user_id: int
    school_id: int | None = None
    grade: str | None = None
    date_of_birth: date | None = None
    student_number: str | None = None
    guardian_name: str | None = None
    guardian_email: str | None = None
    guardian_phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class EducatorCreate(CamelModel):
    user_id: int
    school_id: int | None = None
    department_id: int | None = None
    subject_specialty: str | None = None
    employee_id: str | None = None
    office_location: str | None = None
    office_hours: str | None = None


class EducatorResponse(ORMModel):
    id: int
    user_id: int
    school_id: int | None = None
    department_id: int | None = None
    subject_specialty: str | None = None
    employee_id: str | None = None
    office_location: str | None = None
    office_hours: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
