# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class and enrollment schemas."""

from datetime import datetime

from pydantic import Field

from edconnect.models.common import CamelModel, EnrollmentStatus, ORMModel


class ClassCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    educator_id: int | None = None
    school_id: int | None = None
    department_id: int | None = None
    room_number: str | None = None
    period: str | None = None
    semester: str | None = None
    school_year: str | None = None


class ClassResponse(ORMModel):
    id: int
    name: str
    description: str | None = None
    educator_id: int | None = None
    school_id: int | None = None
    department_id: int | None = None
    room_number: str | None = None
    period: str | None = None
    semester: str | None = None
    school_year: str | None = None
    is_active: bool


class EnrollmentCreate(CamelModel):
    student_id: int
    class_id: int


class EnrollmentUpdate(CamelModel):
    status: EnrollmentStatus


class EnrollmentResponse(ORMModel):
    id: int
    student_id: int
    class_id: int
    enrollment_date: datetime
    status: EnrollmentStatus
