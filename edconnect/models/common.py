# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared enumerations and base schema for EdConnect API models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRole(StrEnum):
    """Account roles gating routes and dashboard widgets."""

    STUDENT = "student"
    EDUCATOR = "educator"
    ADMIN = "admin"


class AdminLevel(StrEnum):
    """Scope of an admin account. Admins without a level are super admins."""

    DISTRICT = "district"
    SCHOOL = "school"
    DEPARTMENT = "department"


class EnrollmentStatus(StrEnum):
    ACTIVE = "active"
    DROPPED = "dropped"
    COMPLETED = "completed"


class AttendanceStatus(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"
    TARDY = "tardy"
    EXCUSED = "excused"


class AchievementType(StrEnum):
    BADGE = "badge"
    CERTIFICATE = "certificate"
    MILESTONE = "milestone"
    LEVEL_UP = "level-up"


class HomeworkPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys.

    Request bodies accept both camelCase and snake_case field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMModel(CamelModel):
    """Base for response schemas built from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
