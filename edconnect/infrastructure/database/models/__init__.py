# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models for EdConnect.

Importing this package registers every table on ``Base.metadata``.
"""

from edconnect.infrastructure.database.models.academic import (
    Achievement,
    Attendance,
    Enrollment,
    Grade,
    SchoolClass,
)
from edconnect.infrastructure.database.models.base import Base, TimestampMixin
from edconnect.infrastructure.database.models.learning import (
    Homework,
    TutoringMessage,
    TutoringSession,
)
from edconnect.infrastructure.database.models.organization import (
    Department,
    District,
    School,
)
from edconnect.infrastructure.database.models.user import Educator, Student, User

__all__ = [
    "Base",
    "TimestampMixin",
    # Organization
    "District",
    "School",
    "Department",
    # People
    "User",
    "Student",
    "Educator",
    # Academic
    "SchoolClass",
    "Enrollment",
    "Grade",
    "Attendance",
    "Achievement",
    # Learning
    "TutoringSession",
    "TutoringMessage",
    "Homework",
]
