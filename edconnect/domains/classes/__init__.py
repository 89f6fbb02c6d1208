# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain package.

This package provides class section management including:
- Scoped class listing and creation
- Rosters
- Enrollments and their status
"""

from edconnect.domains.classes.service import (
    ClassAccessError,
    ClassNotFoundError,
    ClassService,
    ClassServiceError,
    EducatorNotFoundError,
    EnrollmentExistsError,
    EnrollmentNotFoundError,
    StudentNotFoundError,
)

__all__ = [
    "ClassService",
    "ClassServiceError",
    "ClassNotFoundError",
    "ClassAccessError",
    "EducatorNotFoundError",
    "StudentNotFoundError",
    "EnrollmentNotFoundError",
    "EnrollmentExistsError",
]
