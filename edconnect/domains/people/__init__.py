# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""People domain package: accounts, student profiles and educator profiles."""

from edconnect.domains.people.service import (
    DuplicateRecordError,
    EducatorNotFoundError,
    PeopleAccessError,
    PeopleService,
    PeopleServiceError,
    PeopleValidationError,
    StudentNotFoundError,
    UserNotFoundError,
    to_educator_response,
    to_student_response,
)

__all__ = [
    "PeopleService",
    "PeopleServiceError",
    "UserNotFoundError",
    "StudentNotFoundError",
    "EducatorNotFoundError",
    "DuplicateRecordError",
    "PeopleAccessError",
    "PeopleValidationError",
    "to_student_response",
    "to_educator_response",
]
