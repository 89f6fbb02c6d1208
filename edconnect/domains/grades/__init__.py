# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade domain package."""

from edconnect.domains.grades.service import (
    GradeAccessError,
    GradeClassNotFoundError,
    GradeService,
    GradeServiceError,
    StudentNotEnrolledError,
    average_percentage,
)

__all__ = [
    "GradeService",
    "GradeServiceError",
    "GradeClassNotFoundError",
    "GradeAccessError",
    "StudentNotEnrolledError",
    "average_percentage",
]
