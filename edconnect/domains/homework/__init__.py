# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Homework domain package."""

from edconnect.domains.homework.service import (
    HomeworkBucketRows,
    HomeworkNotFoundError,
    HomeworkService,
    HomeworkServiceError,
    HomeworkValidationError,
    bucketize,
)

__all__ = [
    "HomeworkService",
    "HomeworkServiceError",
    "HomeworkNotFoundError",
    "HomeworkValidationError",
    "HomeworkBucketRows",
    "bucketize",
]
