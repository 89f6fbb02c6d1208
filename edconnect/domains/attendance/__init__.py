# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance domain package."""

from edconnect.domains.attendance.service import (
    AttendanceAccessError,
    AttendanceClassNotFoundError,
    AttendanceService,
    AttendanceServiceError,
    StudentNotEnrolledError,
    attendance_rate,
)

__all__ = [
    "AttendanceService",
    "AttendanceServiceError",
    "AttendanceClassNotFoundError",
    "AttendanceAccessError",
    "StudentNotEnrolledError",
    "attendance_rate",
]
