# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance service and attendance rate calculation."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.infrastructure.database.models import Attendance, Enrollment, SchoolClass
from edconnect.models.common import AttendanceStatus
from edconnect.models.records import AttendanceCreate

logger = logging.getLogger(__name__)

# Tardy students were still in class.
ATTENDED_STATUSES = frozenset({AttendanceStatus.PRESENT.value, AttendanceStatus.TARDY.value})


class AttendanceServiceError(Exception):
    """Base exception for attendance service errors."""

    pass


class AttendanceClassNotFoundError(AttendanceServiceError):
    """Raised when the class does not exist."""

    pass


class AttendanceAccessError(AttendanceServiceError):
    """Raised when the class lies outside the recorder's scope."""

    pass


class StudentNotEnrolledError(AttendanceServiceError):
    """Raised when marking a student who is not enrolled in the class."""

    pass


def attendance_rate(records: Iterable[Attendance]) -> float:
    """Percentage of records marked present or tardy, 0 when there are none."""
    records = list(records)
    if not records:
        return 0.0
    attended = sum(1 for r in records if r.status in ATTENDED_STATUSES)
    return attended / len(records) * 100


class AttendanceService:
    """Service for attendance records.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_attendance(
        self,
        scope: AccessScope,
        class_id: int | None = None,
        student_id: int | None = None,
    ) -> list[Attendance]:
        stmt = select(Attendance).where(await scope.attendance_condition())
        if class_id is not None:
            stmt = stmt.where(Attendance.class_id == class_id)
        if student_id is not None:
            stmt = stmt.where(Attendance.student_id == student_id)

        result = await self._db.execute(stmt.order_by(Attendance.date.desc(), Attendance.id.desc()))
        return list(result.scalars().all())

    async def record(
        self,
        data: AttendanceCreate,
        scope: AccessScope,
        recorded_by: int,
    ) -> Attendance:
        """Record an attendance mark.

        Args:
            data: Attendance details.
            scope: Recorder's scope.
            recorded_by: User id of the recorder.

        Raises:
            AttendanceClassNotFoundError: If the class does not exist.
            AttendanceAccessError: If the class is outside the recorder's scope.
            StudentNotEnrolledError: If the student is not in the class.
        """
        if await self._db.get(SchoolClass, data.class_id) is None:
            raise AttendanceClassNotFoundError(f"Class {data.class_id} not found")
        if not await scope.can_access_class(data.class_id):
            raise AttendanceAccessError("Access denied to this class")

        enrolled = await self._db.execute(
            select(Enrollment.id).where(
                Enrollment.class_id == data.class_id,
                Enrollment.student_id == data.student_id,
            )
        )
        if enrolled.scalar_one_or_none() is None:
            raise StudentNotEnrolledError("Student is not enrolled in this class")

        record = Attendance(**data.model_dump(), recorded_by=recorded_by)
        self._db.add(record)
        await self._db.commit()
        await self._db.refresh(record)

        logger.info(
            "Attendance recorded: student=%s class=%s date=%s status=%s",
            record.student_id,
            record.class_id,
            record.date,
            record.status,
        )
        return record
