# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade service.

Grades are recorded by educators and admins for students enrolled in a
class the recorder can access.

Example:
    >>> service = GradeService(db_session)
    >>> grades = await service.list_grades(scope, class_id=2)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.infrastructure.database.models import Enrollment, Grade, SchoolClass
from edconnect.models.records import GradeCreate

logger = logging.getLogger(__name__)


class GradeServiceError(Exception):
    """Base exception for grade service errors."""

    pass


class GradeClassNotFoundError(GradeServiceError):
    """Raised when the graded class does not exist."""

    pass


class GradeAccessError(GradeServiceError):
    """Raised when the class lies outside the recorder's scope."""

    pass


class StudentNotEnrolledError(GradeServiceError):
    """Raised when grading a student who is not enrolled in the class."""

    pass


def average_percentage(grades: list[Grade]) -> float:
    """Mean of the grades' percentages, 0 when there are none."""
    if not grades:
        return 0.0
    return sum(g.percentage for g in grades) / len(grades)


class GradeService:
    """Service for grade records.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_grades(
        self,
        scope: AccessScope,
        class_id: int | None = None,
        student_id: int | None = None,
    ) -> list[Grade]:
        """List accessible grades, newest first within filters."""
        stmt = select(Grade).where(await scope.grade_condition())
        if class_id is not None:
            stmt = stmt.where(Grade.class_id == class_id)
        if student_id is not None:
            stmt = stmt.where(Grade.student_id == student_id)

        result = await self._db.execute(stmt.order_by(Grade.graded_date.desc(), Grade.id.desc()))
        return list(result.scalars().all())

    async def create_grade(self, data: GradeCreate, scope: AccessScope) -> Grade:
        """Record a grade.

        Raises:
            GradeClassNotFoundError: If the class does not exist.
            GradeAccessError: If the class is outside the recorder's scope.
            StudentNotEnrolledError: If the student is not in the class.
        """
        if await self._db.get(SchoolClass, data.class_id) is None:
            raise GradeClassNotFoundError(f"Class {data.class_id} not found")
        if not await scope.can_access_class(data.class_id):
            raise GradeAccessError("Access denied to this class")

        enrolled = await self._db.execute(
            select(Enrollment.id).where(
                Enrollment.class_id == data.class_id,
                Enrollment.student_id == data.student_id,
            )
        )
        if enrolled.scalar_one_or_none() is None:
            raise StudentNotEnrolledError("Student is not enrolled in this class")

        grade = Grade(**data.model_dump())
        self._db.add(grade)
        await self._db.commit()
        await self._db.refresh(grade)

        logger.info(
            "Grade recorded: %s (student=%s, class=%s, %.1f%%)",
            grade.id,
            grade.student_id,
            grade.class_id,
            grade.percentage,
        )
        return grade
