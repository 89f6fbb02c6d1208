# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class service for class sections, rosters and enrollments.

This module provides the ClassService that handles:
- Class listing, lookup and creation within the viewer's scope
- Class rosters
- Enrollment listing, creation and status changes

Example:
    >>> service = ClassService(db_session)
    >>> classes = await service.list_classes(scope)
    >>> enrollment = await service.enroll(EnrollmentCreate(student_id=1, class_id=2), scope)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.infrastructure.database.models import (
    Educator,
    Enrollment,
    SchoolClass,
    Student,
)
from edconnect.models.classes import ClassCreate, EnrollmentCreate
from edconnect.models.common import EnrollmentStatus

logger = logging.getLogger(__name__)


class ClassServiceError(Exception):
    """Base exception for class service errors."""

    pass


class ClassNotFoundError(ClassServiceError):
    """Raised when a class is not found."""

    pass


class ClassAccessError(ClassServiceError):
    """Raised when a class lies outside the viewer's scope."""

    pass


class EducatorNotFoundError(ClassServiceError):
    """Raised when the teaching educator does not exist."""

    pass


class StudentNotFoundError(ClassServiceError):
    """Raised when the student to enroll does not exist."""

    pass


class EnrollmentNotFoundError(ClassServiceError):
    """Raised when an enrollment is not found."""

    pass


class EnrollmentExistsError(ClassServiceError):
    """Raised when the student is already enrolled in the class."""

    pass


class ClassService:
    """Service for class sections and enrollments.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    # =========================================================================
    # Classes
    # =========================================================================

    async def list_classes(self, scope: AccessScope) -> list[SchoolClass]:
        return await scope.classes()

    async def get_class(self, class_id: int, scope: AccessScope) -> SchoolClass:
        """Get a class by id.

        Raises:
            ClassNotFoundError: If the class does not exist.
            ClassAccessError: If it is outside the viewer's scope.
        """
        school_class = await self._db.get(SchoolClass, class_id)
        if school_class is None:
            raise ClassNotFoundError(f"Class {class_id} not found")
        if not await scope.can_access_class(class_id):
            raise ClassAccessError("Access denied to this class")
        return school_class

    async def create_class(self, data: ClassCreate, scope: AccessScope) -> SchoolClass:
        """Create a class section.

        Educators always create classes they teach themselves, at their own
        school. Admins may assign any educator and must have access to the
        target school.

        Raises:
            EducatorNotFoundError: If the educator profile is missing.
            ClassAccessError: If the school lies outside the viewer's scope.
        """
        fields = data.model_dump()

        if scope.is_educator:
            educator = await scope.educator_for_user()
            if educator is None:
                raise EducatorNotFoundError("No educator profile for the current user")
            fields["educator_id"] = educator.id
            fields["school_id"] = educator.school_id or data.school_id
            if fields["department_id"] is None:
                fields["department_id"] = educator.department_id
        else:
            if data.educator_id is not None:
                educator = await self._db.get(Educator, data.educator_id)
                if educator is None:
                    raise EducatorNotFoundError(f"Educator {data.educator_id} not found")
                if fields["school_id"] is None:
                    fields["school_id"] = educator.school_id
            if (
                fields["school_id"] is not None
                and not scope.is_super_admin
                and not await scope.can_access_school(fields["school_id"])
            ):
                raise ClassAccessError("Access denied to this school")

        school_class = SchoolClass(**fields, is_active=True)
        self._db.add(school_class)
        await self._db.commit()
        await self._db.refresh(school_class)

        logger.info(
            "Class created: %s (educator=%s, school=%s)",
            school_class.id,
            school_class.educator_id,
            school_class.school_id,
        )
        return school_class

    async def roster(self, class_id: int, scope: AccessScope) -> list[Student]:
        """Students enrolled in a class the viewer can access."""
        await self.get_class(class_id, scope)
        result = await self._db.execute(
            select(Student)
            .join(Enrollment, Enrollment.student_id == Student.id)
            .where(Enrollment.class_id == class_id)
            .order_by(Student.id)
        )
        return list(result.scalars().unique().all())

    # =========================================================================
    # Enrollments
    # =========================================================================

    async def list_enrollments(self, scope: AccessScope) -> list[Enrollment]:
        return await scope.enrollments()

    async def enroll(self, data: EnrollmentCreate, scope: AccessScope) -> Enrollment:
        """Enroll a student in an accessible class.

        Raises:
            ClassNotFoundError: If the class does not exist.
            ClassAccessError: If the class is outside the viewer's scope.
            StudentNotFoundError: If the student does not exist.
            EnrollmentExistsError: If the student is already enrolled.
        """
        await self.get_class(data.class_id, scope)

        if await self._db.get(Student, data.student_id) is None:
            raise StudentNotFoundError(f"Student {data.student_id} not found")

        existing = await self._db.execute(
            select(Enrollment.id).where(
                Enrollment.student_id == data.student_id,
                Enrollment.class_id == data.class_id,
            )
        )
        if existing.scalar_one_or_none() is not None:
            raise EnrollmentExistsError("Student is already enrolled in this class")

        enrollment = Enrollment(
            student_id=data.student_id,
            class_id=data.class_id,
            status=EnrollmentStatus.ACTIVE.value,
        )
        self._db.add(enrollment)
        await self._db.commit()
        await self._db.refresh(enrollment)

        logger.info("Student %s enrolled in class %s", data.student_id, data.class_id)
        return enrollment

    async def update_enrollment_status(
        self,
        enrollment_id: int,
        status: EnrollmentStatus,
        scope: AccessScope,
    ) -> Enrollment:
        """Change an enrollment to active, dropped or completed.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
            ClassAccessError: If its class is outside the viewer's scope.
        """
        enrollment = await self._db.get(Enrollment, enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(f"Enrollment {enrollment_id} not found")
        if not await scope.can_access_class(enrollment.class_id):
            raise ClassAccessError("Access denied to this class")

        enrollment.status = EnrollmentStatus(status).value
        await self._db.commit()
        await self._db.refresh(enrollment)

        logger.info("Enrollment %s status changed to %s", enrollment.id, enrollment.status)
        return enrollment
