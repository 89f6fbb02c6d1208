# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""People service for accounts, student profiles and educator profiles.

This module provides the PeopleService that handles:
- Account listing and admin-side account creation
- Student and educator profile listing, lookup and creation

Profile responses carry the linked account's name and email.

Example:
    >>> service = PeopleService(db_session)
    >>> students = await service.list_students(scope)
    >>> educator = await service.get_educator(3, scope)
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.domains.auth.password import PasswordHasher
from edconnect.infrastructure.database.models import Educator, Student, User
from edconnect.models.people import (
    EducatorCreate,
    EducatorResponse,
    StudentCreate,
    StudentResponse,
    UserCreate,
)

logger = logging.getLogger(__name__)


class PeopleServiceError(Exception):
    """Base exception for people service errors."""

    pass


class UserNotFoundError(PeopleServiceError):
    """Raised when a user is not found."""

    pass


class StudentNotFoundError(PeopleServiceError):
    """Raised when a student profile is not found."""

    pass


class EducatorNotFoundError(PeopleServiceError):
    """Raised when an educator profile is not found."""

    pass


class DuplicateRecordError(PeopleServiceError):
    """Raised when a unique username, email, student number or employee id is taken."""

    pass


class PeopleAccessError(PeopleServiceError):
    """Raised when the record lies outside the viewer's scope."""

    pass


class PeopleValidationError(PeopleServiceError):
    """Raised when request fields contradict each other."""

    pass


class PeopleService:
    """Service for accounts and their role profiles.

    Attributes:
        _db: Async database session.
        _hasher: Password hasher for admin-created accounts.
    """

    def __init__(self, db: AsyncSession, password_hasher: PasswordHasher | None = None) -> None:
        self._db = db
        self._hasher = password_hasher or PasswordHasher()

    # =========================================================================
    # Users
    # =========================================================================

    async def list_users(self, scope: AccessScope) -> list[User]:
        """List accounts visible to the viewer."""
        return await scope.users()

    async def create_user(self, data: UserCreate, scope: AccessScope) -> User:
        """Create an account of any role, with its profile record.

        Args:
            data: Account details, including the admin level for admins.
            scope: Creating admin's scope.

        Returns:
            The created user.

        Raises:
            PeopleValidationError: If an admin level is given for a non-admin.
            PeopleAccessError: If the school lies outside the creator's scope.
            DuplicateRecordError: If the username or email is taken.
        """
        if data.admin_level is not None and data.role != "admin":
            raise PeopleValidationError("adminLevel is only valid for admin accounts")
        if data.role == "admin" and not scope.is_super_admin:
            raise PeopleAccessError("Only super admins can create admin accounts")
        if (
            data.school_id is not None
            and not scope.is_super_admin
            and not await scope.can_access_school(data.school_id)
        ):
            raise PeopleAccessError("Access denied to this school")

        username_taken = await self._db.execute(
            select(User.id).where(User.username == data.username)
        )
        if username_taken.scalar_one_or_none() is not None:
            raise DuplicateRecordError("Username already exists")

        email_taken = await self._db.execute(
            select(User.id).where(func.lower(User.email) == data.email.lower())
        )
        if email_taken.scalars().first() is not None:
            raise DuplicateRecordError("Email already exists")

        user = User(
            username=data.username,
            password_hash=self._hasher.hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            role=data.role,
            school_id=data.school_id,
            district_id=data.district_id,
            department_id=data.department_id,
            admin_level=data.admin_level,
            is_active=True,
        )
        self._db.add(user)
        await self._db.flush()

        if user.role == "student":
            self._db.add(Student(user_id=user.id, school_id=user.school_id))
        elif user.role == "educator":
            self._db.add(
                Educator(
                    user_id=user.id,
                    school_id=user.school_id,
                    department_id=user.department_id,
                )
            )

        await self._db.commit()
        await self._db.refresh(user)

        logger.info("User created: %s (role=%s, level=%s)", user.id, user.role, user.admin_level)
        return user

    # =========================================================================
    # Students
    # =========================================================================

    async def list_students(self, scope: AccessScope) -> list[StudentResponse]:
        return [to_student_response(s) for s in await scope.students()]

    async def get_student(self, student_id: int, scope: AccessScope) -> StudentResponse:
        """Get a student profile.

        Raises:
            StudentNotFoundError: If the profile does not exist.
            PeopleAccessError: If it is outside the viewer's scope.
        """
        student = await self._db.get(Student, student_id)
        if student is None:
            raise StudentNotFoundError(f"Student {student_id} not found")
        if not await scope.can_access_student(student_id):
            raise PeopleAccessError("Access denied to this student")
        return to_student_response(student)

    async def create_student(self, data: StudentCreate, scope: AccessScope) -> StudentResponse:
        """Attach a student profile to an existing account.

        Raises:
            UserNotFoundError: If the account does not exist.
            PeopleAccessError: If the school lies outside the creator's scope.
            DuplicateRecordError: If the student number is taken.
        """
        user = await self._db.get(User, data.user_id)
        if user is None:
            raise UserNotFoundError(f"User {data.user_id} not found")

        school_id = data.school_id if data.school_id is not None else user.school_id
        await self._check_school(school_id, scope)

        if data.student_number:
            taken = await self._db.execute(
                select(Student.id).where(Student.student_number == data.student_number)
            )
            if taken.scalar_one_or_none() is not None:
                raise DuplicateRecordError(
                    f"Student number '{data.student_number}' already exists"
                )

        fields = data.model_dump()
        fields["school_id"] = school_id
        student = Student(**fields)
        self._db.add(student)
        await self._db.commit()
        await self._db.refresh(student)

        logger.info("Student profile created: %s (user=%s)", student.id, student.user_id)
        return to_student_response(student, user)

    # =========================================================================
    # Educators
    # =========================================================================

    async def list_educators(self, scope: AccessScope) -> list[EducatorResponse]:
        return [to_educator_response(e) for e in await scope.educators()]

    async def get_educator(self, educator_id: int, scope: AccessScope) -> EducatorResponse:
        """Get an educator profile.

        Raises:
            EducatorNotFoundError: If the profile does not exist.
            PeopleAccessError: If it is outside the viewer's scope.
        """
        educator = await self._db.get(Educator, educator_id)
        if educator is None:
            raise EducatorNotFoundError(f"Educator {educator_id} not found")
        if not await scope.can_access_educator(educator_id):
            raise PeopleAccessError("Access denied to this educator")
        return to_educator_response(educator)

    async def create_educator(self, data: EducatorCreate, scope: AccessScope) -> EducatorResponse:
        """Attach an educator profile to an existing account.

        Raises:
            UserNotFoundError: If the account does not exist.
            PeopleAccessError: If the school lies outside the creator's scope.
            DuplicateRecordError: If the employee id is taken.
        """
        user = await self._db.get(User, data.user_id)
        if user is None:
            raise UserNotFoundError(f"User {data.user_id} not found")

        school_id = data.school_id if data.school_id is not None else user.school_id
        await self._check_school(school_id, scope)

        if data.employee_id:
            taken = await self._db.execute(
                select(Educator.id).where(Educator.employee_id == data.employee_id)
            )
            if taken.scalar_one_or_none() is not None:
                raise DuplicateRecordError(f"Employee id '{data.employee_id}' already exists")

        fields = data.model_dump()
        fields["school_id"] = school_id
        educator = Educator(**fields)
        self._db.add(educator)
        await self._db.commit()
        await self._db.refresh(educator)

        logger.info("Educator profile created: %s (user=%s)", educator.id, educator.user_id)
        return to_educator_response(educator, user)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _check_school(self, school_id: int | None, scope: AccessScope) -> None:
        if school_id is None or scope.is_super_admin:
            return
        if not await scope.can_access_school(school_id):
            raise PeopleAccessError("Access denied to this school")


def _with_user(response, user: User | None):
    if user is None:
        return response
    return response.model_copy(
        update={
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
        }
    )


def to_student_response(student: Student, user: User | None = None) -> StudentResponse:
    """Build a student response carrying the linked account's name and email."""
    return _with_user(StudentResponse.model_validate(student), user or student.user)


def to_educator_response(educator: Educator, user: User | None = None) -> EducatorResponse:
    """Build an educator response carrying the linked account's name and email."""
    return _with_user(EducatorResponse.model_validate(educator), user or educator.user)
