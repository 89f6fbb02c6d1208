# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role-based access scope.

Every listing in EdConnect is filtered through an AccessScope, which
turns the viewer's role, admin level and organisation links into SQL
conditions:

- Super admins (role ``admin`` with no admin level) see everything.
- District, school and department admins see the records under their
  district, school or department.
- Educators see their own classes, the students enrolled in them and the
  colleagues at their school.
- Students see their own records, their classes and the educators who
  teach them.

Each ``*_condition`` method returns a SQLAlchemy boolean clause (``true()``
for unrestricted, ``false()`` for nothing) so conditions compose into
subqueries without loading intermediate rows.

Example:
    >>> scope = AccessScope(db, current_user)
    >>> classes = await scope.classes()
    >>> if not await scope.can_access_class(class_id):
    ...     raise PermissionError
"""

import logging
from typing import Protocol

from sqlalchemy import ColumnElement, false, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.infrastructure.database.models import (
    Achievement,
    Attendance,
    Department,
    Educator,
    Enrollment,
    Grade,
    School,
    SchoolClass,
    Student,
    User,
)

logger = logging.getLogger(__name__)


class Principal(Protocol):
    """The viewer an access scope is resolved for."""

    id: int
    role: str | None
    admin_level: str | None
    school_id: int | None
    district_id: int | None
    department_id: int | None


class AccessScope:
    """Resolves which rows a principal may see.

    Attributes:
        _db: Database session.
        principal: Viewer the scope is resolved for.
    """

    def __init__(self, db: AsyncSession, principal: Principal) -> None:
        self._db = db
        self.principal = principal
        self._student: Student | None = None
        self._educator: Educator | None = None
        self._profiles_loaded = False

    # =========================================================================
    # Principal helpers
    # =========================================================================

    @property
    def is_admin(self) -> bool:
        return self.principal.role == "admin"

    @property
    def is_super_admin(self) -> bool:
        return self.is_admin and not self.principal.admin_level

    @property
    def is_educator(self) -> bool:
        return self.principal.role == "educator"

    @property
    def is_student(self) -> bool:
        return self.principal.role == "student"

    async def _load_profiles(self) -> None:
        if self._profiles_loaded:
            return
        if self.is_student:
            result = await self._db.execute(
                select(Student).where(Student.user_id == self.principal.id).order_by(Student.id).limit(1)
            )
            self._student = result.scalar_one_or_none()
        elif self.is_educator:
            result = await self._db.execute(
                select(Educator).where(Educator.user_id == self.principal.id).order_by(Educator.id).limit(1)
            )
            self._educator = result.scalar_one_or_none()
        self._profiles_loaded = True

    async def student_for_user(self) -> Student | None:
        """The viewer's student profile, if the viewer is a student."""
        await self._load_profiles()
        return self._student

    async def educator_for_user(self) -> Educator | None:
        """The viewer's educator profile, if the viewer is an educator."""
        await self._load_profiles()
        return self._educator

    # =========================================================================
    # Conditions
    # =========================================================================

    def _admin_level_condition(
        self,
        district: ColumnElement[bool] | None,
        school: ColumnElement[bool] | None,
        department: ColumnElement[bool] | None,
    ) -> ColumnElement[bool]:
        """Pick the clause matching the admin level; missing links see nothing."""
        p = self.principal
        if p.admin_level == "district":
            return district if (district is not None and p.district_id is not None) else false()
        if p.admin_level == "school":
            return school if (school is not None and p.school_id is not None) else false()
        if p.admin_level == "department":
            return department if (department is not None and p.department_id is not None) else false()
        return false()

    async def school_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            return true()
        if self.is_admin:
            if p.admin_level == "department":
                return School.id == p.school_id if p.school_id is not None else false()
            return self._admin_level_condition(
                district=School.district_id == p.district_id,
                school=School.id == p.school_id,
                department=None,
            )
        if self.is_educator or self.is_student:
            return School.id == p.school_id if p.school_id is not None else false()
        return false()

    async def _accessible_school_ids(self):
        return select(School.id).where(await self.school_condition())

    async def department_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            return true()
        if self.is_admin:
            return self._admin_level_condition(
                district=Department.school_id.in_(await self._accessible_school_ids()),
                school=Department.school_id == p.school_id,
                department=Department.id == p.department_id,
            )
        if self.is_educator:
            educator = await self.educator_for_user()
            department_id = (educator.department_id if educator else None) or p.department_id
            if department_id is not None:
                return Department.id == department_id
            return Department.school_id == p.school_id if p.school_id is not None else false()
        if self.is_student:
            return Department.school_id == p.school_id if p.school_id is not None else false()
        return false()

    async def class_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            return true()
        if self.is_admin:
            return self._admin_level_condition(
                district=SchoolClass.school_id.in_(await self._accessible_school_ids()),
                school=SchoolClass.school_id == p.school_id,
                department=SchoolClass.department_id == p.department_id,
            )
        if self.is_educator:
            educator = await self.educator_for_user()
            return SchoolClass.educator_id == educator.id if educator else false()
        if self.is_student:
            student = await self.student_for_user()
            if student is None:
                return false()
            return SchoolClass.id.in_(
                select(Enrollment.class_id).where(Enrollment.student_id == student.id)
            )
        return false()

    async def student_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            return true()
        if self.is_admin:
            return self._admin_level_condition(
                district=Student.school_id.in_(await self._accessible_school_ids()),
                school=Student.school_id == p.school_id,
                department=Student.id.in_(
                    select(Enrollment.student_id)
                    .join(SchoolClass, SchoolClass.id == Enrollment.class_id)
                    .where(SchoolClass.department_id == p.department_id)
                ),
            )
        if self.is_educator:
            educator = await self.educator_for_user()
            if educator is None:
                return false()
            return Student.id.in_(
                select(Enrollment.student_id)
                .join(SchoolClass, SchoolClass.id == Enrollment.class_id)
                .where(SchoolClass.educator_id == educator.id)
            )
        if self.is_student:
            student = await self.student_for_user()
            return Student.id == student.id if student else false()
        return false()

    async def educator_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            return true()
        if self.is_admin:
            return self._admin_level_condition(
                district=Educator.school_id.in_(await self._accessible_school_ids()),
                school=Educator.school_id == p.school_id,
                department=Educator.department_id == p.department_id,
            )
        if self.is_educator:
            educator = await self.educator_for_user()
            school_id = (educator.school_id if educator else None) or p.school_id
            if school_id is None:
                return Educator.id == educator.id if educator else false()
            return Educator.school_id == school_id
        if self.is_student:
            student = await self.student_for_user()
            if student is None:
                return false()
            return Educator.id.in_(
                select(SchoolClass.educator_id)
                .join(Enrollment, Enrollment.class_id == SchoolClass.id)
                .where(Enrollment.student_id == student.id)
            )
        return false()

    async def _record_condition(self, model: type[Grade] | type[Attendance]) -> ColumnElement[bool]:
        if self.is_super_admin:
            return true()
        if self.is_admin:
            return model.student_id.in_(select(Student.id).where(await self.student_condition()))
        if self.is_educator:
            educator = await self.educator_for_user()
            if educator is None:
                return false()
            return model.class_id.in_(
                select(SchoolClass.id).where(SchoolClass.educator_id == educator.id)
            )
        if self.is_student:
            student = await self.student_for_user()
            return model.student_id == student.id if student else false()
        return false()

    async def grade_condition(self) -> ColumnElement[bool]:
        return await self._record_condition(Grade)

    async def attendance_condition(self) -> ColumnElement[bool]:
        return await self._record_condition(Attendance)

    async def user_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            return true()
        if self.is_admin:
            return self._admin_level_condition(
                district=User.district_id == p.district_id,
                school=User.school_id == p.school_id,
                department=User.department_id == p.department_id,
            )
        if self.is_educator:
            clauses = [
                User.id == p.id,
                User.id.in_(select(Student.user_id).where(await self.student_condition())),
            ]
            if p.school_id is not None:
                clauses.append((User.role == "educator") & (User.school_id == p.school_id))
            return or_(*clauses)
        return User.id == p.id

    async def achievement_condition(self) -> ColumnElement[bool]:
        p = self.principal
        if self.is_super_admin:
            scope: ColumnElement[bool] = true()
        elif self.is_admin:
            scope = Achievement.user_id.in_(select(User.id).where(await self.user_condition()))
        elif self.is_educator:
            scope = or_(
                Achievement.user_id == p.id,
                Achievement.user_id.in_(
                    select(Student.user_id).where(await self.student_condition())
                ),
            )
        elif self.is_student:
            scope = or_(Achievement.user_id == p.id, Achievement.is_public.is_(True))
        else:
            return false()
        return scope & or_(Achievement.visible.is_(True), Achievement.user_id == p.id)

    async def enrollment_condition(self) -> ColumnElement[bool]:
        if self.is_student:
            student = await self.student_for_user()
            return Enrollment.student_id == student.id if student else false()
        return Enrollment.class_id.in_(select(SchoolClass.id).where(await self.class_condition()))

    # =========================================================================
    # Accessible rows
    # =========================================================================

    async def _rows(self, model, condition: ColumnElement[bool]) -> list:
        result = await self._db.execute(select(model).where(condition).order_by(model.id))
        return list(result.scalars().all())

    async def schools(self) -> list[School]:
        return await self._rows(School, await self.school_condition())

    async def departments(self) -> list[Department]:
        return await self._rows(Department, await self.department_condition())

    async def classes(self) -> list[SchoolClass]:
        return await self._rows(SchoolClass, await self.class_condition())

    async def students(self) -> list[Student]:
        return await self._rows(Student, await self.student_condition())

    async def educators(self) -> list[Educator]:
        return await self._rows(Educator, await self.educator_condition())

    async def grades(self) -> list[Grade]:
        return await self._rows(Grade, await self.grade_condition())

    async def attendance(self) -> list[Attendance]:
        return await self._rows(Attendance, await self.attendance_condition())

    async def users(self) -> list[User]:
        return await self._rows(User, await self.user_condition())

    async def achievements(self) -> list[Achievement]:
        return await self._rows(Achievement, await self.achievement_condition())

    async def enrollments(self) -> list[Enrollment]:
        return await self._rows(Enrollment, await self.enrollment_condition())

    # =========================================================================
    # Guards
    # =========================================================================

    async def _exists(self, model, row_id: int, condition: ColumnElement[bool]) -> bool:
        result = await self._db.execute(
            select(model.id).where(model.id == row_id, condition).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def can_access_school(self, school_id: int) -> bool:
        return await self._exists(School, school_id, await self.school_condition())

    async def can_access_department(self, department_id: int) -> bool:
        return await self._exists(Department, department_id, await self.department_condition())

    async def can_access_class(self, class_id: int) -> bool:
        return await self._exists(SchoolClass, class_id, await self.class_condition())

    async def can_access_student(self, student_id: int) -> bool:
        return await self._exists(Student, student_id, await self.student_condition())

    async def can_access_educator(self, educator_id: int) -> bool:
        return await self._exists(Educator, educator_id, await self.educator_condition())

    async def can_access_user(self, user_id: int) -> bool:
        return await self._exists(User, user_id, await self.user_condition())

    async def can_access_achievement(self, achievement_id: int) -> bool:
        return await self._exists(Achievement, achievement_id, await self.achievement_condition())
