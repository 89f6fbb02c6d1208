# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for AccessScope.

Runs against an in-memory SQLite database holding the demo data plus a
second district with its own school, educator and student.
"""

from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.infrastructure.database.models import (
    Achievement,
    District,
    Educator,
    Enrollment,
    School,
    SchoolClass,
    Student,
    User,
)


@pytest_asyncio.fixture
async def other_district(db_session: AsyncSession, demo: dict[str, Any]) -> dict[str, Any]:
    """A second district whose rows the demo accounts must not see."""
    district = District(name="Boston Public Schools", code="BPS")
    db_session.add(district)
    await db_session.flush()

    school = School(name="Back Bay High", code="BBH-001", district_id=district.id)
    db_session.add(school)
    await db_session.flush()

    teacher = User(
        username="bteacher",
        password_hash="x",
        first_name="Bea",
        last_name="Teach",
        email="bea@bps.edu",
        role="educator",
        school_id=school.id,
        district_id=district.id,
    )
    student_user = User(
        username="bstudent",
        password_hash="x",
        first_name="Ben",
        last_name="Learner",
        email="ben@bps.edu",
        role="student",
        school_id=school.id,
        district_id=district.id,
    )
    db_session.add_all([teacher, student_user])
    await db_session.flush()

    educator = Educator(user_id=teacher.id, school_id=school.id)
    student = Student(user_id=student_user.id, school_id=school.id)
    db_session.add_all([educator, student])
    await db_session.flush()

    school_class = SchoolClass(name="Biology", educator_id=educator.id, school_id=school.id)
    db_session.add(school_class)
    await db_session.flush()

    db_session.add(Enrollment(student_id=student.id, class_id=school_class.id))
    await db_session.commit()

    return {
        "district": district,
        "school": school,
        "teacher": teacher,
        "student_user": student_user,
        "educator": educator,
        "student": student,
        "class": school_class,
    }


def _ids(rows) -> set[int]:
    return {row.id for row in rows}


class TestSuperAdminScope:
    """Super admins see every row."""

    @pytest.mark.asyncio
    async def test_sees_everything(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].admin))

        assert scope.is_super_admin is True
        assert _ids(await scope.schools()) == {demo["school"].id, other_district["school"].id}
        assert len(await scope.classes()) == 5
        assert len(await scope.students()) == 2
        assert await scope.can_access_class(other_district["class"].id) is True


class TestScopedAdmins:
    """District, school and department admins see their own subtree."""

    @pytest.mark.asyncio
    async def test_district_admin_sees_own_district(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        principal = principal_for(
            demo["accounts"].admin,
            admin_level="district",
            district_id=demo["district"].id,
        )
        scope = AccessScope(db_session, principal)

        assert _ids(await scope.schools()) == {demo["school"].id}
        assert _ids(await scope.students()) == {demo["student"].id}
        assert len(await scope.grades()) == 4
        assert await scope.can_access_school(other_district["school"].id) is False

    @pytest.mark.asyncio
    async def test_school_admin_sees_own_school(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        principal = principal_for(
            demo["accounts"].admin,
            admin_level="school",
            school_id=other_district["school"].id,
        )
        scope = AccessScope(db_session, principal)

        assert _ids(await scope.classes()) == {other_district["class"].id}
        assert _ids(await scope.educators()) == {other_district["educator"].id}
        assert await scope.grades() == []

    @pytest.mark.asyncio
    async def test_department_admin_sees_department_classes(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
    ) -> None:
        principal = principal_for(
            demo["accounts"].admin,
            admin_level="department",
            school_id=demo["school"].id,
            department_id=demo["department"].id,
        )
        scope = AccessScope(db_session, principal)

        classes = await scope.classes()

        assert [c.name for c in classes] == ["Mathematics"]
        assert _ids(await scope.departments()) == {demo["department"].id}

    @pytest.mark.asyncio
    async def test_admin_level_without_link_sees_nothing(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
    ) -> None:
        principal = principal_for(demo["accounts"].admin, admin_level="district", district_id=None)
        scope = AccessScope(db_session, principal)

        assert await scope.schools() == []
        assert await scope.students() == []


class TestEducatorScope:
    """Educators see their classes and the students in them."""

    @pytest.mark.asyncio
    async def test_sees_own_classes_and_students(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        assert _ids(await scope.classes()) == _ids(demo["classes"])
        assert _ids(await scope.students()) == {demo["student"].id}
        assert len(await scope.attendance()) == 4
        assert await scope.can_access_student(other_district["student"].id) is False
        assert await scope.can_access_class(other_district["class"].id) is False

    @pytest.mark.asyncio
    async def test_sees_school_colleagues_only(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        assert _ids(await scope.educators()) == {demo["educator"].id}
        assert (await scope.educator_for_user()).id == demo["educator"].id

    @pytest.mark.asyncio
    async def test_users_cover_self_students_and_colleagues(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        user_ids = _ids(await scope.users())

        assert demo["accounts"].teacher.id in user_ids
        assert demo["accounts"].student.id in user_ids
        assert demo["accounts"].admin.id not in user_ids
        assert other_district["student_user"].id not in user_ids


class TestStudentScope:
    """Students see their own records."""

    @pytest.mark.asyncio
    async def test_sees_own_records(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].student))

        assert (await scope.student_for_user()).id == demo["student"].id
        assert _ids(await scope.students()) == {demo["student"].id}
        assert len(await scope.classes()) == 4
        assert len(await scope.grades()) == 4
        assert _ids(await scope.educators()) == {demo["educator"].id}
        assert _ids(await scope.users()) == {demo["accounts"].student.id}
        assert await scope.can_access_user(demo["accounts"].teacher.id) is False

    @pytest.mark.asyncio
    async def test_student_without_profile_sees_nothing(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
    ) -> None:
        user = User(
            username="newbie",
            password_hash="x",
            first_name="New",
            last_name="Student",
            email="newbie@edconnect.edu",
            role="student",
        )
        db_session.add(user)
        await db_session.commit()

        scope = AccessScope(db_session, principal_for(user))

        assert await scope.classes() == []
        assert await scope.grades() == []
        assert await scope.enrollments() == []


class TestAchievementVisibility:
    """Hidden achievements are only visible to their owner."""

    @pytest.mark.asyncio
    async def test_public_and_hidden_achievements(
        self,
        db_session: AsyncSession,
        principal_for,
        demo: dict[str, Any],
        other_district: dict[str, Any],
    ) -> None:
        public = Achievement(
            user_id=other_district["student_user"].id,
            title="Science Fair Winner",
            type="certificate",
            is_public=True,
        )
        hidden = Achievement(
            user_id=other_district["student_user"].id,
            title="Private Milestone",
            type="milestone",
            is_public=True,
            visible=False,
        )
        own = Achievement(
            user_id=demo["accounts"].student.id,
            title="Perfect Attendance",
            type="badge",
        )
        db_session.add_all([public, hidden, own])
        await db_session.commit()

        student_scope = AccessScope(db_session, principal_for(demo["accounts"].student))
        owner_scope = AccessScope(db_session, principal_for(other_district["student_user"]))

        assert _ids(await student_scope.achievements()) == {public.id, own.id}
        assert _ids(await owner_scope.achievements()) == {public.id, hidden.id}
