# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Demo database seed data.

This module provides the demo data loaded into an empty database:
- Organization: one district, school and department
- Accounts: super admin, teacher and student with their profiles
- Academic records: four classes, enrollments, grades and attendance

Seeding only runs when no users exist yet (see ``seed_if_empty``).
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.auth.password import hash_password
from edconnect.infrastructure.database.models import (
    Attendance,
    Department,
    District,
    Educator,
    Enrollment,
    Grade,
    School,
    SchoolClass,
    Student,
    User,
)

logger = logging.getLogger(__name__)


class DemoAccounts(NamedTuple):
    admin: User
    teacher: User
    student: User


async def seed_organization(session: AsyncSession) -> tuple[District, School, Department]:
    """Seed the demo district, school and department.

    Args:
        session: Database session.

    Returns:
        The created district, school and department.
    """
    district = District(
        name="New York City Department of Education",
        code="NYC-DOE",
        city="New York",
        state="NY",
    )
    session.add(district)
    await session.flush()

    school = School(
        name="EdConnect High School",
        code="ECHS-001",
        district_id=district.id,
        city="New York",
        state="NY",
        grade_range="9-12",
    )
    session.add(school)
    await session.flush()

    department = Department(
        name="Mathematics",
        school_id=school.id,
        description="Algebra, geometry and calculus",
    )
    session.add(department)
    await session.flush()

    logger.info("Seeded district %s, school %s, department %s", district.id, school.id, department.id)
    return district, school, department


async def seed_accounts(
    session: AsyncSession,
    school: School,
    department: Department,
) -> DemoAccounts:
    """Seed the demo admin, teacher and student accounts.

    The admin has no admin level, which makes it a super admin.
    """
    accounts_data = [
        {
            "username": "admin",
            "password": "AdminED2025!",
            "first_name": "Admin",
            "last_name": "User",
            "email": "admin@edconnect.edu",
            "role": "admin",
        },
        {
            "username": "teacher",
            "password": "TeachNYC2025!",
            "first_name": "John",
            "last_name": "Doe",
            "email": "john.doe@edconnect.edu",
            "role": "educator",
            "school_id": school.id,
            "district_id": school.district_id,
            "department_id": department.id,
        },
        {
            "username": "student",
            "password": "EdConnect2025!",
            "first_name": "Alex",
            "last_name": "Chen",
            "email": "alex.chen@edconnect.edu",
            "role": "student",
            "school_id": school.id,
            "district_id": school.district_id,
        },
    ]

    users = []
    for data in accounts_data:
        password = data.pop("password")
        user = User(**data, password_hash=hash_password(password), is_active=True)
        session.add(user)
        users.append(user)

    await session.flush()
    logger.info("Seeded %d demo accounts", len(users))
    return DemoAccounts(*users)


async def seed_academics(
    session: AsyncSession,
    accounts: DemoAccounts,
    school: School,
    department: Department,
) -> dict:
    """Seed profiles, classes, enrollments, grades and attendance.

    Returns:
        Dictionary with the seeded rows.
    """
    student = Student(
        user_id=accounts.student.id,
        school_id=school.id,
        grade="10th",
        date_of_birth=date(2006, 4, 15),
    )
    educator = Educator(
        user_id=accounts.teacher.id,
        school_id=school.id,
        department_id=department.id,
        subject_specialty="Mathematics",
        employee_id="T12345",
        office_location="Room 101",
        office_hours="M-F 3:00 PM - 4:00 PM",
    )
    session.add_all([student, educator])
    await session.flush()

    classes_data = [
        ("Mathematics", "Algebra and Geometry fundamentals"),
        ("Science", "Physics and Chemistry basics"),
        ("English", "Literature and Composition"),
        ("History", "World History"),
    ]
    classes = [
        SchoolClass(
            name=name,
            description=description,
            educator_id=educator.id,
            school_id=school.id,
            department_id=department.id if name == "Mathematics" else None,
            is_active=True,
        )
        for name, description in classes_data
    ]
    session.add_all(classes)
    await session.flush()

    enrollments = [Enrollment(student_id=student.id, class_id=c.id) for c in classes]
    session.add_all(enrollments)

    grades_data = [
        ("Algebraic Equations", 84, datetime(2023, 5, 1, tzinfo=timezone.utc)),
        ("Chemical Reactions", 76, datetime(2023, 5, 5, tzinfo=timezone.utc)),
        ("Essay Writing", 92, datetime(2023, 5, 10, tzinfo=timezone.utc)),
        ("Historical Analysis", 79, datetime(2023, 5, 15, tzinfo=timezone.utc)),
    ]
    grades = [
        Grade(
            student_id=student.id,
            class_id=school_class.id,
            assignment_name=name,
            score=score,
            max_score=100,
            submission_date=submitted,
        )
        for school_class, (name, score, submitted) in zip(classes, grades_data)
    ]
    session.add_all(grades)

    attendance_data = [
        (date(2023, 5, 1), "present"),
        (date(2023, 5, 1), "present"),
        (date(2023, 5, 2), "present"),
        (date(2023, 5, 2), "absent"),
    ]
    attendance = [
        Attendance(
            student_id=student.id,
            class_id=school_class.id,
            date=day,
            status=status,
            recorded_by=accounts.teacher.id,
        )
        for school_class, (day, status) in zip(classes, attendance_data)
    ]
    session.add_all(attendance)

    await session.flush()
    logger.info(
        "Seeded %d classes, %d grades, %d attendance records",
        len(classes),
        len(grades),
        len(attendance),
    )

    return {
        "student": student,
        "educator": educator,
        "classes": classes,
        "enrollments": enrollments,
        "grades": grades,
        "attendance": attendance,
    }


async def seed_demo_data(session: AsyncSession) -> dict:
    """Seed the database with the demo organization, accounts and records.

    Args:
        session: Database session.

    Returns:
        Dictionary with seeded entities.
    """
    logger.info("Seeding demo data...")

    district, school, department = await seed_organization(session)
    accounts = await seed_accounts(session, school, department)
    academics = await seed_academics(session, accounts, school, department)

    await session.commit()

    logger.info("Demo data seeding complete")

    return {
        "district": district,
        "school": school,
        "department": department,
        "accounts": accounts,
        **academics,
    }


async def seed_if_empty(session: AsyncSession) -> bool:
    """Seed demo data when the users table is empty.

    Returns:
        True if data was seeded.
    """
    user_count = await session.scalar(select(func.count()).select_from(User))
    if user_count:
        logger.info("Skipping demo seed, %d users already exist", user_count)
        return False

    await seed_demo_data(session)
    return True


if __name__ == "__main__":
    from edconnect.core.config import get_settings
    from edconnect.infrastructure.database.connection import (
        close_database,
        create_all_tables,
        get_session,
        init_database,
    )

    async def main():
        settings = get_settings()
        await init_database(settings)
        try:
            await create_all_tables()
            async with get_session() as session:
                await seed_if_empty(session)
        finally:
            await close_database()

    asyncio.run(main())
