# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Attendance service."""

from datetime import date
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.domains.attendance import (
    AttendanceAccessError,
    AttendanceClassNotFoundError,
    AttendanceService,
    StudentNotEnrolledError,
    attendance_rate,
)
from edconnect.infrastructure.database.models import SchoolClass
from edconnect.models.records import AttendanceCreate


@pytest.fixture
def attendance_service(db_session: AsyncSession) -> AttendanceService:
    return AttendanceService(db_session)


class TestAttendanceRate:
    """Tests for the attendance rate."""

    def test_tardy_counts_as_attended(self) -> None:
        records = [
            SimpleNamespace(status="present"),
            SimpleNamespace(status="tardy"),
            SimpleNamespace(status="absent"),
            SimpleNamespace(status="excused"),
        ]

        assert attendance_rate(records) == 50.0

    def test_no_records(self) -> None:
        assert attendance_rate([]) == 0.0


class TestAttendanceService:
    """Tests for listing and recording attendance."""

    @pytest.mark.asyncio
    async def test_seeded_rate_is_75_percent(
        self, attendance_service, db_session, demo, principal_for
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].student))

        records = await attendance_service.list_attendance(scope)

        assert len(records) == 4
        assert attendance_rate(records) == 75.0
        assert records[0].date == date(2023, 5, 2)

    @pytest.mark.asyncio
    async def test_record_sets_recorder(
        self, attendance_service, db_session, demo, principal_for
    ) -> None:
        teacher = demo["accounts"].teacher
        scope = AccessScope(db_session, principal_for(teacher))

        record = await attendance_service.record(
            AttendanceCreate(
                studentId=demo["student"].id,
                classId=demo["classes"][2].id,
                date=date(2023, 5, 3),
                status="tardy",
                notes="Bus was late",
            ),
            scope,
            recorded_by=teacher.id,
        )

        assert record.recorded_by == teacher.id
        assert record.status == "tardy"

        english = await attendance_service.list_attendance(scope, class_id=demo["classes"][2].id)
        assert len(english) == 2

    @pytest.mark.asyncio
    async def test_record_for_unknown_class(
        self, attendance_service, db_session, demo, principal_for
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        with pytest.raises(AttendanceClassNotFoundError):
            await attendance_service.record(
                AttendanceCreate(
                    studentId=demo["student"].id, classId=999, date=date(2023, 5, 3), status="present"
                ),
                scope,
                recorded_by=demo["accounts"].teacher.id,
            )

    @pytest.mark.asyncio
    async def test_record_for_class_outside_scope(
        self, attendance_service, db_session, demo, principal_for
    ) -> None:
        foreign = SchoolClass(name="Robotics", school_id=demo["school"].id)
        db_session.add(foreign)
        await db_session.commit()
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        with pytest.raises(AttendanceAccessError):
            await attendance_service.record(
                AttendanceCreate(
                    studentId=demo["student"].id,
                    classId=foreign.id,
                    date=date(2023, 5, 3),
                    status="present",
                ),
                scope,
                recorded_by=demo["accounts"].teacher.id,
            )

    @pytest.mark.asyncio
    async def test_record_for_unenrolled_student(
        self, attendance_service, db_session, demo, principal_for
    ) -> None:
        extra = SchoolClass(name="Latin", educator_id=demo["educator"].id, school_id=demo["school"].id)
        db_session.add(extra)
        await db_session.commit()
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        with pytest.raises(StudentNotEnrolledError):
            await attendance_service.record(
                AttendanceCreate(
                    studentId=demo["student"].id,
                    classId=extra.id,
                    date=date(2023, 5, 3),
                    status="present",
                ),
                scope,
                recorded_by=demo["accounts"].teacher.id,
            )
