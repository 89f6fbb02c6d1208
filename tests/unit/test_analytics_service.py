# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Analytics service."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.domains.analytics import AnalyticsService
from edconnect.infrastructure.database.models import Homework, TutoringSession
from edconnect.utils.datetime import utc_now


@pytest.fixture
def analytics_service(db_session: AsyncSession) -> AnalyticsService:
    return AnalyticsService(db_session)


def _widgets(dashboard) -> dict[str, int | float]:
    return {w.key: w.value for w in dashboard.widgets}


class TestPerformance:
    """Tests for per-subject performance."""

    @pytest.mark.asyncio
    async def test_student_report_from_seeded_grades(
        self, analytics_service, db_session, demo, principal_for
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].student))

        report = await analytics_service.performance(scope)

        assert [(m.subject, m.percentage) for m in report.metrics] == [
            ("English", 92),
            ("History", 79),
            ("Mathematics", 84),
            ("Science", 76),
        ]
        assert [i.type for i in report.insights] == ["success", "improvement", "warning"]
        assert "English" in report.insights[0].title
        assert "Science" in report.insights[1].title
        assert "75%" in report.insights[2].description

    @pytest.mark.asyncio
    async def test_empty_scope_has_no_insights(
        self, analytics_service, db_session, demo, principal_for
    ) -> None:
        principal = principal_for(demo["accounts"].admin, admin_level="district", district_id=None)

        report = await analytics_service.performance(AccessScope(db_session, principal))

        assert report.metrics == []
        assert report.insights == []


class TestEducatorPerformance:
    """Tests for educator evaluation."""

    @pytest.mark.asyncio
    async def test_scores_demo_teacher(
        self, analytics_service, db_session, demo, principal_for
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].admin))

        report = await analytics_service.educator_performance(scope)

        assert len(report.metrics) == 1
        metric = report.metrics[0]
        assert metric.name == "John Doe"
        assert metric.student_outcomes == 83
        assert metric.class_engagement == 75
        assert metric.evaluation_score == 79
        assert [i.type for i in report.insights] == ["success"]


class TestDashboard:
    """Tests for role dashboards."""

    @pytest.mark.asyncio
    async def test_student_dashboard(
        self, analytics_service, db_session, demo, principal_for
    ) -> None:
        user_id = demo["accounts"].student.id
        now = utc_now()
        db_session.add_all(
            [
                Homework(student_id=user_id, title="Overdue", due_date=now - timedelta(days=1)),
                Homework(student_id=user_id, title="Upcoming", due_date=now + timedelta(days=1)),
                Homework(
                    student_id=user_id,
                    title="Done",
                    due_date=now - timedelta(days=2),
                    completed=True,
                ),
                TutoringSession(student_id=user_id, subject="Math"),
            ]
        )
        await db_session.commit()
        scope = AccessScope(db_session, principal_for(demo["accounts"].student))

        dashboard = await analytics_service.dashboard(scope)

        assert dashboard.role == "student"
        assert _widgets(dashboard) == {
            "enrolledClasses": 4,
            "averageGrade": 83,
            "attendanceRate": 75,
            "pendingHomework": 1,
            "overdueHomework": 1,
            "tutoringSessions": 1,
        }

    @pytest.mark.asyncio
    async def test_educator_dashboard(
        self, analytics_service, db_session, demo, principal_for
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].teacher))

        dashboard = await analytics_service.dashboard(scope)

        assert dashboard.role == "educator"
        assert _widgets(dashboard) == {
            "classes": 4,
            "students": 1,
            "averageGrade": 83,
            "attendanceRate": 75,
        }

    @pytest.mark.asyncio
    async def test_admin_dashboard(
        self, analytics_service, db_session, demo, principal_for
    ) -> None:
        scope = AccessScope(db_session, principal_for(demo["accounts"].admin))

        dashboard = await analytics_service.dashboard(scope)

        assert dashboard.role == "admin"
        assert _widgets(dashboard) == {"schools": 1, "educators": 1, "students": 1, "classes": 4}
