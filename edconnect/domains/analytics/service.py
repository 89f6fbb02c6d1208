# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics service for performance reports and role dashboards.

Every figure is computed over the rows the viewer's AccessScope exposes,
so a student's report covers their own grades while a district admin's
covers the whole district.

Example:
    >>> service = AnalyticsService(db_session)
    >>> report = await service.performance(scope)
    >>> dashboard = await service.dashboard(scope)
"""

import logging
from collections import defaultdict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.domains.attendance import attendance_rate
from edconnect.domains.grades import average_percentage
from edconnect.domains.homework import bucketize
from edconnect.infrastructure.database.models import (
    Attendance,
    Grade,
    Homework,
    SchoolClass,
    TutoringSession,
)
from edconnect.models.analytics import (
    Dashboard,
    DashboardWidget,
    EducatorMetric,
    EducatorPerformanceReport,
    Insight,
    PerformanceReport,
    SubjectMetric,
)
from edconnect.models.common import UserRole
from edconnect.utils.datetime import utc_now

logger = logging.getLogger(__name__)

SUBJECT_IMPROVEMENT_THRESHOLD = 80
ATTENDANCE_WARNING_THRESHOLD = 90
EDUCATOR_SUPPORT_THRESHOLD = 70


class AnalyticsService:
    """Service for performance analytics and dashboards.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    # =========================================================================
    # Performance
    # =========================================================================

    async def performance(self, scope: AccessScope) -> PerformanceReport:
        """Mean grade percentage per subject with insights."""
        grades = await scope.grades()
        class_names = await self._class_names({g.class_id for g in grades})

        by_subject: dict[str, list[Grade]] = defaultdict(list)
        for grade in grades:
            by_subject[class_names.get(grade.class_id, "Unknown")].append(grade)

        metrics = [
            SubjectMetric(subject=subject, percentage=round(average_percentage(items)))
            for subject, items in sorted(by_subject.items())
        ]

        insights: list[Insight] = []
        if metrics:
            strongest = max(metrics, key=lambda m: m.percentage)
            insights.append(
                Insight(
                    type="success",
                    title=f"Strong performance in {strongest.subject}",
                    description=(
                        f"{strongest.subject} has the highest average at {strongest.percentage}%."
                    ),
                )
            )
            weakest = min(metrics, key=lambda m: m.percentage)
            if weakest.percentage < SUBJECT_IMPROVEMENT_THRESHOLD:
                insights.append(
                    Insight(
                        type="improvement",
                        title=f"{weakest.subject} needs attention",
                        description=(
                            f"{weakest.subject} averages {weakest.percentage}%, below the "
                            f"{SUBJECT_IMPROVEMENT_THRESHOLD}% target."
                        ),
                    )
                )

        records = await scope.attendance()
        if records:
            rate = round(attendance_rate(records))
            if rate < ATTENDANCE_WARNING_THRESHOLD:
                insights.append(
                    Insight(
                        type="warning",
                        title="Attendance below target",
                        description=(
                            f"Attendance is at {rate}%, below the "
                            f"{ATTENDANCE_WARNING_THRESHOLD}% target."
                        ),
                    )
                )

        return PerformanceReport(metrics=metrics, insights=insights)

    async def educator_performance(self, scope: AccessScope) -> EducatorPerformanceReport:
        """Outcomes, engagement and evaluation score per accessible educator."""
        educators = await scope.educators()
        educator_ids = [e.id for e in educators]

        classes_by_educator: dict[int, list[int]] = defaultdict(list)
        grades_by_class: dict[int, list[Grade]] = defaultdict(list)
        attendance_by_class: dict[int, list[Attendance]] = defaultdict(list)

        if educator_ids:
            classes = await self._db.execute(
                select(SchoolClass.id, SchoolClass.educator_id).where(
                    SchoolClass.educator_id.in_(educator_ids)
                )
            )
            for class_id, educator_id in classes.all():
                classes_by_educator[educator_id].append(class_id)

            class_ids = [c for ids in classes_by_educator.values() for c in ids]
            if class_ids:
                grades = await self._db.execute(select(Grade).where(Grade.class_id.in_(class_ids)))
                for grade in grades.scalars().all():
                    grades_by_class[grade.class_id].append(grade)

                records = await self._db.execute(
                    select(Attendance).where(Attendance.class_id.in_(class_ids))
                )
                for record in records.scalars().all():
                    attendance_by_class[record.class_id].append(record)

        metrics: list[EducatorMetric] = []
        for educator in educators:
            class_ids = classes_by_educator.get(educator.id, [])
            grades = [g for c in class_ids for g in grades_by_class.get(c, [])]
            records = [r for c in class_ids for r in attendance_by_class.get(c, [])]

            outcomes = round(average_percentage(grades))
            engagement = round(attendance_rate(records))
            name = educator.user.full_name if educator.user else f"Educator {educator.id}"

            metrics.append(
                EducatorMetric(
                    educator_id=educator.id,
                    name=name,
                    student_outcomes=outcomes,
                    class_engagement=engagement,
                    evaluation_score=round((outcomes + engagement) / 2),
                )
            )

        insights: list[Insight] = []
        if metrics:
            top = max(metrics, key=lambda m: m.evaluation_score)
            insights.append(
                Insight(
                    type="success",
                    title=f"Top educator: {top.name}",
                    description=f"{top.name} leads with an evaluation score of {top.evaluation_score}.",
                )
            )
            struggling = [m for m in metrics if m.evaluation_score < EDUCATOR_SUPPORT_THRESHOLD]
            if struggling:
                names = ", ".join(m.name for m in struggling)
                insights.append(
                    Insight(
                        type="improvement",
                        title="Educators who may need support",
                        description=(
                            f"{names} scored below {EDUCATOR_SUPPORT_THRESHOLD}. "
                            "Consider mentoring or professional development."
                        ),
                    )
                )

        return EducatorPerformanceReport(metrics=metrics, insights=insights)

    # =========================================================================
    # Dashboard
    # =========================================================================

    async def dashboard(self, scope: AccessScope) -> Dashboard:
        """Role-specific counts and rates for the viewer's home page."""
        if scope.is_student:
            widgets = await self._student_widgets(scope)
            role = UserRole.STUDENT
        elif scope.is_educator:
            widgets = await self._educator_widgets(scope)
            role = UserRole.EDUCATOR
        else:
            widgets = await self._admin_widgets(scope)
            role = UserRole.ADMIN

        return Dashboard(role=role, widgets=widgets)

    async def _student_widgets(self, scope: AccessScope) -> list[DashboardWidget]:
        user_id = scope.principal.id
        homework = await self._db.execute(select(Homework).where(Homework.student_id == user_id))
        buckets = bucketize(list(homework.scalars().all()), utc_now())

        sessions = await self._db.execute(
            select(func.count(TutoringSession.id)).where(TutoringSession.student_id == user_id)
        )

        return [
            DashboardWidget(key="enrolledClasses", title="Enrolled Classes", value=len(await scope.classes())),
            DashboardWidget(
                key="averageGrade",
                title="Average Grade",
                value=round(average_percentage(await scope.grades())),
            ),
            DashboardWidget(
                key="attendanceRate",
                title="Attendance Rate",
                value=round(attendance_rate(await scope.attendance())),
            ),
            DashboardWidget(key="pendingHomework", title="Pending Homework", value=len(buckets.upcoming)),
            DashboardWidget(key="overdueHomework", title="Overdue Homework", value=len(buckets.overdue)),
            DashboardWidget(
                key="tutoringSessions",
                title="Tutoring Sessions",
                value=sessions.scalar_one(),
            ),
        ]

    async def _educator_widgets(self, scope: AccessScope) -> list[DashboardWidget]:
        return [
            DashboardWidget(key="classes", title="Classes Taught", value=len(await scope.classes())),
            DashboardWidget(key="students", title="Students", value=len(await scope.students())),
            DashboardWidget(
                key="averageGrade",
                title="Average Class Grade",
                value=round(average_percentage(await scope.grades())),
            ),
            DashboardWidget(
                key="attendanceRate",
                title="Attendance Rate",
                value=round(attendance_rate(await scope.attendance())),
            ),
        ]

    async def _admin_widgets(self, scope: AccessScope) -> list[DashboardWidget]:
        return [
            DashboardWidget(key="schools", title="Schools", value=len(await scope.schools())),
            DashboardWidget(key="educators", title="Educators", value=len(await scope.educators())),
            DashboardWidget(key="students", title="Students", value=len(await scope.students())),
            DashboardWidget(key="classes", title="Classes", value=len(await scope.classes())),
        ]

    async def _class_names(self, class_ids: set[int]) -> dict[int, str]:
        if not class_ids:
            return {}
        result = await self._db.execute(
            select(SchoolClass.id, SchoolClass.name).where(SchoolClass.id.in_(class_ids))
        )
        return {class_id: name for class_id, name in result.all()}
