# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Each module provides a FastAPI router for a specific domain.

Modules:
    auth: Registration, login, token refresh and profile.
    districts, schools, departments, admin_regions: Organization hierarchy.
    users, students, educators: Accounts and role profiles.
    classes, enrollments: Class sections and rosters.
    grades, attendance, achievements: Academic records.
    homework: Personal homework lists.
    tutor: AI tutor sessions.
    analytics, dashboard: Performance reports and role dashboards.
"""

from fastapi import APIRouter

from edconnect.api.v1 import (
    achievements,
    admin_regions,
    analytics,
    attendance,
    auth,
    classes,
    dashboard,
    departments,
    districts,
    educators,
    enrollments,
    grades,
    homework,
    schools,
    students,
    tutor,
    users,
)

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(districts.router, prefix="/districts", tags=["Districts"])
router.include_router(schools.router, prefix="/schools", tags=["Schools"])
router.include_router(departments.router, prefix="/departments", tags=["Departments"])
router.include_router(admin_regions.router, prefix="/admin-regions", tags=["Admin Regions"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(students.router, prefix="/students", tags=["Students"])
router.include_router(educators.router, prefix="/educators", tags=["Educators"])
router.include_router(classes.router, prefix="/classes", tags=["Classes"])
router.include_router(enrollments.router, prefix="/enrollments", tags=["Enrollments"])
router.include_router(grades.router, prefix="/grades", tags=["Grades"])
router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
router.include_router(achievements.router, prefix="/achievements", tags=["Achievements"])
router.include_router(homework.router, prefix="/homework", tags=["Homework"])
router.include_router(tutor.router, prefix="/tutor", tags=["AI Tutor"])
router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

__all__ = ["router"]
