# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Performance analytics API endpoints.

- GET /performance - Grade averages per subject with insights
- GET /educator-performance - Educator evaluation scores (admin)
"""

from fastapi import APIRouter

from edconnect.api.dependencies import DB, AdminUser, AuthenticatedUser, Scope
from edconnect.domains.analytics import AnalyticsService
from edconnect.models.analytics import EducatorPerformanceReport, PerformanceReport

router = APIRouter()


@router.get(
    "/performance",
    response_model=PerformanceReport,
    summary="Subject performance",
    description="Mean grade percentage per subject over the caller's accessible grades.",
)
async def performance(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> PerformanceReport:
    return await AnalyticsService(db).performance(scope)


@router.get(
    "/educator-performance",
    response_model=EducatorPerformanceReport,
    summary="Educator performance",
    description="Student outcomes, class engagement and evaluation score per educator.",
)
async def educator_performance(
    current_user: AdminUser,
    scope: Scope,
    db: DB,
) -> EducatorPerformanceReport:
    return await AnalyticsService(db).educator_performance(scope)
