# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role dashboard endpoint."""

from fastapi import APIRouter

from edconnect.api.dependencies import DB, AuthenticatedUser, Scope
from edconnect.domains.analytics import AnalyticsService
from edconnect.models.analytics import Dashboard

router = APIRouter()


@router.get(
    "",
    response_model=Dashboard,
    summary="Dashboard",
    description="Widgets for the caller's role: student, educator or admin.",
)
async def get_dashboard(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> Dashboard:
    return await AnalyticsService(db).dashboard(scope)
