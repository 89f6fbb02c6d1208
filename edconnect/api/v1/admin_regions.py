# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin region endpoint: accessible districts with their schools."""

from fastapi import APIRouter

from edconnect.api.dependencies import DB, AdminUser, Scope
from edconnect.domains.organization import OrganizationService
from edconnect.models.organization import AdminRegion, DistrictResponse, SchoolResponse

router = APIRouter()


@router.get(
    "",
    response_model=list[AdminRegion],
    summary="List admin regions",
    description="Districts the admin can filter by, each with its accessible schools.",
)
async def list_admin_regions(
    current_user: AdminUser,
    scope: Scope,
    db: DB,
) -> list[AdminRegion]:
    regions = await OrganizationService(db).admin_regions(scope)
    return [
        AdminRegion(
            district=DistrictResponse.model_validate(r.district) if r.district else None,
            schools=[SchoolResponse.model_validate(s) for s in r.schools],
        )
        for r in regions
    ]
