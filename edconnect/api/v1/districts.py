# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""District API endpoints.

- GET / - List accessible districts
- GET /{district_id} - Get district details
- POST / - Create a district (super admin)
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, Scope, SuperAdminUser
from edconnect.domains.organization import (
    CodeExistsError,
    DistrictNotFoundError,
    OrganizationAccessError,
    OrganizationService,
)
from edconnect.models.organization import DistrictCreate, DistrictResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_organization_service(db: AsyncSession) -> OrganizationService:
    return OrganizationService(db)


@router.get(
    "",
    response_model=list[DistrictResponse],
    summary="List districts",
)
async def list_districts(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[DistrictResponse]:
    districts = await _get_organization_service(db).list_districts(scope)
    return [DistrictResponse.model_validate(d) for d in districts]


@router.get(
    "/{district_id}",
    response_model=DistrictResponse,
    summary="Get district",
)
async def get_district(
    district_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> DistrictResponse:
    try:
        district = await _get_organization_service(db).get_district(district_id, scope)
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OrganizationAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return DistrictResponse.model_validate(district)


@router.post(
    "",
    response_model=DistrictResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create district",
    description="Create a district. Requires super admin access.",
)
async def create_district(
    data: DistrictCreate,
    current_user: SuperAdminUser,
    db: DB,
) -> DistrictResponse:
    logger.info("Creating district: code=%s, by=%s", data.code, current_user.id)
    try:
        district = await _get_organization_service(db).create_district(data)
    except CodeExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return DistrictResponse.model_validate(district)
