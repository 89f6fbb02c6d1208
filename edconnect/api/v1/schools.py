# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School API endpoints.

- GET / - List accessible schools (optionally by district)
- GET /{school_id} - Get school details
- POST / - Create a school (admin)

Example:
    POST /api/v1/schools
    {
        "name": "Lincoln High School",
        "code": "LHS001",
        "districtId": 1
    }
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AdminUser, AuthenticatedUser, Scope
from edconnect.domains.organization import (
    CodeExistsError,
    DistrictNotFoundError,
    OrganizationAccessError,
    OrganizationService,
    SchoolNotFoundError,
)
from edconnect.models.organization import SchoolCreate, SchoolResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_organization_service(db: AsyncSession) -> OrganizationService:
    return OrganizationService(db)


@router.get(
    "",
    response_model=list[SchoolResponse],
    summary="List schools",
    description="List the schools the caller can access.",
)
async def list_schools(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
    district_id: Annotated[int | None, Query(description="Filter by district")] = None,
) -> list[SchoolResponse]:
    schools = await _get_organization_service(db).list_schools(scope, district_id=district_id)
    return [SchoolResponse.model_validate(s) for s in schools]


@router.get(
    "/{school_id}",
    response_model=SchoolResponse,
    summary="Get school",
)
async def get_school(
    school_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> SchoolResponse:
    try:
        school = await _get_organization_service(db).get_school(school_id, scope)
    except SchoolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OrganizationAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return SchoolResponse.model_validate(school)


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create school",
    description="Create a school. Requires admin access.",
)
async def create_school(
    data: SchoolCreate,
    current_user: AdminUser,
    db: DB,
) -> SchoolResponse:
    """Create a school.

    Raises:
        HTTPException: 409 if the code exists, 404 if the district is missing.
    """
    logger.info("Creating school: code=%s, name=%s, by=%s", data.code, data.name, current_user.id)
    try:
        school = await _get_organization_service(db).create_school(data)
    except CodeExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SchoolResponse.model_validate(school)
