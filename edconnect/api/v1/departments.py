# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Department API endpoints.

- GET / - List accessible departments (optionally by school)
- GET /{department_id} - Get department details
- POST / - Create a department in an accessible school (admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AdminUser, AuthenticatedUser, Scope
from edconnect.domains.organization import (
    DepartmentNotFoundError,
    OrganizationAccessError,
    OrganizationService,
    SchoolNotFoundError,
)
from edconnect.models.organization import DepartmentCreate, DepartmentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_organization_service(db: AsyncSession) -> OrganizationService:
    return OrganizationService(db)


@router.get(
    "",
    response_model=list[DepartmentResponse],
    summary="List departments",
)
async def list_departments(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
    school_id: Annotated[int | None, Query(description="Filter by school")] = None,
) -> list[DepartmentResponse]:
    departments = await _get_organization_service(db).list_departments(scope, school_id=school_id)
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.get(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Get department",
)
async def get_department(
    department_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> DepartmentResponse:
    try:
        department = await _get_organization_service(db).get_department(department_id, scope)
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OrganizationAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return DepartmentResponse.model_validate(department)


@router.post(
    "",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
)
async def create_department(
    data: DepartmentCreate,
    current_user: AdminUser,
    scope: Scope,
    db: DB,
) -> DepartmentResponse:
    try:
        department = await _get_organization_service(db).create_department(data, scope)
    except SchoolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except OrganizationAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return DepartmentResponse.model_validate(department)
