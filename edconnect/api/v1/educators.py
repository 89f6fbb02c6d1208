# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Educator profile API endpoints.

- GET / - List accessible educators
- GET /{educator_id} - Get an educator profile
- POST / - Attach an educator profile to an account (admin)
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AdminUser, AuthenticatedUser, Scope
from edconnect.domains.people import (
    DuplicateRecordError,
    EducatorNotFoundError,
    PeopleAccessError,
    PeopleService,
    UserNotFoundError,
)
from edconnect.models.people import EducatorCreate, EducatorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_people_service(db: AsyncSession) -> PeopleService:
    return PeopleService(db)


@router.get(
    "",
    response_model=list[EducatorResponse],
    summary="List educators",
)
async def list_educators(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[EducatorResponse]:
    return await _get_people_service(db).list_educators(scope)


@router.get(
    "/{educator_id}",
    response_model=EducatorResponse,
    summary="Get educator",
)
async def get_educator(
    educator_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> EducatorResponse:
    try:
        return await _get_people_service(db).get_educator(educator_id, scope)
    except EducatorNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PeopleAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.post(
    "",
    response_model=EducatorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create educator profile",
    description="Attach an educator profile to an existing account. Requires admin access.",
)
async def create_educator(
    data: EducatorCreate,
    current_user: AdminUser,
    scope: Scope,
    db: DB,
) -> EducatorResponse:
    try:
        return await _get_people_service(db).create_educator(data, scope)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PeopleAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except DuplicateRecordError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
