# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student profile API endpoints.

- GET / - List accessible students
- GET /{student_id} - Get a student profile
- POST / - Attach a student profile to an account (admin)
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AdminUser, AuthenticatedUser, Scope
from edconnect.domains.people import (
    DuplicateRecordError,
    PeopleAccessError,
    PeopleService,
    StudentNotFoundError,
    UserNotFoundError,
)
from edconnect.models.people import StudentCreate, StudentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_people_service(db: AsyncSession) -> PeopleService:
    return PeopleService(db)


@router.get(
    "",
    response_model=list[StudentResponse],
    summary="List students",
)
async def list_students(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[StudentResponse]:
    return await _get_people_service(db).list_students(scope)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Get student",
)
async def get_student(
    student_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> StudentResponse:
    try:
        return await _get_people_service(db).get_student(student_id, scope)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PeopleAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create student profile",
    description="Attach a student profile to an existing account. Requires admin access.",
)
async def create_student(
    data: StudentCreate,
    current_user: AdminUser,
    scope: Scope,
    db: DB,
) -> StudentResponse:
    try:
        return await _get_people_service(db).create_student(data, scope)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PeopleAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except DuplicateRecordError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
