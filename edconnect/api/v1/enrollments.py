# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API endpoints.

- GET / - List accessible enrollments
- POST / - Enroll a student in a class (educator or admin)
- PATCH /{enrollment_id} - Change enrollment status
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, EducatorOrAdmin, Scope
from edconnect.domains.classes import (
    ClassAccessError,
    ClassNotFoundError,
    ClassService,
    EnrollmentExistsError,
    EnrollmentNotFoundError,
    StudentNotFoundError,
)
from edconnect.models.classes import EnrollmentCreate, EnrollmentResponse, EnrollmentUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_class_service(db: AsyncSession) -> ClassService:
    return ClassService(db)


@router.get(
    "",
    response_model=list[EnrollmentResponse],
    summary="List enrollments",
)
async def list_enrollments(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[EnrollmentResponse]:
    enrollments = await _get_class_service(db).list_enrollments(scope)
    return [EnrollmentResponse.model_validate(e) for e in enrollments]


@router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll student",
)
async def create_enrollment(
    data: EnrollmentCreate,
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> EnrollmentResponse:
    """Enroll a student in an accessible class.

    Raises:
        HTTPException: 404 for a missing class or student, 403 outside
            scope, 409 when already enrolled.
    """
    try:
        enrollment = await _get_class_service(db).enroll(data, scope)
    except (ClassNotFoundError, StudentNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ClassAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except EnrollmentExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return EnrollmentResponse.model_validate(enrollment)


@router.patch(
    "/{enrollment_id}",
    response_model=EnrollmentResponse,
    summary="Update enrollment status",
)
async def update_enrollment(
    enrollment_id: int,
    data: EnrollmentUpdate,
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> EnrollmentResponse:
    try:
        enrollment = await _get_class_service(db).update_enrollment_status(
            enrollment_id, data.status, scope
        )
    except EnrollmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ClassAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return EnrollmentResponse.model_validate(enrollment)
