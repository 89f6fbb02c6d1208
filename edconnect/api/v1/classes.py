# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class section API endpoints.

- GET / - List accessible classes
- GET /{class_id} - Get class details
- POST / - Create a class (educator or admin)
- GET /{class_id}/students - Class roster

Educators always create classes they teach themselves.

Example:
    POST /api/v1/classes
    {
        "name": "Mathematics",
        "roomNumber": "101",
        "period": "1"
    }
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, EducatorOrAdmin, Scope
from edconnect.domains.classes import (
    ClassAccessError,
    ClassNotFoundError,
    ClassService,
    EducatorNotFoundError,
)
from edconnect.domains.people import to_student_response
from edconnect.models.classes import ClassCreate, ClassResponse
from edconnect.models.people import StudentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_class_service(db: AsyncSession) -> ClassService:
    return ClassService(db)


@router.get(
    "",
    response_model=list[ClassResponse],
    summary="List classes",
    description="Classes taught by, enrolled in, or administered by the caller.",
)
async def list_classes(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[ClassResponse]:
    classes = await _get_class_service(db).list_classes(scope)
    return [ClassResponse.model_validate(c) for c in classes]


@router.get(
    "/{class_id}",
    response_model=ClassResponse,
    summary="Get class",
)
async def get_class(
    class_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> ClassResponse:
    try:
        school_class = await _get_class_service(db).get_class(class_id, scope)
    except ClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ClassAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return ClassResponse.model_validate(school_class)


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create class",
)
async def create_class(
    data: ClassCreate,
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> ClassResponse:
    """Create a class section.

    Raises:
        HTTPException: 404 if the educator is missing, 403 outside scope.
    """
    logger.info("Creating class: name=%s, by=%s", data.name, current_user.id)
    try:
        school_class = await _get_class_service(db).create_class(data, scope)
    except EducatorNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ClassAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return ClassResponse.model_validate(school_class)


@router.get(
    "/{class_id}/students",
    response_model=list[StudentResponse],
    summary="Class roster",
)
async def list_class_students(
    class_id: int,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[StudentResponse]:
    try:
        students = await _get_class_service(db).roster(class_id, scope)
    except ClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ClassAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return [to_student_response(s) for s in students]
