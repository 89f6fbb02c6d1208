# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade API endpoints.

- GET / - List accessible grades (filter by class or student)
- POST / - Record a grade (educator or admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, EducatorOrAdmin, Scope
from edconnect.domains.grades import (
    GradeAccessError,
    GradeClassNotFoundError,
    GradeService,
    StudentNotEnrolledError,
)
from edconnect.models.records import GradeCreate, GradeResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_grade_service(db: AsyncSession) -> GradeService:
    return GradeService(db)


@router.get(
    "",
    response_model=list[GradeResponse],
    summary="List grades",
)
async def list_grades(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
    class_id: Annotated[int | None, Query(description="Filter by class")] = None,
    student_id: Annotated[int | None, Query(description="Filter by student")] = None,
) -> list[GradeResponse]:
    grades = await _get_grade_service(db).list_grades(scope, class_id=class_id, student_id=student_id)
    return [GradeResponse.model_validate(g) for g in grades]


@router.post(
    "",
    response_model=GradeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record grade",
)
async def create_grade(
    data: GradeCreate,
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> GradeResponse:
    """Record a grade for an enrolled student.

    Raises:
        HTTPException: 404 for a missing class, 403 outside scope,
            400 when the student is not enrolled.
    """
    try:
        grade = await _get_grade_service(db).create_grade(data, scope)
    except GradeClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GradeAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except StudentNotEnrolledError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return GradeResponse.model_validate(grade)
