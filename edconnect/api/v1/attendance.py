# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance API endpoints.

- GET / - List accessible attendance records (filter by class or student)
- POST / - Record attendance (educator or admin)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, EducatorOrAdmin, Scope
from edconnect.domains.attendance import (
    AttendanceAccessError,
    AttendanceClassNotFoundError,
    AttendanceService,
    StudentNotEnrolledError,
)
from edconnect.models.records import AttendanceCreate, AttendanceResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_attendance_service(db: AsyncSession) -> AttendanceService:
    return AttendanceService(db)


@router.get(
    "",
    response_model=list[AttendanceResponse],
    summary="List attendance",
)
async def list_attendance(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
    class_id: Annotated[int | None, Query(description="Filter by class")] = None,
    student_id: Annotated[int | None, Query(description="Filter by student")] = None,
) -> list[AttendanceResponse]:
    records = await _get_attendance_service(db).list_attendance(
        scope, class_id=class_id, student_id=student_id
    )
    return [AttendanceResponse.model_validate(r) for r in records]


@router.post(
    "",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record attendance",
)
async def create_attendance(
    data: AttendanceCreate,
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> AttendanceResponse:
    try:
        record = await _get_attendance_service(db).record(data, scope, recorded_by=current_user.id)
    except AttendanceClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AttendanceAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except StudentNotEnrolledError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AttendanceResponse.model_validate(record)
