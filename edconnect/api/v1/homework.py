# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Homework API endpoints.

Every account manages its own homework list:
- GET / - List homework by due date (``?view=buckets`` groups it)
- POST / - Create homework
- GET /{homework_id} - Get homework
- PATCH /{homework_id} - Update homework
- DELETE /{homework_id} - Delete homework

Example:
    PATCH /api/v1/homework/3
    {
        "completed": true
    }
"""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser
from edconnect.domains.homework import (
    HomeworkNotFoundError,
    HomeworkService,
    HomeworkValidationError,
    bucketize,
)
from edconnect.models.homework import (
    HomeworkBuckets,
    HomeworkCreate,
    HomeworkResponse,
    HomeworkUpdate,
)
from edconnect.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_homework_service(db: AsyncSession) -> HomeworkService:
    return HomeworkService(db)


@router.get(
    "",
    response_model=list[HomeworkResponse] | HomeworkBuckets,
    summary="List homework",
    description="List the caller's homework, soonest due first.",
)
async def list_homework(
    current_user: AuthenticatedUser,
    db: DB,
    view: Annotated[
        Literal["list", "buckets"],
        Query(description="'buckets' groups items into overdue, upcoming and completed"),
    ] = "list",
) -> list[HomeworkResponse] | HomeworkBuckets:
    items = await _get_homework_service(db).list_for_student(current_user.id)

    if view == "buckets":
        buckets = bucketize(items, utc_now())
        return HomeworkBuckets(
            overdue=[HomeworkResponse.model_validate(h) for h in buckets.overdue],
            upcoming=[HomeworkResponse.model_validate(h) for h in buckets.upcoming],
            completed=[HomeworkResponse.model_validate(h) for h in buckets.completed],
        )

    return [HomeworkResponse.model_validate(h) for h in items]


@router.post(
    "",
    response_model=HomeworkResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create homework",
)
async def create_homework(
    data: HomeworkCreate,
    current_user: AuthenticatedUser,
    db: DB,
) -> HomeworkResponse:
    homework = await _get_homework_service(db).create(current_user.id, data)
    return HomeworkResponse.model_validate(homework)


@router.get(
    "/{homework_id}",
    response_model=HomeworkResponse,
    summary="Get homework",
)
async def get_homework(
    homework_id: int,
    current_user: AuthenticatedUser,
    db: DB,
) -> HomeworkResponse:
    try:
        homework = await _get_homework_service(db).get(homework_id, current_user.id)
    except HomeworkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HomeworkResponse.model_validate(homework)


@router.patch(
    "/{homework_id}",
    response_model=HomeworkResponse,
    summary="Update homework",
    description="Partial update. Setting completed stamps or clears completedAt.",
)
async def update_homework(
    homework_id: int,
    data: HomeworkUpdate,
    current_user: AuthenticatedUser,
    db: DB,
) -> HomeworkResponse:
    try:
        homework = await _get_homework_service(db).update(homework_id, current_user.id, data)
    except HomeworkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except HomeworkValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HomeworkResponse.model_validate(homework)


@router.delete(
    "/{homework_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete homework",
)
async def delete_homework(
    homework_id: int,
    current_user: AuthenticatedUser,
    db: DB,
) -> Response:
    try:
        await _get_homework_service(db).delete(homework_id, current_user.id)
    except HomeworkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
