# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Achievement API endpoints.

- GET / - List visible achievements within scope
- POST / - Award an achievement (educator or admin)
- PATCH /{achievement_id} - Toggle sharing flags or update progress
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, EducatorOrAdmin, Scope
from edconnect.domains.achievements import (
    AchievementAccessError,
    AchievementNotFoundError,
    AchievementService,
    AchievementUserNotFoundError,
)
from edconnect.models.records import AchievementCreate, AchievementResponse, AchievementUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_achievement_service(db: AsyncSession) -> AchievementService:
    return AchievementService(db)


@router.get(
    "",
    response_model=list[AchievementResponse],
    summary="List achievements",
)
async def list_achievements(
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> list[AchievementResponse]:
    achievements = await _get_achievement_service(db).list_achievements(scope)
    return [AchievementResponse.model_validate(a) for a in achievements]


@router.post(
    "",
    response_model=AchievementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Award achievement",
)
async def award_achievement(
    data: AchievementCreate,
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> AchievementResponse:
    try:
        achievement = await _get_achievement_service(db).award(
            data, scope, awarded_by=current_user.id
        )
    except AchievementUserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AchievementAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return AchievementResponse.model_validate(achievement)


@router.patch(
    "/{achievement_id}",
    response_model=AchievementResponse,
    summary="Update achievement",
    description="Owners change shared/visible/isPublic; awarders change progress and level.",
)
async def update_achievement(
    achievement_id: int,
    data: AchievementUpdate,
    current_user: AuthenticatedUser,
    scope: Scope,
    db: DB,
) -> AchievementResponse:
    try:
        achievement = await _get_achievement_service(db).update(achievement_id, data, scope)
    except AchievementNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AchievementAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return AchievementResponse.model_validate(achievement)
