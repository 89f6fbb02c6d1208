# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User management API endpoints.

- GET / - List accessible users (educator or admin)
- POST / - Create an account of any role (admin)

Admin accounts can only be created here, by a super admin.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AdminUser, EducatorOrAdmin, Scope
from edconnect.domains.people import (
    DuplicateRecordError,
    PeopleAccessError,
    PeopleService,
    PeopleValidationError,
)
from edconnect.models.auth import UserResponse
from edconnect.models.people import UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_people_service(db: AsyncSession) -> PeopleService:
    return PeopleService(db)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="List the accounts the caller can see.",
)
async def list_users(
    current_user: EducatorOrAdmin,
    scope: Scope,
    db: DB,
) -> list[UserResponse]:
    users = await _get_people_service(db).list_users(scope)
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create an account with its role profile. Requires admin access.",
)
async def create_user(
    data: UserCreate,
    current_user: AdminUser,
    scope: Scope,
    db: DB,
) -> UserResponse:
    """Create an account.

    Raises:
        HTTPException: 400 on contradictory fields, 403 outside scope,
            409 on duplicate username or email.
    """
    logger.info("Creating user: username=%s, role=%s, by=%s", data.username, data.role, current_user.id)
    try:
        user = await _get_people_service(db).create_user(data, scope)
    except PeopleValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PeopleAccessError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except DuplicateRecordError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.model_validate(user)
