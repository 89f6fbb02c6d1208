# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users and enforce roles
- Resolve the viewer's access scope
- Get service instances

Example:
    @router.get("/students")
    async def list_students(
        db: DB,
        scope: Scope,
        current_user: EducatorOrAdmin,
    ):
        ...
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.middleware.auth import CurrentUser, get_current_user
from edconnect.core.config import get_settings
from edconnect.core.llm import LLMClient
from edconnect.domains.access import AccessScope
from edconnect.domains.auth.jwt import JWTManager
from edconnect.domains.auth.service import AuthService
from edconnect.domains.tutoring import TutorClient
from edconnect.infrastructure.database.connection import get_session

logger = logging.getLogger(__name__)


# =============================================================================
# Database
# =============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession committed on success and rolled back on error.
    """
    async with get_session() as session:
        yield session


# =============================================================================
# Authentication
# =============================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(request: Request) -> CurrentUser:
    """Require an admin of any level.

    Raises:
        HTTPException: If not authenticated or not admin.
    """
    user = require_auth(request)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def require_super_admin(request: Request) -> CurrentUser:
    """Require an admin without an admin level.

    Raises:
        HTTPException: If not a super admin.
    """
    user = require_auth(request)
    if not user.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super admin access required",
        )
    return user


def require_educator(request: Request) -> CurrentUser:
    """Require educator user.

    Raises:
        HTTPException: If not an educator.
    """
    user = require_auth(request)
    if not user.is_educator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Educator access required",
        )
    return user


def require_educator_or_admin(request: Request) -> CurrentUser:
    """Require educator or admin user.

    Raises:
        HTTPException: If not educator or admin.
    """
    user = require_auth(request)
    if not (user.is_educator or user.is_admin):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Educator or admin access required",
        )
    return user


class RequireRole:
    """Dependency for requiring specific roles.

    Example:
        @router.get("/progress")
        async def progress(
            user: CurrentUser = Depends(RequireRole("student")),
        ):
            ...
    """

    def __init__(self, *roles: str) -> None:
        self.roles = roles

    def __call__(self, request: Request) -> CurrentUser:
        """Check roles and return user.

        Raises:
            HTTPException: If the user has none of the roles.
        """
        user = require_auth(request)

        if not user.has_any_role(*self.roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(self.roles)}",
            )

        return user


# =============================================================================
# Services
# =============================================================================


def get_jwt_manager() -> JWTManager:
    """Get JWT manager instance."""
    return JWTManager(get_settings().jwt)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db, jwt_manager)


async def get_scope(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_auth),
) -> AccessScope:
    """Resolve the authenticated viewer's access scope."""
    return AccessScope(db, user)


@lru_cache(maxsize=1)
def get_tutor() -> TutorClient:
    """Get the shared tutor client.

    Built on first use so the app starts without LLM credentials.
    """
    return TutorClient(LLMClient())


# =============================================================================
# Annotated aliases
# =============================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
AdminUser = Annotated[CurrentUser, Depends(require_admin)]
SuperAdminUser = Annotated[CurrentUser, Depends(require_super_admin)]
EducatorUser = Annotated[CurrentUser, Depends(require_educator)]
EducatorOrAdmin = Annotated[CurrentUser, Depends(require_educator_or_admin)]
StudentUser = Annotated[CurrentUser, Depends(RequireRole("student"))]
Scope = Annotated[AccessScope, Depends(get_scope)]
Tutor = Annotated[TutorClient, Depends(get_tutor)]
