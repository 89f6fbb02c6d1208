# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for user authentication:
- POST /register - Create a student or educator account
- POST /login - Username/password login
- POST /refresh - Refresh access token
- POST /logout - User logout
- GET /me - Get current user info
- PATCH /me - Update name or email

Example:
    POST /api/v1/auth/login
    {
        "username": "student",
        "password": "EdConnect2025!"
    }
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from edconnect.api.dependencies import AuthenticatedUser, get_auth_service
from edconnect.api.middleware.rate_limit import RATE_LIMIT_AUTH, limiter
from edconnect.domains.auth.service import (
    AccountInactiveError,
    AuthResult,
    AuthService,
    EmailExistsError,
    InvalidCredentialsError,
    TokenRefreshError,
    UserNotFoundError,
    UsernameExistsError,
)
from edconnect.models.auth import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(user=UserResponse.model_validate(result.user), tokens=result.tokens)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a student or educator account and return tokens.",
)
@limiter.limit(RATE_LIMIT_AUTH)
async def register(
    request: Request,
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create an account with its student or educator profile.

    Raises:
        HTTPException: 400 if the username or email is taken.
    """
    try:
        result = await service.register(data)
    except (UsernameExistsError, EmailExistsError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return _to_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login",
    description="Authenticate with username and password.",
)
@limiter.limit(RATE_LIMIT_AUTH)
async def login(
    request: Request,
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Authenticate and issue tokens.

    Raises:
        HTTPException: 401 on bad credentials, 403 for inactive accounts.
    """
    try:
        result = await service.login(data.username, data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except AccountInactiveError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    return _to_response(result)


@router.post(
    "/refresh",
    response_model=AuthResponse,
    summary="Refresh tokens",
    description="Exchange a refresh token for a new token pair.",
)
async def refresh(
    data: RefreshRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Issue a new token pair.

    Raises:
        HTTPException: 401 if the refresh token is not usable.
    """
    try:
        result = await service.refresh(data.refresh_token)
    except TokenRefreshError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _to_response(result)


@router.post(
    "/logout",
    summary="Logout",
    description="Tokens are stateless; clients discard them.",
)
async def logout(current_user: AuthenticatedUser) -> dict[str, str]:
    logger.info("User logged out: %s", current_user.id)
    return {"message": "Logged out successfully"}


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(
    current_user: AuthenticatedUser,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    try:
        user = await service.get_user(current_user.id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user)


@router.patch(
    "/me",
    response_model=UserResponse,
    summary="Update current user",
    description="Change first name, last name or email.",
)
async def update_me(
    data: UpdateProfileRequest,
    current_user: AuthenticatedUser,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Update the caller's profile.

    Raises:
        HTTPException: 404 if the account is gone, 409 if the email is taken.
    """
    try:
        user = await service.update_profile(current_user.id, data)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EmailExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.model_validate(user)
