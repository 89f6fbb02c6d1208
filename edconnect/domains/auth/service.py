# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for account registration and token issuance.

This module provides the AuthService that orchestrates:
- Self-service registration (students and educators)
- Username/password login
- Token refresh
- Profile lookup and update

Admin accounts are never self-registered; they are created by another
admin through the people domain.

Example:
    >>> auth_service = AuthService(db_session, jwt_manager)
    >>> result = await auth_service.login("student", "EdConnect2025!")
    >>> result.tokens.access_token
"""

import logging
from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.auth.jwt import (
    InvalidTokenError,
    JWTManager,
    TokenExpiredError,
    TokenPair,
)
from edconnect.domains.auth.password import PasswordHasher
from edconnect.infrastructure.database.models import Educator, School, Student, User
from edconnect.models.auth import RegisterRequest, UpdateProfileRequest
from edconnect.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_SCHOOL_ID = 1


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class UsernameExistsError(AuthenticationError):
    """Raised when registering with a taken username."""

    pass


class EmailExistsError(AuthenticationError):
    """Raised when registering with a taken email."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when username or password is wrong."""

    pass


class AccountInactiveError(AuthenticationError):
    """Raised when account is not active."""

    pass


class TokenRefreshError(AuthenticationError):
    """Raised when token refresh fails."""

    pass


class UserNotFoundError(AuthenticationError):
    """Raised when the token subject no longer exists."""

    pass


class AuthResult(NamedTuple):
    """An account together with freshly issued tokens."""

    user: User
    tokens: TokenPair


class AuthService:
    """Authentication service for accounts and tokens.

    Attributes:
        _db: Database session for queries.
        _jwt_manager: JWT token manager.
        _hasher: Password hasher.

    Example:
        >>> auth_service = AuthService(db, jwt_manager)
        >>> result = await auth_service.register(request)
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Async database session.
            jwt_manager: JWT token manager.
            password_hasher: Password hasher, bcrypt with defaults when omitted.
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._hasher = password_hasher or PasswordHasher()

    def issue_tokens(self, user: User) -> TokenPair:
        """Create a token pair carrying the user's scope claims."""
        return self._jwt_manager.create_token_pair(
            user_id=user.id,
            role=user.role,
            admin_level=user.admin_level,
            school_id=user.school_id,
            district_id=user.district_id,
            department_id=user.department_id,
        )

    async def register(self, data: RegisterRequest) -> AuthResult:
        """Create a student or educator account with its profile record.

        Args:
            data: Registration request.

        Returns:
            The created user and a token pair.

        Raises:
            UsernameExistsError: If the username is taken.
            EmailExistsError: If the email is taken.
        """
        if await self._get_by_username(data.username):
            raise UsernameExistsError("Username already exists")
        if await self._get_by_email(data.email):
            raise EmailExistsError("Email already exists")

        user = User(
            username=data.username,
            password_hash=self._hasher.hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            role=data.role,
            school_id=data.school_id,
            district_id=data.district_id,
            department_id=data.department_id,
            is_active=True,
        )
        self._db.add(user)
        await self._db.flush()

        if user.role == "student":
            self._db.add(
                Student(
                    user_id=user.id,
                    school_id=user.school_id,
                    grade=data.grade,
                    date_of_birth=data.date_of_birth,
                )
            )
        elif user.role == "educator":
            self._db.add(
                Educator(
                    user_id=user.id,
                    school_id=user.school_id or await self._default_school_id(),
                    department_id=user.department_id,
                    subject_specialty=data.subject_specialty,
                )
            )

        await self._db.commit()
        await self._db.refresh(user)

        logger.info("User registered: %s (role=%s)", user.id, user.role)

        return AuthResult(user=user, tokens=self.issue_tokens(user))

    async def login(self, username: str, password: str) -> AuthResult:
        """Authenticate with username and password.

        Raises:
            InvalidCredentialsError: If the username or password is wrong.
            AccountInactiveError: If the account is deactivated.
        """
        user = await self._get_by_username(username)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentialsError("Invalid username or password")

        if not user.is_active:
            raise AccountInactiveError("Account is not active")

        if self._hasher.needs_rehash(user.password_hash):
            user.password_hash = self._hasher.hash(password)

        user.last_login_at = utc_now()
        await self._db.commit()
        await self._db.refresh(user)

        logger.info("User logged in: %s", user.id)

        return AuthResult(user=user, tokens=self.issue_tokens(user))

    async def refresh(self, refresh_token: str) -> AuthResult:
        """Issue a new token pair from a refresh token.

        Claims are rebuilt from the current user row, so role or school
        changes take effect on the next refresh.

        Raises:
            TokenRefreshError: If the token is invalid, expired or the
                account is gone or inactive.
        """
        try:
            payload = self._jwt_manager.decode_token(refresh_token, expected_type="refresh")
        except (TokenExpiredError, InvalidTokenError) as e:
            raise TokenRefreshError(str(e)) from e

        user = await self._db.get(User, payload.user_id)
        if user is None:
            raise TokenRefreshError("User not found")
        if not user.is_active:
            raise TokenRefreshError("Account is not active")

        return AuthResult(user=user, tokens=self.issue_tokens(user))

    async def get_user(self, user_id: int) -> User:
        """Load an account by id.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        user = await self._db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def update_profile(self, user_id: int, data: UpdateProfileRequest) -> User:
        """Update the caller's name or email.

        Raises:
            UserNotFoundError: If no such user exists.
            EmailExistsError: If the new email belongs to another account.
        """
        user = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        email = changes.get("email")
        if email and email != user.email:
            existing = await self._get_by_email(email)
            if existing and existing.id != user.id:
                raise EmailExistsError("Email already exists")

        for field, value in changes.items():
            setattr(user, field, value)

        await self._db.commit()
        await self._db.refresh(user)

        logger.info("Profile updated: %s (fields=%s)", user.id, sorted(changes))
        return user

    async def _get_by_username(self, username: str) -> User | None:
        result = await self._db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def _get_by_email(self, email: str) -> User | None:
        result = await self._db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalars().first()

    async def _default_school_id(self) -> int | None:
        school = await self._db.get(School, DEFAULT_SCHOOL_ID)
        return school.id if school else None
