# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT token management utilities.

This module provides JWT token creation and validation using python-jose.
Access tokens carry the claims needed to resolve a user's access scope
without a database round trip (role, admin level and organisation ids);
refresh tokens only identify the user.

Example:
    >>> from edconnect.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> tokens = jwt_manager.create_token_pair(user_id=3, role="student")
    >>> claims = jwt_manager.decode_token(tokens.access_token, expected_type="access")
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from edconnect.core.config.settings import JWTSettings

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        sub: Subject (user ID as string).
        type: Token type (access or refresh).
        role: Account role (student, educator, admin).
        admin_level: Admin scope (district, school, department) or None.
        school_id: School the user belongs to.
        district_id: District the user belongs to.
        department_id: Department the user belongs to.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: JWT ID for token tracking.
    """

    sub: str
    type: Literal["access", "refresh"]
    role: str | None = None
    admin_level: str | None = None
    school_id: int | None = None
    district_id: int | None = None
    department_id: int | None = None
    exp: int
    iat: int
    jti: str

    @property
    def user_id(self) -> int:
        return int(self.sub)


class TokenPair(BaseModel):
    """Access and refresh token pair.

    Attributes:
        access_token: JWT access token string.
        refresh_token: JWT refresh token string.
        token_type: Token type (always "Bearer").
        expires_in: Access token expiration in seconds.
        refresh_expires_in: Refresh token expiration in seconds.
    """

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_expires_in: int


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """JWT token creation and validation manager.

    Attributes:
        _settings: JWT configuration settings.
    """

    def __init__(self, settings: JWTSettings) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings.
        """
        self._settings = settings

    @property
    def refresh_token_expire_days(self) -> int:
        return self._settings.refresh_token_expire_days

    def _encode(self, payload: dict[str, Any]) -> str:
        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def create_access_token(
        self,
        user_id: int | str,
        role: str | None = None,
        admin_level: str | None = None,
        school_id: int | None = None,
        district_id: int | None = None,
        department_id: int | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: User identifier.
            role: Account role.
            admin_level: Admin scope for admins.
            school_id: User's school.
            district_id: User's district.
            department_id: User's department.

        Returns:
            JWT access token string.
        """
        now = datetime.now(timezone.utc)
        exp = now + timedelta(minutes=self._settings.access_token_expire_minutes)

        return self._encode({
            "sub": str(user_id),
            "type": "access",
            "role": role,
            "admin_level": admin_level,
            "school_id": school_id,
            "district_id": district_id,
            "department_id": department_id,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        })

    def create_refresh_token(self, user_id: int | str) -> str:
        """Create a refresh token carrying only the subject."""
        now = datetime.now(timezone.utc)
        exp = now + timedelta(days=self._settings.refresh_token_expire_days)

        return self._encode({
            "sub": str(user_id),
            "type": "refresh",
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        })

    def create_token_pair(
        self,
        user_id: int | str,
        role: str | None = None,
        admin_level: str | None = None,
        school_id: int | None = None,
        district_id: int | None = None,
        department_id: int | None = None,
    ) -> TokenPair:
        """Create an access and refresh token pair.

        Args:
            user_id: User identifier.
            role: Account role.
            admin_level: Admin scope for admins.
            school_id: User's school.
            district_id: User's district.
            department_id: User's department.

        Returns:
            TokenPair with access and refresh tokens.
        """
        access_token = self.create_access_token(
            user_id=user_id,
            role=role,
            admin_level=admin_level,
            school_id=school_id,
            district_id=district_id,
            department_id=department_id,
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=self.create_refresh_token(user_id),
            token_type="Bearer",
            expires_in=self._settings.access_token_expire_minutes * 60,
            refresh_expires_in=self._settings.refresh_token_expire_days * 24 * 60 * 60,
        )

    def decode_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.
            expected_type: Expected token type (access or refresh).

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or wrong type.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}")

        if expected_type and payload.get("type") != expected_type:
            raise InvalidTokenError(
                f"Expected {expected_type} token, got {payload.get('type')}"
            )

        try:
            return TokenPayload.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError(f"Invalid token claims: {e.error_count()} errors")

    def verify_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> bool:
        """Verify if a token is valid.

        Returns:
            True if token is valid, False otherwise.
        """
        try:
            self.decode_token(token, expected_type)
            return True
        except (TokenExpiredError, InvalidTokenError):
            return False

    @staticmethod
    def hash_token(token: str) -> str:
        """Create a SHA-256 hex digest of a token for logging and auditing."""
        return hashlib.sha256(token.encode()).hexdigest()
