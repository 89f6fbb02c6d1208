# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for AuthService."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from edconnect.core.config.settings import JWTSettings
from edconnect.domains.auth.jwt import JWTManager
from edconnect.domains.auth.password import PasswordHasher
from edconnect.domains.auth.service import (
    AccountInactiveError,
    AuthService,
    EmailExistsError,
    InvalidCredentialsError,
    TokenRefreshError,
    UserNotFoundError,
    UsernameExistsError,
)
from edconnect.infrastructure.database.models import Educator, Student, User
from edconnect.models.auth import RegisterRequest, UpdateProfileRequest

HASHER = PasswordHasher(rounds=4)


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    db.get = AsyncMock()
    return db


@pytest.fixture
def jwt_manager() -> JWTManager:
    return JWTManager(JWTSettings(secret_key=SecretStr("auth-service-test-secret")))


@pytest.fixture
def auth_service(mock_db, jwt_manager):
    """Create auth service with mock database."""
    return AuthService(mock_db, jwt_manager, password_hasher=HASHER)


def _lookup(user=None) -> MagicMock:
    """Result for a username or email lookup."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    result.scalars.return_value.first.return_value = user
    return result


def _account(**overrides) -> SimpleNamespace:
    fields = {
        "id": 3,
        "username": "student",
        "password_hash": HASHER.hash("EdConnect2025!"),
        "email": "alex.chen@edconnect.edu",
        "first_name": "Alex",
        "last_name": "Chen",
        "role": "student",
        "admin_level": None,
        "school_id": 1,
        "district_id": 1,
        "department_id": None,
        "is_active": True,
        "last_login_at": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _assign_ids(mock_db):
    async def flush():
        for call in mock_db.add.call_args_list:
            row = call.args[0]
            if getattr(row, "id", None) is None:
                row.id = 42
    return flush


class TestRegister:
    """Tests for self-service registration."""

    @pytest.mark.asyncio
    async def test_register_student_creates_profile(self, auth_service, mock_db, jwt_manager):
        request = RegisterRequest(
            username="newstudent",
            password="Password123!",
            firstName="New",
            lastName="Student",
            email="new@edconnect.edu",
            schoolId=1,
            grade="9th",
        )
        mock_db.execute.side_effect = [_lookup(), _lookup()]
        mock_db.flush.side_effect = _assign_ids(mock_db)

        result = await auth_service.register(request)

        added = [call.args[0] for call in mock_db.add.call_args_list]
        assert isinstance(added[0], User)
        assert isinstance(added[1], Student)
        assert added[1].user_id == 42
        assert added[1].grade == "9th"
        assert result.user.role == "student"
        assert HASHER.verify("Password123!", result.user.password_hash)
        mock_db.commit.assert_called_once()

        claims = jwt_manager.decode_token(result.tokens.access_token, expected_type="access")
        assert claims.user_id == 42
        assert claims.role == "student"
        assert claims.school_id == 1

    @pytest.mark.asyncio
    async def test_register_educator_defaults_to_first_school(self, auth_service, mock_db):
        request = RegisterRequest(
            username="newteacher",
            password="Password123!",
            firstName="New",
            lastName="Teacher",
            email="teach@edconnect.edu",
            role="educator",
            subjectSpecialty="Physics",
        )
        mock_db.execute.side_effect = [_lookup(), _lookup()]
        mock_db.flush.side_effect = _assign_ids(mock_db)
        mock_db.get.return_value = SimpleNamespace(id=1)

        await auth_service.register(request)

        educator = mock_db.add.call_args_list[1].args[0]
        assert isinstance(educator, Educator)
        assert educator.school_id == 1
        assert educator.subject_specialty == "Physics"

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, auth_service, mock_db):
        request = RegisterRequest(
            username="student",
            password="Password123!",
            firstName="Dup",
            lastName="User",
            email="dup@edconnect.edu",
        )
        mock_db.execute.return_value = _lookup(_account())

        with pytest.raises(UsernameExistsError):
            await auth_service.register(request)

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, auth_service, mock_db):
        request = RegisterRequest(
            username="fresh",
            password="Password123!",
            firstName="Dup",
            lastName="Email",
            email="alex.chen@edconnect.edu",
        )
        mock_db.execute.side_effect = [_lookup(), _lookup(_account())]

        with pytest.raises(EmailExistsError):
            await auth_service.register(request)


class TestLogin:
    """Tests for username/password login."""

    @pytest.mark.asyncio
    async def test_login_success_updates_last_login(self, auth_service, mock_db):
        user = _account()
        mock_db.execute.return_value = _lookup(user)

        result = await auth_service.login("student", "EdConnect2025!")

        assert result.user is user
        assert user.last_login_at is not None
        assert result.tokens.token_type == "Bearer"
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service, mock_db):
        mock_db.execute.return_value = _lookup(_account())

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("student", "wrong")

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, auth_service, mock_db):
        mock_db.execute.return_value = _lookup(None)

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("ghost", "whatever")

    @pytest.mark.asyncio
    async def test_login_inactive_account(self, auth_service, mock_db):
        mock_db.execute.return_value = _lookup(_account(is_active=False))

        with pytest.raises(AccountInactiveError):
            await auth_service.login("student", "EdConnect2025!")

    @pytest.mark.asyncio
    async def test_login_rehashes_weak_hash(self, mock_db, jwt_manager):
        service = AuthService(mock_db, jwt_manager, password_hasher=PasswordHasher(rounds=5))
        user = _account()
        old_hash = user.password_hash
        mock_db.execute.return_value = _lookup(user)

        await service.login("student", "EdConnect2025!")

        assert user.password_hash != old_hash
        assert user.password_hash.startswith("$2b$05$")


class TestRefresh:
    """Tests for token refresh."""

    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair(self, auth_service, mock_db, jwt_manager):
        user = _account(role="admin", admin_level="school")
        mock_db.get.return_value = user
        refresh_token = jwt_manager.create_refresh_token(user.id)

        result = await auth_service.refresh(refresh_token)

        claims = jwt_manager.decode_token(result.tokens.access_token, expected_type="access")
        assert claims.role == "admin"
        assert claims.admin_level == "school"

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, auth_service, jwt_manager):
        access_token = jwt_manager.create_access_token(user_id=3, role="student")

        with pytest.raises(TokenRefreshError):
            await auth_service.refresh(access_token)

    @pytest.mark.asyncio
    async def test_refresh_for_deleted_user(self, auth_service, mock_db, jwt_manager):
        mock_db.get.return_value = None

        with pytest.raises(TokenRefreshError, match="User not found"):
            await auth_service.refresh(jwt_manager.create_refresh_token(99))

    @pytest.mark.asyncio
    async def test_refresh_for_inactive_user(self, auth_service, mock_db, jwt_manager):
        mock_db.get.return_value = _account(is_active=False)

        with pytest.raises(TokenRefreshError, match="not active"):
            await auth_service.refresh(jwt_manager.create_refresh_token(3))


class TestProfile:
    """Tests for profile lookup and update."""

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, auth_service, mock_db):
        mock_db.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await auth_service.get_user(99)

    @pytest.mark.asyncio
    async def test_update_profile_changes_only_given_fields(self, auth_service, mock_db):
        user = _account()
        mock_db.get.return_value = user

        result = await auth_service.update_profile(3, UpdateProfileRequest(firstName="Alexander"))

        assert result.first_name == "Alexander"
        assert result.last_name == "Chen"
        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_profile_email_taken(self, auth_service, mock_db):
        mock_db.get.return_value = _account()
        mock_db.execute.return_value = _lookup(_account(id=2, email="john.doe@edconnect.edu"))

        with pytest.raises(EmailExistsError):
            await auth_service.update_profile(
                3, UpdateProfileRequest(email="john.doe@edconnect.edu")
            )
