# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (in-memory SQLite sessions, mock LLM)
- Integration tests (full app with seeded demo data)
"""

import os

# Settings are cached on first use, so the test environment is set before
# any edconnect module is imported.
os.environ.update({
    "ENVIRONMENT": "development",
    "DEBUG": "true",
    "LOG_LEVEL": "WARNING",
    "DB_URL": "sqlite+aiosqlite:///:memory:",
    "JWT_SECRET_KEY": "test-secret-key-for-testing-only",
    "RATE_LIMIT_ENABLED": "false",
    "SEED_ENABLED": "true",
})

from collections.abc import AsyncGenerator, Generator
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from edconnect.api import create_app
from edconnect.api.dependencies import get_tutor
from edconnect.domains.tutoring import SessionSummary, TutorClient, TutorReply
from edconnect.infrastructure.database.connection import (
    build_engine,
    build_sessionmaker,
    create_all_tables,
)
from edconnect.infrastructure.database.seed import seed_demo_data

DEMO_PASSWORDS = {
    "admin": "AdminED2025!",
    "teacher": "TeachNYC2025!",
    "student": "EdConnect2025!",
}


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (full app, SQLite)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database with every table created."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the in-memory database."""
    sessionmaker = build_sessionmaker(engine)
    async with sessionmaker() as session:
        yield session


@pytest_asyncio.fixture
async def demo(db_session: AsyncSession) -> dict[str, Any]:
    """Demo organization, accounts and records.

    The rows are detached afterwards so services load them fresh, with
    their eager relationships, as they would in a new request.
    """
    data = await seed_demo_data(db_session)
    db_session.expunge_all()
    return data


def make_principal(user: Any, **overrides: Any) -> SimpleNamespace:
    """Build an access-scope principal from a user row."""
    fields = {
        "id": user.id,
        "role": user.role,
        "admin_level": user.admin_level,
        "school_id": user.school_id,
        "district_id": user.district_id,
        "department_id": user.department_id,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


# =============================================================================
# Tutor Fixtures
# =============================================================================


@pytest.fixture
def fake_tutor() -> MagicMock:
    """Tutor client with canned replies and assessments."""
    tutor = MagicMock(spec=TutorClient)
    tutor.respond = AsyncMock(
        return_value=TutorReply(
            message="What do you already know about a quadratic equation?",
            concepts_discussed=["Quadratic", "Equation"],
        )
    )
    tutor.summarize = AsyncMock(
        return_value=SessionSummary(
            summary="Worked through factoring quadratics.",
            performance_score=82,
            improvement_areas=["Factoring"],
            strength_areas=["Persistence"],
            concepts_covered=["Polynomial"],
        )
    )
    return tutor


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(fake_tutor: MagicMock) -> FastAPI:
    """Application with the tutor replaced by a fake."""
    app = create_app()
    app.dependency_overrides[get_tutor] = lambda: fake_tutor
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client; the lifespan creates and seeds a fresh in-memory database."""
    with TestClient(app) as client:
        yield client


def login(client: TestClient, username: str, password: str | None = None) -> dict[str, str]:
    """Log in and return the Authorization header."""
    response = client.post(
        "/api/v1/auth/login",
        json={"username": username, "password": password or DEMO_PASSWORDS[username]},
    )
    assert response.status_code == 200, response.text
    token = response.json()["tokens"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    return login(client, "admin")


@pytest.fixture
def teacher_headers(client: TestClient) -> dict[str, str]:
    return login(client, "teacher")


@pytest.fixture
def student_headers(client: TestClient) -> dict[str, str]:
    return login(client, "student")


@pytest.fixture
def login_as(client: TestClient):
    """Log in as any account and return its Authorization header."""
    return lambda username, password=None: login(client, username, password)


@pytest.fixture
def principal_for():
    """Build an access-scope principal from a user row."""
    return make_principal
