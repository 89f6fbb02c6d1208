# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

This package provides the SQLAlchemy async engine and sessions used by
every domain service. PostgreSQL (asyncpg) is the production backend;
SQLite (aiosqlite) serves local development and tests.

Example:
    from edconnect.infrastructure.database import get_session

    async with get_session() as session:
        result = await session.execute(select(School))
"""

from edconnect.infrastructure.database.connection import (
    DatabaseError,
    build_engine,
    build_sessionmaker,
    check_database_connection,
    close_database,
    create_all_tables,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "DatabaseError",
    "build_engine",
    "build_sessionmaker",
    "check_database_connection",
    "close_database",
    "create_all_tables",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
]
