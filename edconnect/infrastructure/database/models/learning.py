# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student-owned learning records: AI tutoring sessions and homework.

Both tables key their owner on ``users.id``; every account can keep a
homework list and talk to the tutor.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from edconnect.infrastructure.database.models.base import Base
from edconnect.utils.datetime import utc_now


class TutoringSession(Base):
    """A conversation with the AI tutor plus its derived summary."""

    __tablename__ = "tutoring_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    subject: Mapped[str | None] = mapped_column(String(100))
    topic: Mapped[str | None] = mapped_column(String(200))
    difficulty: Mapped[str | None] = mapped_column(String(30))
    total_messages: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    student_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    concepts_covered: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    session_summary: Mapped[str | None] = mapped_column(Text)
    performance_score: Mapped[int | None] = mapped_column(Integer)
    improvement_areas: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    strength_areas: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    @property
    def is_active(self) -> bool:
        return self.ended_at is None


class TutoringMessage(Base):
    """One chat turn inside a tutoring session."""

    __tablename__ = "tutoring_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("tutoring_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    concepts_discussed: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)


class Homework(Base):
    """Homework to-do item owned by a user."""

    __tablename__ = "homework"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    subject: Mapped[str | None] = mapped_column(String(100))
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    priority: Mapped[str] = mapped_column(String(10), default="medium", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)
    attachment_url: Mapped[str | None] = mapped_column(String(500))
    attachment_name: Mapped[str | None] = mapped_column(String(200))
