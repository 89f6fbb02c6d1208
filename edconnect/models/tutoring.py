# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""AI tutor schemas."""

from datetime import datetime

from pydantic import Field

from edconnect.models.common import CamelModel, MessageRole, ORMModel


class TutoringMessageResponse(ORMModel):
    id: int
    session_id: int
    role: MessageRole
    content: str
    timestamp: datetime
    concepts_discussed: list[str] = Field(default_factory=list)


class TutoringSessionResponse(ORMModel):
    id: int
    student_id: int
    started_at: datetime
    ended_at: datetime | None = None
    subject: str | None = None
    topic: str | None = None
    difficulty: str | None = None
    total_messages: int
    student_questions: int
    concepts_covered: list[str] = Field(default_factory=list)
    session_summary: str | None = None
    performance_score: int | None = None
    improvement_areas: list[str] = Field(default_factory=list)
    strength_areas: list[str] = Field(default_factory=list)


class SessionWithMessages(CamelModel):
    session: TutoringSessionResponse
    messages: list[TutoringMessageResponse] = Field(default_factory=list)


class SendMessageRequest(CamelModel):
    message: str = Field(min_length=1, max_length=8000)
    session_id: int


class SendMessageResponse(CamelModel):
    user_message: TutoringMessageResponse
    assistant_message: TutoringMessageResponse
    session: TutoringSessionResponse


class EndSessionRequest(CamelModel):
    session_id: int


class SubjectProgress(CamelModel):
    sessions: int
    time: int
    avg_performance: int


class ProgressInsights(CamelModel):
    overall_progress: str
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    weekly_goal: str
    total_sessions: int
    total_time: int
    subject_breakdown: dict[str, SubjectProgress] = Field(default_factory=dict)
