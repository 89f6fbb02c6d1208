# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tutoring service for AI tutor sessions.

This module provides the TutoringService that handles:
- Session start and resume per subject
- Message exchange with the tutor
- Session end with assessment
- Progress insights across a student's sessions

Example:
    >>> service = TutoringService(db_session, tutor)
    >>> started = await service.get_or_create_session(user_id, "Math")
    >>> exchange = await service.send_message(user_id, started.session.id, "What is a slope?")
"""

import logging
from collections import Counter, defaultdict
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.tutoring.redaction import StudentContext
from edconnect.domains.tutoring.tutor import TutorClient
from edconnect.infrastructure.database.models import (
    School,
    Student,
    TutoringMessage,
    TutoringSession,
    User,
)
from edconnect.models.common import MessageRole
from edconnect.models.tutoring import ProgressInsights, SubjectProgress
from edconnect.utils.datetime import days_ago, ensure_utc, minutes_between, utc_now

logger = logging.getLogger(__name__)

WEEKLY_SESSION_GOAL = 3
TOP_AREAS = 5
GENERAL_SUBJECT = "General"


class TutoringServiceError(Exception):
    """Base exception for tutoring service errors."""

    pass


class SessionNotFoundError(TutoringServiceError):
    """Raised when a session is missing or belongs to someone else."""

    pass


class SessionEndedError(TutoringServiceError):
    """Raised when sending a message to an ended session."""

    pass


class TutoringValidationError(TutoringServiceError):
    """Raised when a message is blank."""

    pass


class SessionRows(NamedTuple):
    session: TutoringSession
    messages: list[TutoringMessage]


class ExchangeRows(NamedTuple):
    user_message: TutoringMessage
    assistant_message: TutoringMessage
    session: TutoringSession


class TutoringService:
    """Service for tutoring sessions.

    Attributes:
        _db: Async database session.
        _tutor: Tutor producing replies and assessments.
    """

    def __init__(self, db: AsyncSession, tutor: TutorClient) -> None:
        self._db = db
        self._tutor = tutor

    # =========================================================================
    # Sessions
    # =========================================================================

    async def get_or_create_session(self, user_id: int, subject: str | None = None) -> SessionRows:
        """Resume the active session for a subject or start a new one."""
        stmt = select(TutoringSession).where(
            TutoringSession.student_id == user_id,
            TutoringSession.ended_at.is_(None),
        )
        if subject:
            stmt = stmt.where(TutoringSession.subject == subject)
        else:
            stmt = stmt.where(TutoringSession.subject.is_(None))

        result = await self._db.execute(stmt.order_by(TutoringSession.started_at.desc()).limit(1))
        session = result.scalar_one_or_none()

        if session is None:
            session = TutoringSession(
                student_id=user_id,
                subject=subject or None,
                started_at=utc_now(),
                total_messages=0,
                student_questions=0,
                concepts_covered=[],
                improvement_areas=[],
                strength_areas=[],
            )
            self._db.add(session)
            await self._db.commit()
            await self._db.refresh(session)
            logger.info("Tutoring session started: %s (user=%s, subject=%s)", session.id, user_id, subject)

        return SessionRows(session=session, messages=await self._messages(session.id))

    async def list_sessions(self, user_id: int) -> list[TutoringSession]:
        result = await self._db.execute(
            select(TutoringSession)
            .where(TutoringSession.student_id == user_id)
            .order_by(TutoringSession.started_at.desc(), TutoringSession.id.desc())
        )
        return list(result.scalars().all())

    async def send_message(self, user_id: int, session_id: int, text: str) -> ExchangeRows:
        """Store a student message and the tutor's reply.

        Raises:
            TutoringValidationError: If the message is blank.
            SessionNotFoundError: If the session is missing or foreign.
            SessionEndedError: If the session has ended.
            TutorError: If the tutor fails; nothing is stored.
        """
        if not text or not text.strip():
            raise TutoringValidationError("Message cannot be empty")

        session = await self._get_owned(user_id, session_id)
        if not session.is_active:
            raise SessionEndedError("Session has already ended")

        history = await self._messages(session.id)
        conversation = [{"role": m.role, "content": m.content} for m in history]
        conversation.append({"role": MessageRole.USER.value, "content": text})

        reply = await self._tutor.respond(
            conversation,
            subject=session.subject,
            topic=session.topic,
            context=await self._student_context(user_id),
        )

        now = utc_now()
        user_message = TutoringMessage(
            session_id=session.id,
            role=MessageRole.USER.value,
            content=text,
            timestamp=now,
            concepts_discussed=[],
        )
        assistant_message = TutoringMessage(
            session_id=session.id,
            role=MessageRole.ASSISTANT.value,
            content=reply.message,
            timestamp=utc_now(),
            concepts_discussed=reply.concepts_discussed,
        )
        self._db.add_all([user_message, assistant_message])

        session.total_messages = (session.total_messages or 0) + 2
        session.student_questions = (session.student_questions or 0) + 1
        session.concepts_covered = _merge(session.concepts_covered, reply.concepts_discussed)

        await self._db.commit()
        await self._db.refresh(user_message)
        await self._db.refresh(assistant_message)
        await self._db.refresh(session)

        logger.info("Tutoring exchange stored: session=%s, messages=%s", session.id, session.total_messages)
        return ExchangeRows(user_message=user_message, assistant_message=assistant_message, session=session)

    async def end_session(self, user_id: int, session_id: int) -> TutoringSession:
        """Assess and close a session. Ended sessions are returned unchanged.

        Raises:
            SessionNotFoundError: If the session is missing or foreign.
        """
        session = await self._get_owned(user_id, session_id)
        if not session.is_active:
            return session

        messages = await self._messages(session.id)
        summary = await self._tutor.summarize(
            [{"role": m.role, "content": m.content} for m in messages],
            subject=session.subject,
            topic=session.topic,
            context=await self._student_context(user_id),
        )

        session.session_summary = summary.summary
        session.performance_score = summary.performance_score
        session.improvement_areas = summary.improvement_areas
        session.strength_areas = summary.strength_areas
        session.concepts_covered = _merge(session.concepts_covered, summary.concepts_covered)
        session.ended_at = utc_now()

        await self._db.commit()
        await self._db.refresh(session)

        logger.info("Tutoring session ended: %s (score=%s)", session.id, session.performance_score)
        return session

    # =========================================================================
    # Insights
    # =========================================================================

    async def progress_insights(self, user_id: int) -> ProgressInsights:
        """Summarize a student's tutoring history."""
        sessions = await self.list_sessions(user_id)

        total_time = 0
        scores: list[int] = []
        strengths: Counter[str] = Counter()
        weaknesses: Counter[str] = Counter()
        by_subject: dict[str, dict] = defaultdict(
            lambda: {"sessions": 0, "time": 0, "scores": []}
        )

        for session in sessions:
            minutes = 0
            if session.ended_at is not None:
                minutes = minutes_between(session.started_at, session.ended_at)
            total_time += minutes

            bucket = by_subject[session.subject or GENERAL_SUBJECT]
            bucket["sessions"] += 1
            bucket["time"] += minutes
            if session.performance_score is not None:
                scores.append(session.performance_score)
                bucket["scores"].append(session.performance_score)

            strengths.update(session.strength_areas or [])
            weaknesses.update(session.improvement_areas or [])

        breakdown = {
            subject: SubjectProgress(
                sessions=bucket["sessions"],
                time=bucket["time"],
                avg_performance=_mean(bucket["scores"]),
            )
            for subject, bucket in sorted(by_subject.items())
        }

        week_start = days_ago(7)
        this_week = sum(1 for s in sessions if ensure_utc(s.started_at) >= week_start)
        average = _mean(scores)
        areas = [area for area, _ in weaknesses.most_common(TOP_AREAS)]

        return ProgressInsights(
            overall_progress=_overall_progress(len(sessions), average),
            strengths=[area for area, _ in strengths.most_common(TOP_AREAS)],
            areas_for_improvement=areas,
            recommendations=_recommendations(len(sessions), this_week, areas, breakdown),
            weekly_goal=(
                f"Complete {WEEKLY_SESSION_GOAL} tutoring sessions this week "
                f"({min(this_week, WEEKLY_SESSION_GOAL)}/{WEEKLY_SESSION_GOAL} done)"
            ),
            total_sessions=len(sessions),
            total_time=total_time,
            subject_breakdown=breakdown,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _get_owned(self, user_id: int, session_id: int) -> TutoringSession:
        session = await self._db.get(TutoringSession, session_id)
        if session is None or session.student_id != user_id:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    async def _messages(self, session_id: int) -> list[TutoringMessage]:
        result = await self._db.execute(
            select(TutoringMessage)
            .where(TutoringMessage.session_id == session_id)
            .order_by(TutoringMessage.timestamp, TutoringMessage.id)
        )
        return list(result.scalars().all())

    async def _student_context(self, user_id: int) -> StudentContext:
        user = await self._db.get(User, user_id)
        if user is None:
            return StudentContext()

        result = await self._db.execute(select(Student).where(Student.user_id == user_id).limit(1))
        student = result.scalar_one_or_none()

        school_id = user.school_id or (student.school_id if student else None)
        school = await self._db.get(School, school_id) if school_id is not None else None

        return StudentContext(
            full_name=user.full_name,
            email=user.email,
            student_id=student.student_number if student else None,
            school_name=school.name if school else None,
        )


def _merge(existing: list[str] | None, new: list[str]) -> list[str]:
    merged = list(existing or [])
    for item in new:
        if item not in merged:
            merged.append(item)
    return merged


def _mean(values: list[int]) -> int:
    return round(sum(values) / len(values)) if values else 0


def _overall_progress(total_sessions: int, average: int) -> str:
    if total_sessions == 0:
        return "Start your first tutoring session to begin tracking progress."
    if average >= 85:
        return "Excellent progress! You are mastering concepts across your sessions."
    if average >= 70:
        return "Good progress. Keep practicing to strengthen your understanding."
    if average > 0:
        return "You are building foundations. Regular sessions will help concepts click."
    return "Finish a session to receive your first assessment."


def _recommendations(
    total_sessions: int,
    this_week: int,
    areas: list[str],
    breakdown: dict[str, SubjectProgress],
) -> list[str]:
    if total_sessions == 0:
        return ["Start a tutoring session in a subject you want to improve."]

    recommendations = [f"Review {area} with your tutor." for area in areas[:3]]

    weakest = [
        subject
        for subject, progress in breakdown.items()
        if 0 < progress.avg_performance < 70
    ]
    recommendations.extend(f"Spend extra time on {subject}." for subject in weakest)

    if this_week < WEEKLY_SESSION_GOAL:
        recommendations.append(
            f"Schedule {WEEKLY_SESSION_GOAL - this_week} more session(s) to reach your weekly goal."
        )
    if not recommendations:
        recommendations.append("Keep up the great work and try a new topic.")
    return recommendations
