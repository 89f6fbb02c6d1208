# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Tutoring service."""

from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.tutoring import (
    SessionEndedError,
    SessionNotFoundError,
    TutorError,
    TutoringService,
    TutoringValidationError,
)
from edconnect.infrastructure.database.models import TutoringMessage, TutoringSession
from edconnect.utils.datetime import days_ago, utc_now


@pytest.fixture
def tutoring_service(db_session: AsyncSession, fake_tutor) -> TutoringService:
    return TutoringService(db_session, fake_tutor)


class TestSessions:
    """Tests for starting and resuming sessions."""

    @pytest.mark.asyncio
    async def test_resumes_active_session_per_subject(self, tutoring_service, demo) -> None:
        user_id = demo["accounts"].student.id

        first = await tutoring_service.get_or_create_session(user_id, "Math")
        again = await tutoring_service.get_or_create_session(user_id, "Math")
        other = await tutoring_service.get_or_create_session(user_id, "Science")

        assert again.session.id == first.session.id
        assert other.session.id != first.session.id
        assert first.messages == []
        assert first.session.total_messages == 0

    @pytest.mark.asyncio
    async def test_ended_session_is_not_resumed(self, tutoring_service, demo) -> None:
        user_id = demo["accounts"].student.id
        first = await tutoring_service.get_or_create_session(user_id, "Math")
        await tutoring_service.end_session(user_id, first.session.id)

        fresh = await tutoring_service.get_or_create_session(user_id, "Math")

        assert fresh.session.id != first.session.id

    @pytest.mark.asyncio
    async def test_list_sessions_newest_first(self, tutoring_service, demo) -> None:
        user_id = demo["accounts"].student.id
        math = await tutoring_service.get_or_create_session(user_id, "Math")
        music = await tutoring_service.get_or_create_session(user_id, "Music")

        sessions = await tutoring_service.list_sessions(user_id)

        assert [s.id for s in sessions] == [music.session.id, math.session.id]


class TestSendMessage:
    """Tests for the message exchange."""

    @pytest.mark.asyncio
    async def test_stores_both_messages_and_counters(
        self, tutoring_service, fake_tutor, demo
    ) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")

        exchange = await tutoring_service.send_message(
            user_id, started.session.id, "How do I solve x^2 + 5x + 6 = 0?"
        )

        assert exchange.user_message.role == "user"
        assert exchange.assistant_message.role == "assistant"
        assert exchange.assistant_message.concepts_discussed == ["Quadratic", "Equation"]
        assert exchange.session.total_messages == 2
        assert exchange.session.student_questions == 1
        assert exchange.session.concepts_covered == ["Quadratic", "Equation"]

        kwargs = fake_tutor.respond.call_args.kwargs
        assert kwargs["subject"] == "Math"
        assert kwargs["context"].full_name == "Alex Chen"
        assert kwargs["context"].school_name == "EdConnect High School"

    @pytest.mark.asyncio
    async def test_history_is_sent_to_tutor(self, tutoring_service, fake_tutor, demo) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")
        await tutoring_service.send_message(user_id, started.session.id, "First question")

        await tutoring_service.send_message(user_id, started.session.id, "Second question")

        conversation = fake_tutor.respond.call_args.args[0]
        assert [m["role"] for m in conversation] == ["user", "assistant", "user"]
        assert conversation[-1]["content"] == "Second question"

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, tutoring_service, demo) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")

        with pytest.raises(TutoringValidationError):
            await tutoring_service.send_message(user_id, started.session.id, "   ")

    @pytest.mark.asyncio
    async def test_foreign_session_is_missing(self, tutoring_service, demo) -> None:
        started = await tutoring_service.get_or_create_session(demo["accounts"].student.id, "Math")

        with pytest.raises(SessionNotFoundError):
            await tutoring_service.send_message(demo["accounts"].teacher.id, started.session.id, "Hi")

    @pytest.mark.asyncio
    async def test_ended_session_rejects_messages(self, tutoring_service, demo) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")
        await tutoring_service.end_session(user_id, started.session.id)

        with pytest.raises(SessionEndedError):
            await tutoring_service.send_message(user_id, started.session.id, "Hello?")

    @pytest.mark.asyncio
    async def test_tutor_failure_stores_nothing(
        self, tutoring_service, fake_tutor, db_session, demo
    ) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")
        fake_tutor.respond.side_effect = TutorError("Failed to get tutor response. Please try again.")

        with pytest.raises(TutorError):
            await tutoring_service.send_message(user_id, started.session.id, "Hello")

        count = await db_session.scalar(select(func.count()).select_from(TutoringMessage))
        assert count == 0


class TestEndSession:
    """Tests for ending sessions."""

    @pytest.mark.asyncio
    async def test_end_stores_assessment(self, tutoring_service, fake_tutor, demo) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")
        await tutoring_service.send_message(user_id, started.session.id, "How do I factor?")

        ended = await tutoring_service.end_session(user_id, started.session.id)

        assert ended.ended_at is not None
        assert ended.session_summary == "Worked through factoring quadratics."
        assert ended.performance_score == 82
        assert ended.improvement_areas == ["Factoring"]
        assert ended.strength_areas == ["Persistence"]
        assert ended.concepts_covered == ["Quadratic", "Equation", "Polynomial"]

    @pytest.mark.asyncio
    async def test_end_is_idempotent(self, tutoring_service, fake_tutor, demo) -> None:
        user_id = demo["accounts"].student.id
        started = await tutoring_service.get_or_create_session(user_id, "Math")
        first = await tutoring_service.end_session(user_id, started.session.id)

        second = await tutoring_service.end_session(user_id, started.session.id)

        assert second.ended_at == first.ended_at
        fake_tutor.summarize.assert_awaited_once()


class TestProgressInsights:
    """Tests for progress insights."""

    @pytest.mark.asyncio
    async def test_no_sessions(self, tutoring_service, demo) -> None:
        insights = await tutoring_service.progress_insights(demo["accounts"].student.id)

        assert insights.total_sessions == 0
        assert insights.total_time == 0
        assert insights.recommendations == [
            "Start a tutoring session in a subject you want to improve."
        ]
        assert insights.weekly_goal.endswith("(0/3 done)")

    @pytest.mark.asyncio
    async def test_aggregates_sessions(self, tutoring_service, db_session, demo) -> None:
        user_id = demo["accounts"].student.id
        now = utc_now()
        db_session.add_all(
            [
                TutoringSession(
                    student_id=user_id,
                    subject="Math",
                    started_at=now - timedelta(minutes=50),
                    ended_at=now - timedelta(minutes=20),
                    performance_score=90,
                    strength_areas=["Factoring"],
                    improvement_areas=["Graphing"],
                ),
                TutoringSession(
                    student_id=user_id,
                    subject="Science",
                    started_at=days_ago(10),
                    ended_at=days_ago(10) + timedelta(minutes=15),
                    performance_score=60,
                    strength_areas=["Curiosity"],
                    improvement_areas=["Graphing", "Units"],
                ),
                TutoringSession(student_id=user_id, subject=None, started_at=now),
            ]
        )
        await db_session.commit()

        insights = await tutoring_service.progress_insights(user_id)

        assert insights.total_sessions == 3
        assert insights.total_time == 45
        assert insights.areas_for_improvement[0] == "Graphing"
        assert set(insights.strengths) == {"Factoring", "Curiosity"}
        assert insights.subject_breakdown["Math"].avg_performance == 90
        assert insights.subject_breakdown["Science"].time == 15
        assert insights.subject_breakdown["General"].sessions == 1
        assert insights.overall_progress.startswith("Good progress")
        assert "Spend extra time on Science." in insights.recommendations
        assert insights.weekly_goal.endswith("(2/3 done)")
