# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""AI tutor API endpoints.

This module provides endpoints for Socratic tutoring sessions:
- GET /session - Resume or start the session for a subject
- GET /sessions - List the caller's sessions
- POST /message - Send a message and get the tutor's reply
- POST /session/end - End a session with an assessment
- GET /progress-insights - Progress across all sessions

Example:
    POST /api/v1/tutor/message
    {
        "sessionId": 12,
        "message": "Why does the quadratic formula work?"
    }
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.api.dependencies import DB, AuthenticatedUser, Tutor
from edconnect.api.middleware.rate_limit import RATE_LIMIT_EXPENSIVE, limiter
from edconnect.domains.tutoring import (
    SessionEndedError,
    SessionNotFoundError,
    TutorClient,
    TutorError,
    TutoringService,
    TutoringValidationError,
)
from edconnect.models.tutoring import (
    EndSessionRequest,
    ProgressInsights,
    SendMessageRequest,
    SendMessageResponse,
    SessionWithMessages,
    TutoringMessageResponse,
    TutoringSessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_tutoring_service(db: AsyncSession, tutor: TutorClient) -> TutoringService:
    return TutoringService(db, tutor)


@router.get(
    "/session",
    response_model=SessionWithMessages,
    summary="Get or start session",
    description="Resume the active session for a subject, or start a new one.",
)
async def get_session(
    current_user: AuthenticatedUser,
    db: DB,
    tutor: Tutor,
    subject: Annotated[str | None, Query(max_length=100, description="Session subject")] = None,
) -> SessionWithMessages:
    rows = await _get_tutoring_service(db, tutor).get_or_create_session(current_user.id, subject)
    return SessionWithMessages(
        session=TutoringSessionResponse.model_validate(rows.session),
        messages=[TutoringMessageResponse.model_validate(m) for m in rows.messages],
    )


@router.get(
    "/sessions",
    response_model=list[TutoringSessionResponse],
    summary="List sessions",
)
async def list_sessions(
    current_user: AuthenticatedUser,
    db: DB,
    tutor: Tutor,
) -> list[TutoringSessionResponse]:
    sessions = await _get_tutoring_service(db, tutor).list_sessions(current_user.id)
    return [TutoringSessionResponse.model_validate(s) for s in sessions]


@router.post(
    "/message",
    response_model=SendMessageResponse,
    summary="Send message",
    description="Store the student's message and the tutor's Socratic reply.",
)
@limiter.limit(RATE_LIMIT_EXPENSIVE)
async def send_message(
    request: Request,
    data: SendMessageRequest,
    current_user: AuthenticatedUser,
    db: DB,
    tutor: Tutor,
) -> SendMessageResponse:
    """Exchange one message with the tutor.

    Raises:
        HTTPException: 400 for a blank message, 404 for a missing session,
            409 for an ended session, 502 when the tutor fails.
    """
    try:
        rows = await _get_tutoring_service(db, tutor).send_message(
            current_user.id, data.session_id, data.message
        )
    except TutoringValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SessionEndedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except TutorError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return SendMessageResponse(
        user_message=TutoringMessageResponse.model_validate(rows.user_message),
        assistant_message=TutoringMessageResponse.model_validate(rows.assistant_message),
        session=TutoringSessionResponse.model_validate(rows.session),
    )


@router.post(
    "/session/end",
    response_model=TutoringSessionResponse,
    summary="End session",
    description="Assess the session and close it. Ending an ended session is a no-op.",
)
@limiter.limit(RATE_LIMIT_EXPENSIVE)
async def end_session(
    request: Request,
    data: EndSessionRequest,
    current_user: AuthenticatedUser,
    db: DB,
    tutor: Tutor,
) -> TutoringSessionResponse:
    try:
        session = await _get_tutoring_service(db, tutor).end_session(current_user.id, data.session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TutoringSessionResponse.model_validate(session)


@router.get(
    "/progress-insights",
    response_model=ProgressInsights,
    summary="Progress insights",
)
async def progress_insights(
    current_user: AuthenticatedUser,
    db: DB,
    tutor: Tutor,
) -> ProgressInsights:
    return await _get_tutoring_service(db, tutor).progress_insights(current_user.id)
