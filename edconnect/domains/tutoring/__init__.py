# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""AI tutor domain."""

from edconnect.domains.tutoring.concepts import extract_concepts
from edconnect.domains.tutoring.prompts import TutorPrompts, get_system_prompt, get_tutor_prompts
from edconnect.domains.tutoring.redaction import StudentContext, redact_pii
from edconnect.domains.tutoring.service import (
    SessionEndedError,
    SessionNotFoundError,
    TutoringService,
    TutoringServiceError,
    TutoringValidationError,
)
from edconnect.domains.tutoring.tutor import SessionSummary, TutorClient, TutorError, TutorReply

__all__ = [
    "SessionEndedError",
    "SessionNotFoundError",
    "SessionSummary",
    "StudentContext",
    "TutorClient",
    "TutorError",
    "TutorPrompts",
    "TutorReply",
    "TutoringService",
    "TutoringServiceError",
    "TutoringValidationError",
    "extract_concepts",
    "get_system_prompt",
    "get_tutor_prompts",
    "redact_pii",
]
