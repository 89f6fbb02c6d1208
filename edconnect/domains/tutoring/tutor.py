# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""AI tutor backed by the LLM client.

The TutorClient produces Socratic replies to student messages and
end-of-session assessments. Student text is redacted before it is sent
to the model.

Example:
    >>> tutor = TutorClient(LLMClient())
    >>> reply = await tutor.respond(
    ...     [{"role": "user", "content": "How do I solve x^2 + 5x + 6 = 0?"}],
    ...     subject="Math",
    ... )
    >>> reply.concepts_discussed
    ['Quadratic', 'Equation']
"""

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from edconnect.core.config.settings import get_settings
from edconnect.core.llm import LLMClient, LLMError
from edconnect.domains.tutoring.concepts import extract_concepts
from edconnect.domains.tutoring.prompts import TutorPrompts, get_tutor_prompts
from edconnect.domains.tutoring.redaction import StudentContext, redact_pii

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I apologize, but I'm having trouble formulating a response. "
    "Please try rephrasing your question."
)
DEFAULT_PERFORMANCE_SCORE = 75
TRANSCRIPT_MESSAGE_CHARS = 200

_JSON_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


class TutorError(Exception):
    """Raised when the tutor cannot produce a reply."""

    pass


@dataclass
class TutorReply:
    """Assistant reply and the concepts it touches."""

    message: str
    concepts_discussed: list[str] = field(default_factory=list)


@dataclass
class SessionSummary:
    """Assessment of a finished tutoring session."""

    summary: str
    performance_score: int
    improvement_areas: list[str] = field(default_factory=list)
    strength_areas: list[str] = field(default_factory=list)
    concepts_covered: list[str] = field(default_factory=list)

    @classmethod
    def fallback(cls) -> "SessionSummary":
        return cls(summary="Session completed", performance_score=DEFAULT_PERFORMANCE_SCORE)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _clamp_score(value: Any) -> int:
    try:
        score = int(round(float(value))) if value else DEFAULT_PERFORMANCE_SCORE
    except (TypeError, ValueError, OverflowError):
        score = DEFAULT_PERFORMANCE_SCORE
    return max(1, min(100, score))


def parse_summary(content: str) -> SessionSummary:
    """Parse the model's JSON assessment.

    Raises:
        ValueError: If the content is not a JSON object.
    """
    text = content.strip()
    fenced = _JSON_FENCE.search(text)
    if fenced:
        text = fenced.group(1)

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Session summary is not a JSON object")

    return SessionSummary(
        summary=str(data.get("summary") or "Session completed"),
        performance_score=_clamp_score(data.get("performanceScore")),
        improvement_areas=_string_list(data.get("improvementAreas")),
        strength_areas=_string_list(data.get("strengthAreas")),
        concepts_covered=_string_list(data.get("conceptsCovered")),
    )


class TutorClient:
    """Socratic tutor built on an LLM client.

    Attributes:
        _llm: LLM client used for completions.
        _prompts: Tutor prompt texts.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        prompts: TutorPrompts | None = None,
        max_tokens: int | None = None,
        summary_max_tokens: int | None = None,
    ) -> None:
        llm_settings = get_settings().llm
        self._llm = llm_client
        self._prompts = prompts or get_tutor_prompts()
        self._max_tokens = max_tokens or llm_settings.tutor_max_tokens
        self._summary_max_tokens = summary_max_tokens or llm_settings.summary_max_tokens

    def _prepare(
        self,
        messages: Sequence[dict[str, str]],
        context: StudentContext | None,
    ) -> list[dict[str, str]]:
        prepared = []
        for message in messages:
            role = message.get("role")
            if role == "system":
                continue
            content = message.get("content", "")
            if role == "user":
                content = redact_pii(content, context)
            prepared.append({"role": role, "content": content})
        return prepared

    async def respond(
        self,
        messages: Sequence[dict[str, str]],
        subject: str | None = None,
        topic: str | None = None,
        context: StudentContext | None = None,
    ) -> TutorReply:
        """Reply to the latest student message.

        Args:
            messages: Full conversation as ``{"role", "content"}`` dicts.
            subject: Session subject selecting the system prompt.
            topic: Optional topic appended to the system prompt.
            context: Student identifiers to redact.

        Raises:
            TutorError: If the LLM call fails.
        """
        system_prompt = self._prompts.system_prompt(subject)
        if topic:
            system_prompt += f"\n\nCurrent Topic: {topic}"

        chat = [{"role": "system", "content": system_prompt}]
        chat.extend(self._prepare(messages, context))

        try:
            response = await self._llm.complete_with_messages(
                chat,
                max_tokens=self._max_tokens,
            )
        except LLMError as e:
            logger.error("Tutor response failed: %s", e)
            raise TutorError("Failed to get tutor response. Please try again.") from e

        content = response.content.strip() or FALLBACK_REPLY
        return TutorReply(message=content, concepts_discussed=extract_concepts(content, subject))

    async def summarize(
        self,
        messages: Sequence[dict[str, str]],
        subject: str | None = None,
        topic: str | None = None,
        context: StudentContext | None = None,
    ) -> SessionSummary:
        """Assess a session transcript.

        Never raises; failures yield the fallback summary.
        """
        transcript = "\n".join(
            f"{i}. {m['role']}: {m['content'][:TRANSCRIPT_MESSAGE_CHARS]}..."
            for i, m in enumerate(self._prepare(messages, context), start=1)
        )
        header = "Based on this tutoring session, provide a detailed analysis in JSON format:"
        if subject:
            header += f"\nSubject: {subject}"
        if topic:
            header += f"\nTopic: {topic}"
        prompt = (
            f"{header}\n\nSession Messages:\n{transcript}\n\n{self._prompts.summary_instructions}"
        )

        try:
            response = await self._llm.complete_with_messages(
                [
                    {"role": "system", "content": self._prompts.summary_system},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self._summary_max_tokens,
            )
            return parse_summary(response.content)
        except (LLMError, ValueError) as e:
            logger.warning("Session summary failed, using fallback: %s", e)
            return SessionSummary.fallback()
