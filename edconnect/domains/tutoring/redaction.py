# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student PII redaction applied before any text reaches the LLM.

Known identifiers of the student (name, email, student number, school)
are replaced first, then generic patterns: phone numbers, emails, street
addresses, SSNs, dates of birth, ZIP codes and well-known NYC school names.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentContext:
    """Identifiers of the student whose messages are redacted."""

    full_name: str | None = None
    email: str | None = None
    student_id: str | None = None
    school_name: str | None = None


_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"), "[PHONE_REDACTED]"),
    (re.compile(r"\(\d{3}\)\s*\d{3}[-.]?\d{4}\b"), "[PHONE_REDACTED]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL_REDACTED]"),
    (
        re.compile(
            r"\b\d+\s+[A-Za-z0-9\s,]+(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd"
            r"|Lane|Ln|Drive|Dr|Court|Ct|Circle|Cir)\b",
            re.IGNORECASE,
        ),
        "[ADDRESS_REDACTED]",
    ),
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "[SSN_REDACTED]"),
    (re.compile(r"\b\d{9}\b"), "[SSN_REDACTED]"),
    (
        re.compile(r"\b(0?[1-9]|1[0-2])[/-](0?[1-9]|[12]\d|3[01])[/-](\d{2}|\d{4})\b"),
        "[DOB_REDACTED]",
    ),
    (re.compile(r"\b\d{5}(?:-\d{4})?\b"), "[ZIP_REDACTED]"),
)

NYC_SCHOOLS = (
    "Stuyvesant",
    "Bronx Science",
    "Brooklyn Tech",
    "Townsend Harris",
    "Staten Island Tech",
    "HSMSE",
    "Bard",
    "LaGuardia",
)


def _replace_word(text: str, word: str, replacement: str) -> str:
    pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
    return pattern.sub(replacement, text)


def redact_pii(message: str, context: StudentContext | None = None) -> str:
    """Replace student identifiers and common PII patterns with placeholders.

    Args:
        message: Text written by the student.
        context: Known identifiers of the student.

    Returns:
        The redacted text.
    """
    redacted = message

    if context is not None:
        if context.full_name:
            for part in context.full_name.split(" "):
                if len(part) > 1:
                    redacted = _replace_word(redacted, part, "[STUDENT_NAME]")
        if context.email:
            username = context.email.split("@")[0]
            redacted = _replace_word(redacted, context.email, "[STUDENT_EMAIL]")
            if username:
                redacted = _replace_word(redacted, username, "[STUDENT_ID]")
        if context.student_id:
            redacted = _replace_word(redacted, context.student_id, "[STUDENT_ID]")
        if context.school_name:
            redacted = _replace_word(redacted, context.school_name, "[SCHOOL_NAME]")

    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)

    for school in NYC_SCHOOLS:
        redacted = _replace_word(redacted, school, "[SCHOOL_NAME]")

    if redacted != message:
        logger.info("PII redaction applied to student message")

    return redacted
