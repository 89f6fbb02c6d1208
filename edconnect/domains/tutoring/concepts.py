# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Keyword based concept extraction from tutor replies."""

import re

MAX_CONCEPTS = 10

MATH_KEYWORDS = (
    "algebra", "equation", "quadratic", "polynomial", "geometry", "theorem", "proof",
    "function", "derivative", "integral", "matrix", "vector", "probability", "statistics",
)
SCIENCE_KEYWORDS = (
    "physics", "chemistry", "biology", "atom", "molecule", "cell", "energy", "force",
    "momentum", "reaction", "evolution", "photosynthesis", "newton", "law", "theory",
)
ENGLISH_KEYWORDS = (
    "metaphor", "simile", "theme", "symbolism", "character", "plot", "narrative", "essay",
    "analysis", "rhetoric", "syntax", "diction", "tone", "irony",
)
HISTORY_KEYWORDS = (
    "revolution", "empire", "democracy", "constitution", "reform", "renaissance",
    "enlightenment", "industrial", "colonization", "treaty", "amendment",
)

# Subject name fragments mapped to keyword sets; first match wins.
_SUBJECT_KEYWORDS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("math",), MATH_KEYWORDS),
    (("science", "physics", "chemistry", "biology"), SCIENCE_KEYWORDS),
    (("english", "literature"), ENGLISH_KEYWORDS),
    (("history", "social"), HISTORY_KEYWORDS),
)

_ALL_KEYWORDS = MATH_KEYWORDS + SCIENCE_KEYWORDS + ENGLISH_KEYWORDS + HISTORY_KEYWORDS


def _keywords_for(subject: str | None) -> tuple[str, ...]:
    if subject:
        subject_lower = subject.lower()
        for fragments, keywords in _SUBJECT_KEYWORDS:
            if any(fragment in subject_lower for fragment in fragments):
                return keywords
    return _ALL_KEYWORDS


def extract_concepts(content: str, subject: str | None = None) -> list[str]:
    """Concepts mentioned in a reply, capitalized, in order of first mention.

    Args:
        content: Tutor reply text.
        subject: Session subject selecting the keyword set; all sets are
            used when it matches none.

    Returns:
        Up to ten distinct concepts.
    """
    pattern = re.compile(
        r"\b(?:" + "|".join(_keywords_for(subject)) + r")\b",
        re.IGNORECASE,
    )

    concepts: list[str] = []
    for match in pattern.findall(content):
        concept = match[:1].upper() + match[1:].lower()
        if concept not in concepts:
            concepts.append(concept)

    return concepts[:MAX_CONCEPTS]
