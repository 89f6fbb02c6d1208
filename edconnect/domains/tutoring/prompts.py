# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tutor system prompts loaded from ``config/tutor/*.yaml``.

Each YAML file holds one prompt under the ``prompt`` key; the session
summary file holds a ``system`` prompt and the JSON ``instructions``.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from edconnect.core.config.yaml_loader import (
    YAMLLoadError,
    get_config_directory,
    load_yaml_directory,
)
from edconnect.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_PROMPTS = ("socratic", "build_with_claude", "music", "clock_building", "session_summary")


@dataclass(frozen=True)
class TutorPrompts:
    """The tutor's prompt texts.

    Attributes:
        socratic: Base Socratic tutor prompt used for every session.
        build_with_claude: Elective prompt for app building with AI.
        music: Elective prompt for music.
        clock_building: Elective prompt for clock building.
        summary_system: System prompt for session assessment.
        summary_instructions: JSON format instructions for session assessment.
    """

    socratic: str
    build_with_claude: str
    music: str
    clock_building: str
    summary_system: str
    summary_instructions: str

    def system_prompt(self, subject: str | None = None) -> str:
        """Pick the system prompt for a subject.

        Electives append their own prompt to the Socratic base; any other
        subject is appended as the current focus.
        """
        if not subject:
            return self.socratic

        subject_lower = subject.lower()
        if "build" in subject_lower and "claude" in subject_lower:
            return f"{self.socratic}\n\n{self.build_with_claude}"
        if "music" in subject_lower:
            return f"{self.socratic}\n\n{self.music}"
        if "clock" in subject_lower:
            return f"{self.socratic}\n\n{self.clock_building}"

        return f"{self.socratic}\n\nCurrent Subject Focus: {subject}"


def load_tutor_prompts(directory: Path | None = None) -> TutorPrompts:
    """Load the tutor prompts from a directory of YAML files.

    Args:
        directory: Prompt directory, ``config/tutor`` when omitted.

    Raises:
        YAMLLoadError: If the directory or a required prompt is missing.
    """
    path = directory or get_config_directory() / "tutor"
    files = load_yaml_directory(path)

    missing = [name for name in REQUIRED_PROMPTS if name not in files]
    if missing:
        raise YAMLLoadError(path, f"Missing tutor prompts: {', '.join(missing)}")

    summary = files["session_summary"]
    prompts = TutorPrompts(
        socratic=files["socratic"].get("prompt", "").strip(),
        build_with_claude=files["build_with_claude"].get("prompt", "").strip(),
        music=files["music"].get("prompt", "").strip(),
        clock_building=files["clock_building"].get("prompt", "").strip(),
        summary_system=str(summary.get("system", "")).strip(),
        summary_instructions=str(summary.get("instructions", "")).strip(),
    )

    logger.debug("tutor_prompts_loaded", directory=str(path), count=len(files))
    return prompts


@lru_cache(maxsize=1)
def get_tutor_prompts() -> TutorPrompts:
    """Cached prompts from the default config directory."""
    return load_tutor_prompts()


def get_system_prompt(subject: str | None = None) -> str:
    """System prompt for a subject using the default prompts."""
    return get_tutor_prompts().system_prompt(subject)
