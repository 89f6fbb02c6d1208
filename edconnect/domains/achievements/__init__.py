# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Achievement domain package."""

from edconnect.domains.achievements.service import (
    AchievementAccessError,
    AchievementNotFoundError,
    AchievementService,
    AchievementServiceError,
    AchievementUserNotFoundError,
)

__all__ = [
    "AchievementService",
    "AchievementServiceError",
    "AchievementNotFoundError",
    "AchievementUserNotFoundError",
    "AchievementAccessError",
]
