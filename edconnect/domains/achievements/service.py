# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Achievement service.

Educators and admins award badges, certificates, milestones and level-ups.
Owners decide whether an achievement is shared, visible or public;
awarding educators keep progress and level up to date.

Example:
    >>> service = AchievementService(db_session)
    >>> achievement = await service.award(data, scope, awarded_by=current_user.id)
    >>> await service.update(achievement.id, AchievementUpdate(is_public=True), scope)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.infrastructure.database.models import Achievement, User
from edconnect.models.records import AchievementCreate, AchievementUpdate

logger = logging.getLogger(__name__)

OWNER_FIELDS = frozenset({"shared", "visible", "is_public"})
AWARDER_FIELDS = frozenset({"progress", "max_progress", "level"})


class AchievementServiceError(Exception):
    """Base exception for achievement service errors."""

    pass


class AchievementNotFoundError(AchievementServiceError):
    """Raised when an achievement is not found."""

    pass


class AchievementUserNotFoundError(AchievementServiceError):
    """Raised when awarding to a user that does not exist."""

    pass


class AchievementAccessError(AchievementServiceError):
    """Raised when the viewer may not award or change the achievement."""

    pass


class AchievementService:
    """Service for user achievements.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_achievements(self, scope: AccessScope) -> list[Achievement]:
        return await scope.achievements()

    async def award(
        self,
        data: AchievementCreate,
        scope: AccessScope,
        awarded_by: int,
    ) -> Achievement:
        """Award an achievement to an accessible user.

        Raises:
            AchievementUserNotFoundError: If the user does not exist.
            AchievementAccessError: If the user is outside the awarder's scope.
        """
        if await self._db.get(User, data.user_id) is None:
            raise AchievementUserNotFoundError(f"User {data.user_id} not found")
        if not await scope.can_access_user(data.user_id):
            raise AchievementAccessError("Access denied to this user")

        achievement = Achievement(
            **data.model_dump(),
            shared=False,
            visible=True,
            created_by_educator=awarded_by,
        )
        self._db.add(achievement)
        await self._db.commit()
        await self._db.refresh(achievement)

        logger.info(
            "Achievement awarded: %s (user=%s, type=%s, by=%s)",
            achievement.id,
            achievement.user_id,
            achievement.type,
            awarded_by,
        )
        return achievement

    async def update(
        self,
        achievement_id: int,
        data: AchievementUpdate,
        scope: AccessScope,
    ) -> Achievement:
        """Apply owner flag changes or awarder progress changes.

        Raises:
            AchievementNotFoundError: If the achievement does not exist or is
                hidden from the viewer.
            AchievementAccessError: If the viewer may not change the given fields.
        """
        achievement = await self._db.get(Achievement, achievement_id)
        if achievement is None:
            raise AchievementNotFoundError(f"Achievement {achievement_id} not found")

        viewer_id = scope.principal.id
        changes = data.model_dump(exclude_unset=True)

        is_owner = achievement.user_id == viewer_id
        is_awarder = (
            (scope.is_educator or scope.is_admin)
            and achievement.created_by_educator == viewer_id
        )

        if not (is_owner or is_awarder or scope.is_super_admin):
            if not await scope.can_access_achievement(achievement_id):
                raise AchievementNotFoundError(f"Achievement {achievement_id} not found")
            raise AchievementAccessError(
                "Only the owner or the awarding educator can change this achievement"
            )
        if OWNER_FIELDS & changes.keys() and not is_owner:
            raise AchievementAccessError("Only the owner can change sharing settings")
        if AWARDER_FIELDS & changes.keys() and not (is_awarder or scope.is_super_admin):
            raise AchievementAccessError("Only the awarding educator can update progress")

        for field, value in changes.items():
            if value is not None:
                setattr(achievement, field, value)

        await self._db.commit()
        await self._db.refresh(achievement)

        logger.info("Achievement %s updated (fields=%s)", achievement.id, sorted(changes))
        return achievement
