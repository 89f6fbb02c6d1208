# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Homework service for student to-do items.

This module provides the HomeworkService that handles:
- Listing a user's homework by due date
- Create, update and delete of owned items
- Completion stamping
- Grouping into overdue / upcoming / completed buckets

Every operation is keyed on the owning user; items of other users are
reported as missing.

Example:
    >>> service = HomeworkService(db_session)
    >>> item = await service.create(user_id, HomeworkCreate(title="Essay", due_date=due))
    >>> buckets = bucketize(await service.list_for_student(user_id), utc_now())
"""

import logging
from datetime import datetime
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.infrastructure.database.models import Homework
from edconnect.models.homework import HomeworkCreate, HomeworkUpdate
from edconnect.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class HomeworkServiceError(Exception):
    """Base exception for homework service errors."""

    pass


class HomeworkNotFoundError(HomeworkServiceError):
    """Raised when a homework item is missing or owned by someone else."""

    pass


class HomeworkValidationError(HomeworkServiceError):
    """Raised when an update would leave the item invalid."""

    pass


class HomeworkBucketRows(NamedTuple):
    overdue: list[Homework]
    upcoming: list[Homework]
    completed: list[Homework]


def bucketize(items: list[Homework], now: datetime) -> HomeworkBucketRows:
    """Split homework into overdue, upcoming and completed.

    Incomplete items due before ``now`` are overdue, the rest of the
    incomplete items are upcoming. Input order is kept within each bucket.
    """
    now = ensure_utc(now)
    overdue: list[Homework] = []
    upcoming: list[Homework] = []
    completed: list[Homework] = []

    for item in items:
        if item.completed:
            completed.append(item)
        elif ensure_utc(item.due_date) < now:
            overdue.append(item)
        else:
            upcoming.append(item)

    return HomeworkBucketRows(overdue=overdue, upcoming=upcoming, completed=completed)


class HomeworkService:
    """Service for homework items.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_for_student(self, user_id: int) -> list[Homework]:
        """List a user's homework, soonest due first."""
        result = await self._db.execute(
            select(Homework)
            .where(Homework.student_id == user_id)
            .order_by(Homework.due_date.asc(), Homework.id.asc())
        )
        return list(result.scalars().all())

    async def get(self, homework_id: int, user_id: int) -> Homework:
        """Get an owned homework item.

        Raises:
            HomeworkNotFoundError: If the item is missing or not owned by the user.
        """
        homework = await self._db.get(Homework, homework_id)
        if homework is None or homework.student_id != user_id:
            raise HomeworkNotFoundError(f"Homework {homework_id} not found")
        return homework

    async def create(self, user_id: int, data: HomeworkCreate) -> Homework:
        fields = data.model_dump()
        fields["due_date"] = ensure_utc(fields["due_date"])
        homework = Homework(
            student_id=user_id,
            **fields,
            completed=False,
            created_at=utc_now(),
        )
        self._db.add(homework)
        await self._db.commit()
        await self._db.refresh(homework)

        logger.info("Homework created: %s (user=%s, due=%s)", homework.id, user_id, homework.due_date)
        return homework

    async def update(self, homework_id: int, user_id: int, data: HomeworkUpdate) -> Homework:
        """Apply a partial update to an owned item.

        Completing an item stamps ``completed_at`` (now unless the request
        carries a timestamp); reopening it clears the stamp.

        Raises:
            HomeworkNotFoundError: If the item is missing or not owned by the user.
            HomeworkValidationError: If the update clears the title, due date or priority.
        """
        homework = await self.get(homework_id, user_id)
        changes = data.model_dump(exclude_unset=True)

        for required in ("title", "due_date", "priority"):
            if required in changes and changes[required] is None:
                raise HomeworkValidationError(f"{required} cannot be empty")

        completed = changes.pop("completed", None)
        completed_at = ensure_utc(changes.pop("completed_at", None))
        if changes.get("due_date") is not None:
            changes["due_date"] = ensure_utc(changes["due_date"])

        for field, value in changes.items():
            setattr(homework, field, value)

        if completed is True:
            homework.completed = True
            homework.completed_at = completed_at or utc_now()
        elif completed is False:
            homework.completed = False
            homework.completed_at = None
        elif completed_at is not None and homework.completed:
            homework.completed_at = completed_at

        await self._db.commit()
        await self._db.refresh(homework)

        logger.info("Homework updated: %s (fields=%s)", homework.id, sorted(data.model_fields_set))
        return homework

    async def delete(self, homework_id: int, user_id: int) -> None:
        """Delete an owned item.

        Raises:
            HomeworkNotFoundError: If the item is missing or not owned by the user.
        """
        homework = await self.get(homework_id, user_id)
        await self._db.delete(homework)
        await self._db.commit()

        logger.info("Homework deleted: %s (user=%s)", homework_id, user_id)
