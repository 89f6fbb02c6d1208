# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Homework service."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.homework import (
    HomeworkNotFoundError,
    HomeworkService,
    HomeworkValidationError,
    bucketize,
)
from edconnect.models.homework import HomeworkCreate, HomeworkUpdate
from edconnect.utils.datetime import ensure_utc, utc_now

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def homework_service(db_session: AsyncSession) -> HomeworkService:
    return HomeworkService(db_session)


class TestBucketize:
    """Tests for overdue / upcoming / completed grouping."""

    def test_groups_by_state_and_due_date(self) -> None:
        items = [
            SimpleNamespace(id=1, completed=False, due_date=NOW - timedelta(days=1)),
            SimpleNamespace(id=2, completed=True, due_date=NOW - timedelta(days=3)),
            SimpleNamespace(id=3, completed=False, due_date=NOW + timedelta(hours=1)),
            SimpleNamespace(id=4, completed=False, due_date=(NOW - timedelta(hours=2)).replace(tzinfo=None)),
        ]

        buckets = bucketize(items, NOW)

        assert [i.id for i in buckets.overdue] == [1, 4]
        assert [i.id for i in buckets.upcoming] == [3]
        assert [i.id for i in buckets.completed] == [2]

    def test_empty(self) -> None:
        buckets = bucketize([], NOW)

        assert buckets.overdue == buckets.upcoming == buckets.completed == []


class TestHomeworkService:
    """Tests for homework CRUD."""

    @pytest.mark.asyncio
    async def test_create_and_list_sorted_by_due_date(
        self, homework_service, demo
    ) -> None:
        user_id = demo["accounts"].student.id
        later = await homework_service.create(
            user_id, HomeworkCreate(title="Essay", dueDate=NOW + timedelta(days=5))
        )
        sooner = await homework_service.create(
            user_id,
            HomeworkCreate(title="Worksheet", dueDate=NOW + timedelta(days=1), priority="high"),
        )

        items = await homework_service.list_for_student(user_id)

        assert [i.id for i in items] == [sooner.id, later.id]
        assert sooner.priority == "high"
        assert later.priority == "medium"
        assert later.completed is False

    @pytest.mark.asyncio
    async def test_completing_stamps_completed_at(self, homework_service, demo) -> None:
        user_id = demo["accounts"].student.id
        item = await homework_service.create(user_id, HomeworkCreate(title="Lab", dueDate=NOW))
        before = utc_now()

        done = await homework_service.update(item.id, user_id, HomeworkUpdate(completed=True))

        assert done.completed is True
        assert ensure_utc(done.completed_at) >= before - timedelta(seconds=1)

        reopened = await homework_service.update(item.id, user_id, HomeworkUpdate(completed=False))

        assert reopened.completed is False
        assert reopened.completed_at is None

    @pytest.mark.asyncio
    async def test_completion_keeps_given_timestamp(self, homework_service, demo) -> None:
        user_id = demo["accounts"].student.id
        item = await homework_service.create(user_id, HomeworkCreate(title="Lab", dueDate=NOW))

        done = await homework_service.update(
            item.id, user_id, HomeworkUpdate(completed=True, completedAt=NOW)
        )

        assert ensure_utc(done.completed_at) == NOW

    @pytest.mark.asyncio
    async def test_clearing_due_date_rejected(self, homework_service, demo) -> None:
        user_id = demo["accounts"].student.id
        item = await homework_service.create(user_id, HomeworkCreate(title="Lab", dueDate=NOW))

        with pytest.raises(HomeworkValidationError):
            await homework_service.update(item.id, user_id, HomeworkUpdate(dueDate=None))

    @pytest.mark.asyncio
    async def test_other_users_items_are_missing(self, homework_service, demo) -> None:
        owner = demo["accounts"].student.id
        intruder = demo["accounts"].teacher.id
        item = await homework_service.create(owner, HomeworkCreate(title="Lab", dueDate=NOW))

        with pytest.raises(HomeworkNotFoundError):
            await homework_service.update(item.id, intruder, HomeworkUpdate(title="Mine now"))

        with pytest.raises(HomeworkNotFoundError):
            await homework_service.delete(item.id, intruder)

    @pytest.mark.asyncio
    async def test_delete(self, homework_service, demo) -> None:
        user_id = demo["accounts"].student.id
        item = await homework_service.create(user_id, HomeworkCreate(title="Lab", dueDate=NOW))

        await homework_service.delete(item.id, user_id)

        assert await homework_service.list_for_student(user_id) == []
        with pytest.raises(HomeworkNotFoundError):
            await homework_service.get(item.id, user_id)
