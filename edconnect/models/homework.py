# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Homework schemas."""

from datetime import datetime

from pydantic import Field

from edconnect.models.common import CamelModel, HomeworkPriority, ORMModel


class HomeworkCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    subject: str | None = None
    due_date: datetime
    priority: HomeworkPriority = HomeworkPriority.MEDIUM
    notes: str | None = None
    attachment_url: str | None = Field(default=None, max_length=500)
    attachment_name: str | None = Field(default=None, max_length=200)


class HomeworkUpdate(CamelModel):
    """Partial update; only fields present in the request body are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    subject: str | None = None
    due_date: datetime | None = None
    priority: HomeworkPriority | None = None
    completed: bool | None = None
    completed_at: datetime | None = None
    notes: str | None = None
    attachment_url: str | None = Field(default=None, max_length=500)
    attachment_name: str | None = Field(default=None, max_length=200)


class HomeworkResponse(ORMModel):
    id: int
    student_id: int
    title: str
    description: str | None = None
    subject: str | None = None
    due_date: datetime
    completed: bool
    completed_at: datetime | None = None
    priority: HomeworkPriority
    created_at: datetime
    notes: str | None = None
    attachment_url: str | None = None
    attachment_name: str | None = None


class HomeworkBuckets(CamelModel):
    overdue: list[HomeworkResponse] = Field(default_factory=list)
    upcoming: list[HomeworkResponse] = Field(default_factory=list)
    completed: list[HomeworkResponse] = Field(default_factory=list)
