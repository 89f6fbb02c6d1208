# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade, attendance and achievement schemas."""

import datetime as dt

from pydantic import Field, model_validator

from edconnect.models.common import (
    AchievementType,
    AttendanceStatus,
    CamelModel,
    ORMModel,
)


class GradeCreate(CamelModel):
    student_id: int
    class_id: int
    assignment_name: str = Field(min_length=1, max_length=200)
    assignment_type: str | None = None
    score: float = Field(ge=0)
    max_score: float = Field(default=100, gt=0)
    submission_date: dt.datetime | None = None
    comments: str | None = None

    @model_validator(mode="after")
    def score_within_max(self) -> "GradeCreate":
        if self.score > self.max_score:
            raise ValueError("score cannot exceed max_score")
        return self


class GradeResponse(ORMModel):
    id: int
    student_id: int
    class_id: int
    assignment_name: str
    assignment_type: str | None = None
    score: float
    max_score: float
    percentage: float
    submission_date: dt.datetime | None = None
    graded_date: dt.datetime
    comments: str | None = None


class AttendanceCreate(CamelModel):
    student_id: int
    class_id: int
    date: dt.date
    status: AttendanceStatus
    notes: str | None = None


class AttendanceResponse(ORMModel):
    id: int
    student_id: int
    class_id: int
    date: dt.date
    status: AttendanceStatus
    notes: str | None = None
    recorded_by: int | None = None


class AchievementCreate(CamelModel):
    user_id: int
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    type: AchievementType
    subject: str | None = None
    path_node_id: str | None = None
    progress: int | None = Field(default=None, ge=0)
    max_progress: int | None = Field(default=None, ge=1)
    level: int | None = Field(default=None, ge=1)
    icon_type: str | None = None
    is_public: bool = False


class AchievementUpdate(CamelModel):
    """Owners toggle sharing flags; awarding educators update progress."""

    shared: bool | None = None
    visible: bool | None = None
    is_public: bool | None = None
    progress: int | None = Field(default=None, ge=0)
    max_progress: int | None = Field(default=None, ge=1)
    level: int | None = Field(default=None, ge=1)


class AchievementResponse(ORMModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    type: AchievementType
    earned_at: dt.datetime
    subject: str | None = None
    path_node_id: str | None = None
    progress: int | None = None
    max_progress: int | None = None
    level: int | None = None
    icon_type: str | None = None
    shared: bool
    visible: bool
    is_public: bool
    created_by_educator: int | None = None
