# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics and dashboard schemas."""

from typing import Literal

from pydantic import Field

from edconnect.models.common import CamelModel, UserRole


class Insight(CamelModel):
    type: Literal["success", "improvement", "warning"]
    title: str
    description: str


class SubjectMetric(CamelModel):
    subject: str
    percentage: int


class PerformanceReport(CamelModel):
    metrics: list[SubjectMetric] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)


class EducatorMetric(CamelModel):
    educator_id: int
    name: str
    evaluation_score: int
    student_outcomes: int
    class_engagement: int


class EducatorPerformanceReport(CamelModel):
    metrics: list[EducatorMetric] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)


class DashboardWidget(CamelModel):
    key: str
    title: str
    value: int | float


class Dashboard(CamelModel):
    role: UserRole
    widgets: list[DashboardWidget] = Field(default_factory=list)
