# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for EdConnect.

Each domain module owns the business rules for one area and exposes a
service class plus its exception hierarchy; the API layer maps those
exceptions to HTTP responses.

Domains:
    access: Role-based visibility of schools, classes, people and records.
    auth: Accounts, passwords and JWT tokens.
    organization: Districts, schools and departments.
    people: User, student and educator profiles.
    classes: Classes and enrollments.
    records: Grades, attendance and achievements.
    homework: Student homework tracking.
    tutoring: AI tutor sessions, PII redaction and progress insights.
    analytics: Performance analytics and role-conditional dashboard widgets.
"""
