"""EdConnect Backend.

Role-based education management service: districts, schools, classes,
grades, attendance, homework tracking and an AI tutor for students.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
