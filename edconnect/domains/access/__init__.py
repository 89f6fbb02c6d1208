# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role-based access scope resolution."""

from edconnect.domains.access.scope import AccessScope, Principal

__all__ = [
    "AccessScope",
    "Principal",
]
