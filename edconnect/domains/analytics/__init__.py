# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics domain: performance reports and dashboards."""

from edconnect.domains.analytics.service import AnalyticsService

__all__ = ["AnalyticsService"]
