# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Organization domain package.

This package provides the district / school / department hierarchy:
- Scoped listing and lookup
- Creation with unique codes
- Admin regions for admin filtering
"""

from edconnect.domains.organization.service import (
    AdminRegionRows,
    CodeExistsError,
    DepartmentNotFoundError,
    DistrictNotFoundError,
    OrganizationAccessError,
    OrganizationService,
    OrganizationServiceError,
    SchoolNotFoundError,
)

__all__ = [
    "OrganizationService",
    "OrganizationServiceError",
    "DistrictNotFoundError",
    "SchoolNotFoundError",
    "DepartmentNotFoundError",
    "CodeExistsError",
    "OrganizationAccessError",
    "AdminRegionRows",
]
