# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Organization service for districts, schools and departments.

This module provides the OrganizationService that handles:
- District, school and department listing within the viewer's scope
- Creation with unique code checks
- Admin regions (districts grouped with their schools)

Example:
    >>> service = OrganizationService(db_session)
    >>> schools = await service.list_schools(scope, district_id=1)
    >>> regions = await service.admin_regions(scope)
"""

import logging
from typing import NamedTuple

from sqlalchemy import or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from edconnect.domains.access import AccessScope
from edconnect.infrastructure.database.models import Department, District, School
from edconnect.models.organization import DepartmentCreate, DistrictCreate, SchoolCreate

logger = logging.getLogger(__name__)


class OrganizationServiceError(Exception):
    """Base exception for organization service errors."""

    pass


class DistrictNotFoundError(OrganizationServiceError):
    """Raised when a district is not found."""

    pass


class SchoolNotFoundError(OrganizationServiceError):
    """Raised when a school is not found."""

    pass


class DepartmentNotFoundError(OrganizationServiceError):
    """Raised when a department is not found."""

    pass


class CodeExistsError(OrganizationServiceError):
    """Raised when creating a district or school with an existing code."""

    pass


class OrganizationAccessError(OrganizationServiceError):
    """Raised when the record lies outside the viewer's scope."""

    pass


class AdminRegionRows(NamedTuple):
    """A district (None for schools without one) and its accessible schools."""

    district: District | None
    schools: list[School]


class OrganizationService:
    """Service for the district / school / department hierarchy.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    # =========================================================================
    # Districts
    # =========================================================================

    async def _district_condition(self, scope: AccessScope):
        if scope.is_super_admin:
            return true()
        clauses = [
            District.id.in_(
                select(School.district_id).where(await scope.school_condition())
            )
        ]
        if scope.principal.district_id is not None:
            clauses.append(District.id == scope.principal.district_id)
        return or_(*clauses)

    async def list_districts(self, scope: AccessScope) -> list[District]:
        """Districts the viewer's schools belong to (all for super admins)."""
        result = await self._db.execute(
            select(District).where(await self._district_condition(scope)).order_by(District.id)
        )
        return list(result.scalars().all())

    async def get_district(self, district_id: int, scope: AccessScope) -> District:
        """Get a district by id.

        Raises:
            DistrictNotFoundError: If the district does not exist.
            OrganizationAccessError: If it is outside the viewer's scope.
        """
        district = await self._db.get(District, district_id)
        if district is None:
            raise DistrictNotFoundError(f"District {district_id} not found")

        result = await self._db.execute(
            select(District.id).where(
                District.id == district_id, await self._district_condition(scope)
            )
        )
        if result.scalar_one_or_none() is None:
            raise OrganizationAccessError("Access denied to this district")
        return district

    async def create_district(self, data: DistrictCreate) -> District:
        """Create a district.

        Raises:
            CodeExistsError: If the district code is taken.
        """
        existing = await self._db.execute(select(District.id).where(District.code == data.code))
        if existing.scalar_one_or_none() is not None:
            raise CodeExistsError(f"District with code '{data.code}' already exists")

        district = District(**data.model_dump())
        self._db.add(district)
        await self._db.commit()
        await self._db.refresh(district)

        logger.info("District created: %s (code=%s)", district.id, district.code)
        return district

    # =========================================================================
    # Schools
    # =========================================================================

    async def list_schools(
        self,
        scope: AccessScope,
        district_id: int | None = None,
    ) -> list[School]:
        """List accessible schools, optionally within one district."""
        stmt = select(School).where(await scope.school_condition())
        if district_id is not None:
            stmt = stmt.where(School.district_id == district_id)

        result = await self._db.execute(stmt.order_by(School.id))
        return list(result.scalars().all())

    async def get_school(self, school_id: int, scope: AccessScope) -> School:
        """Get a school by id.

        Raises:
            SchoolNotFoundError: If the school does not exist.
            OrganizationAccessError: If it is outside the viewer's scope.
        """
        school = await self._db.get(School, school_id)
        if school is None:
            raise SchoolNotFoundError(f"School {school_id} not found")
        if not await scope.can_access_school(school_id):
            raise OrganizationAccessError("Access denied to this school")
        return school

    async def create_school(self, data: SchoolCreate) -> School:
        """Create a school.

        Raises:
            CodeExistsError: If the school code is taken.
            DistrictNotFoundError: If the given district does not exist.
        """
        existing = await self._db.execute(select(School.id).where(School.code == data.code))
        if existing.scalar_one_or_none() is not None:
            raise CodeExistsError(f"School with code '{data.code}' already exists")

        if data.district_id is not None and await self._db.get(District, data.district_id) is None:
            raise DistrictNotFoundError(f"District {data.district_id} not found")

        school = School(**data.model_dump())
        self._db.add(school)
        await self._db.commit()
        await self._db.refresh(school)

        logger.info("School created: %s (code=%s)", school.id, school.code)
        return school

    # =========================================================================
    # Departments
    # =========================================================================

    async def list_departments(
        self,
        scope: AccessScope,
        school_id: int | None = None,
    ) -> list[Department]:
        """List accessible departments, optionally within one school."""
        stmt = select(Department).where(await scope.department_condition())
        if school_id is not None:
            stmt = stmt.where(Department.school_id == school_id)

        result = await self._db.execute(stmt.order_by(Department.id))
        return list(result.scalars().all())

    async def get_department(self, department_id: int, scope: AccessScope) -> Department:
        """Get a department by id.

        Raises:
            DepartmentNotFoundError: If the department does not exist.
            OrganizationAccessError: If it is outside the viewer's scope.
        """
        department = await self._db.get(Department, department_id)
        if department is None:
            raise DepartmentNotFoundError(f"Department {department_id} not found")
        if not await scope.can_access_department(department_id):
            raise OrganizationAccessError("Access denied to this department")
        return department

    async def create_department(self, data: DepartmentCreate, scope: AccessScope) -> Department:
        """Create a department in an accessible school.

        Raises:
            SchoolNotFoundError: If the school does not exist.
            OrganizationAccessError: If the school is outside the viewer's scope.
        """
        await self.get_school(data.school_id, scope)

        department = Department(**data.model_dump())
        self._db.add(department)
        await self._db.commit()
        await self._db.refresh(department)

        logger.info("Department created: %s (school=%s)", department.id, department.school_id)
        return department

    # =========================================================================
    # Admin regions
    # =========================================================================

    async def admin_regions(self, scope: AccessScope) -> list[AdminRegionRows]:
        """Group the viewer's accessible schools under their districts.

        Schools without a district are collected in a trailing region whose
        district is None.
        """
        schools = await scope.schools()
        district_ids = {s.district_id for s in schools if s.district_id is not None}

        districts: dict[int, District] = {}
        if district_ids:
            result = await self._db.execute(
                select(District).where(District.id.in_(district_ids)).order_by(District.id)
            )
            districts = {d.id: d for d in result.scalars().all()}

        regions = [
            AdminRegionRows(
                district=district,
                schools=[s for s in schools if s.district_id == district_id],
            )
            for district_id, district in districts.items()
        ]

        orphans = [s for s in schools if s.district_id is None]
        if orphans:
            regions.append(AdminRegionRows(district=None, schools=orphans))

        return regions
