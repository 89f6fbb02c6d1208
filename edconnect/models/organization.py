# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""District, school and department schemas."""

from pydantic import Field

from edconnect.models.common import CamelModel, ORMModel


class DistrictCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone_number: str | None = None
    website: str | None = None


class DistrictResponse(ORMModel):
    id: int
    name: str
    code: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone_number: str | None = None
    website: str | None = None


class SchoolCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    district_id: int | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone_number: str | None = None
    grade_range: str | None = None


class SchoolResponse(ORMModel):
    id: int
    name: str
    code: str
    district_id: int | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone_number: str | None = None
    grade_range: str | None = None


class DepartmentCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    school_id: int
    chair_person_id: int | None = None
    description: str | None = None


class DepartmentResponse(ORMModel):
    id: int
    name: str
    school_id: int
    chair_person_id: int | None = None
    description: str | None = None


class AdminRegion(CamelModel):
    """A district with the schools of it the viewer may administer."""

    district: DistrictResponse | None = None
    schools: list[SchoolResponse] = Field(default_factory=list)
