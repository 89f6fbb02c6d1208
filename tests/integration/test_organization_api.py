# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for district, school, department and region endpoints."""

from fastapi.testclient import TestClient


def _school_id(client: TestClient, headers: dict[str, str]) -> int:
    return client.get("/api/v1/schools", headers=headers).json()[0]["id"]


class TestDistricts:
    def test_requires_auth(self, client: TestClient) -> None:
        assert client.get("/api/v1/districts").status_code == 401

    def test_list(self, client: TestClient, teacher_headers) -> None:
        response = client.get("/api/v1/districts", headers=teacher_headers)

        assert response.status_code == 200
        assert [d["code"] for d in response.json()] == ["NYC-DOE"]

    def test_super_admin_creates_district(self, client: TestClient, admin_headers) -> None:
        response = client.post(
            "/api/v1/districts",
            headers=admin_headers,
            json={"name": "Boston Public Schools", "code": "BPS", "zipCode": "02108"},
        )

        assert response.status_code == 201
        assert response.json()["zipCode"] == "02108"

    def test_duplicate_code(self, client: TestClient, admin_headers) -> None:
        response = client.post(
            "/api/v1/districts",
            headers=admin_headers,
            json={"name": "Copy", "code": "NYC-DOE"},
        )

        assert response.status_code == 409

    def test_educator_cannot_create(self, client: TestClient, teacher_headers) -> None:
        response = client.post(
            "/api/v1/districts",
            headers=teacher_headers,
            json={"name": "Boston Public Schools", "code": "BPS"},
        )

        assert response.status_code == 403

    def test_missing_district(self, client: TestClient, admin_headers) -> None:
        assert client.get("/api/v1/districts/999", headers=admin_headers).status_code == 404


class TestSchools:
    def test_create_and_filter(self, client: TestClient, admin_headers) -> None:
        district = client.post(
            "/api/v1/districts",
            headers=admin_headers,
            json={"name": "Boston Public Schools", "code": "BPS"},
        ).json()

        created = client.post(
            "/api/v1/schools",
            headers=admin_headers,
            json={"name": "Boston Latin", "code": "BLS-001", "districtId": district["id"]},
        )
        assert created.status_code == 201

        response = client.get(
            "/api/v1/schools",
            headers=admin_headers,
            params={"district_id": district["id"]},
        )
        assert [s["code"] for s in response.json()] == ["BLS-001"]

    def test_unknown_district(self, client: TestClient, admin_headers) -> None:
        response = client.post(
            "/api/v1/schools",
            headers=admin_headers,
            json={"name": "Nowhere High", "code": "NWH", "districtId": 999},
        )

        assert response.status_code == 404

    def test_student_cannot_create(self, client: TestClient, student_headers) -> None:
        response = client.post(
            "/api/v1/schools",
            headers=student_headers,
            json={"name": "Nowhere High", "code": "NWH"},
        )

        assert response.status_code == 403

    def test_get_school(self, client: TestClient, student_headers) -> None:
        school_id = _school_id(client, student_headers)

        response = client.get(f"/api/v1/schools/{school_id}", headers=student_headers)

        assert response.status_code == 200
        assert response.json()["code"] == "ECHS-001"


class TestDepartments:
    def test_list_for_school(self, client: TestClient, teacher_headers) -> None:
        school_id = _school_id(client, teacher_headers)

        response = client.get(
            "/api/v1/departments",
            headers=teacher_headers,
            params={"school_id": school_id},
        )

        assert [d["name"] for d in response.json()] == ["Mathematics"]

    def test_admin_creates_department(self, client: TestClient, admin_headers) -> None:
        school_id = _school_id(client, admin_headers)

        response = client.post(
            "/api/v1/departments",
            headers=admin_headers,
            json={"name": "Science", "schoolId": school_id},
        )

        assert response.status_code == 201
        assert response.json()["schoolId"] == school_id

    def test_unknown_school(self, client: TestClient, admin_headers) -> None:
        response = client.post(
            "/api/v1/departments",
            headers=admin_headers,
            json={"name": "Science", "schoolId": 999},
        )

        assert response.status_code == 404


class TestAdminRegions:
    def test_regions_group_schools(self, client: TestClient, admin_headers) -> None:
        response = client.get("/api/v1/admin-regions", headers=admin_headers)

        assert response.status_code == 200
        regions = response.json()
        assert regions[0]["district"]["code"] == "NYC-DOE"
        assert [s["code"] for s in regions[0]["schools"]] == ["ECHS-001"]

    def test_admin_only(self, client: TestClient, teacher_headers) -> None:
        assert client.get("/api/v1/admin-regions", headers=teacher_headers).status_code == 403
