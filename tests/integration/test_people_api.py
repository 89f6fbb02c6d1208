# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for user, student and educator endpoints."""

from fastapi.testclient import TestClient


def _new_user(**overrides) -> dict:
    payload = {
        "username": "principal",
        "password": "Principal2025!",
        "firstName": "Pat",
        "lastName": "Rivera",
        "email": "pat.rivera@edconnect.edu",
        "role": "admin",
    }
    payload.update(overrides)
    return payload


class TestUsers:
    def test_super_admin_creates_school_admin(
        self, client: TestClient, admin_headers, login_as
    ) -> None:
        school_id = client.get("/api/v1/schools", headers=admin_headers).json()[0]["id"]

        response = client.post(
            "/api/v1/users",
            headers=admin_headers,
            json=_new_user(adminLevel="school", schoolId=school_id),
        )
        assert response.status_code == 201
        assert response.json()["adminLevel"] == "school"

        headers = login_as("principal", "Principal2025!")
        students = client.get("/api/v1/students", headers=headers).json()
        assert [s["firstName"] for s in students] == ["Alex"]

    def test_admin_level_needs_admin_role(self, client: TestClient, admin_headers) -> None:
        response = client.post(
            "/api/v1/users",
            headers=admin_headers,
            json=_new_user(role="student", adminLevel="school"),
        )

        assert response.status_code == 400

    def test_duplicate_username(self, client: TestClient, admin_headers) -> None:
        response = client.post(
            "/api/v1/users",
            headers=admin_headers,
            json=_new_user(username="teacher", role="educator"),
        )

        assert response.status_code == 409

    def test_educator_cannot_create_users(self, client: TestClient, teacher_headers) -> None:
        response = client.post(
            "/api/v1/users",
            headers=teacher_headers,
            json=_new_user(role="student"),
        )

        assert response.status_code == 403

    def test_student_cannot_list_users(self, client: TestClient, student_headers) -> None:
        assert client.get("/api/v1/users", headers=student_headers).status_code == 403

    def test_super_admin_lists_everyone(self, client: TestClient, admin_headers) -> None:
        users = client.get("/api/v1/users", headers=admin_headers).json()

        assert {u["username"] for u in users} == {"admin", "teacher", "student"}
        assert all("passwordHash" not in u for u in users)


class TestStudents:
    def test_student_sees_only_self(self, client: TestClient, student_headers) -> None:
        students = client.get("/api/v1/students", headers=student_headers).json()

        assert len(students) == 1
        assert students[0]["grade"] == "10th"
        assert students[0]["lastName"] == "Chen"

    def test_teacher_sees_enrolled_student(self, client: TestClient, teacher_headers) -> None:
        students = client.get("/api/v1/students", headers=teacher_headers).json()

        assert [s["email"] for s in students] == ["alex.chen@edconnect.edu"]

    def test_missing_student(self, client: TestClient, admin_headers) -> None:
        assert client.get("/api/v1/students/999", headers=admin_headers).status_code == 404

    def test_create_profile_for_unknown_user(self, client: TestClient, admin_headers) -> None:
        response = client.post("/api/v1/students", headers=admin_headers, json={"userId": 999})

        assert response.status_code == 404

    def test_create_profile(self, client: TestClient, admin_headers) -> None:
        user = client.post(
            "/api/v1/users",
            headers=admin_headers,
            json=_new_user(username="sam", email="sam@edconnect.edu", role="admin"),
        ).json()

        response = client.post(
            "/api/v1/students",
            headers=admin_headers,
            json={"userId": user["id"], "grade": "11th", "studentNumber": "S-0042"},
        )

        assert response.status_code == 201
        assert response.json()["studentNumber"] == "S-0042"
        assert response.json()["firstName"] == "Pat"


class TestEducators:
    def test_student_sees_own_teacher(self, client: TestClient, student_headers) -> None:
        educators = client.get("/api/v1/educators", headers=student_headers).json()

        assert [e["employeeId"] for e in educators] == ["T12345"]
        assert educators[0]["officeHours"] == "M-F 3:00 PM - 4:00 PM"

    def test_get_educator(self, client: TestClient, teacher_headers) -> None:
        educator_id = client.get("/api/v1/educators", headers=teacher_headers).json()[0]["id"]

        response = client.get(f"/api/v1/educators/{educator_id}", headers=teacher_headers)

        assert response.status_code == 200
        assert response.json()["firstName"] == "John"

    def test_duplicate_employee_id(self, client: TestClient, admin_headers) -> None:
        user = client.post(
            "/api/v1/users",
            headers=admin_headers,
            json=_new_user(username="kim", email="kim@edconnect.edu", role="admin"),
        ).json()

        response = client.post(
            "/api/v1/educators",
            headers=admin_headers,
            json={"userId": user["id"], "employeeId": "T12345"},
        )

        assert response.status_code == 409
