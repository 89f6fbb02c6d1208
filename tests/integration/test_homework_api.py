# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for homework endpoints."""

from datetime import timedelta

from fastapi.testclient import TestClient

from edconnect.utils.datetime import utc_now


def _create(client: TestClient, headers, title: str, due_in_days: int) -> dict:
    response = client.post(
        "/api/v1/homework",
        headers=headers,
        json={
            "title": title,
            "subject": "Mathematics",
            "dueDate": (utc_now() + timedelta(days=due_in_days)).isoformat(),
            "priority": "high",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHomework:
    def test_create_and_list_soonest_first(self, client: TestClient, student_headers) -> None:
        _create(client, student_headers, "Essay", 5)
        _create(client, student_headers, "Worksheet", 1)

        response = client.get("/api/v1/homework", headers=student_headers)

        assert response.status_code == 200
        assert [h["title"] for h in response.json()] == ["Worksheet", "Essay"]
        assert response.json()[0]["completed"] is False

    def test_buckets(self, client: TestClient, student_headers) -> None:
        _create(client, student_headers, "Late lab report", -2)
        _create(client, student_headers, "Reading", 3)
        done = _create(client, student_headers, "Flashcards", 1)
        client.patch(
            f"/api/v1/homework/{done['id']}", headers=student_headers, json={"completed": True}
        )

        response = client.get(
            "/api/v1/homework", headers=student_headers, params={"view": "buckets"}
        )

        body = response.json()
        assert [h["title"] for h in body["overdue"]] == ["Late lab report"]
        assert [h["title"] for h in body["upcoming"]] == ["Reading"]
        assert [h["title"] for h in body["completed"]] == ["Flashcards"]

    def test_complete_and_reopen(self, client: TestClient, student_headers) -> None:
        item = _create(client, student_headers, "Worksheet", 1)

        completed = client.patch(
            f"/api/v1/homework/{item['id']}", headers=student_headers, json={"completed": True}
        ).json()
        reopened = client.patch(
            f"/api/v1/homework/{item['id']}", headers=student_headers, json={"completed": False}
        ).json()

        assert completed["completedAt"] is not None
        assert reopened["completed"] is False
        assert reopened["completedAt"] is None

    def test_clearing_title_rejected(self, client: TestClient, student_headers) -> None:
        item = _create(client, student_headers, "Worksheet", 1)

        response = client.patch(
            f"/api/v1/homework/{item['id']}", headers=student_headers, json={"title": None}
        )

        assert response.status_code == 400

    def test_clearing_priority_rejected(self, client: TestClient, student_headers) -> None:
        item = _create(client, student_headers, "Worksheet", 1)

        response = client.patch(
            f"/api/v1/homework/{item['id']}", headers=student_headers, json={"priority": None}
        )
        current = client.get("/api/v1/homework", headers=student_headers).json()

        assert response.status_code == 400
        assert current[0]["priority"] == "high"

    def test_other_users_homework_is_hidden(
        self, client: TestClient, student_headers, teacher_headers
    ) -> None:
        item = _create(client, student_headers, "Worksheet", 1)

        response = client.get(f"/api/v1/homework/{item['id']}", headers=teacher_headers)

        assert response.status_code == 404

    def test_delete(self, client: TestClient, student_headers) -> None:
        item = _create(client, student_headers, "Worksheet", 1)

        response = client.delete(f"/api/v1/homework/{item['id']}", headers=student_headers)

        assert response.status_code == 204
        assert client.get(f"/api/v1/homework/{item['id']}", headers=student_headers).status_code == 404

    def test_invalid_view(self, client: TestClient, student_headers) -> None:
        response = client.get(
            "/api/v1/homework", headers=student_headers, params={"view": "calendar"}
        )

        assert response.status_code == 422
