"""Integration tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from campus_api.domain.exceptions import DirectoryError, StoreError
from campus_api.infrastructure.models import NotificationModel
from campus_api.infrastructure.repositories import (
    DirectoryRepository,
    NotificationRepository,
)
from campus_api.infrastructure.security import create_access_token

CONTENT = {
    "type": "announcement",
    "title": "Faculty meeting",
    "message": "Thursday at 3pm in the main hall.",
    "payload": {"room": "Main hall"},
}


@pytest.fixture()
def client():
    """Return a test client bound to a clean application instance."""

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _auth(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


def test_requests_without_a_valid_token_are_rejected(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401
    response = client.get("/notifications/", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_department_teachers_flow(client: TestClient, directory) -> None:
    """A HOD notifies the department teachers, who then read their inbox."""

    hod = directory.user("hod", first_name="Grace", last_name="Hopper")
    department = directory.department(department_id=7)
    teachers = [directory.teacher(department) for _ in range(3)]
    for _ in range(10):
        directory.student(department)

    response = client.post(
        "/notifications/send/department-teachers",
        json={**CONTENT, "department_id": 7},
        headers=_auth(hod.id),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["recipient_count"] == 3
    assert len(body["notification_ids"]) == 3

    teacher_headers = _auth(teachers[0].user_id)
    inbox = client.get("/notifications/", headers=teacher_headers).json()
    assert len(inbox) == 1
    (item,) = inbox
    assert item["sender_name"] == "Grace Hopper"
    assert item["payload"] == CONTENT["payload"]
    assert item["read"] is False

    first = client.put(f"/notifications/{item['id']}/read", headers=teacher_headers)
    assert first.status_code == 200
    second = client.put(f"/notifications/{item['id']}/read", headers=teacher_headers)
    assert second.status_code == 404

    inbox = client.get("/notifications/", headers=teacher_headers).json()
    assert inbox[0]["read"] is True


def test_other_users_cannot_mark_a_notification(client: TestClient, directory) -> None:
    sender = directory.user("admin")
    owner = directory.user("student")
    intruder = directory.user("student")

    sent = client.post(
        "/notifications/send/user",
        json={**CONTENT, "user_id": owner.id},
        headers=_auth(sender.id),
    )
    assert sent.status_code == 201
    (notification_id,) = sent.json()["notification_ids"]

    response = client.put(f"/notifications/{notification_id}/read", headers=_auth(intruder.id))
    assert response.status_code == 404
    assert client.get("/notifications/", headers=_auth(intruder.id)).json() == []
    assert client.get("/notifications/", headers=_auth(owner.id)).json()[0]["read"] is False


def test_mark_all_as_read_reports_the_count(client: TestClient, directory) -> None:
    sender = directory.user("admin")
    owner = directory.user("student")
    for _ in range(4):
        client.post(
            "/notifications/send/user",
            json={**CONTENT, "user_id": owner.id},
            headers=_auth(sender.id),
        )

    response = client.put("/notifications/read-all", headers=_auth(owner.id))
    assert response.status_code == 200
    assert response.json()["count"] == 4

    again = client.put("/notifications/read-all", headers=_auth(owner.id))
    assert again.json()["count"] == 0
    inbox = client.get("/notifications/", headers=_auth(owner.id)).json()
    assert all(item["read"] for item in inbox)


def test_list_supports_limit_and_offset(client: TestClient, directory) -> None:
    sender = directory.user("admin")
    owner = directory.user("student")
    for index in range(5):
        client.post(
            "/notifications/send/user",
            json={**CONTENT, "title": f"Notice {index}", "user_id": owner.id},
            headers=_auth(sender.id),
        )

    page = client.get("/notifications/?limit=2&offset=1", headers=_auth(owner.id)).json()

    assert [item["title"] for item in page] == ["Notice 3", "Notice 2"]


def test_teacher_notifies_all_of_their_students(client: TestClient, directory) -> None:
    teacher = directory.teacher()
    algebra = directory.course("ALG")
    physics = directory.course("PHY")
    shared = directory.student()
    other = directory.student()
    directory.enroll(shared, algebra)
    directory.enroll(shared, physics)
    directory.enroll(other, physics)
    directory.schedule(algebra, teacher)
    directory.schedule(physics, teacher)

    response = client.post(
        "/notifications/send/my-students",
        json=CONTENT,
        headers=_auth(teacher.user_id),
    )

    assert response.status_code == 201
    assert response.json()["recipient_count"] == 2


def test_my_students_requires_a_teacher_record(client: TestClient, directory) -> None:
    admin = directory.user("admin")

    response = client.post("/notifications/send/my-students", json=CONTENT, headers=_auth(admin.id))

    assert response.status_code == 404


def test_send_to_all_users_skips_the_sender(client: TestClient, directory) -> None:
    admin = directory.user("admin")
    directory.teacher()
    directory.student()
    directory.student(is_active=False)

    response = client.post("/notifications/send/all-users", json=CONTENT, headers=_auth(admin.id))

    assert response.status_code == 201
    assert response.json()["recipient_count"] == 2
    assert client.get("/notifications/", headers=_auth(admin.id)).json() == []


def test_empty_audience_returns_not_found(client: TestClient, directory) -> None:
    teacher = directory.teacher()
    course = directory.course("EMPTY")

    response = client.post(
        "/notifications/send/course",
        json={**CONTENT, "course_id": course.id},
        headers=_auth(teacher.user_id),
    )

    assert response.status_code == 404


def test_blank_message_is_rejected(client: TestClient, directory) -> None:
    admin = directory.user("admin")

    response = client.post(
        "/notifications/send/all-teachers",
        json={**CONTENT, "message": "   "},
        headers=_auth(admin.id),
    )

    assert response.status_code == 400


def test_unknown_recipient_reports_the_failed_ids(client: TestClient, directory) -> None:
    admin = directory.user("admin")

    response = client.post(
        "/notifications/send/user",
        json={**CONTENT, "user_id": 5555},
        headers=_auth(admin.id),
    )

    assert response.status_code == 500
    assert response.json()["detail"]["failed_recipient_ids"] == [5555]


def test_directory_outage_returns_service_unavailable(
    client: TestClient, directory, db_session, monkeypatch
) -> None:
    admin = directory.user("admin")
    directory.teacher()

    def unavailable(self):
        raise DirectoryError("directory offline")

    monkeypatch.setattr(DirectoryRepository, "get_all_teachers", unavailable)

    response = client.post("/notifications/send/all-teachers", json=CONTENT, headers=_auth(admin.id))

    assert response.status_code == 503
    db_session.expire_all()
    assert db_session.query(NotificationModel).count() == 0


@pytest.mark.parametrize(
    ("method", "path", "repository_method"),
    [
        ("get", "/notifications/", "list_for_recipient"),
        ("put", "/notifications/read-all", "mark_all_as_read"),
        ("put", "/notifications/1/read", "mark_as_read"),
    ],
)
def test_store_outage_returns_service_unavailable(
    client: TestClient, directory, monkeypatch, method: str, path: str, repository_method: str
) -> None:
    owner = directory.user("student")

    def unavailable(self, *args, **kwargs):
        raise StoreError("store offline")

    monkeypatch.setattr(NotificationRepository, repository_method, unavailable)

    response = client.request(method.upper(), path, headers=_auth(owner.id))

    assert response.status_code == 503
