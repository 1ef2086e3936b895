"""Integration tests for label and comment endpoints."""
import pytest
from fastapi.testclient import TestClient

API = "/api/v1"


@pytest.fixture
def task(client: TestClient, auth_headers) -> dict:
    """A task in a fresh project's first column."""
    project = client.post(f"{API}/projects", json={"name": "Roadmap"}, headers=auth_headers).json()
    board = client.get(f"{API}/projects/{project['id']}/boards", headers=auth_headers).json()["data"][0]
    column = client.get(f"{API}/boards/{board['id']}/columns", headers=auth_headers).json()["data"][0]
    task = client.post(
        f"{API}/columns/{column['id']}/tasks", json={"title": "Task"}, headers=auth_headers
    ).json()
    return {**task, "project_id": project["id"]}


def test_label_lifecycle(client: TestClient, auth_headers, task):
    response = client.post(
        f"{API}/projects/{task['project_id']}/labels", json={"name": "bug"}, headers=auth_headers
    )
    assert response.status_code == 201
    label = response.json()
    assert label["color"] == "#6b7280"

    for _ in range(2):
        response = client.post(
            f"{API}/tasks/{task['id']}/labels", json={"label_id": label["id"]}, headers=auth_headers
        )
        assert response.status_code == 204

    labels = client.get(f"{API}/tasks/{task['id']}/labels", headers=auth_headers).json()["data"]
    assert [l["id"] for l in labels] == [label["id"]]

    response = client.delete(f"{API}/tasks/{task['id']}/labels/{label['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"{API}/tasks/{task['id']}/labels", headers=auth_headers).json()["data"] == []

    assert client.delete(f"{API}/labels/{label['id']}", headers=auth_headers).status_code == 204
    labels = client.get(f"{API}/projects/{task['project_id']}/labels", headers=auth_headers)
    assert labels.json()["data"] == []


def test_label_color_must_be_hex(client: TestClient, auth_headers, task):
    response = client.post(
        f"{API}/projects/{task['project_id']}/labels",
        json={"name": "bug", "color": "red"},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_label_from_other_project(client: TestClient, auth_headers, task):
    other = client.post(f"{API}/projects", json={"name": "Other"}, headers=auth_headers).json()
    label = client.post(
        f"{API}/projects/{other['id']}/labels", json={"name": "bug"}, headers=auth_headers
    ).json()

    response = client.post(
        f"{API}/tasks/{task['id']}/labels", json={"label_id": label["id"]}, headers=auth_headers
    )
    assert response.status_code == 400


def test_comment_lifecycle(client: TestClient, auth_headers, task):
    for content in ("first", "second"):
        response = client.post(
            f"{API}/tasks/{task['id']}/comments", json={"content": content}, headers=auth_headers
        )
        assert response.status_code == 201

    comments = client.get(f"{API}/tasks/{task['id']}/comments", headers=auth_headers).json()["data"]
    assert [c["content"] for c in comments] == ["first", "second"]

    response = client.patch(
        f"{API}/comments/{comments[0]['id']}", json={"content": "edited"}, headers=auth_headers
    )
    assert response.json()["content"] == "edited"

    assert client.delete(f"{API}/comments/{comments[1]['id']}", headers=auth_headers).status_code == 204
    comments = client.get(f"{API}/tasks/{task['id']}/comments", headers=auth_headers).json()["data"]
    assert [c["content"] for c in comments] == ["edited"]


def test_comment_on_foreign_task(client: TestClient, auth_headers, task):
    bob = {"email": "b@x.com", "name": "Bob", "password": "password123"}
    client.post(f"{API}/auth/register", json=bob)
    token = client.post(
        f"{API}/auth/login", json={"email": bob["email"], "password": bob["password"]}
    ).json()["tokens"]["access_token"]

    response = client.post(
        f"{API}/tasks/{task['id']}/comments",
        json={"content": "hi"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 403
