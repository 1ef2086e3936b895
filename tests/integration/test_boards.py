"""Integration tests for project, board and column endpoints."""

from fastapi.testclient import TestClient

API = "/api/v1"


def _create_project(client: TestClient, headers, name="Roadmap") -> dict:
    response = client.post(f"{API}/projects", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()


def _other_user_headers(client: TestClient) -> dict[str, str]:
    user = {"email": "b@x.com", "name": "Bob", "password": "password123"}
    client.post(f"{API}/auth/register", json=user)
    response = client.post(
        f"{API}/auth/login", json={"email": user["email"], "password": user["password"]}
    )
    return {"Authorization": f"Bearer {response.json()['tokens']['access_token']}"}


def test_project_crud(client: TestClient, auth_headers):
    project = _create_project(client, auth_headers)
    assert project["description"] == ""

    response = client.get(f"{API}/projects/{project['id']}", headers=auth_headers)
    assert response.status_code == 200

    response = client.patch(
        f"{API}/projects/{project['id']}", json={"description": "Q3"}, headers=auth_headers
    )
    assert response.json()["description"] == "Q3"
    assert response.json()["name"] == "Roadmap"

    response = client.delete(f"{API}/projects/{project['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get(f"{API}/projects/{project['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_new_project_has_default_board(client: TestClient, auth_headers):
    project = _create_project(client, auth_headers)

    boards = client.get(f"{API}/projects/{project['id']}/boards", headers=auth_headers).json()["data"]
    assert [b["name"] for b in boards] == ["Main Board"]

    columns = client.get(
        f"{API}/boards/{boards[0]['id']}/columns", headers=auth_headers
    ).json()["data"]
    assert [(c["name"], c["position"]) for c in columns] == [
        ("To Do", 1000.0),
        ("In Progress", 2000.0),
        ("Done", 3000.0),
    ]


def test_other_user_is_forbidden(client: TestClient, auth_headers):
    project = _create_project(client, auth_headers)
    other = _other_user_headers(client)

    response = client.get(f"{API}/projects/{project['id']}", headers=other)
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"

    response = client.post(
        f"{API}/projects/{project['id']}/boards", json={"name": "Sneaky"}, headers=other
    )
    assert response.status_code == 403

    assert client.get(f"{API}/projects", headers=other).json()["data"] == []


def test_board_crud(client: TestClient, auth_headers):
    project = _create_project(client, auth_headers)

    response = client.post(
        f"{API}/projects/{project['id']}/boards", json={"name": "Backlog"}, headers=auth_headers
    )
    assert response.status_code == 201
    board = response.json()

    response = client.patch(
        f"{API}/boards/{board['id']}", json={"name": "Icebox"}, headers=auth_headers
    )
    assert response.json()["name"] == "Icebox"

    assert client.delete(f"{API}/boards/{board['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"{API}/boards/{board['id']}", headers=auth_headers).status_code == 404


def test_column_create_move_and_rebalance(client: TestClient, auth_headers):
    project = _create_project(client, auth_headers)
    board_id = client.get(
        f"{API}/projects/{project['id']}/boards", headers=auth_headers
    ).json()["data"][0]["id"]

    response = client.post(
        f"{API}/boards/{board_id}/columns", json={"name": "Review"}, headers=auth_headers
    )
    assert response.status_code == 201
    review = response.json()
    assert review["position"] == 4000.0

    response = client.patch(
        f"{API}/columns/{review['id']}", json={"position": 1500.5}, headers=auth_headers
    )
    assert response.json()["position"] == 1500.5

    response = client.post(f"{API}/boards/{board_id}/columns/rebalance", headers=auth_headers)
    assert [(c["name"], c["position"]) for c in response.json()["data"]] == [
        ("To Do", 1000.0),
        ("Review", 2000.0),
        ("In Progress", 3000.0),
        ("Done", 4000.0),
    ]

    assert client.delete(f"{API}/columns/{review['id']}", headers=auth_headers).status_code == 204


def test_column_position_must_be_finite(client: TestClient, auth_headers):
    project = _create_project(client, auth_headers)
    board_id = client.get(
        f"{API}/projects/{project['id']}/boards", headers=auth_headers
    ).json()["data"][0]["id"]
    column = client.get(f"{API}/boards/{board_id}/columns", headers=auth_headers).json()["data"][0]

    response = client.patch(
        f"{API}/columns/{column['id']}",
        content='{"position": Infinity}',
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 422

    response = client.post(
        f"{API}/boards/{board_id}/columns", json={"name": "Review"}, headers=auth_headers
    )
    assert response.json()["position"] == 4000.0


def test_blank_project_name_is_rejected(client: TestClient, auth_headers):
    response = client.post(f"{API}/projects", json={"name": "   "}, headers=auth_headers)
    assert response.status_code == 400
