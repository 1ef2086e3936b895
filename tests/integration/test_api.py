"""Integration tests for health and authentication endpoints."""

from fastapi.testclient import TestClient

API = "/api/v1"


def _login(client: TestClient, test_user_data) -> dict:
    response = client.post(
        f"{API}/auth/login",
        json={"email": test_user_data["email"], "password": test_user_data["password"]},
    )
    assert response.status_code == 200
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_register_user(client: TestClient, test_user_data):
    """Test user registration."""
    response = client.post(f"{API}/auth/register", json=test_user_data)
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == test_user_data["email"]
    assert data["name"] == test_user_data["name"]
    assert data["role"] == "member"
    assert "id" in data
    assert "password" not in data
    assert "hashed_password" not in data


def test_register_duplicate_user(client: TestClient, test_user_data):
    """Test registering a duplicate user."""
    response = client.post(f"{API}/auth/register", json=test_user_data)
    assert response.status_code == 201

    response = client.post(f"{API}/auth/register", json=test_user_data)
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_register_short_password(client: TestClient, test_user_data):
    response = client.post(f"{API}/auth/register", json={**test_user_data, "password": "short"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_login_user(client: TestClient, test_user_data):
    """Test user login."""
    client.post(f"{API}/auth/register", json=test_user_data)

    data = _login(client, test_user_data)

    assert data["user"]["email"] == test_user_data["email"]
    assert data["tokens"]["access_token"]
    assert data["tokens"]["refresh_token"]
    assert data["tokens"]["token_type"] == "bearer"


def test_login_invalid_credentials(client: TestClient, test_user_data):
    """Wrong password and unknown email get the same answer."""
    client.post(f"{API}/auth/register", json=test_user_data)

    wrong_password = client.post(
        f"{API}/auth/login", json={"email": test_user_data["email"], "password": "WrongPassword!"}
    )
    unknown_email = client.post(
        f"{API}/auth/login", json={"email": "nobody@x.com", "password": test_user_data["password"]}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["code"] == "INVALID_CREDENTIALS"


def test_me_requires_token(client: TestClient):
    response = client.get(f"{API}/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["code"] == "UNAUTHORIZED"


def test_me_rejects_invalid_token(client: TestClient):
    response = client.get(f"{API}/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_me_rejects_non_bearer_scheme(client: TestClient):
    response = client.get(f"{API}/me", headers={"Authorization": "Basic YTpi"})
    assert response.status_code == 401


def test_me_and_update_profile(client: TestClient, auth_headers):
    response = client.get(f"{API}/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Alice"

    response = client.patch(f"{API}/me", json={"name": "Alice B"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Alice B"


def test_register_login_refresh_end_to_end(client: TestClient, test_user_data):
    """Register, log in, call an owner-scoped endpoint, rotate, reuse the old secret."""
    response = client.post(f"{API}/auth/register", json=test_user_data)
    assert response.status_code == 201

    first = _login(client, test_user_data)["tokens"]
    headers = {"Authorization": f"Bearer {first['access_token']}"}

    response = client.post(f"{API}/projects", json={"name": "Launch"}, headers=headers)
    assert response.status_code == 201
    response = client.get(f"{API}/projects", headers=headers)
    assert [p["name"] for p in response.json()["data"]] == ["Launch"]

    response = client.post(f"{API}/auth/refresh", json={"refresh_token": first["refresh_token"]})
    assert response.status_code == 200
    second = response.json()["tokens"]
    assert second["refresh_token"] != first["refresh_token"]

    response = client.get(
        f"{API}/projects", headers={"Authorization": f"Bearer {second['access_token']}"}
    )
    assert response.status_code == 200

    response = client.post(f"{API}/auth/refresh", json={"refresh_token": first["refresh_token"]})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_logout(client: TestClient, test_user_data):
    client.post(f"{API}/auth/register", json=test_user_data)
    tokens = _login(client, test_user_data)["tokens"]

    response = client.post(f"{API}/auth/logout", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 204

    # Unknown secrets log out just as quietly
    response = client.post(f"{API}/auth/logout", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 204

    response = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 401
