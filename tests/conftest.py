"""Test fixtures and configuration."""
import os
from collections.abc import Generator

# Must be set before the application module reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-minimum-32-characters-long")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("OTEL_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kanban.config import Settings, get_settings
from kanban.core.auth import register_user
from kanban.core.scope import Scope
from kanban.core.security import TokenCodec
from kanban.database import Base, get_db
from kanban.main import app
from kanban.models import Board, Column, Project, User
from kanban.services.project_service import create_project


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Get test settings."""
    return Settings(
        database_url="sqlite:///:memory:",
        secret_key="test-secret-key-minimum-32-characters-long",
        environment="test",
        otel_enabled=False,
        bcrypt_rounds=4,
        auto_create_tables=False,
    )


@pytest.fixture(scope="function")
def db_engine(test_settings):
    """Create a test database engine."""
    engine = create_engine(
        test_settings.database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session, test_settings) -> Generator[TestClient, None, None]:
    """Create a test client."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    def override_get_settings():
        return test_settings

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = override_get_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def codec(test_settings) -> TokenCodec:
    """Token codec sharing the test signing key."""
    return TokenCodec.from_settings(test_settings)


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "email": "a@x.com",
        "name": "Alice",
        "password": "password123",
    }


@pytest.fixture
def owner(db_session, test_settings) -> User:
    """A registered user who owns the project fixtures."""
    return register_user(db_session, test_settings, "owner@example.com", "Owner", "password123")


@pytest.fixture
def intruder(db_session, test_settings) -> User:
    """A second registered user who owns nothing."""
    return register_user(db_session, test_settings, "intruder@example.com", "Intruder", "password123")


@pytest.fixture
def owner_scope(owner) -> Scope:
    return Scope(user_id=owner.id, email=owner.email, role=owner.role)


@pytest.fixture
def intruder_scope(intruder) -> Scope:
    return Scope(user_id=intruder.id, email=intruder.email, role=intruder.role)


@pytest.fixture
def project(db_session, owner_scope) -> Project:
    """A project with its default board and columns."""
    return create_project(db_session, owner_scope, "Roadmap", "Quarterly plan")


@pytest.fixture
def board(project) -> Board:
    return project.boards[0]


@pytest.fixture
def columns(db_session, board) -> list[Column]:
    """The default board's columns in position order."""
    return sorted(board.columns, key=lambda c: c.position)


@pytest.fixture
def auth_headers(client: TestClient, test_user_data) -> dict[str, str]:
    """Register and log in through the API; return the Bearer header."""
    client.post("/api/v1/auth/register", json=test_user_data)
    response = client.post(
        "/api/v1/auth/login",
        json={"email": test_user_data["email"], "password": test_user_data["password"]},
    )
    token = response.json()["tokens"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
