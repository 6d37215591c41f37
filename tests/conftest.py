"""Test fixtures and configuration."""
import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# The app builds its startup engine from the environment when first imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from taskmanager.config import Settings, get_settings
from taskmanager.core.security import PasswordHasher
from taskmanager.core.tokens import TokenService
from taskmanager.database import Base, build_engine, get_db
from taskmanager.main import app
from taskmanager.repositories import TaskRepository, UserRepository
from taskmanager.services import AuthenticationService, TaskService, UserService


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Get test settings."""
    return Settings(
        database_url="sqlite:///:memory:",
        jwt_secret="test-secret-key-minimum-32-characters-long",
        environment="test",
        otel_enabled=False,
        bcrypt_rounds=4,
    )


@pytest.fixture(scope="function")
def db_engine(test_settings):
    """Create a test database engine with foreign keys enforced."""
    engine = build_engine(test_settings.database_url, poolclass=StaticPool)
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


@pytest.fixture(scope="session")
def password_hasher(test_settings) -> PasswordHasher:
    """Cheap bcrypt hasher for tests."""
    return PasswordHasher.from_settings(test_settings)


@pytest.fixture
def token_service(test_settings) -> TokenService:
    """Token service signing with the test secret."""
    return TokenService.from_settings(test_settings)


@pytest.fixture
def user_repository(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def task_repository(db_session) -> TaskRepository:
    return TaskRepository(db_session)


@pytest.fixture
def user_service(user_repository, password_hasher) -> UserService:
    return UserService(user_repository, password_hasher)


@pytest.fixture
def auth_service(user_service, user_repository, password_hasher, token_service):
    return AuthenticationService(user_service, user_repository, password_hasher, token_service)


@pytest.fixture
def task_service(task_repository, user_repository) -> TaskService:
    return TaskService(task_repository, user_repository)


@pytest.fixture
def test_user_data():
    """Sample registration payload for testing."""
    return {
        "email": "user1@example.com",
        "password": "secret123",
        "passwordConfirmation": "secret123",
    }


@pytest.fixture
def second_user_data():
    """Registration payload for a second, unrelated user."""
    return {
        "email": "user2@example.com",
        "password": "hunter22",
        "passwordConfirmation": "hunter22",
    }


@pytest.fixture
def test_task_data():
    """Sample task data for testing."""
    return {
        "name": "Task 1",
        "description": "Write the quarterly report",
    }


@pytest.fixture
def register_user(client: TestClient):
    """Register a user through the API; returns its ID and token."""

    def _register(user_data: dict) -> tuple[int, str]:
        response = client.post("/api/v1/auth/register", json=user_data)
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["userId"], data["jwtToken"]

    return _register


@pytest.fixture
def authenticated_user(client: TestClient, register_user, test_user_data):
    """Registered user ID with its Bearer header set on the client."""
    user_id, token = register_user(test_user_data)
    client.headers["Authorization"] = f"Bearer {token}"
    return user_id
