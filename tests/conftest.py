"""Test configuration and fixtures for Recipe Site.

This module provides isolated test environments:
- Fresh in-memory database per test (unique random name)
- Temporary database file for HTTP-level tests
- Fresh user sessions for each test
"""
import asyncio
from pathlib import Path
from typing import Dict, Generator
from unittest.mock import Mock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from recipe_site.infrastructure.database import init_schema, open_connection, open_memory_connection
from recipe_site.infrastructure.identity import UserManager
from recipe_site.infrastructure.repositories import RecipeRepository, UserRepository


# =============================================================================
# Async database fixtures
# =============================================================================

@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with schema, one per test."""
    conn = await open_memory_connection()
    yield conn
    await conn.close()


@pytest.fixture
def make_user(db):
    """Factory that inserts a user row directly (no password)."""
    async def _make(
        user_id: str = "user1",
        username: str = "TestUser",
        email: str | None = None,
        first_name: str = "FirstName",
        last_name: str = "LastName"
    ) -> dict:
        email = email or f"{username.lower()}@example.com"
        await UserRepository(db).create(
            username, email, "", first_name=first_name, last_name=last_name, user_id=user_id
        )
        return {"id": user_id, "username": username, "email": email,
                "first_name": first_name, "last_name": last_name}
    return _make


@pytest.fixture
def make_recipe(db):
    """Factory that inserts a recipe row directly."""
    async def _make(
        recipe_id: str = "recipe1",
        title: str = "Chocolate Cake",
        user_id: str | None = "user1",
        description: str = "A delicious chocolate cake.",
        difficulty: str = "Medium"
    ) -> dict:
        await RecipeRepository(db).create(
            title=title,
            description=description,
            difficulty=difficulty,
            user_id=user_id,
            recipe_id=recipe_id
        )
        return {"id": recipe_id, "title": title, "user_id": user_id}
    return _make


@pytest.fixture
def mock_user_manager() -> UserManager:
    """UserManager over a mocked store.

    Lookups in UserService never reach the manager, so the store
    only needs to exist.
    """
    return UserManager(Mock())


# =============================================================================
# HTTP fixtures
# =============================================================================

@pytest.fixture(scope="function")
def database_path(tmp_path: Path, monkeypatch) -> Path:
    """Point the app at a temporary database file."""
    import recipe_site.config as config

    path = tmp_path / "test.db"
    monkeypatch.setattr(config, "DATABASE_PATH", path)
    return path


@pytest.fixture(scope="function")
def client(database_path: Path) -> Generator[TestClient, None, None]:
    """Create test client with fresh isolated database.

    Usage:
        def test_something(client):
            response = client.get("/Login")
            assert response.status_code == 200
    """
    from recipe_site.main import app

    with TestClient(app) as test_client:
        yield test_client


def create_user_in_file(db_path: Path, username: str, email: str, password: str) -> str:
    """Create a user with a real password hash in a database file."""
    async def _create() -> str:
        conn = await open_connection(db_path)
        try:
            await init_schema(conn)
            manager = UserManager(UserRepository(conn))
            return await manager.create(username, email, password, "Test", "User")
        finally:
            await conn.close()

    return asyncio.run(_create())


@pytest.fixture(scope="function")
def mounted_client(database_path: Path) -> Generator[TestClient, None, None]:
    """Client for the app served under the /cook prefix.

    testuser / TestPass123! exists before the app starts.
    """
    from recipe_site.main import app

    create_user_in_file(database_path, "testuser", "testuser@example.com", "TestPass123!")
    with TestClient(app, root_path="/cook") as test_client:
        yield test_client


@pytest.fixture(scope="function")
def test_user(client: TestClient, database_path: Path) -> Dict:
    """Create a test user and return credentials.

    Returns:
        Dict with: id, username, email, password
    """
    credentials = {
        "username": "testuser",
        "email": "testuser@example.com",
        "password": "TestPass123!",
    }
    credentials["id"] = create_user_in_file(
        database_path, credentials["username"], credentials["email"], credentials["password"]
    )
    return credentials


@pytest.fixture(scope="function")
def second_user(client: TestClient, database_path: Path) -> Dict:
    """Create a second user for search and sharing tests."""
    credentials = {
        "username": "seconduser",
        "email": "second@example.com",
        "password": "SecondPass123!",
    }
    credentials["id"] = create_user_in_file(
        database_path, credentials["username"], credentials["email"], credentials["password"]
    )
    return credentials


def login_form(login: str, password: str, remember_me: bool = False) -> Dict:
    """Form body as posted by the login page."""
    data = {"Input.UsernameOrEmail": login, "Input.Password": password}
    if remember_me:
        data["Input.RememberMe"] = "true"
    return data


@pytest.fixture(scope="function")
def authenticated_client(client: TestClient, test_user: Dict) -> TestClient:
    """Client authenticated as test_user."""
    response = client.post(
        "/Login",
        data=login_form(test_user["email"], test_user["password"]),
        follow_redirects=False
    )

    assert response.status_code == 302, "Login should redirect to homepage"
    assert "recipe_session" in response.cookies, "Session cookie should be set"

    return client


@pytest.fixture(scope="function")
def csrf_headers(authenticated_client: TestClient) -> Dict:
    """Headers carrying the CSRF token for state-changing requests."""
    if not authenticated_client.cookies.get("recipe_csrf"):
        authenticated_client.get("/")
    return {"X-CSRF-Token": authenticated_client.cookies.get("recipe_csrf", "")}
