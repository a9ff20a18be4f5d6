"""Tests for AuthService."""
import pytest
import pytest_asyncio

from recipe_site.application.services import AuthService
from recipe_site.config import REMEMBER_ME_DAYS, SESSION_HOURS
from recipe_site.infrastructure.identity import UserManager
from recipe_site.infrastructure.repositories import SessionRepository, UserRepository


@pytest.fixture
def auth_service(db):
    return AuthService(UserManager(UserRepository(db)), SessionRepository(db))


@pytest_asyncio.fixture
async def registered_user(db):
    manager = UserManager(UserRepository(db))
    user_id = await manager.create("chef", "chef@example.com", "Passw0rd!")
    return {"id": user_id, "username": "chef", "email": "chef@example.com", "password": "Passw0rd!"}


@pytest.mark.asyncio
async def test_authenticate_with_email(auth_service, registered_user):
    user = await auth_service.authenticate("chef@example.com", "Passw0rd!")

    assert user is not None
    assert user["id"] == registered_user["id"]


@pytest.mark.asyncio
async def test_authenticate_with_username(auth_service, registered_user):
    user = await auth_service.authenticate("CHEF", "Passw0rd!")

    assert user is not None
    assert user["username"] == "chef"


@pytest.mark.asyncio
async def test_authenticate_wrong_password(auth_service, registered_user):
    assert await auth_service.authenticate("chef@example.com", "wrong") is None


@pytest.mark.asyncio
async def test_authenticate_unknown_user(auth_service):
    assert await auth_service.authenticate("nobody@example.com", "whatever") is None


@pytest.mark.asyncio
async def test_session_roundtrip(auth_service, registered_user):
    session_id = await auth_service.create_session(registered_user["id"], remember_me=True)

    session = await auth_service.get_session(session_id)
    assert session["user_id"] == registered_user["id"]

    assert await auth_service.delete_session(session_id) is True
    assert await auth_service.get_session(session_id) is None


def test_session_hours():
    assert AuthService.session_hours(False) == SESSION_HOURS
    assert AuthService.session_hours(True) == REMEMBER_ME_DAYS * 24
