"""Shared fixtures for unit tests."""

from typing import Any

import pytest
from pytest_mock import MockerFixture, MockType

from userdesk.core.config import Settings
from userdesk.domain.users import User, UsersService


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide a real Settings object built from test environment values."""
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_VERSION", "1.0.0")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    return Settings()


@pytest.fixture
def alice() -> User:
    """A user record as returned by the users service."""
    return User(id="user-1", name="Alice", email="a@x.com")


@pytest.fixture
def mock_users_service(mocker: MockerFixture, alice: User) -> MockType:
    """Users service mock whose calls all succeed by default.

    ``email_exists`` answers False and ``verify_credential`` answers True, so
    every guard passes unless a test overrides a return value.
    """
    service = mocker.AsyncMock(spec=UsersService)
    service.list_users.return_value = [alice]
    service.get_user_by_id.return_value = alice
    service.email_exists.return_value = False
    service.create_user.return_value = True
    service.update_user.return_value = True
    service.verify_credential.return_value = True
    service.patch_password.return_value = True
    service.delete_user.return_value = True
    return service


@pytest.fixture
def create_body() -> dict[str, Any]:
    """A valid ``POST /users`` body."""
    return {
        "name": "Alice",
        "email": "a@x.com",
        "password": "secret1",
        "confirmPassword": "secret1",
    }


@pytest.fixture
def patch_body() -> dict[str, Any]:
    """A valid ``PATCH /users/{id}`` body."""
    return {
        "oldPassword": "secret1",
        "newPassword": "secret2",
        "confirmNewPassword": "secret2",
    }
