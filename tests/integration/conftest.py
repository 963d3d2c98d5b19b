"""Shared fixtures for integration tests.

Each test gets a fresh application wired to its own in-memory users service,
so accounts created by one test never leak into another.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Response

from userdesk.api.main import create_app
from userdesk.core.config import get_settings
from userdesk.infrastructure.users import InMemoryUsersService


@pytest.fixture
def users_service() -> InMemoryUsersService:
    """Backend shared by the app and the test."""
    return InMemoryUsersService()


@pytest.fixture
def app(users_service: InMemoryUsersService) -> FastAPI:
    """Application built from the test environment."""
    return create_app(get_settings(), users_service=users_service)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client


@pytest.fixture
def register_user(
    client: AsyncClient, users_service: InMemoryUsersService
) -> Callable[..., Awaitable[str]]:
    """Create a user over HTTP and return the id the backend assigned."""

    async def _register(
        name: str = "Alice",
        email: str = "a@x.com",
        password: str = "secret1",
    ) -> str:
        body: dict[str, Any] = {
            "name": name,
            "email": email,
            "password": password,
            "confirmPassword": password,
        }
        response: Response = await client.post("/users", json=body)
        assert response.status_code == 200, response.text

        user_id = next(
            user.id
            for user in await users_service.list_users()
            if user.email == email
        )
        return user_id

    return _register
