"""Unit tests for the in-memory users service."""

import pytest

from userdesk.domain.users import User, UsersService
from userdesk.infrastructure.users import InMemoryUsersService


@pytest.fixture
async def service() -> InMemoryUsersService:
    """A service holding one account for Alice."""
    users = InMemoryUsersService()
    assert await users.create_user("Alice", "a@x.com", "secret1")
    return users


async def _alice_id(service: InMemoryUsersService) -> str:
    (alice,) = await service.list_users()
    return alice.id


@pytest.mark.unit
class TestInMemoryUsersService:
    """Test the users service contract on the in-memory backend."""

    def test_satisfies_protocol(self) -> None:
        """The backend can be used wherever a UsersService is expected."""
        users: UsersService = InMemoryUsersService()

        assert hasattr(users, "patch_password")

    async def test_create_and_list(self, service: InMemoryUsersService) -> None:
        """Created users are listed without their password."""
        users = await service.list_users()

        assert len(users) == 1
        assert isinstance(users[0], User)
        assert users[0].name == "Alice"
        assert "password" not in users[0].model_dump()

    async def test_get_user_by_id(self, service: InMemoryUsersService) -> None:
        """Users are found by id; unknown ids give None."""
        user_id = await _alice_id(service)

        user = await service.get_user_by_id(user_id)

        assert user is not None
        assert user.email == "a@x.com"
        assert await service.get_user_by_id("missing") is None

    async def test_email_exists_case_insensitive(
        self, service: InMemoryUsersService
    ) -> None:
        """Email lookups ignore case."""
        assert await service.email_exists("A@X.COM") is True
        assert await service.email_exists("b@x.com") is False

    async def test_duplicate_email_refused(self, service: InMemoryUsersService) -> None:
        """A second account with the same email is not created."""
        assert await service.create_user("Other", "a@x.com", "secret2") is False
        assert len(await service.list_users()) == 1

    async def test_update_user(self, service: InMemoryUsersService) -> None:
        """Name and email change; the password does not."""
        user_id = await _alice_id(service)

        assert await service.update_user(user_id, "Alicia", "alicia@x.com") is True

        user = await service.get_user_by_id(user_id)
        assert user == User(id=user_id, name="Alicia", email="alicia@x.com")
        assert await service.verify_credential(user_id, "secret1") is True

    async def test_update_unknown_user(self, service: InMemoryUsersService) -> None:
        """Updating a missing user fails."""
        assert await service.update_user("missing", "X", "x@x.com") is False

    async def test_verify_credential(self, service: InMemoryUsersService) -> None:
        """True means the password matches."""
        user_id = await _alice_id(service)

        assert await service.verify_credential(user_id, "secret1") is True
        assert await service.verify_credential(user_id, "wrong1") is False
        assert await service.verify_credential("missing", "secret1") is False

    async def test_patch_password(self, service: InMemoryUsersService) -> None:
        """The new password replaces the old one."""
        user_id = await _alice_id(service)

        assert await service.patch_password(user_id, "secret1", "secret2") is True

        assert await service.verify_credential(user_id, "secret2") is True
        assert await service.verify_credential(user_id, "secret1") is False

    async def test_patch_password_requires_old(
        self, service: InMemoryUsersService
    ) -> None:
        """A wrong old password leaves the account unchanged."""
        user_id = await _alice_id(service)

        assert await service.patch_password(user_id, "wrong1", "secret2") is False
        assert await service.verify_credential(user_id, "secret1") is True

    async def test_delete_user(self, service: InMemoryUsersService) -> None:
        """Deleted users are gone; deleting twice fails."""
        user_id = await _alice_id(service)

        assert await service.delete_user(user_id) is True
        assert await service.delete_user(user_id) is False
        assert await service.list_users() == []
