"""Process-local implementation of the users service contract.

Accounts live in a dict owned by the service instance, so they are lost on
restart and not shared between workers. This backend exists to run the API
locally and in tests; production deployments plug in their own
``UsersService``.
"""

import secrets
import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from userdesk.domain.users import User


@dataclass(slots=True)
class _Account:
    id: str
    name: str
    email: str
    password: str

    def to_user(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)


class InMemoryUsersService:
    """Users service backed by a dict keyed by user id.

    Emails are compared case-insensitively.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, _Account] = {}

    def _find_by_email(self, email: str) -> _Account | None:
        wanted = email.casefold()
        return next(
            (a for a in self._accounts.values() if a.email.casefold() == wanted),
            None,
        )

    async def list_users(self) -> Sequence[User]:
        return [account.to_user() for account in self._accounts.values()]

    async def get_user_by_id(self, user_id: str) -> User | None:
        account = self._accounts.get(user_id)
        return account.to_user() if account else None

    async def email_exists(self, email: str) -> bool:
        return self._find_by_email(email) is not None

    async def create_user(self, name: str, email: str, password: str) -> bool:
        if self._find_by_email(email) is not None:
            return False

        user_id = uuid.uuid4().hex
        self._accounts[user_id] = _Account(user_id, name, email, password)
        logger.debug("Stored account {}", user_id)
        return True

    async def update_user(self, user_id: str, name: str, email: str) -> bool:
        account = self._accounts.get(user_id)
        if account is None:
            return False

        account.name = name
        account.email = email
        return True

    async def verify_credential(self, user_id: str, password: str) -> bool:
        account = self._accounts.get(user_id)
        if account is None:
            return False
        return secrets.compare_digest(account.password.encode(), password.encode())

    async def patch_password(
        self, user_id: str, old_password: str, new_password: str
    ) -> bool:
        if not await self.verify_credential(user_id, old_password):
            return False

        self._accounts[user_id].password = new_password
        return True

    async def delete_user(self, user_id: str) -> bool:
        return self._accounts.pop(user_id, None) is not None
