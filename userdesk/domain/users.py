"""User entity and the users service contract.

The users service owns persistence and credential storage. The API layer
only depends on the ``UsersService`` protocol below, so any backend that
implements these coroutines can be plugged into the application.
"""

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """A user account as exposed by the users service.

    Credentials are never part of this model.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str


class UsersService(Protocol):
    """Operations the request handlers delegate to.

    Mutating operations report success with a boolean instead of raising, so
    handlers can map a refusal to the right error kind.
    """

    async def list_users(self) -> Sequence[User]: ...

    async def get_user_by_id(self, user_id: str) -> User | None: ...

    async def email_exists(self, email: str) -> bool: ...

    async def create_user(self, name: str, email: str, password: str) -> bool: ...

    async def update_user(self, user_id: str, name: str, email: str) -> bool: ...

    async def verify_credential(self, user_id: str, password: str) -> bool:
        """Return True when ``password`` matches the stored credential."""
        ...

    async def patch_password(
        self, user_id: str, old_password: str, new_password: str
    ) -> bool: ...

    async def delete_user(self, user_id: str) -> bool: ...
