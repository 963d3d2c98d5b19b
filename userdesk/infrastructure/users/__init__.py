"""Users service backends."""

from userdesk.infrastructure.users.memory import InMemoryUsersService

__all__ = ["InMemoryUsersService"]
