"""FastAPI dependencies shared by the routers."""

from typing import Annotated, cast

from fastapi import Depends, Path, Request

from userdesk.domain.users import UsersService


def get_users_service(request: Request) -> UsersService:
    """Return the users service the application was created with.

    Args:
        request: The current request.

    Returns:
        UsersService: Service stored on ``app.state`` by ``create_app``.
    """
    return cast("UsersService", request.app.state.users_service)


UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]

# The users service owns the id format; only blank ids are rejected here
UserId = Annotated[
    str,
    Path(
        min_length=1,
        pattern=r"^\s*\S",
        title="User ID",
        description="Identifier assigned by the users service",
    ),
]
