"""HTTP routes for user accounts.

Every route follows the same pipeline: the validation gate checks the body,
the handler runs its guards and calls the users service, and the result is
unwrapped. An ``Err`` is raised so the centralized exception handlers turn
it into the JSON error response.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from userdesk.api.dependencies import UserId, UsersServiceDep
from userdesk.api.handlers import users as handlers
from userdesk.api.schemas.errors import ErrorResponse
from userdesk.api.schemas.users import (
    PasswordPatchRequest,
    UserCreatedResponse,
    UserCreateRequest,
    UserIdResponse,
    UserResponse,
    UserUpdateRequest,
)
from userdesk.api.validation import body_openapi, validated_body
from userdesk.core.observability import trace_operation
from userdesk.domain.users import User

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        403: {"model": ErrorResponse, "description": "Invalid password"},
        409: {"model": ErrorResponse, "description": "Email already taken"},
        422: {"model": ErrorResponse, "description": "Validation or domain error"},
    },
)


@router.get("", response_model=list[UserResponse])
async def get_users(service: UsersServiceDep) -> list[User]:
    """List all users."""
    with trace_operation("users.list"):
        return list((await handlers.get_users(service)).unwrap())


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UserId, service: UsersServiceDep) -> User:
    """Get one user by id."""
    with trace_operation("users.get", user_id=user_id):
        return (await handlers.get_user(service, user_id)).unwrap()


@router.post("", openapi_extra=body_openapi(UserCreateRequest))
async def create_user(
    payload: Annotated[UserCreateRequest, Depends(validated_body(UserCreateRequest))],
    service: UsersServiceDep,
) -> UserCreatedResponse:
    """Register a new user."""
    with trace_operation("users.create"):
        return (await handlers.create_user(service, payload)).unwrap()


@router.put("/{user_id}", openapi_extra=body_openapi(UserUpdateRequest))
async def update_user(
    user_id: UserId,
    payload: Annotated[UserUpdateRequest, Depends(validated_body(UserUpdateRequest))],
    service: UsersServiceDep,
) -> UserIdResponse:
    """Update the name and email of a user."""
    with trace_operation("users.update", user_id=user_id):
        return (await handlers.update_user(service, user_id, payload)).unwrap()


@router.patch("/{user_id}", openapi_extra=body_openapi(PasswordPatchRequest))
async def patch_user_password(
    user_id: UserId,
    payload: Annotated[
        PasswordPatchRequest, Depends(validated_body(PasswordPatchRequest))
    ],
    service: UsersServiceDep,
) -> UserIdResponse:
    """Change the password of a user."""
    with trace_operation("users.patch_password", user_id=user_id):
        return (await handlers.patch_user_password(service, user_id, payload)).unwrap()


@router.delete("/{user_id}")
async def delete_user(user_id: UserId, service: UsersServiceDep) -> UserIdResponse:
    """Delete a user."""
    with trace_operation("users.delete", user_id=user_id):
        return (await handlers.delete_user(service, user_id)).unwrap()
