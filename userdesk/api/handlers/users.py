"""Semantic checks and service delegation for the users endpoints.

Each handler receives a payload that already passed schema validation and
runs the business rules a static schema cannot express. Guards run in a
fixed order and the first failing one ends the pipeline with an ``Err``; the
users service is only asked to mutate anything after every guard passed.

Handlers keep no state between calls.
"""

from collections.abc import Sequence

from loguru import logger

from userdesk.api.schemas.users import (
    PasswordPatchRequest,
    UserCreatedResponse,
    UserCreateRequest,
    UserIdResponse,
    UserUpdateRequest,
)
from userdesk.core.exceptions import (
    EmailAlreadyTakenError,
    InvalidCredentialsError,
    InvalidPasswordError,
    UnprocessableEntityError,
)
from userdesk.core.result import Err, Ok, Result
from userdesk.domain.users import User, UsersService

PASSWORDS_MISMATCH = "Passwords did not match"
WRONG_PASSWORD = "Wrong password!"
NEW_PASSWORDS_MISMATCH = "Your new password doesnt match the confirm new password!"
PASSWORD_REUSED = "Your new password cant be the same as the old one!"


async def get_users(service: UsersService) -> Result[Sequence[User]]:
    """List every user account."""
    return Ok(await service.list_users())


async def get_user(service: UsersService, user_id: str) -> Result[User]:
    """Fetch one user, failing with UNPROCESSABLE_ENTITY when it is unknown."""
    user = await service.get_user_by_id(user_id)
    if user is None:
        return Err(
            UnprocessableEntityError("Unknown user", context={"user_id": user_id})
        )
    return Ok(user)


async def create_user(
    service: UsersService, payload: UserCreateRequest
) -> Result[UserCreatedResponse]:
    """Register a new user.

    Guards, in order: the password confirmation matches, the email is not
    registered yet. A refused creation maps to UNPROCESSABLE_ENTITY.

    Args:
        service: Users service to delegate to.
        payload: Validated request body.

    Returns:
        Result[UserCreatedResponse]: The created name and email, never the
            password. The email is echoed as EmailStr normalized it, so the
            domain part comes back lower-cased.
    """
    if payload.confirm_password != payload.password:
        return Err(InvalidPasswordError(PASSWORDS_MISMATCH))

    if await service.email_exists(payload.email):
        return Err(EmailAlreadyTakenError(context={"email": payload.email}))

    if not await service.create_user(payload.name, payload.email, payload.password):
        return Err(UnprocessableEntityError("Failed to create user"))

    logger.info("User created", email=payload.email)
    return Ok(UserCreatedResponse(name=payload.name, email=payload.email))


async def update_user(
    service: UsersService, user_id: str, payload: UserUpdateRequest
) -> Result[UserIdResponse]:
    """Change the name and email of a user.

    The optional password pair is compared first so a client that sends it
    gets the same INVALID_PASSWORD answer as on creation. The password itself
    is left untouched.

    Args:
        service: Users service to delegate to.
        user_id: Id taken from the request path.
        payload: Validated request body.

    Returns:
        Result[UserIdResponse]: The id of the updated user.
    """
    if payload.confirm_password != payload.password:
        return Err(InvalidPasswordError(PASSWORDS_MISMATCH))

    if await service.email_exists(payload.email):
        return Err(EmailAlreadyTakenError(context={"email": payload.email}))

    if not await service.update_user(user_id, payload.name, payload.email):
        return Err(
            UnprocessableEntityError(
                "Failed to update user", context={"user_id": user_id}
            )
        )

    logger.info("User updated", user_id=user_id)
    return Ok(UserIdResponse(id=user_id))


async def patch_user_password(
    service: UsersService, user_id: str, payload: PasswordPatchRequest
) -> Result[UserIdResponse]:
    """Replace the password of a user.

    Guards, in order: the old password verifies, the new password matches its
    confirmation, the new password differs from the old one. A refused patch
    maps to INVALID_CREDENTIALS.

    Args:
        service: Users service to delegate to.
        user_id: Id taken from the request path.
        payload: Validated request body.

    Returns:
        Result[UserIdResponse]: The id of the patched user.
    """
    if not await service.verify_credential(user_id, payload.old_password):
        logger.warning("Password change rejected: wrong password", user_id=user_id)
        return Err(InvalidPasswordError(WRONG_PASSWORD, context={"user_id": user_id}))

    if payload.new_password != payload.confirm_new_password:
        return Err(InvalidPasswordError(NEW_PASSWORDS_MISMATCH))

    if payload.old_password == payload.new_password:
        return Err(UnprocessableEntityError(PASSWORD_REUSED))

    if not await service.patch_password(
        user_id, payload.old_password, payload.new_password
    ):
        return Err(
            InvalidCredentialsError(
                "Fail to patch user", context={"user_id": user_id}
            )
        )

    logger.info("User password changed", user_id=user_id)
    return Ok(UserIdResponse(id=user_id))


async def delete_user(service: UsersService, user_id: str) -> Result[UserIdResponse]:
    """Delete a user, failing with UNPROCESSABLE_ENTITY when the service refuses."""
    if not await service.delete_user(user_id):
        return Err(
            UnprocessableEntityError(
                "Failed to delete user", context={"user_id": user_id}
            )
        )

    logger.info("User deleted", user_id=user_id)
    return Ok(UserIdResponse(id=user_id))
