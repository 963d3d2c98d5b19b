"""Request and response models for the users endpoints.

Request models double as the validation schemas of the API: their field
constraints are the only shape checks a request goes through before its
handler runs. Each field carries a ``title`` used as the human-readable label
in validation messages.

Body keys are camelCase. The lower-case spellings (``confirmpassword``,
``oldpassword``...) are accepted too.
"""

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 32
NAME_MAX_LENGTH = 100


def _password_field(title: str, *aliases: str) -> Any:  # noqa: ANN401
    return Field(
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        title=title,
        validation_alias=AliasChoices(*aliases) if aliases else None,
    )


Name = Annotated[str, Field(min_length=1, max_length=NAME_MAX_LENGTH, title="Name")]
Email = Annotated[EmailStr, Field(title="Email")]


class _RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class UserCreateRequest(_RequestModel):
    """Body of ``POST /users``."""

    name: Name
    email: Email
    password: str = _password_field("Password")
    confirm_password: str = _password_field(
        "Confirm Password", "confirmPassword", "confirmpassword"
    )


class UserUpdateRequest(_RequestModel):
    """Body of ``PUT /users/{id}``.

    The password pair is optional and only checked for agreement; updating
    a user never changes the password.
    """

    name: Name
    email: Email
    password: str | None = Field(default=None, title="Password")
    confirm_password: str | None = Field(
        default=None,
        title="Confirm Password",
        validation_alias=AliasChoices("confirmPassword", "confirmpassword"),
    )


class PasswordPatchRequest(_RequestModel):
    """Body of ``PATCH /users/{id}``."""

    old_password: str = _password_field(
        "Old Password", "oldPassword", "oldpassword"
    )
    new_password: str = _password_field(
        "New Password", "newPassword", "newpassword"
    )
    confirm_new_password: str = _password_field(
        "Confirm New Password", "confirmNewPassword", "confirmnewpassword"
    )


class UserResponse(BaseModel):
    """A user record returned by the list and detail endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., examples=["3f2b9c7e5d1a4e6f8a0b1c2d3e4f5a6b"])
    name: str = Field(..., examples=["Alice"])
    email: str = Field(..., examples=["alice@example.com"])


class UserCreatedResponse(BaseModel):
    """Echo of a created user. The password is never returned."""

    name: str
    email: str


class UserIdResponse(BaseModel):
    """Identifier of the user an update, patch or delete applied to."""

    id: str
