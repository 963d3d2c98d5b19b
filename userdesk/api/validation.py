"""Schema validation gate for request bodies.

``validate_payload`` is a pure function from raw decoded JSON to either the
typed request model or a ``ValidationError`` describing every violated field.
The error message names the first violation by its field label, for example
``"Confirm Password" length must be at least 6 characters long``; the
``validation_errors`` mapping in the error context lists all of them.

Routes get validated bodies through the ``validated_body`` dependency, which
raises the error so the registered exception handler renders it. Handler
semantic checks therefore never see a malformed payload.
"""

from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

import orjson
from fastapi import Request
from pydantic import AliasChoices, BaseModel
from pydantic import ValidationError as PydanticValidationError

from userdesk.core.exceptions import ValidationError
from userdesk.core.result import Err, Ok, Result

ROOT_FIELD = "root"


def _field_names(schema: type[BaseModel]) -> dict[str, tuple[str, str]]:
    """Map every accepted key of ``schema`` to its public name and label."""
    names: dict[str, tuple[str, str]] = {}
    for name, info in schema.model_fields.items():
        keys = [name]
        alias = info.validation_alias
        if isinstance(alias, AliasChoices):
            keys = [choice for choice in alias.choices if isinstance(choice, str)]
            keys.append(name)
        elif isinstance(alias, str):
            keys = [alias, name]

        public = keys[0]
        label = info.title or public
        for key in keys:
            names[key] = (public, label)
    return names


def describe_error(error: Mapping[str, Any], label: str) -> str:
    """Render one pydantic error as a field-labeled sentence.

    Args:
        error: A single entry of ``ValidationError.errors()``.
        label: Human-readable name of the offending field.

    Returns:
        str: The message shown to API clients.
    """
    ctx = error.get("ctx") or {}
    match error.get("type"):
        case "missing":
            return f'"{label}" is required'
        case "string_too_short" if ctx.get("min_length") == 1:
            return f'"{label}" is not allowed to be empty'
        case "string_too_short":
            return (
                f'"{label}" length must be at least {ctx.get("min_length")} '
                "characters long"
            )
        case "string_too_long":
            return (
                f'"{label}" length must be less than or equal to '
                f'{ctx.get("max_length")} characters long'
            )
        case "string_pattern_mismatch":
            return f'"{label}" is not allowed to be blank'
        case "string_type":
            return f'"{label}" must be a string'
        case "value_error" if "email" in str(error.get("msg", "")):
            return f'"{label}" must be a valid email'
        case "model_type" | "model_attributes_type" | "dict_type":
            return '"value" must be of type object'
        case _:
            return f'"{label}" {error.get("msg", "is invalid")}'


def build_validation_error(
    errors: Iterable[Mapping[str, Any]],
    names: Mapping[str, tuple[str, str]] | None = None,
    loc_offset: int = 0,
) -> ValidationError:
    """Collect pydantic errors into a single ``ValidationError``.

    Args:
        errors: Errors as returned by pydantic or FastAPI.
        names: Accepted key to (public name, label) mapping of the schema.
        loc_offset: Number of leading ``loc`` entries to skip, e.g. 1 to drop
            the ``"path"``/``"query"`` prefix FastAPI adds.

    Returns:
        ValidationError: Error whose message describes the first violation.
    """
    names = names or {}
    field_errors: dict[str, list[str]] = {}
    first_message: str | None = None

    for error in errors:
        loc = [str(part) for part in error.get("loc", ())[loc_offset:]]
        key = loc[0] if loc else ROOT_FIELD
        public, label = names.get(key, (key, key))
        if len(loc) > 1:
            public = ".".join([public, *loc[1:]])

        message = describe_error(error, label)
        field_errors.setdefault(public, []).append(message)
        if first_message is None:
            first_message = message

    return ValidationError(
        first_message or "Request validation failed",
        context={"validation_errors": field_errors},
    )


def validate_payload[M: BaseModel](schema: type[M], raw: object) -> Result[M]:
    """Check ``raw`` against ``schema``.

    Args:
        schema: Request model of the operation.
        raw: Decoded JSON body.

    Returns:
        Result[M]: ``Ok`` with the typed payload, or ``Err`` with a
            ``ValidationError`` listing every violated field.
    """
    try:
        return Ok(schema.model_validate(raw))
    except PydanticValidationError as exc:
        return Err(
            build_validation_error(
                exc.errors(include_url=False, include_input=False),
                _field_names(schema),
            )
        )


def validated_body[M: BaseModel](
    schema: type[M],
) -> Callable[[Request], Awaitable[M]]:
    """Build a FastAPI dependency that runs the gate on the request body.

    Args:
        schema: Request model of the operation.

    Returns:
        Callable[[Request], Awaitable[M]]: Dependency yielding the typed body.
    """

    async def dependency(request: Request) -> M:
        body = await request.body()
        try:
            raw = orjson.loads(body) if body.strip() else {}
        except orjson.JSONDecodeError as exc:
            raise ValidationError(
                "Request body must be valid JSON",
                context={"validation_errors": {ROOT_FIELD: [str(exc)]}},
                cause=exc,
            ) from exc
        return validate_payload(schema, raw).unwrap()

    return dependency


def body_openapi(schema: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI ``requestBody`` for routes reading their body via the gate."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }
