"""Explicit success/failure values for request pipelines.

Validation and handler steps return ``Ok`` or ``Err`` instead of raising, so
every failure path is visible in the signature. Pipelines short-circuit with
an early ``return`` on the first ``Err``; only the HTTP boundary turns an
``Err`` back into an exception via ``unwrap``.

Example:
    >>> match await create_user(service, payload):
    ...     case Ok(value):
    ...         return value
    ...     case Err(error):
    ...         raise error
"""

from dataclasses import dataclass
from typing import Never

from userdesk.core.exceptions import UserdeskError


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful step carrying its value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E: UserdeskError]:
    """A failed step carrying the error that ended the pipeline."""

    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Never:
        """Raise the carried error.

        Raises:
            UserdeskError: Always.
        """
        raise self.error


type Result[T] = Ok[T] | Err[UserdeskError]
