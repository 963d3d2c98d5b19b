"""Error taxonomy for the Userdesk API.

Every failure a request can end in is one of a small, fixed set of error
kinds. Each kind has a dedicated exception class so the API boundary can map
it to an HTTP status without inspecting messages.

Key components:
- **ErrorCode enum**: The error kinds reported to clients
- **Severity enum**: Error classification for logging and alerting
- **UserdeskError**: Base exception with context and fingerprinting
- **Specialized exceptions**: One class per error kind

Handlers never raise these directly; they return them wrapped in ``Err`` and
the route layer raises them for the registered exception handlers.
"""

import hashlib
import traceback
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error kinds returned to API clients."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """The request body or path failed schema validation."""

    INVALID_PASSWORD = "INVALID_PASSWORD"
    """Password fields did not match, or the current password was wrong."""

    EMAIL_ALREADY_TAKEN = "EMAIL_ALREADY_TAKEN"
    """The email address is already registered to an account."""

    UNPROCESSABLE_ENTITY = "UNPROCESSABLE_ENTITY"
    """A domain rule failed: unknown user, or a service mutation failed."""

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    """The users service refused to change the password."""


class Severity(Enum):
    """Severity levels for errors.

    LOW and MEDIUM errors are caused by client input and are expected during
    normal operation. HIGH and CRITICAL errors point at a broken deployment.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class UserdeskError(Exception):
    """Base exception class for all Userdesk application exceptions.

    Args:
        error_code: Unique identifier for the error kind (string or ErrorCode)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        # Capture stack trace at creation time, excluding this frame
        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Generate a fingerprint for error grouping.

        The hash combines the error class, its code and the application frames
        closest to where the error was created.

        Returns:
            str: A 16 character hex digest
        """
        max_frames = 5
        relevant_frames = self.stack_trace[-max_frames:]

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"
        for frame in relevant_frames:
            if "site-packages" not in frame and "userdesk/" in frame:
                lines = frame.strip().split("\n")
                if lines:
                    fingerprint_data += f":{lines[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether the error is a normal outcome of bad client input."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(UserdeskError):
    """Raised when a request fails schema validation.

    Args:
        message: Field-labeled description of the first violation
        context: Additional context, usually the per-field error listing
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.VALIDATION_ERROR, message, Severity.LOW, context, cause
        )


class InvalidPasswordError(UserdeskError):
    """Raised when password fields disagree or the current password is wrong."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.INVALID_PASSWORD, message, Severity.LOW, context, cause
        )


class EmailAlreadyTakenError(UserdeskError):
    """Raised when an email address is already registered."""

    def __init__(
        self,
        message: str = "Email already taken",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.EMAIL_ALREADY_TAKEN, message, Severity.LOW, context, cause
        )


class UnprocessableEntityError(UserdeskError):
    """Raised when a domain rule fails.

    Covers unknown users and create/update/delete calls the users service
    reported as failed.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.UNPROCESSABLE_ENTITY, message, Severity.MEDIUM, context, cause
        )


class InvalidCredentialsError(UserdeskError):
    """Raised when the users service refuses a password change."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.INVALID_CREDENTIALS, message, Severity.MEDIUM, context, cause
        )
