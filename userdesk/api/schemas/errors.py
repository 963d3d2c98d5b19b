"""Error response schema shared by every failing request.

``kind`` carries the error kind (``VALIDATION_ERROR``, ``INVALID_PASSWORD``,
``EMAIL_ALREADY_TAKEN``, ``UNPROCESSABLE_ENTITY``, ``INVALID_CREDENTIALS`` or
``INTERNAL_ERROR``) and ``message`` the human-readable explanation.
``error_code`` repeats the kind. The remaining fields help correlate the
failure with server logs.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Identifies the service instance that produced an error."""

    name: str = Field(..., description="Name of the service", examples=["Userdesk"])
    version: str = Field(..., description="Version of the service", examples=["0.1.0"])
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    kind: str = Field(
        ...,
        description="Error kind identifying the failed rule",
        examples=["VALIDATION_ERROR", "EMAIL_ALREADY_TAKEN", "INVALID_PASSWORD"],
    )

    error_code: str = Field(
        ...,
        description="Same value as kind, kept for log and dashboard queries",
        examples=["VALIDATION_ERROR", "EMAIL_ALREADY_TAKEN", "INVALID_PASSWORD"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=['"Email" must be a valid email', "Passwords did not match"],
    )

    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details (e.g., field-specific validation errors)",
        examples=[{"validation_errors": {"email": ['"Email" must be a valid email']}}],
    )

    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )

    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW"],
    )

    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )

    request_id: str | None = Field(
        default=None,
        description="Unique identifier of this request",
        examples=["req-660e8400-e29b-41d4-a716-446655440000"],
    )

    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "kind": "VALIDATION_ERROR",
                    "error_code": "VALIDATION_ERROR",
                    "message": '"Password" length must be at least 6 characters long',
                    "details": {
                        "validation_errors": {
                            "password": [
                                '"Password" length must be at least 6 characters long'
                            ]
                        }
                    },
                    "timestamp": "2024-06-14T12:00:00+00:00",
                    "severity": "LOW",
                },
                {
                    "kind": "EMAIL_ALREADY_TAKEN",
                    "error_code": "EMAIL_ALREADY_TAKEN",
                    "message": "Email already taken",
                    "details": {"email": "alice@example.com"},
                    "timestamp": "2024-06-14T12:00:01+00:00",
                    "severity": "LOW",
                },
                {
                    "kind": "UNPROCESSABLE_ENTITY",
                    "error_code": "UNPROCESSABLE_ENTITY",
                    "message": "Unknown user",
                    "details": {"user_id": "3f2b9c7e5d1a4e6f8a0b1c2d3e4f5a6b"},
                    "timestamp": "2024-06-14T12:00:02+00:00",
                    "severity": "MEDIUM",
                },
            ]
        }
    }
