"""Root conftest.py for the Userdesk test suite.

Project-wide fixtures: environment isolation and settings cache resets.
"""

import os
from collections.abc import Generator

import pytest

from userdesk.core.config import get_settings
from userdesk.core.context import RequestContext
from userdesk.core.error_context import _get_sensitive_fields

APP_ENV_PREFIXES = (
    "APP_",
    "API_",
    "ENVIRONMENT",
    "DEBUG",
    "DOCS_URL",
    "REDOC_URL",
    "OPENAPI_URL",
    "LOG_CONFIG__",
    "OBSERVABILITY_CONFIG__",
    "K_SERVICE",
    "AWS_EXECUTION_ENV",
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch]:
    """Remove application env vars and disable tracing for every test."""
    for key in list(os.environ):
        if key.startswith(APP_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OBSERVABILITY_CONFIG__ENABLE_TRACING", "false")

    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def production_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Simulate a production deployment.

    Args:
        monkeypatch: Pytest monkeypatch fixture for environment manipulation.
    """
    get_settings.cache_clear()
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_CONFIG__LOG_FORMATTER_TYPE", "json")
    yield
    get_settings.cache_clear()
