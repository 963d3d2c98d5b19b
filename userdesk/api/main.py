"""FastAPI application factory.

``create_app`` wires configuration, logging, tracing, exception handlers,
middleware and routers together. Middleware run in reverse order of
registration, so the security headers middleware sees every response last.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI
from loguru import logger

from userdesk.api.middleware.error_handler import register_exception_handlers
from userdesk.api.middleware.request_context import RequestContextMiddleware
from userdesk.api.middleware.request_logging import RequestLoggingMiddleware
from userdesk.api.middleware.security_headers import SecurityHeadersMiddleware
from userdesk.api.routes.users import router as users_router
from userdesk.api.utils.responses import ORJSONResponse
from userdesk.core.config import Settings, get_settings
from userdesk.core.logging import setup_logging
from userdesk.core.observability import instrument_app, setup_tracing
from userdesk.domain.users import UsersService
from userdesk.infrastructure.users import InMemoryUsersService


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Control while the application serves requests.
    """
    logger.info(
        "Application startup complete - {} v{} ({})",
        app_instance.title,
        app_instance.version,
        type(app_instance.state.users_service).__name__,
    )
    yield
    logger.info("Application shutdown complete")


def create_app(
    settings: Settings | None = None,
    users_service: UsersService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. Defaults to get_settings().
        users_service: Backend the users endpoints delegate to. Defaults to a
            fresh InMemoryUsersService.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    if users_service is None:
        users_service = InMemoryUsersService()
    application.state.users_service = users_service

    # Exception handlers BEFORE middleware
    register_exception_handlers(application)

    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(SecurityHeadersMiddleware)

    application.include_router(users_router)

    @application.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning a welcome message."""
        return {"message": f"Hello from {settings.app_name}!"}

    @application.get("/health")
    async def health() -> dict[str, str]:
        """Liveness endpoint for container orchestration and load balancers."""
        return {"status": "healthy"}

    @application.get("/info")
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        """Get application name, version and environment."""
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
        }

    instrument_app(application, settings)

    return application


app = create_app()
