"""Main entry point for running the Userdesk FastAPI application."""

import os

import uvicorn
from loguru import logger

from userdesk.api.main import app
from userdesk.core.config import get_settings
from userdesk.core.logging import setup_logging

# Route uvicorn's own loggers through Loguru
UVICORN_LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "default": {"class": "userdesk.core.logging.InterceptHandler"},
    },
    "loggers": {
        name: {"handlers": ["default"], "level": "INFO", "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    },
}


def main() -> None:
    """Main entry point for the Userdesk application."""
    settings = get_settings()
    setup_logging(settings)

    # Cloud Run and similar platforms pass the listening port in PORT
    port = int(os.environ.get("PORT", settings.api_port))

    if settings.debug:
        logger.info(
            f"Starting Uvicorn on http://{settings.api_host}:{port} "
            "(development mode with auto-reload)"
        )
        # Reload needs the app as an import string
        uvicorn.run(
            "userdesk.api.main:app",
            host=settings.api_host,
            port=port,
            reload=True,
            log_config=UVICORN_LOG_CONFIG,
        )
    else:
        logger.info(
            f"Starting Uvicorn on http://{settings.api_host}:{port} (production mode)"
        )
        uvicorn.run(
            app,
            host=settings.api_host,
            port=port,
            reload=False,
            log_config=UVICORN_LOG_CONFIG,
        )


if __name__ == "__main__":
    main()
