"""
Server Entry Point - Main Layer

Runs the FastAPI application with uvicorn using the configured host,
port and reload flag.
"""

import uvicorn

from src.main.config import get_settings
from src.shared import configure_logging, get_logger, update_logging_from_settings

logger = get_logger(__name__)


def main() -> None:
    """Start the HTTP server."""
    settings = get_settings()

    configure_logging()
    update_logging_from_settings(settings)

    logger.info(
        "server.starting",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        environment=settings.environment.value,
    )

    uvicorn.run(
        "src.main.app:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
