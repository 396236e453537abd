"""
Logging Configuration - Shared Layer

Structured logging for the device registry. Standard library records and
structlog events share a single ``ProcessorFormatter`` so that third-party
libraries (uvicorn, pymongo, redis) and our own dotted events are rendered
the same way, with the request ``trace_id`` merged from contextvars.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from src.shared.consts import EnumEnvironment

DEFAULT_LOG_LEVEL = "INFO"


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = EnumEnvironment.DEVELOPMENT.value,
) -> None:
    """
    Configure stdlib logging and structlog.

    Called once at import time with environment-variable defaults and again
    after settings are loaded (see ``update_logging_from_settings``).

    Args:
        level: Log level name; falls back to ``LOG_LEVEL`` then INFO.
        file_path: Optional log file; falls back to ``LOG_FILE_PATH``.
        environment: Deployment environment; production renders JSON.
    """
    log_level = level or os.environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    get_logger(__name__).debug(
        "logging.configured", level=log_level.upper(), file_path=log_file
    )


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: ``AppSettings`` (or any object exposing ``logging.level``,
            ``logging.file_path`` and ``environment``).
    """
    try:
        level = getattr(settings.logging.level, "value", settings.logging.level)
        environment = getattr(settings.environment, "value", settings.environment)
        configure_logging(
            level=level,
            file_path=settings.logging.file_path,
            environment=environment,
        )
    except AttributeError as exc:
        logging.getLogger(__name__).error(
            "Failed to update logging from settings: %s", exc
        )


def bind_request_context(**values: Any) -> None:
    """Bind values (e.g. ``trace_id``) to every log event of the current task."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
