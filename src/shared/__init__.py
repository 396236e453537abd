"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the device registry service.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, cache backends)
- Configuring structured logging and request-scoped log context
- Resolving Docker-style secret files into environment variables

It must not depend on Domain, Application, Infrastructure or Frameworks.
"""

from .consts import EnumCacheBackend, EnumEnvironment, EnumLogLevel, TRACE_ID_HEADER
from .logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

__all__ = [
    "EnumCacheBackend",
    "EnumEnvironment",
    "EnumLogLevel",
    "TRACE_ID_HEADER",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
