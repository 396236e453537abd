"""
Presentation Layer Package

This package contains the presentation layer components,
which are responsible for handling HTTP requests and responses:
the FastAPI routers and the request tracing middleware.
"""

from src.presentation import controllers, middlewares

__all__ = ["controllers", "middlewares"]
