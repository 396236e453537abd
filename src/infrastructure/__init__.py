"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the MongoDB store,
the Redis cache and dependency health checks.
"""

from src.infrastructure import cache, database, repositories, services

__all__ = ["cache", "database", "repositories", "services"]
