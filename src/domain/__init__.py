"""
Domain Layer Package

This package contains the core business rules of the device registry.
It defines entities, repository contracts, ports and services without
dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from src.domain import entities, ports, repositories, services

__all__ = ["entities", "repositories", "services", "ports"]
