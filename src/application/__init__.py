"""
Application Layer Package

This package contains the application-specific business rules: the
device registry that coordinates cache and store, the use cases exposed
to the API and the DTOs they exchange.
"""

# Re-export submodules
from src.application import dtos, models, services, use_cases

__all__ = ["dtos", "use_cases", "models", "services"]
