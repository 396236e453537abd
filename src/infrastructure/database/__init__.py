"""
Database package - Infrastructure Layer

This package contains database-related implementations for the device
registry. It provides the MongoDB client wrapper used by the device store.
"""

from src.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
