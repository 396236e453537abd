"""
MongoDB Database - Infrastructure Layer

This module provides a MongoDB database client for interacting with MongoDB.
It handles connection, collections, and basic CRUD operations.
"""

from typing import Any, Dict, List, Optional

import pymongo
import pymongo.errors
from pymongo import MongoClient
from pymongo.database import Database

from src.shared import get_logger

logger = get_logger(__name__)

DEVICES_COLLECTION = "devices"

_DEVICE_INDEXES = (
    ("created_at", pymongo.DESCENDING, "created_at_idx"),
    ("brand", pymongo.ASCENDING, "brand_idx"),
    ("state", pymongo.ASCENDING, "state_idx"),
)


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        self.db: Database = self.client[db_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents

        Returns:
            The document if found, None otherwise
        """
        return self.db[collection_name].find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field to sort by
            sort_direction: Sort direction (1 for ascending, -1 for descending)

        Returns:
            List of documents
        """
        cursor = self.db[collection_name].find(query)

        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)

        return list(cursor)

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Insert a document into a collection.

        Args:
            collection_name: Name of the collection
            document: Document to insert

        Returns:
            The inserted document with any generated fields

        Raises:
            Exception: If the insert fails
        """
        result = self.db[collection_name].insert_one(document)
        if not result.acknowledged:
            raise Exception(f"Failed to insert document in {collection_name}")
        return document

    async def replace_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        document: Dict[str, Any],
        upsert: bool = False,
    ) -> Dict[str, Any]:
        """
        Replace a document in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match document to replace
            document: New document
            upsert: Insert the document when nothing matches the query

        Returns:
            The new document

        Raises:
            Exception: If the document does not exist (without upsert) or the
                replace fails
        """
        result = self.db[collection_name].replace_one(query, document, upsert=upsert)
        if not upsert and result.matched_count == 0:
            raise Exception(f"Document not found in {collection_name}")
        if not result.acknowledged:
            raise Exception(f"Failed to replace document in {collection_name}")
        return document

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> None:
        """
        Delete a document from a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match document to delete

        Raises:
            Exception: If the document does not exist or the delete fails
        """
        result = self.db[collection_name].delete_one(query)
        if result.deleted_count == 0:
            raise Exception(f"Document not found in {collection_name}")
        if not result.acknowledged:
            raise Exception(f"Failed to delete document in {collection_name}")

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    def _safe_drop_index(self, collection_name: str, index_name: str) -> None:
        """
        Safely drop an index if it exists.

        Args:
            collection_name: Name of the collection
            index_name: Name of the index to drop
        """
        try:
            self.db[collection_name].drop_index(index_name)
        except pymongo.errors.OperationFailure:
            # Index doesn't exist, nothing to do
            pass

    async def create_indexes(self) -> None:
        """
        Create all necessary indexes for the application.
        This is an async method to be called during application startup.
        """
        collection = self.db[DEVICES_COLLECTION]

        for _, _, index_name in _DEVICE_INDEXES:
            self._safe_drop_index(DEVICES_COLLECTION, index_name)

        try:
            collection.create_index("id", name="id_idx", unique=True)
            for field, direction, index_name in _DEVICE_INDEXES:
                collection.create_index([(field, direction)], name=index_name)
        except pymongo.errors.OperationFailure as exc:
            logger.warning(
                "mongo.indexes.create_failed",
                collection=DEVICES_COLLECTION,
                error=str(exc),
            )
        else:
            logger.info("mongo.indexes.created", collection=DEVICES_COLLECTION)
