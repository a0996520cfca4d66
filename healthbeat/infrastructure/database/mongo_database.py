"""
MongoDB Database - Infrastructure Layer

Thin wrapper around a pymongo client used by the catalog and result
repositories.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pymongo
import pymongo.errors
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from healthbeat.shared import get_logger

logger = get_logger(__name__)

SERVICE_DEFINITIONS = "service_definitions"
DATABASE_CONNECTIONS = "database_connections"
HEALTH_CHECK_RESULTS = "health_check_results"

IndexKeys = Union[str, Sequence[Tuple[str, int]]]

_INDEXES: Dict[str, List[Tuple[IndexKeys, str]]] = {
    SERVICE_DEFINITIONS: [
        ("id", "service_id_idx"),
        ("check_type", "check_type_idx"),
    ],
    DATABASE_CONNECTIONS: [
        ("id", "connection_id_idx"),
    ],
    HEALTH_CHECK_RESULTS: [
        (
            [("service_definition_id", pymongo.ASCENDING), ("checked_at", pymongo.DESCENDING)],
            "service_checked_at_idx",
        ),
    ],
}


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Return the first document matching ``query`` or None."""
        return self.db[collection_name].find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field to sort by
            sort_direction: 1 for ascending, -1 for descending
            skip: Number of documents to skip
            limit: Maximum number of documents, 0 for no limit

        Returns:
            List of documents
        """
        cursor = self.db[collection_name].find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        cursor = cursor.skip(skip).limit(limit)
        return list(cursor)

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Insert a document.

        Raises:
            Exception: If the write is not acknowledged
        """
        result = self.db[collection_name].insert_one(document)
        if not result.acknowledged:
            raise Exception(f"Failed to insert document in {collection_name}")
        return document

    async def replace_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Replace the document matching ``query``.

        Raises:
            Exception: If nothing matched or the write is not acknowledged
        """
        result = self.db[collection_name].replace_one(query, document)
        if result.matched_count == 0:
            raise Exception(f"Document not found in {collection_name}")
        if not result.acknowledged:
            raise Exception(f"Failed to replace document in {collection_name}")
        return document

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> None:
        """
        Delete the document matching ``query``.

        Raises:
            Exception: If nothing matched or the write is not acknowledged
        """
        result = self.db[collection_name].delete_one(query)
        if result.deleted_count == 0:
            raise Exception(f"Document not found in {collection_name}")
        if not result.acknowledged:
            raise Exception(f"Failed to delete document in {collection_name}")

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """Create the indexes used by the repositories. Called at startup."""
        for collection_name, indexes in _INDEXES.items():
            for keys, name in indexes:
                try:
                    self.db[collection_name].create_index(keys, name=name)
                except pymongo.errors.OperationFailure as e:
                    logger.warning(
                        "mongo.index.create_failed",
                        collection=collection_name,
                        index=name,
                        error=str(e),
                    )
