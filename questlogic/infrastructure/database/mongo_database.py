"""
MongoDB Database - Infrastructure Layer

Thin wrapper over a pymongo client exposing the handful of operations the
event log needs: insert, conditional update and sorted scans.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pymongo.errors
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from questlogic.shared import get_logger

logger = get_logger(__name__)

SortSpec = Sequence[Tuple[str, int]]


class MongoDatabase:
    """MongoDB database client."""

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        events_collection: str = "prediction_events",
    ):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
            events_collection: Collection holding prediction events
        """
        # tz_aware so stored UTC timestamps come back with their offset
        self.client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        self.db: Database = self.client[db_name]
        self.events_collection = events_collection

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        return self.db[collection_name].find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find documents matching ``query``.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort: Ordered (field, direction) pairs
            skip: Number of documents to skip
            limit: Maximum number of documents, or None for no bound

        Returns:
            List of documents in cursor order
        """
        cursor = self.db[collection_name].find(query)

        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)

        return list(cursor)

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Insert a document into a collection.

        Raises:
            Exception: If the write is not acknowledged
        """
        result = self.db[collection_name].insert_one(document)
        if not result.acknowledged:
            raise Exception(f"Failed to insert document in {collection_name}")
        return document

    async def update_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        update: Dict[str, Any],
    ) -> int:
        """
        Apply ``update`` to the first document matching ``query``.

        The match and the write are a single server-side operation.

        Returns:
            Number of matched documents (0 or 1)
        """
        result = self.db[collection_name].update_one(query, update)
        if not result.acknowledged:
            raise Exception(f"Failed to update document in {collection_name}")
        return result.matched_count

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """Create the indexes used by event lookups and listings."""
        collection = self.db[self.events_collection]
        try:
            collection.create_index("id", name="event_id_idx", unique=True)
            collection.create_index(
                [("user_hash", ASCENDING), ("timestamp", DESCENDING)],
                name="user_timestamp_idx",
            )
            collection.create_index(
                [("timestamp", DESCENDING)], name="timestamp_idx"
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning(
                "mongo.indexes.create_failed",
                collection=self.events_collection,
                error=str(e),
            )
