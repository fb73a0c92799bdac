"""
Storage Manager for the VideoHub service.

Owns the MongoDB client. The connection is opened once at application
startup and closed at shutdown; repositories receive this manager instead of
reaching for a module-level client.
"""

import logging
from typing import Optional, Dict, Any

from pymongo import AsyncMongoClient, ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from ..core.config import Config


class StorageManager:
    """Manages the document database connection and collections"""

    def __init__(self, config: Config, client: Optional[AsyncMongoClient] = None):
        self.config = config
        self.database_config = config.database
        self.logger = logging.getLogger(__name__)

        self._client: Optional[AsyncMongoClient] = client
        self._database: Optional[AsyncDatabase] = None

    async def connect(self) -> None:
        """Open the client, verify the server and ensure indexes"""
        if self._database is not None:
            return

        if self._client is None:
            self._client = AsyncMongoClient(
                self.database_config.uri,
                serverSelectionTimeoutMS=self.database_config.server_selection_timeout_ms,
                tz_aware=True,
            )

        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            self.logger.error(f"MongoDB connection failed: {e}")
            raise

        self._database = self._client[self.database_config.name]
        self.logger.info(f"MongoDB connected, database: {self.database_config.name}")

        await self.ensure_indexes()

    async def close(self) -> None:
        """Close the client"""
        if self._client is None:
            return

        await self._client.close()
        self._client = None
        self._database = None
        self.logger.info("MongoDB connection closed")

    def is_connected(self) -> bool:
        return self._database is not None

    def get_collection(self, name: str) -> AsyncCollection:
        """Get a collection from the open database"""
        if self._database is None:
            raise RuntimeError("Storage manager is not connected")
        return self._database[name]

    async def ensure_indexes(self) -> None:
        """Create the indexes the list query relies on"""
        videos = self.get_collection(self.database_config.videos_collection)
        try:
            await videos.create_index([("owner", ASCENDING)])
            await videos.create_index([("isPublished", ASCENDING), ("createdAt", DESCENDING)])
            self.logger.debug("Video indexes ensured")
        except PyMongoError as e:
            self.logger.warning(f"Could not create video indexes: {e}")

    async def get_status(self) -> Dict[str, Any]:
        """Connection status for health checks"""
        status = {"backend": "mongodb", "database": self.database_config.name, "connected": False}
        if self._client is None or self._database is None:
            return status

        try:
            await self._client.admin.command("ping")
            status["connected"] = True
        except PyMongoError as e:
            status["error"] = str(e)
        return status
