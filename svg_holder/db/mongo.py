"""MongoDB connection lifecycle."""

import asyncio
import logging
from enum import Enum
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from svg_holder.exceptions import NotConnectedError, StoreConnectionError

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """States of the managed connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSING = "closing"


class MongoManager:
    """Owns the single MongoDB client used by the process.

    The manager moves through ``DISCONNECTED -> CONNECTING -> CONNECTED ->
    CLOSING -> DISCONNECTED``. Only :meth:`connect` is valid while
    disconnected, and a database handle is only handed out while connected.
    The driver's own connection pool is shared by all request tasks.
    """

    def __init__(self, timeout_ms: int = 10000):
        self.timeout_ms = timeout_ms
        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None
        self._state = ConnectionState.DISCONNECTED
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def _create_client(self, uri: str) -> AsyncMongoClient:
        return AsyncMongoClient(
            uri,
            serverSelectionTimeoutMS=self.timeout_ms,
            connectTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )

    async def connect(self, uri: str, db_name: str) -> AsyncDatabase:
        """Open the client and verify the server answers a ping.

        Calling this again while connected returns the existing handle.

        Raises:
            StoreConnectionError: If the server is unreachable, the URI is
                invalid or the credentials are rejected within the timeout.
        """
        async with self._lock:
            if self._state is ConnectionState.CONNECTED:
                return self._database

            self._state = ConnectionState.CONNECTING
            client = None
            try:
                client = self._create_client(uri)
                await client.admin.command("ping")
            except PyMongoError as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                if client is not None:
                    await self._close_client(client)
                self._state = ConnectionState.DISCONNECTED
                raise StoreConnectionError(f"Failed to connect to MongoDB: {e}") from e

            self._client = client
            self._database = client[db_name]
            self._state = ConnectionState.CONNECTED
            logger.info(f"Connected to MongoDB database '{db_name}'")
            return self._database

    def get_database(self) -> AsyncDatabase:
        """Return the active database handle.

        Raises:
            NotConnectedError: If :meth:`connect` has not completed.
        """
        if self._state is not ConnectionState.CONNECTED or self._database is None:
            raise NotConnectedError()
        return self._database

    def get_collection(self, name: str) -> AsyncCollection:
        return self.get_database()[name]

    async def ping(self) -> None:
        """Round-trip a ping to the server."""
        database = self.get_database()
        await database.command("ping")

    async def close(self) -> None:
        """Release the client. Repeated calls are no-ops."""
        async with self._lock:
            if self._state is not ConnectionState.CONNECTED:
                return

            self._state = ConnectionState.CLOSING
            client = self._client
            self._client = None
            self._database = None
            try:
                await self._close_client(client)
            finally:
                self._state = ConnectionState.DISCONNECTED
            logger.info("MongoDB connection closed")

    async def _close_client(self, client: AsyncMongoClient) -> None:
        try:
            await client.close()
        except Exception as e:
            logger.error(f"Error while closing MongoDB client: {e}", exc_info=True)
