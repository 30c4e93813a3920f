"""
Connection management: connect() and the Database handle it returns.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .collection import Collection
from .config import resolve_connection_options
from .exceptions import ConnectionClosed
from .indexes import IndexBuilder, IndexSpec
from .options import ConnectionOptions


async def connect(options: Union[ConnectionOptions, Mapping[str, Any], None] = None) -> 'Database':
    """
    Connect to a MongoDB database.

    Args:
        options: host (default 'localhost'), port (default 27017), name of the
                 database (required here or in Config), plus any MongoClient
                 option. Writes are always acknowledged.

    Returns:
        An open Database handle

    Raises:
        MissingDatabaseName: no database name was given or configured
        pymongo.errors.PyMongoError: the server could not be reached
    """
    resolved = resolve_connection_options(options)
    client = AsyncIOMotorClient(resolved.host, resolved.port, **resolved.client_kwargs())

    try:
        await client.admin.command('ping')
    except Exception as e:
        logging.error(f"MongoDatabase: Failed to connect to {resolved.host}:{resolved.port}: {e}")
        client.close()
        raise

    logging.info(f"MongoDatabase: Connected to {resolved.name} on {resolved.host}:{resolved.port}")
    return Database(client, client[resolved.name])


class Database:
    """Thin wrapper around a Motor database; only hands out collections and closes"""

    def __init__(self, client: AsyncIOMotorClient, db: AsyncIOMotorDatabase):
        self._client = client
        self._db = db
        self._closed = False
        self.indexes = IndexBuilder()

    @property
    def name(self) -> str:
        return self._db.name

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConnectionClosed(self.name)

    async def get_collection(self, name: str, indexes: Optional[Sequence[IndexSpec]] = None) -> Collection:
        """
        Create or get a collection and ensure the given indexes exist.

        Index builds are started in the background and not awaited; failures are
        logged and dropped. Use wait_for_indexes() to sequence on them.

        Args:
            name: Collection name
            indexes: e.g. ['id', {'created': -1}]
        """
        self._ensure_open()
        coll = self._db[name]

        if indexes:
            self.indexes.ensure(coll, indexes)

        return Collection(name, coll)

    async def wait_for_indexes(self) -> None:
        """Wait for background index builds; never raises their errors"""
        await self.indexes.wait()

    async def close(self, force: bool = False) -> None:
        """
        Close the connection.

        Args:
            force: mark the handle as closed for good so it can not be reused
        """
        self._ensure_open()
        self.indexes.cancel()
        self._client.close()
        if force:
            self._closed = True
        logging.info(f"MongoDatabase: Connection to {self.name} closed")
