"""
A thin MongoDB layer for restposten.

    db = await connect({"name": "persistence_test"})
    authors = await db.get_collection("author", ["_id"])
    saved = await authors.save({"name": "pvorb"})
    found = await authors.find({"name": "pvorb"})
    await db.close()
"""

__version__ = "0.1.0"

from .collection import Collection
from .config import Config, resolve_connection_options
from .core import Database, connect
from .exceptions import ConnectionClosed, DatabaseError, MissingDatabaseName
from .options import ConnectionOptions, CountOptions, FindOptions, WriteOptions
from .utils import normalize_id

__all__ = [
    "connect",
    "Database",
    "Collection",
    "Config",
    "resolve_connection_options",
    "ConnectionOptions",
    "FindOptions",
    "CountOptions",
    "WriteOptions",
    "DatabaseError",
    "MissingDatabaseName",
    "ConnectionClosed",
    "normalize_id",
]
