"""
Best-effort index creation for collections handed out by a Database.

Index builds run as background tasks. Nobody awaits them on the way to the
caller, and their failures are logged and dropped.
"""

import asyncio
import logging
from typing import Any, List, Mapping, Sequence, Set, Tuple, Union

import pymongo
from motor.motor_asyncio import AsyncIOMotorCollection

IndexSpec = Union[str, Mapping[str, Any], Sequence[Tuple[str, Any]]]


def index_keys(index: IndexSpec) -> List[Tuple[str, Any]]:
    """
    Turn an index spec into the key list create_index expects.

    'created'             -> [('created', 1)]
    {'created': -1}       -> [('created', -1)]
    [('a', 1), ('b', -1)] -> unchanged
    """
    if isinstance(index, str):
        return [(index, pymongo.ASCENDING)]
    if isinstance(index, Mapping):
        if not index:
            raise ValueError("Index mapping must name at least one field")
        return list(index.items())
    keys = [tuple(key) for key in index]
    if not keys:
        raise ValueError("Index key list must name at least one field")
    return keys


class IndexBuilder:
    """Spawns index builds without a join point and keeps them alive until done"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def ensure(self, collection: AsyncIOMotorCollection, indexes: Sequence[IndexSpec]) -> None:
        """Start one create_index request per entry and return immediately"""
        loop = asyncio.get_running_loop()
        for index in indexes:
            task = loop.create_task(self._create(collection, index))
            self._pending.add(task)
            task.add_done_callback(self._finished)

    async def _create(self, collection: AsyncIOMotorCollection, index: IndexSpec) -> None:
        try:
            name = await collection.create_index(index_keys(index))
        except Exception as e:
            # index errors are not observable by callers of get_collection
            self.logger.warning(f"Could not ensure index {index!r} on {collection.name}: {e}")
            return
        self.logger.info(f"Ensured index {name} on {collection.name}")

    def _finished(self, task: asyncio.Task) -> None:
        self._pending.discard(task)

    async def wait(self) -> None:
        """Wait for every build still in flight; failures were already logged"""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def cancel(self) -> None:
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()
