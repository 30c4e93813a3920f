"""
Thin wrapper around a Motor collection.

Each operation issues exactly one driver request. Hex string ids are turned
into ObjectIds first and writes always wait for acknowledgement. Driver
errors are not caught here.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import WriteConcern

from .options import CountOptions, FindOptions, WriteOptions
from .utils import ID_FIELD, force_acknowledged, normalize_id

Document = Dict[str, Any]
Projection = Union[Sequence[str], Mapping[str, Any], None]
OptionsArg = Union[Mapping[str, Any], None]


class Collection:
    """
    A named collection of documents.

    Removing whole collections is not supported through this class and has
    to be done with the mongo shell.
    """

    def __init__(self, name: str, collection: AsyncIOMotorCollection):
        self._name = name
        self._coll = collection

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Collection({self._name!r})"

    def _acknowledged(self, options: WriteOptions) -> AsyncIOMotorCollection:
        concern = force_acknowledged(options.write_concern_kwargs())
        return self._coll.with_options(write_concern=WriteConcern(**concern))

    async def find(
        self,
        query: Document,
        fields: Projection = None,
        options: Union[FindOptions, OptionsArg] = None
    ) -> List[Document]:
        """
        Find all documents matching query.

        Args:
            query: Filter document; a hex string ``_id`` is searched as ObjectId
            fields: Projection, e.g. ["name"] or {"name": 1}; None returns whole documents
            options: Sort, skip, limit and any other find() option

        Returns:
            Every matching document, in the order the server returns them
        """
        normalize_id(query)
        kwargs = FindOptions.coerce(options).to_kwargs()
        cursor = self._coll.find(query, fields, **kwargs)
        return await cursor.to_list(length=None)

    async def find_one(
        self,
        query: Document,
        fields: Projection = None,
        options: Union[FindOptions, OptionsArg] = None
    ) -> Optional[Document]:
        """Find the first document matching query, or None"""
        normalize_id(query)
        kwargs = FindOptions.coerce(options).to_kwargs()
        return await self._coll.find_one(query, fields, **kwargs)

    async def save(
        self,
        record: Document,
        options: Union[WriteOptions, OptionsArg] = None
    ) -> Union[Document, int]:
        """
        Insert record, or overwrite the document with the same ``_id`` completely.

        Without an ``_id`` the record is inserted, gets a generated ObjectId and
        is returned. With an ``_id`` it replaces (or upserts) the stored document
        and the number of affected documents is returned.
        """
        opts = WriteOptions.coerce(options)
        normalize_id(record)
        coll = self._acknowledged(opts)
        # save decides between insert and upsert itself
        kwargs = opts.to_kwargs()
        kwargs.pop("upsert", None)

        if record.get(ID_FIELD) is None:
            record.pop(ID_FIELD, None)
            await coll.insert_one(record, **kwargs)
            return record

        result = await coll.replace_one({ID_FIELD: record[ID_FIELD]}, record, upsert=True, **kwargs)
        return result.matched_count + (1 if result.upserted_id is not None else 0)

    async def update(
        self,
        criteria: Document,
        record: Document,
        options: Union[WriteOptions, OptionsArg] = None
    ) -> int:
        """
        Replace the document matching criteria with record. This is not a merge:
        fields missing from record are gone afterwards.

        Returns:
            Number of matched documents
        """
        opts = WriteOptions.coerce(options)
        normalize_id(criteria)
        normalize_id(record)
        result = await self._acknowledged(opts).replace_one(criteria, record, **opts.to_kwargs())
        return result.matched_count

    async def delete(
        self,
        query: Document,
        options: Union[WriteOptions, OptionsArg] = None
    ) -> int:
        """Delete all documents matching query and return how many were removed"""
        opts = WriteOptions.coerce(options)
        normalize_id(query)
        result = await self._acknowledged(opts).delete_many(query, **opts.to_kwargs())
        return result.deleted_count

    async def count(
        self,
        query: Optional[Document] = None,
        options: Union[CountOptions, OptionsArg] = None
    ) -> int:
        """Count documents matching query; all documents when query is None"""
        query = normalize_id(query if query is not None else {})
        kwargs = CountOptions.coerce(options).to_kwargs()
        return await self._acknowledged(WriteOptions()).count_documents(query, **kwargs)
