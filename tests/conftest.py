"""
In-memory stand-ins for the Motor client, database and collection objects.

They implement just enough of the driver surface for the wrapper: equality
matching on top level fields, list or mapping projections, and result objects
carrying the counts the wrapper reads.
"""

import copy
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import InvalidName

from restposten_mongodb import Config
from restposten_mongodb import core


def _matches(doc: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    return all(doc.get(key) == value for key, value in (query or {}).items())


def _project(doc: Dict[str, Any], projection) -> Dict[str, Any]:
    if not projection:
        return copy.deepcopy(doc)
    fields = list(projection.keys()) if isinstance(projection, dict) else list(projection)
    return {key: copy.deepcopy(value) for key, value in doc.items() if key in fields or key == "_id"}


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """Mock MongoDB collection"""

    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.write_concerns = []
        self.calls = []
        self.create_index = AsyncMock(side_effect=lambda keys, **kwargs: "_".join(f"{k}_{v}" for k, v in keys))

    def with_options(self, write_concern=None):
        self.write_concerns.append(write_concern)
        return self

    def find(self, query, projection=None, **kwargs):
        self.calls.append(("find", query, projection, kwargs))
        found = [_project(doc, projection) for doc in self.docs if _matches(doc, query)]
        skip = kwargs.get("skip") or 0
        limit = kwargs.get("limit") or None
        found = found[skip:]
        return FakeCursor(found[:limit] if limit else found)

    async def find_one(self, query, projection=None, **kwargs):
        self.calls.append(("find_one", query, projection, kwargs))
        for doc in self.docs:
            if _matches(doc, query):
                return _project(doc, projection)
        return None

    async def insert_one(self, document, **kwargs):
        self.calls.append(("insert_one", document, kwargs))
        if "_id" not in document:
            document["_id"] = ObjectId()
        self.docs.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)

    async def replace_one(self, filter, replacement, upsert=False, **kwargs):
        self.calls.append(("replace_one", filter, replacement, kwargs))
        for index, doc in enumerate(self.docs):
            if _matches(doc, filter):
                new_doc = copy.deepcopy(replacement)
                new_doc.setdefault("_id", doc["_id"])
                self.docs[index] = new_doc
                return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)
        if upsert:
            new_doc = copy.deepcopy(replacement)
            new_doc.setdefault("_id", filter.get("_id", ObjectId()))
            self.docs.append(new_doc)
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=new_doc["_id"])
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

    async def delete_many(self, filter, **kwargs):
        self.calls.append(("delete_many", filter, kwargs))
        kept = [doc for doc in self.docs if not _matches(doc, filter)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted, acknowledged=True)

    async def count_documents(self, filter, **kwargs):
        self.calls.append(("count_documents", filter, kwargs))
        matched = len([doc for doc in self.docs if _matches(doc, filter)])
        matched = max(matched - (kwargs.get("skip") or 0), 0)
        limit = kwargs.get("limit")
        return min(matched, limit) if limit else matched


class FakeDatabase:
    def __init__(self, name: str):
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if not name or "$" in name:
            raise InvalidName(f"invalid collection name {name!r}")
        return self.collections.setdefault(name, FakeCollection(name))


class FakeClient:
    instances: List["FakeClient"] = []

    def __init__(self, host=None, port=None, **kwargs):
        self.host = host
        self.port = port
        self.kwargs = kwargs
        self.closed = False
        self.admin = SimpleNamespace(command=AsyncMock(return_value={"ok": 1.0}))
        self.databases: Dict[str, FakeDatabase] = {}
        FakeClient.instances.append(self)

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_config():
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def fake_client(monkeypatch):
    """Replace the Motor client used by connect(); returns the list of created clients"""
    FakeClient.instances = []
    monkeypatch.setattr(core, "AsyncIOMotorClient", FakeClient)
    return FakeClient.instances
