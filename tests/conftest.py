"""Pytest configuration and fixtures: an in-memory stand-in for pymongo.MongoClient."""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from pymongo.errors import BulkWriteError

import opstools.config
import opstools.storage


class FakeServer:
    """Shared state behind every FakeMongoClient created during one test."""

    def __init__(self):
        self.databases: Dict[str, "FakeDatabase"] = {}
        self.clients: List["FakeMongoClient"] = []
        self.ping_error: Optional[Exception] = None
        self.commands: List[str] = []
        # Names the server refuses (duplicate key) during insert_many
        self.rejected_names: set = set()

    def database(self, name: str) -> "FakeDatabase":
        if name not in self.databases:
            self.databases[name] = FakeDatabase(self, name)
        return self.databases[name]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.insert_calls: List[Dict[str, Any]] = []
        self.rejected_names: set = set()

    def insert_many(self, documents, ordered=True):
        documents = list(documents)
        self.insert_calls.append({"count": len(documents), "ordered": ordered})
        inserted = []
        for index, doc in enumerate(documents):
            if doc.get("name") in self.rejected_names:
                raise BulkWriteError({
                    "writeErrors": [{"index": index, "code": 11000, "errmsg": "E11000 duplicate key error"}],
                    "nInserted": len(inserted),
                })
            doc = dict(doc)
            doc.setdefault("_id", ObjectId())
            self.docs.append(doc)
            inserted.append(doc["_id"])
        return SimpleNamespace(inserted_ids=inserted, acknowledged=True)


class FakeDatabase:
    def __init__(self, server: FakeServer, name: str):
        self.server = server
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            collection = FakeCollection(name)
            collection.rejected_names = self.server.rejected_names
            self.collections[name] = collection
        return self.collections[name]


class FakeAdmin:
    def __init__(self, server: FakeServer):
        self.server = server

    def command(self, name: str):
        self.server.commands.append(name)
        if self.server.ping_error is not None:
            raise self.server.ping_error
        return {"ok": 1.0}


class FakeMongoClient:
    """Stub mimicking the slice of MongoClient the tools use."""

    def __init__(self, server: FakeServer, uri: str, options: Dict[str, Any]):
        self.server = server
        self.uri = uri
        self.options = options
        self.close_count = 0
        self.admin = FakeAdmin(server)

    def get_default_database(self, default=None):
        path = self.uri.split("://", 1)[1].split("?", 1)[0]
        name = path.split("/", 1)[1] if "/" in path else ""
        return self.server.database(name or default)

    def close(self):
        self.close_count += 1


@pytest.fixture
def fake_server(monkeypatch):
    """Route opstools.storage.MongoClient to an in-memory server."""
    server = FakeServer()

    def factory(uri, **options):
        client = FakeMongoClient(server, uri, options)
        server.clients.append(client)
        return client

    monkeypatch.setattr(opstools.storage, "MongoClient", factory)
    return server


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Fresh settings per test, never reading a developer's .env file."""
    monkeypatch.setattr(opstools.config, "ENV_FILE", tmp_path / ".env")
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/opstools_test")
    opstools.config.get_settings.cache_clear()
    yield
    opstools.config.get_settings.cache_clear()


@pytest.fixture
def unset_uri(monkeypatch):
    monkeypatch.delenv("MONGODB_URI", raising=False)
