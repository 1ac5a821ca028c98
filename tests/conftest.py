"""Shared fixtures: test settings and an in-memory stand-in for MongoDB."""
import os
import sys
from types import SimpleNamespace

import pytest
from bson import ObjectId

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB", "devevent_test")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "test-cloud")
os.environ.setdefault("CLOUDINARY_API_KEY", "test-key")
os.environ.setdefault("CLOUDINARY_API_SECRET", "test-secret")

from api.config import get_settings  # noqa: E402


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, keys):
        docs = list(self._docs)
        # Stable sorts applied from the least significant key up.
        for field, direction in reversed(keys):
            docs.sort(key=lambda d: d[field], reverse=direction < 0)
        return FakeCursor(docs)

    async def to_list(self, length=None):
        docs = [dict(d) for d in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.fail_with = None

    async def insert_one(self, doc):
        if self.fail_with:
            raise self.fail_with
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, filter=None):
        if self.fail_with:
            raise self.fail_with
        return FakeCursor(self.docs)


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_db():
    return FakeDatabase()
