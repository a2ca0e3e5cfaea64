# tests/conftest.py
import copy
from typing import Any, Dict, List, Optional

import bson
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.database import ProductStore
from app.main import create_app


class FakeCollection:
    """In-memory stand-in for the pymongo calls ProductStore makes.

    Every call is recorded in `calls`; setting `fail_with` makes the next
    calls raise that error, the way a dropped connection would.
    """

    def __init__(self):
        self.docs: Dict[Any, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.fail_with: Optional[Exception] = None

    def _record(self, name: str):
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def insert_one(self, doc):
        self._record("insert_one")
        bson.encode(doc)
        self.docs[doc["_id"]] = copy.deepcopy(doc)

    def find_one(self, flt):
        self._record("find_one")
        doc = self.docs.get(flt["_id"])
        return copy.deepcopy(doc) if doc is not None else None

    def update_one(self, flt, update):
        self._record("update_one")
        bson.encode(update)
        doc = self.docs.get(flt["_id"])
        if doc is not None:
            doc.update(update["$set"])

    def delete_one(self, flt):
        self._record("delete_one")
        self.docs.pop(flt["_id"], None)

    def find(self, flt):
        self._record("find")
        return [copy.deepcopy(d) for d in self.docs.values()]


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def client(collection):
    app = create_app(ProductStore(collection))
    return TestClient(app)


@pytest.fixture
def broken_collection(collection):
    collection.fail_with = ServerSelectionTimeoutError("localhost:27017: connection refused")
    return collection

