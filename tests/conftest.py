import copy
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from houseledger.core.auth import create_access_token
from houseledger.core.config import settings
from houseledger.db.mongo import get_db
from houseledger.main import app


def _matches(doc: dict, query: dict) -> bool:
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict) and "$in" in cond:
            if value not in cond["$in"]:
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction=1):
        self.docs = sorted(self.docs, key=lambda d: d.get(key), reverse=direction == -1)
        return self

    async def to_list(self, length=None):
        return [dict(d) for d in self.docs]


class FakeCollection:
    """Just enough of a motor collection for the repositories."""

    def __init__(self, name):
        self.name = name
        self.docs = []
        self.fail_on_insert = False

    async def insert_one(self, doc, session=None):
        if self.fail_on_insert:
            raise PyMongoError(f"insert into {self.name} failed")
        doc = dict(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs, session=None):
        ids = []
        for doc in docs:
            result = await self.insert_one(doc, session=session)
            ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=ids)

    async def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def count_documents(self, query, limit=0):
        return len([d for d in self.docs if _matches(d, query)])

    async def delete_many(self, query, session=None):
        kept = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)

    async def find_one_and_update(self, query, update, return_document=False):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                return dict(doc)
        return None


class FakeSession:
    def __init__(self, db):
        self.db = db

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    @asynccontextmanager
    async def start_transaction(self):
        snapshot = {name: copy.deepcopy(col.docs) for name, col in self.db.collections.items()}
        try:
            yield
        except Exception:
            for name, docs in snapshot.items():
                self.db.collections[name].docs = docs
            for name in set(self.db.collections) - set(snapshot):
                self.db.collections[name].docs = []
            raise


class FakeClient:
    def __init__(self, db):
        self.db = db

    async def start_session(self):
        return FakeSession(self.db)


class FakeDatabase:
    def __init__(self):
        self.collections = {}
        self.client = FakeClient(self)

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


HOUSE_ID = "house-1"


@pytest.fixture
def fake_db():
    """In-memory database with transaction rollback."""
    return FakeDatabase()


@pytest.fixture
def house(fake_db):
    """A house with alice (admin), bob and carol."""
    now = datetime.now(timezone.utc)
    fake_db["house_members"].docs.extend([
        {"_id": ObjectId(), "house_id": HOUSE_ID, "user_id": "alice", "role": "admin",
         "name": "Alice", "joined_at": now},
        {"_id": ObjectId(), "house_id": HOUSE_ID, "user_id": "bob", "role": "member",
         "name": "Bob", "joined_at": now + timedelta(seconds=1)},
        {"_id": ObjectId(), "house_id": HOUSE_ID, "user_id": "carol", "role": "member",
         "name": "Carol", "joined_at": now + timedelta(seconds=2)},
    ])
    return HOUSE_ID


@pytest.fixture
def test_client(fake_db):
    """FastAPI test client backed by the in-memory database."""
    app.dependency_overrides[get_db] = lambda: fake_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""
    def _headers(user_id: str, name: str = ""):
        return {"Authorization": f"Bearer {create_access_token(user_id, name)}"}
    return _headers


@pytest.fixture(autouse=True)
def _transactions_on(monkeypatch):
    monkeypatch.setattr(settings, "USE_TRANSACTIONS", True)
