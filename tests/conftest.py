from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio

from mongo_session import new_store_with_client


class FakeSession:
    def __init__(self, client: "FakeMotorClient"):
        self._client = client

    async def __aenter__(self) -> "FakeSession":
        self._client.open_sessions += 1
        self._client.sessions_started += 1
        return self

    async def __aexit__(self, *exc) -> None:
        self._client.open_sessions -= 1


class FakeCollection:
    """Just enough of AsyncIOMotorCollection for the session store."""

    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.indexes: List[Dict[str, Any]] = []
        self.fail_with: Optional[Exception] = None
        self.fail_on: Optional[str] = None

    def _maybe_fail(self, op: str) -> None:
        if self.fail_with is not None and self.fail_on in (None, op):
            raise self.fail_with

    async def create_index(self, keys, **kwargs) -> str:
        self._maybe_fail("create_index")
        self.indexes.append({"keys": keys, **kwargs})
        return "_".join(f"{k}_{d}" for k, d in keys)

    async def find_one(self, flt, session=None):
        self._maybe_fail("find_one")
        doc = self.docs.get(flt["_id"])
        return copy.deepcopy(doc) if doc else None

    async def update_one(self, flt, update, session=None):
        self._maybe_fail("update_one")
        doc = self.docs.get(flt["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        doc.update(copy.deepcopy(update["$set"]))
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def replace_one(self, flt, replacement, upsert=False, session=None):
        self._maybe_fail("replace_one")
        if flt["_id"] not in self.docs and not upsert:
            return SimpleNamespace(matched_count=0, upserted_id=None)
        self.docs[flt["_id"]] = copy.deepcopy(replacement)
        return SimpleNamespace(matched_count=1, upserted_id=flt["_id"])

    async def delete_one(self, flt, session=None):
        self._maybe_fail("delete_one")
        removed = self.docs.pop(flt["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed else 0)


class FakeAdmin:
    def __init__(self, ping_error: Optional[Exception] = None):
        self.ping_error = ping_error

    async def command(self, name: str):
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}


class FakeMotorClient:
    def __init__(self, ping_error: Optional[Exception] = None) -> None:
        self._dbs: Dict[str, Dict[str, FakeCollection]] = {}
        self.admin = FakeAdmin(ping_error)
        self.open_sessions = 0
        self.sessions_started = 0
        self.closed = False

    def __getitem__(self, db_name: str) -> Dict[str, FakeCollection]:
        db = self._dbs.setdefault(db_name, {})
        return _FakeDatabase(db)

    async def start_session(self) -> FakeSession:
        return FakeSession(self)

    def close(self) -> None:
        self.closed = True


class _FakeDatabase:
    def __init__(self, cols: Dict[str, FakeCollection]):
        self._cols = cols

    def __getitem__(self, name: str) -> FakeCollection:
        return self._cols.setdefault(name, FakeCollection())


DB_NAME = "mydb_test"
COL_NAME = "session"


@pytest.fixture
def client() -> FakeMotorClient:
    return FakeMotorClient()


@pytest.fixture
def col(client: FakeMotorClient) -> FakeCollection:
    return client[DB_NAME][COL_NAME]


@pytest_asyncio.fixture
async def mstore(client: FakeMotorClient):
    m = await new_store_with_client(client, DB_NAME, COL_NAME)
    yield m
    await m.close()
