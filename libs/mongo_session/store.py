# libs/mongo_session/store.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from .codec import Codec
from .contracts import Store
from .logger import get_logger
from .models import JSONValue, SessionRecord
from .rwlock import RWLock

log = get_logger("store")


class MongoStore(Store):
    """
    Values of one session, staged in memory for the length of a request.

    get/set/delete never touch MongoDB; save() writes the whole mapping back
    as a single record. The values dict is guarded by a reader/writer lock
    that is never held across an await.
    """

    def __init__(self, client: AsyncIOMotorClient, col: AsyncIOMotorCollection, codec: Codec):
        self._client = client
        self._col = col
        self._codec = codec
        self._lock = RWLock()
        self._ctx: Any = None
        self._sid = ""
        self._ttl = 0
        self._values: Dict[str, JSONValue] = {}

    def reset(self, ctx: Any, sid: str, ttl: int, values: Optional[Dict[str, JSONValue]] = None) -> None:
        with self._lock.write():
            self._ctx = ctx
            self._sid = sid
            self._ttl = ttl
            self._values = values if values is not None else {}

    def context(self) -> Any:
        return self._ctx

    def session_id(self) -> str:
        return self._sid

    @property
    def ttl(self) -> int:
        return self._ttl

    def set(self, key: str, value: JSONValue) -> None:
        with self._lock.write():
            self._values[key] = value

    def get(self, key: str) -> Tuple[Optional[JSONValue], bool]:
        with self._lock.read():
            if key in self._values:
                return self._values[key], True
        return None, False

    def delete(self, key: str) -> Optional[JSONValue]:
        with self._lock.read():
            found = key in self._values
            v = self._values.get(key)
        # a set() landing between the two phases survives; harmless for sessions
        if found:
            with self._lock.write():
                self._values.pop(key, None)
        return v

    def values(self) -> Dict[str, JSONValue]:
        with self._lock.read():
            return dict(self._values)

    async def flush(self) -> None:
        with self._lock.write():
            self._values = {}
        await self.save()

    async def save(self) -> None:
        with self._lock.read():
            value = self._codec.encode(self._values) if self._values else ""
            sid, ttl = self._sid, self._ttl

        rec = SessionRecord.new(sid, value, ttl)
        async with await self._client.start_session() as s:
            await self._col.replace_one({"_id": sid}, rec.to_doc(), upsert=True, session=s)
        log.debug("session saved sid=%s bytes=%d expired_at=%s", sid, len(value), rec.expired_at.isoformat())
