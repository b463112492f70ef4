# libs/mongo_session/manager.py
from __future__ import annotations

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import ValidationError

from . import db
from .codec import Codec, default_codec
from .contracts import ManagerStore
from .errors import SessionCodecError
from .logger import get_logger
from .models import JSONValue, SessionRecord, expires_in
from .pool import StorePool
from .settings import Settings, settings as default_settings
from .store import MongoStore

log = get_logger("manager")


class MongoManagerStore(ManagerStore):
    """
    Maps session lifecycle calls onto one MongoDB collection and hands out
    pooled MongoStore objects.

    Build it with new_store / new_store_with_client so the TTL index exists
    before the first request.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        db_name: str,
        collection_name: str,
        *,
        codec: Optional[Codec] = None,
        pool_max_size: Optional[int] = None,
    ):
        self._client = client
        self._col = client[db_name][collection_name]
        self._codec = codec or default_codec
        self._pool: StorePool[MongoStore] = StorePool(
            lambda: MongoStore(self._client, self._col, self._codec),
            max_size=default_settings.POOL_MAX_SIZE if pool_max_size is None else pool_max_size,
        )

    async def ensure_indexes(self, grace_seconds: Optional[int] = None) -> None:
        await db.ensure_indexes(self._col, grace_seconds)

    # ----------------- Pool -----------------

    def _acquire(self, ctx: Any, sid: str, ttl: int, values: Optional[Dict[str, JSONValue]] = None) -> MongoStore:
        store = self._pool.acquire()
        store.reset(ctx, sid, ttl, values)
        return store

    def release(self, store: MongoStore) -> None:
        """Give a store back once the request is done with it."""
        store.reset(None, "", 0)
        self._pool.release(store)

    # ----------------- Helpers -----------------

    async def _get_value(self, sid: str) -> str:
        async with await self._client.start_session() as s:
            doc = await self._col.find_one({"_id": sid}, session=s)
        if not doc:
            return ""
        try:
            rec = SessionRecord.model_validate(doc)
        except ValidationError as err:
            raise SessionCodecError(f"malformed session record sid={sid}: {err}") from err
        if rec.is_expired():
            return ""
        return rec.value

    def _parse_value(self, value: str) -> Dict[str, JSONValue]:
        return self._codec.decode(value) if value else {}

    # ----------------- Contract -----------------

    async def check(self, ctx: Any, sid: str) -> bool:
        return await self._get_value(sid) != ""

    async def create(self, ctx: Any, sid: str, ttl: int) -> MongoStore:
        return self._acquire(ctx, sid, ttl)

    async def update(self, ctx: Any, sid: str, ttl: int) -> MongoStore:
        value = await self._get_value(sid)
        if value == "":
            log.debug("update on missing session sid=%s, starting empty", sid)
            return self._acquire(ctx, sid, ttl)

        async with await self._client.start_session() as s:
            await self._col.update_one(
                {"_id": sid},
                {"$set": {"expired_at": expires_in(ttl)}},
                session=s,
            )

        values = self._parse_value(value)
        return self._acquire(ctx, sid, ttl, values)

    async def delete(self, ctx: Any, sid: str) -> None:
        async with await self._client.start_session() as s:
            res = await self._col.delete_one({"_id": sid}, session=s)
        log.debug("session deleted sid=%s removed=%s", sid, res.deleted_count)

    async def refresh(self, ctx: Any, old_sid: str, sid: str, ttl: int) -> MongoStore:
        value = await self._get_value(old_sid)
        if value == "":
            log.debug("refresh on missing session old_sid=%s, starting empty sid=%s", old_sid, sid)
            return self._acquire(ctx, sid, ttl)

        # Not transactional: a failure after the upsert leaves both records
        # until the old one expires.
        async with await self._client.start_session() as s:
            rec = SessionRecord.new(sid, value, ttl)
            await self._col.replace_one({"_id": sid}, rec.to_doc(), upsert=True, session=s)
            await self._col.delete_one({"_id": old_sid}, session=s)
        log.debug("session refreshed old_sid=%s sid=%s", old_sid, sid)

        values = self._parse_value(value)
        return self._acquire(ctx, sid, ttl, values)

    async def close(self) -> None:
        self._client.close()
        log.info("session store closed")


# ----------------- Constructors -----------------

async def new_store(
    uri: str,
    db_name: str,
    collection_name: str,
    *,
    codec: Optional[Codec] = None,
    timeout_ms: Optional[int] = None,
    grace_seconds: Optional[int] = None,
    pool_max_size: Optional[int] = None,
) -> MongoManagerStore:
    """
    Connect to uri and return a manager over db_name.collection_name.

    Raises StoreConnectionError when the server cannot be reached; index
    creation errors propagate from pymongo unchanged.
    """
    client = await db.connect(uri, timeout_ms)
    try:
        return await new_store_with_client(
            client,
            db_name,
            collection_name,
            codec=codec,
            grace_seconds=grace_seconds,
            pool_max_size=pool_max_size,
        )
    except BaseException:
        client.close()
        raise


async def new_store_with_client(
    client: AsyncIOMotorClient,
    db_name: str,
    collection_name: str,
    *,
    codec: Optional[Codec] = None,
    grace_seconds: Optional[int] = None,
    pool_max_size: Optional[int] = None,
) -> MongoManagerStore:
    """Same as new_store, over a client whose lifecycle the caller manages."""
    mstore = MongoManagerStore(client, db_name, collection_name, codec=codec, pool_max_size=pool_max_size)
    await mstore.ensure_indexes(grace_seconds)
    log.info("session store ready db=%s collection=%s", db_name, collection_name)
    return mstore


async def new_store_from_settings(cfg: Optional[Settings] = None, *, codec: Optional[Codec] = None) -> MongoManagerStore:
    cfg = cfg or default_settings
    return await new_store(
        cfg.MONGO_URI,
        cfg.MONGO_DB,
        cfg.COL_SESSIONS,
        codec=codec,
        timeout_ms=cfg.CONNECT_TIMEOUT_MS,
        grace_seconds=cfg.TTL_GRACE_SECONDS,
        pool_max_size=cfg.POOL_MAX_SIZE,
    )
