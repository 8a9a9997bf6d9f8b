# openinv/storage.py
"""Key-value storage backends.

Every collection (items, sold items, users) is persisted as one JSON string
under one key. Stores never talk to a database directly; they get one of these
backends injected.
"""
import asyncio
import logging
from typing import Dict, Optional, Set

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for storage backend failures."""


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass


class KeyValueStorage:
    """Interface shared by all backends.

    ``lock_for`` hands out one lock per key so that every store built on the
    same storage instance serializes its read-modify-write cycles.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def ping(self) -> bool:
        raise NotImplementedError


class InMemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        super().__init__()
        self.data: Dict[str, str] = dict(initial or {})
        self._failing_keys: Set[str] = set()

    def fail_writes_for(self, key: str, fail: bool = True) -> None:
        # simulates a backend that rejects writes for one key
        if fail:
            self._failing_keys.add(key)
        else:
            self._failing_keys.discard(key)

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        if key in self._failing_keys:
            raise StorageWriteError(f"write rejected for key {key!r}")
        self.data[key] = value

    async def ping(self) -> bool:
        return True


class MongoStorage(KeyValueStorage):
    """One document per key: ``{"_id": key, "value": <json string>}``."""

    def __init__(self, collection):
        super().__init__()
        self.collection = collection

    async def get(self, key: str) -> Optional[str]:
        try:
            doc = await self.collection.find_one({"_id": key})
        except PyMongoError as exc:
            raise StorageReadError(f"could not read key {key!r}") from exc
        if not doc:
            return None
        return doc.get("value")

    async def set(self, key: str, value: str) -> None:
        try:
            await self.collection.update_one(
                {"_id": key}, {"$set": {"value": value}}, upsert=True
            )
        except PyMongoError as exc:
            raise StorageWriteError(f"could not write key {key!r}") from exc

    async def ping(self) -> bool:
        try:
            res = await self.collection.database.command("ping")
        except PyMongoError:
            logger.exception("Storage ping failed")
            return False
        return bool(res.get("ok"))
