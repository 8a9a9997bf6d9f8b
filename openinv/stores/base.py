# openinv/stores/base.py
"""Full-collection CRUD over one storage key.

Each mutation reads the whole JSON array, changes it in memory and writes the
whole array back while holding the key's lock. Records that do not validate
are hidden from readers but written back untouched.
"""
import json
import logging
import uuid
from typing import Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from openinv.storage import KeyValueStorage, StorageError, StorageWriteError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# a parsed record, or the raw JSON value of one that failed validation
Entry = Union[BaseModel, dict]


def new_id() -> str:
    return uuid.uuid4().hex


def entry_id(entry) -> Optional[str]:
    if isinstance(entry, BaseModel):
        return entry.id
    if isinstance(entry, dict):
        return entry.get("id")
    return None


class CollectionStore(Generic[T]):
    model: Type[T]
    label = "records"

    def __init__(self, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key

    @property
    def lock(self):
        return self.storage.lock_for(self.key)

    async def _load_raw(self) -> list:
        raw = await self.storage.get(self.key)
        if not raw:
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"{self.key} does not hold a JSON array")
        return data

    def _parse(self, record) -> Entry:
        try:
            return self.model.model_validate(record)
        except ValidationError:
            logger.warning("Skipping unreadable %s record id=%r", self.label, entry_id(record))
            return record

    async def _load(self) -> List[Entry]:
        try:
            raw = await self._load_raw()
        except (StorageError, ValueError):
            logger.exception("Error getting %s", self.label)
            return []
        return [self._parse(record) for record in raw]

    async def _read(self) -> List[T]:
        return [entry for entry in await self._load() if isinstance(entry, self.model)]

    async def _write(self, entries: List[Entry]) -> None:
        payload = json.dumps([
            entry.model_dump(by_alias=True) if isinstance(entry, BaseModel) else entry
            for entry in entries
        ])
        try:
            await self.storage.set(self.key, payload)
        except StorageWriteError:
            logger.error("Error saving %s", self.label)
            raise

    async def list(self) -> List[T]:
        return await self._read()

    async def find(self, record_id: str) -> Optional[T]:
        for rec in await self.list():
            if rec.id == record_id:
                return rec
        return None

    async def _append(self, record: T) -> None:
        entries = await self._load()
        entries.append(record)
        await self._write(entries)

    async def add(self, record: T) -> T:
        async with self.lock:
            await self._append(record)
        return record

    async def _replace(self, record: T) -> bool:
        entries = await self._load()
        for index, existing in enumerate(entries):
            if entry_id(existing) == record.id:
                entries[index] = record
                await self._write(entries)
                return True
        return False

    async def update(self, record: T) -> bool:
        """Replace the record with the same id. Returns False when none matched."""
        async with self.lock:
            return await self._replace(record)

    async def delete(self, record_id: str) -> bool:
        """Remove every record with ``record_id``. Returns whether any was removed."""
        async with self.lock:
            entries = await self._load()
            kept = [entry for entry in entries if entry_id(entry) != record_id]
            await self._write(kept)
            return len(kept) != len(entries)
