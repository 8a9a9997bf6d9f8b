# openinv/stores/sold_items.py
import logging
import math
from typing import List

from openinv.models.inventory import SoldItem, SoldItemCreate
from openinv.storage import StorageError, StorageWriteError
from openinv.stores.base import CollectionStore, Entry, new_id

logger = logging.getLogger(__name__)


def is_valid_sale(record) -> bool:
    if not isinstance(record, dict):
        return False
    price = record.get("priceSold")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    return bool(record.get("itemId")) and record.get("quantitySold") is not None and math.isfinite(price)


class SoldItemStore(CollectionStore[SoldItem]):
    """Sale history.

    Reading drops sales with no itemId, no quantitySold or a non-finite
    priceSold, and persists the cleaned list.
    """

    model = SoldItem
    label = "sold items"

    async def _load(self) -> List[Entry]:
        try:
            raw = await self._load_raw()
        except (StorageError, ValueError):
            logger.exception("Error getting sold items")
            return []

        kept = [record for record in raw if is_valid_sale(record)]

        if len(kept) != len(raw):
            logger.warning("Dropping %d malformed sold item(s)", len(raw) - len(kept))
            try:
                await self._write(kept)
            except StorageWriteError:
                logger.exception("Could not persist cleaned sold items")
        return [self._parse(record) for record in kept]

    async def list(self) -> List[SoldItem]:
        # a read can rewrite the collection, so it takes the lock too
        async with self.lock:
            return await self._read()

    async def create(self, data: SoldItemCreate) -> SoldItem:
        return await self.add(SoldItem(id=new_id(), **data.model_dump()))
