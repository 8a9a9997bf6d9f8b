# openinv/stores/items.py
import logging
from datetime import datetime, timezone
from typing import Optional

from openinv.models.inventory import Item, ItemCreate, SoldItem
from openinv.stores.base import CollectionStore, new_id
from openinv.stores.sold_items import SoldItemStore

logger = logging.getLogger(__name__)


class ItemStore(CollectionStore[Item]):
    model = Item
    label = "items"

    def __init__(self, storage, key: str, sold_items: Optional[SoldItemStore] = None):
        super().__init__(storage, key)
        self.sold_items = sold_items

    async def create(self, data: ItemCreate) -> Item:
        return await self.add(Item(id=new_id(), **data.model_dump()))

    async def find_by_item_id(self, item_id: str) -> Optional[Item]:
        # itemId is not unique; the first match wins
        for item in await self.list():
            if item.item_id == item_id:
                return item
        return None

    async def _change_quantity(self, id: str, new_quantity) -> Optional[Item]:
        async with self.lock:
            items = await self._load()
            item = next((i for i in items if isinstance(i, Item) and i.id == id), None)
            if item is None:
                return None
            quantity = new_quantity(item.quantity)
            if quantity < 0:
                return None
            updated = item.model_copy(update={"quantity": quantity})
            await self._replace(updated)
            return updated

    async def adjust_quantity(self, id: str, change: int) -> Optional[Item]:
        """Add ``change`` (may be negative) to the stock of item ``id``."""
        return await self._change_quantity(id, lambda current: current + change)

    async def set_quantity(self, id: str, quantity: int) -> Optional[Item]:
        return await self._change_quantity(id, lambda current: quantity)

    async def sell(self, id: str, quantity: int, date_sold: Optional[str] = None) -> Optional[SoldItem]:
        """Take ``quantity`` units of item ``id`` out of stock and record the sale.

        Returns the new sale record, or None when the item does not exist or
        there is not enough stock; nothing is written in that case. If the sale
        cannot be recorded the stock decrement is undone and the write error
        is raised.
        """
        if self.sold_items is None:
            raise RuntimeError("ItemStore.sell needs a SoldItemStore")

        async with self.lock, self.sold_items.lock:
            items = await self._load()
            item = next((i for i in items if isinstance(i, Item) and i.id == id), None)
            if item is None or quantity <= 0 or quantity > item.quantity:
                return None

            sold = SoldItem(
                id=new_id(),
                item_id=item.item_id,
                item_name=item.item_name,
                category=item.category,
                quantity_sold=quantity,
                date_sold=date_sold or datetime.now(timezone.utc).isoformat(),
                price_sold=item.selling_price * quantity,
            )

            await self._replace(item.model_copy(update={"quantity": item.quantity - quantity}))

            try:
                await self.sold_items._append(sold)
            except Exception:
                logger.error("Error recording sale of %s, restoring stock", item.id)
                await self._write(items)
                raise
            return sold

    async def sell_by_item_id(self, item_id: str, quantity: int, date_sold: Optional[str] = None) -> Optional[SoldItem]:
        item = await self.find_by_item_id(item_id)
        if item is None:
            return None
        return await self.sell(item.id, quantity, date_sold)

