# openinv/deps.py
from fastapi import Depends
from openinv.core.config import settings
from openinv.db import storage
from openinv.storage import KeyValueStorage
from openinv.stores.items import ItemStore
from openinv.stores.sold_items import SoldItemStore
from openinv.stores.users import UserStore

def get_storage() -> KeyValueStorage:
    return storage

def get_sold_item_store(kv: KeyValueStorage = Depends(get_storage)) -> SoldItemStore:
    return SoldItemStore(kv, settings.sold_items_key)

def get_item_store(
    kv: KeyValueStorage = Depends(get_storage),
    sold_items: SoldItemStore = Depends(get_sold_item_store),
) -> ItemStore:
    return ItemStore(kv, settings.items_key, sold_items=sold_items)

def get_user_store(kv: KeyValueStorage = Depends(get_storage)) -> UserStore:
    return UserStore(kv, settings.users_key)
