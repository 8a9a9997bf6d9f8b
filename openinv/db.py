from motor.motor_asyncio import AsyncIOMotorClient
from openinv.core.config import settings
from openinv.storage import InMemoryStorage, KeyValueStorage, MongoStorage

def build_storage(config=settings) -> KeyValueStorage:
    if config.storage_backend == "memory":
        return InMemoryStorage()
    if config.storage_backend != "mongo":
        raise ValueError(f"Unknown storage backend: {config.storage_backend}")
    client = AsyncIOMotorClient(config.mongo_uri)
    db = client[config.db_name]
    return MongoStorage(db[config.storage_collection])

storage = build_storage()
