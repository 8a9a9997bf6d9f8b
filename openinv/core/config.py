# openinv/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # tell pydantic-settings to load from .env
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # "mongo" or "memory"
    storage_backend: str = "mongo"
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "openinv"
    storage_collection: str = "kv_store"

    items_key: str = "@inventory_items"
    sold_items_key: str = "@sold_items"
    users_key: str = "@users"

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    low_stock_threshold: int = 5
    sales_trend_days: int = 7
    top_selling_limit: int = 5

    log_level: str = "INFO"

settings = Settings()
