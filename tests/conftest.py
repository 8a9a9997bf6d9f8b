import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("STORAGE_BACKEND", "memory")

from main import app  # noqa: E402
from openinv.deps import get_storage  # noqa: E402
from openinv.storage import InMemoryStorage  # noqa: E402
from openinv.stores.items import ItemStore  # noqa: E402
from openinv.stores.sold_items import SoldItemStore  # noqa: E402

ITEMS_KEY = "@inventory_items"
SOLD_ITEMS_KEY = "@sold_items"


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def sold_store(storage) -> SoldItemStore:
    return SoldItemStore(storage, SOLD_ITEMS_KEY)


@pytest.fixture
def item_store(storage, sold_store) -> ItemStore:
    return ItemStore(storage, ITEMS_KEY, sold_items=sold_store)


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client) -> dict:
    user = {"username": "shopkeeper", "email": "owner@example.com", "password": "secret123"}
    resp = client.post("/api/auth/signup", json=user)
    assert resp.status_code == 201
    resp = client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
