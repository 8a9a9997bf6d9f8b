import json

import pytest
from pydantic import ValidationError

from openinv.models.inventory import ItemCreate
from openinv.storage import StorageWriteError

from conftest import ITEMS_KEY
from factories import make_item


@pytest.mark.asyncio
async def test_list_is_empty_when_nothing_persisted(item_store):
    assert await item_store.list() == []


@pytest.mark.asyncio
async def test_added_item_is_listed_with_same_fields(item_store):
    item = make_item("a1", notes="top shelf", image="file:///img.png")
    await item_store.add(item)

    items = await item_store.list()
    assert items == [item]
    assert await item_store.list() == items


@pytest.mark.asyncio
async def test_items_are_persisted_with_camel_case_keys(item_store, storage):
    await item_store.add(make_item("a1"))

    raw = json.loads(storage.data[ITEMS_KEY])
    assert raw == [{
        "itemId": "8901234",
        "itemName": "item-a1",
        "category": "tea",
        "quantity": 10,
        "sellingPrice": 2.5,
        "image": None,
        "notes": None,
        "id": "a1",
    }]


@pytest.mark.asyncio
async def test_create_assigns_an_id(item_store):
    created = await item_store.create(
        ItemCreate(item_id="555", item_name="Green tea", category="tea", quantity=3, selling_price=4)
    )
    assert created.id
    assert await item_store.find(created.id) == created


@pytest.mark.asyncio
async def test_update_replaces_only_the_matching_record(item_store):
    await item_store.add(make_item("a1"))
    await item_store.add(make_item("a2"))

    changed = make_item("a1", item_name="renamed", quantity=1, price=9.0)
    assert await item_store.update(changed) is True

    assert await item_store.list() == [changed, make_item("a2")]


@pytest.mark.asyncio
async def test_update_with_unknown_id_leaves_collection_unchanged(item_store, storage):
    await item_store.add(make_item("a1"))
    before = storage.data[ITEMS_KEY]

    assert await item_store.update(make_item("missing")) is False
    assert storage.data[ITEMS_KEY] == before


@pytest.mark.asyncio
async def test_delete_removes_every_record_with_the_id(item_store, storage):
    await item_store.add(make_item("a1"))
    await item_store.add(make_item("a2"))
    await item_store.add(make_item("a1", item_name="duplicate"))

    assert await item_store.delete("a1") is True
    assert [item.id for item in await item_store.list()] == ["a2"]


@pytest.mark.asyncio
async def test_delete_unknown_id_is_a_no_op(item_store):
    await item_store.add(make_item("a1"))

    assert await item_store.delete("nope") is False
    assert [item.id for item in await item_store.list()] == ["a1"]


@pytest.mark.asyncio
async def test_corrupt_blob_reads_as_empty(item_store, storage):
    storage.data[ITEMS_KEY] = "{not json"
    assert await item_store.list() == []

    storage.data[ITEMS_KEY] = json.dumps({"id": "a1"})
    assert await item_store.list() == []


@pytest.mark.asyncio
async def test_write_failure_propagates(item_store, storage):
    storage.fail_writes_for(ITEMS_KEY)
    with pytest.raises(StorageWriteError):
        await item_store.add(make_item("a1"))
    assert await item_store.list() == []


@pytest.mark.asyncio
async def test_find_by_item_id_returns_first_match(item_store):
    await item_store.add(make_item("a1", item_id="111", item_name="first"))
    await item_store.add(make_item("a2", item_id="111", item_name="second"))

    found = await item_store.find_by_item_id("111")
    assert found.item_name == "first"
    assert await item_store.find_by_item_id("999") is None


@pytest.mark.asyncio
async def test_adjust_quantity(item_store):
    await item_store.add(make_item("a1", quantity=4))

    updated = await item_store.adjust_quantity("a1", 6)
    assert updated.quantity == 10
    assert (await item_store.adjust_quantity("a1", -3)).quantity == 7

    # cannot go below zero
    assert await item_store.adjust_quantity("a1", -8) is None
    assert (await item_store.find("a1")).quantity == 7
    assert await item_store.adjust_quantity("missing", 1) is None


@pytest.mark.asyncio
async def test_set_quantity(item_store):
    await item_store.add(make_item("a1", quantity=4))

    assert (await item_store.set_quantity("a1", 0)).quantity == 0
    assert await item_store.set_quantity("a1", -1) is None
    assert await item_store.set_quantity("missing", 3) is None


@pytest.mark.asyncio
async def test_unreadable_record_is_hidden_but_kept_on_write(item_store, storage):
    broken = {**make_item("a2").model_dump(by_alias=True), "category": None}
    storage.data[ITEMS_KEY] = json.dumps([make_item("a1").model_dump(by_alias=True), broken])

    assert [item.id for item in await item_store.list()] == ["a1"]

    await item_store.add(make_item("a3"))
    await item_store.delete("a1")

    assert [rec["id"] for rec in json.loads(storage.data[ITEMS_KEY])] == ["a2", "a3"]
    assert json.loads(storage.data[ITEMS_KEY])[0] == broken


@pytest.mark.asyncio
async def test_update_repairs_an_unreadable_record(item_store, storage):
    storage.data[ITEMS_KEY] = json.dumps([{"id": "a1", "itemName": "no barcode"}])

    assert await item_store.update(make_item("a1")) is True
    assert await item_store.list() == [make_item("a1")]


@pytest.mark.asyncio
async def test_sell_ignores_unreadable_record_with_same_id(item_store, sold_store, storage):
    storage.data[ITEMS_KEY] = json.dumps([{"id": "a1", "quantity": 50}])

    assert await item_store.sell("a1", 1) is None
    assert json.loads(storage.data[ITEMS_KEY]) == [{"id": "a1", "quantity": 50}]


@pytest.mark.parametrize("price", [float("inf"), float("nan"), -1])
def test_item_price_must_be_finite_and_non_negative(price):
    with pytest.raises(ValidationError):
        ItemCreate(item_id="1", item_name="Tea", category="tea", quantity=1, selling_price=price)
