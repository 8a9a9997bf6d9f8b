# openinv/routers/inventory.py
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional
from pydantic import Field
from openinv.deps import get_item_store
from openinv.models.inventory import CamelModel, Item, ItemCreate, SoldItem
from openinv.routers.auth import get_current_user
from openinv.stores.items import ItemStore

router = APIRouter(
    prefix="/api/items",
    tags=["inventory"],
    dependencies=[Depends(get_current_user)],
)

# ---- Pydantic bodies used in endpoints ----
class QuantityChange(CamelModel):
    change: int

class SetQuantityBody(CamelModel):
    quantity: int

class SellBody(CamelModel):
    quantity: int = Field(gt=0)
    date_sold: Optional[str] = None  # ISO 8601, defaults to now

# ---- CRUD ----
@router.get("/", response_model=List[Item])
async def list_items(items: ItemStore = Depends(get_item_store)):
    return await items.list()

@router.post("/", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(item: ItemCreate, items: ItemStore = Depends(get_item_store)):
    return await items.create(item)

@router.get("/barcode/{item_id}", response_model=Item)
async def get_item_by_barcode(item_id: str, items: ItemStore = Depends(get_item_store)):
    item = await items.find_by_item_id(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item

@router.post("/barcode/{item_id}/sell", response_model=SoldItem, status_code=status.HTTP_201_CREATED)
async def sell_item_by_barcode(item_id: str, payload: SellBody, items: ItemStore = Depends(get_item_store)):
    sold = await items.sell_by_item_id(item_id, payload.quantity, payload.date_sold)
    if sold is None:
        raise HTTPException(status_code=400, detail="Item not found or insufficient stock")
    return sold

@router.get("/{id}", response_model=Item)
async def get_item(id: str, items: ItemStore = Depends(get_item_store)):
    item = await items.find(id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item

@router.put("/{id}", response_model=Item)
async def update_item(id: str, item: ItemCreate, items: ItemStore = Depends(get_item_store)):
    updated = Item(id=id, **item.model_dump())
    if not await items.update(updated):
        raise HTTPException(status_code=404, detail="Item not found")
    return updated

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(id: str, items: ItemStore = Depends(get_item_store)):
    if not await items.delete(id):
        raise HTTPException(status_code=404, detail="Item not found")

# ---- Stock adjustment ----
@router.patch("/{id}/quantity", response_model=Item)
async def adjust_quantity(id: str, payload: QuantityChange, items: ItemStore = Depends(get_item_store)):
    updated = await items.adjust_quantity(id, payload.change)
    if updated is None:
        raise HTTPException(status_code=400, detail="Item not found or quantity would go negative")
    return updated

@router.patch("/{id}/set_quantity", response_model=Item)
async def set_quantity(id: str, payload: SetQuantityBody, items: ItemStore = Depends(get_item_store)):
    if payload.quantity < 0:
        raise HTTPException(status_code=400, detail="Quantity cannot be negative")
    updated = await items.set_quantity(id, payload.quantity)
    if updated is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return updated

# ---- Sales ----
@router.post("/{id}/sell", response_model=SoldItem, status_code=status.HTTP_201_CREATED)
async def sell_item(id: str, payload: SellBody, items: ItemStore = Depends(get_item_store)):
    sold = await items.sell(id, payload.quantity, payload.date_sold)
    if sold is None:
        raise HTTPException(status_code=400, detail="Item not found or insufficient stock")
    return sold
