# openinv/routers/sales.py
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from openinv.deps import get_sold_item_store
from openinv.models.inventory import SoldItem, SoldItemCreate
from openinv.routers.auth import get_current_user
from openinv.stores.sold_items import SoldItemStore

router = APIRouter(
    prefix="/api/sold-items",
    tags=["sales"],
    dependencies=[Depends(get_current_user)],
)

@router.get("/", response_model=List[SoldItem])
async def list_sold_items(sold_items: SoldItemStore = Depends(get_sold_item_store)):
    return await sold_items.list()

@router.post("/", response_model=SoldItem, status_code=status.HTTP_201_CREATED)
async def create_sold_item(sold_item: SoldItemCreate, sold_items: SoldItemStore = Depends(get_sold_item_store)):
    # recording a sale here does not touch stock; use /api/items/{id}/sell for that
    return await sold_items.create(sold_item)

@router.get("/{id}", response_model=SoldItem)
async def get_sold_item(id: str, sold_items: SoldItemStore = Depends(get_sold_item_store)):
    sold = await sold_items.find(id)
    if sold is None:
        raise HTTPException(status_code=404, detail="Sold item not found")
    return sold

@router.put("/{id}", response_model=SoldItem)
async def update_sold_item(id: str, sold_item: SoldItemCreate, sold_items: SoldItemStore = Depends(get_sold_item_store)):
    updated = SoldItem(id=id, **sold_item.model_dump())
    if not await sold_items.update(updated):
        raise HTTPException(status_code=404, detail="Sold item not found")
    return updated

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sold_item(id: str, sold_items: SoldItemStore = Depends(get_sold_item_store)):
    if not await sold_items.delete(id):
        raise HTTPException(status_code=404, detail="Sold item not found")
