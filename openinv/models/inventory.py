# openinv/models/inventory.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional

class CamelModel(BaseModel):
    # persisted and wire shapes use camelCase keys (itemId, sellingPrice, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ItemCreate(CamelModel):
    item_id: str
    item_name: str
    category: str
    quantity: int = Field(ge=0)
    selling_price: float = Field(ge=0, allow_inf_nan=False)
    image: Optional[str] = None
    notes: Optional[str] = None

class Item(ItemCreate):
    id: str

class SoldItemCreate(CamelModel):
    item_id: str
    item_name: str
    category: str
    quantity_sold: int = Field(gt=0)
    date_sold: str  # ISO 8601
    price_sold: float = Field(ge=0, allow_inf_nan=False)  # total for the sale, not a unit price

class SoldItem(CamelModel):
    # read side: older records may lack a category or date, or carry a zero quantity
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    item_id: str
    item_name: str = ""
    category: str = ""
    quantity_sold: int
    date_sold: str = ""
    price_sold: float = Field(allow_inf_nan=False)

class TopSeller(CamelModel):
    item_name: str
    quantity_sold: int

class ReportData(CamelModel):
    sales_trend: Dict[str, float]
    top_selling: List[TopSeller]
    category_distribution: Dict[str, int]
    stock_levels: List[Item]
    low_stock_items: List[Item]
