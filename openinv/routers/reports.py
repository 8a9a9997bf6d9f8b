from fastapi import APIRouter, Depends
from openinv.core.config import settings
from openinv.deps import get_item_store, get_sold_item_store
from openinv.models.inventory import ReportData
from openinv.reports import get_report_data
from openinv.routers.auth import get_current_user
from openinv.stores.items import ItemStore
from openinv.stores.sold_items import SoldItemStore

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_user)],
)

@router.get("/", response_model=ReportData)
async def report(
    items: ItemStore = Depends(get_item_store),
    sold_items: SoldItemStore = Depends(get_sold_item_store),
):
    return await get_report_data(
        items,
        sold_items,
        low_stock_threshold=settings.low_stock_threshold,
        trend_days=settings.sales_trend_days,
        top_selling_limit=settings.top_selling_limit,
    )
