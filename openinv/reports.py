# openinv/reports.py
"""Report numbers computed from the current item and sale snapshots."""
from datetime import date, datetime, timedelta
from typing import Dict, Optional

from openinv.models.inventory import ReportData, TopSeller
from openinv.stores.items import ItemStore
from openinv.stores.sold_items import SoldItemStore


def local_date(timestamp: str) -> Optional[date]:
    """Calendar date of an ISO timestamp in local time, or None if it does not parse."""
    try:
        parsed = datetime.fromisoformat(timestamp)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


async def get_report_data(
    items: ItemStore,
    sold_items: SoldItemStore,
    *,
    today: Optional[date] = None,
    low_stock_threshold: int = 5,
    trend_days: int = 7,
    top_selling_limit: int = 5,
) -> ReportData:
    stock = await items.list()
    sales = await sold_items.list()

    today = today or date.today()
    first_day = today - timedelta(days=trend_days - 1)
    sales_trend: Dict[str, float] = {
        (first_day + timedelta(days=offset)).isoformat(): 0 for offset in range(trend_days)
    }
    top_selling: Dict[str, int] = {}

    for sale in sales:
        sold_on = local_date(sale.date_sold)
        key = sold_on.isoformat() if sold_on else None
        if key in sales_trend:
            sales_trend[key] += sale.price_sold

        top_selling[sale.item_name] = top_selling.get(sale.item_name, 0) + sale.quantity_sold

    category_counts: Dict[str, int] = {}
    for item in stock:
        category_counts[item.category] = category_counts.get(item.category, 0) + item.quantity

    # sorted() is stable: equal totals keep first-appearance order
    ranked = sorted(top_selling.items(), key=lambda entry: entry[1], reverse=True)

    return ReportData(
        sales_trend=sales_trend,
        top_selling=[TopSeller(item_name=name, quantity_sold=qty) for name, qty in ranked[:top_selling_limit]],
        category_distribution=category_counts,
        stock_levels=stock,
        low_stock_items=[item for item in stock if item.quantity <= low_stock_threshold],
    )
