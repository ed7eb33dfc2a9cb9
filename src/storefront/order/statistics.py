"""Delivered-sales statistics — monthly revenue over Delivered orders."""

from collections import defaultdict
from datetime import UTC, datetime

from storefront.order.order import Order, OrderStatus
from storefront.utils.queries import fetch_all


def _as_utc(value):
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def delivered_sales_by_month(start_date: datetime | None = None, end_date: datetime | None = None) -> list[dict]:
    """Sum ``total_price`` of Delivered orders per ``YYYY-MM`` of their creation date.

    The date range applies only when both bounds are given (inclusive).
    Months are returned in ascending order.
    """
    totals: dict[str, float] = defaultdict(float)

    for order in fetch_all(Order, status=OrderStatus.DELIVERED.value):
        created = _as_utc(order.created_at)
        if start_date and end_date and not (_as_utc(start_date) <= created <= _as_utc(end_date)):
            continue
        totals[created.strftime("%Y-%m")] += order.total_price

    return [{"date": month, "total_sales": totals[month]} for month in sorted(totals)]
