"""Order history aggregation for the tracking report."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from .catalogue import find
from .errors import EmptyHistoryError
from .models import Order, Product, ReportRow, canonical_code, parse_timestamp

UNKNOWN_DESCRIPTION = "Unknown"

DateBound = date | datetime | str | None


def _to_date(bound: DateBound) -> date | None:
    if bound is None:
        return None
    if isinstance(bound, datetime):
        return bound.date()
    if isinstance(bound, date):
        return bound
    text = bound.strip()
    if not text:
        return None
    return date.fromisoformat(text[:10])


def _utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def default_range(today: date | None = None, days: int = 30) -> tuple[date, date]:
    """Return the initial tracking window: the last ``days`` days up to today."""
    today = today or date.today()
    return today - timedelta(days=days), today


def filter_by_date(
    orders: list[Order], start_date: DateBound, end_date: DateBound
) -> list[Order]:
    """Keep orders dated in ``[start_date, end_date + 1 day)``.

    Dates are calendar days taken at UTC midnight. If either bound is
    unset, all orders are returned.
    """
    start = _to_date(start_date)
    end = _to_date(end_date)
    if start is None or end is None:
        return list(orders)

    lower = _utc_midnight(start)
    upper = _utc_midnight(end + timedelta(days=1))
    return [o for o in orders if lower <= parse_timestamp(o.date) < upper]


def aggregate(
    orders: list[Order],
    start_date: DateBound,
    end_date: DateBound,
    text_filter: str,
    catalogue: list[Product],
) -> list[ReportRow]:
    """Sum ordered quantities per product code.

    Line items are matched against ``text_filter`` (case-insensitive, on
    code or the description stored with the order). Codes are merged
    case-insensitively. Descriptions come from the current catalogue, not
    from the order snapshot, so renamed or deleted products show their
    present state. Rows are sorted by quantity, largest first.
    """
    needle = (text_filter or "").lower()
    totals: dict[str, int] = {}

    for order in filter_by_date(orders, start_date, end_date):
        for item in order.items:
            if needle and needle not in item.code.lower() and needle not in item.description.lower():
                continue
            key = canonical_code(item.code)
            totals[key] = totals.get(key, 0) + item.quantity

    rows = []
    for code, quantity in totals.items():
        product = find(catalogue, code)
        description = product.description if product else UNKNOWN_DESCRIPTION
        rows.append(ReportRow(code=code, description=description, quantity=quantity))

    rows.sort(key=lambda r: r.quantity, reverse=True)
    return rows


def last_order(orders: list[Order]) -> Order:
    """Return the most recently appended order.

    Raises:
        EmptyHistoryError: If there are no orders.
    """
    if not orders:
        raise EmptyHistoryError()
    return orders[-1]
