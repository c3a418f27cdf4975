"""
Pure aggregation functions over stored expense items.

Items are the plain dicts returned by the expense store: ``amount`` is a
number, ``category`` a category name and ``date`` an ISO 8601 string.
"""

import calendar
from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, datetime, time
from typing import Any, Dict, Iterable, List, Tuple

from analytics.models import CategorySummary, TrendPoint
from shared.exceptions import ValidationError
from shared.validators import DEFAULT_CATEGORY


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """
    Inclusive datetime range covering a calendar month.

    Returns:
        (first day 00:00:00, last day 23:59:59)
    """
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime(year, month, 1),
        datetime.combine(datetime(year, month, last_day).date(), time(23, 59, 59))
    )


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """The calendar month before ``(year, month)``; January rolls back to December."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def shift_months(value: datetime, months: int) -> datetime:
    """
    Move a datetime by a number of calendar months.

    The day is clamped to the length of the target month, so 31 March minus
    one month is 28 (or 29) February.

    Raises:
        ValidationError: If the result falls outside the supported year range
    """
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError("Date range is out of bounds")
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _item_date(item: Dict[str, Any]) -> datetime:
    value = item['date']
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def group_by_category(expenses: Iterable[Dict[str, Any]]) -> List[CategorySummary]:
    """
    Group expenses by category with total, count and average amount.

    Groups are ordered by descending total; equal totals fall back to the
    category name in ascending order.
    """
    totals = defaultdict(float)
    counts = defaultdict(int)

    for expense in expenses:
        category = expense.get('category') or DEFAULT_CATEGORY
        totals[category] += float(expense.get('amount', 0))
        counts[category] += 1

    summary = [
        CategorySummary(
            category=category,
            total_amount=round(total, 2),
            count=counts[category],
            avg_amount=round(total / counts[category], 2)
        )
        for category, total in totals.items()
    ]
    summary.sort(key=lambda row: (-row.total_amount, row.category))
    return summary


def group_by_month(expenses: Iterable[Dict[str, Any]]) -> List[TrendPoint]:
    """Group expenses by (year, month), ascending. The last point is the most recent month."""
    totals = defaultdict(float)
    counts = defaultdict(int)

    for expense in expenses:
        date = _item_date(expense)
        key = (date.year, date.month)
        totals[key] += float(expense.get('amount', 0))
        counts[key] += 1

    return [
        TrendPoint(
            year=year,
            month=month,
            total_amount=round(totals[(year, month)], 2),
            count=counts[(year, month)]
        )
        for year, month in sorted(totals)
    ]


def sum_totals(summary: Iterable[CategorySummary]) -> Tuple[float, int]:
    """Total amount and transaction count across summary rows."""
    rows = list(summary)
    return (
        round(sum(row.total_amount for row in rows), 2),
        sum(row.count for row in rows)
    )


def percentage_change(previous: float, current: float) -> float:
    """Percentage change from ``previous`` to ``current``, 0 when there is no baseline."""
    if previous == 0:
        return 0.0
    return round((current - previous) / previous * 100, 2)
