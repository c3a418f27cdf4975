"""Analytics service: monthly summaries, spending trends and the dashboard."""

import logging
from datetime import datetime
from typing import Any, List, Optional

from shared import config
from shared.dates import utc_now
from shared.validators import validate_positive_int, validate_year_month
from expenses.models import Expense
from expenses.repository import ExpenseRepository
from analytics.aggregation import (
    group_by_category,
    group_by_month,
    month_bounds,
    percentage_change,
    previous_month,
    shift_months,
    sum_totals
)
from analytics.models import (
    CategorySummary,
    Comparison,
    DashboardAnalytics,
    MonthSnapshot,
    TrendPoint
)

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Derives summaries and trends from a user's stored expenses."""

    def __init__(self, repository: Optional[ExpenseRepository] = None):
        """Initialize analytics service."""
        self.repository = repository or ExpenseRepository()

    def monthly_summary(self, user_id: str, year: Any, month: Any) -> List[CategorySummary]:
        """
        Summarize a calendar month by category.

        Args:
            user_id: User ID
            year: Four-digit year
            month: Month number (1-12)

        Returns:
            Category summaries ordered by descending total

        Raises:
            ValidationError: If year or month is invalid
        """
        year, month = validate_year_month(year, month)
        start, end = month_bounds(year, month)
        return self.category_breakdown(user_id, start, end)

    def category_breakdown(
        self,
        user_id: str,
        start: datetime,
        end: Optional[datetime] = None
    ) -> List[CategorySummary]:
        """Group the expenses dated within ``[start, end]`` by category."""
        expenses = self.repository.find_in_range(user_id, start=start, end=end)
        logger.debug(f"Aggregating {len(expenses)} expenses for {user_id}")
        return group_by_category(expenses)

    def spending_trends(self, user_id: str, months: Any = None) -> List[TrendPoint]:
        """
        Monthly totals over a trailing window.

        Args:
            user_id: User ID
            months: Window length in months (default: 6)

        Returns:
            One point per month that has expenses, oldest first
        """
        months = validate_positive_int(
            months, 'months', default=config.DEFAULT_TREND_MONTHS, maximum=config.MAX_WINDOW_MONTHS
        )
        start = shift_months(utc_now(), -months)
        expenses = self.repository.find_in_range(user_id, start=start)
        return group_by_month(expenses)

    def dashboard(self, user_id: str) -> DashboardAnalytics:
        """
        Compare the current month with the previous one and list recent activity.

        Args:
            user_id: User ID

        Returns:
            Dashboard analytics
        """
        now = utc_now()
        last_year, last_month = previous_month(now.year, now.month)

        current = self.monthly_summary(user_id, now.year, now.month)
        previous = self.monthly_summary(user_id, last_year, last_month)

        current_total, current_count = sum_totals(current)
        previous_total, previous_count = sum_totals(previous)

        recent = self.repository.recent(user_id, limit=config.RECENT_EXPENSES_LIMIT)

        return DashboardAnalytics(
            current_month=MonthSnapshot(
                total=current_total,
                breakdown=current,
                transaction_count=current_count
            ),
            last_month=MonthSnapshot(
                total=previous_total,
                breakdown=previous,
                transaction_count=previous_count
            ),
            comparison=Comparison(
                percentage_change=percentage_change(previous_total, current_total),
                difference=round(current_total - previous_total, 2)
            ),
            recent_expenses=[Expense.from_item(item) for item in recent]
        )
