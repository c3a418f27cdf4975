"""Analytics data models."""

from typing import List

from pydantic import Field

from expenses.models import Expense
from shared.models import CamelModel


class CategorySummary(CamelModel):
    """One category's aggregate within a period."""

    category: str
    total_amount: float
    count: int
    avg_amount: float


class TrendPoint(CamelModel):
    """Aggregate spending for one calendar month."""

    year: int
    month: int
    total_amount: float
    count: int


class MonthSnapshot(CamelModel):
    """Totals and category breakdown for one month of the dashboard."""

    total: float
    breakdown: List[CategorySummary] = Field(default_factory=list)
    transaction_count: int = 0


class Comparison(CamelModel):
    """Current month against the previous month."""

    percentage_change: float
    difference: float


class DashboardAnalytics(CamelModel):
    """Dashboard composite: two month snapshots, their comparison and recent activity."""

    current_month: MonthSnapshot
    last_month: MonthSnapshot
    comparison: Comparison
    recent_expenses: List[Expense] = Field(default_factory=list)
