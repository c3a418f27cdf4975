"""Preferences service: budget settings and budget-status evaluation."""

import logging
from datetime import datetime, time
from typing import Any, Dict, List, Optional

from shared import config
from shared.dates import to_timestamp, utc_now
from shared.dynamodb import DynamoDBClient
from shared.models import validate_payload
from shared.exceptions import ValidationError
from analytics.aggregation import month_bounds
from expenses.repository import ExpenseRepository
from preferences.models import BudgetStatus, LimitStatus, Preferences, PreferencesUpdate

logger = logging.getLogger(__name__)


def evaluate_limit(limit: Optional[float], spent: float, threshold: int) -> LimitStatus:
    """
    Compare spending against a limit.

    Args:
        limit: Spending limit, or None when unset
        spent: Amount spent in the limit's period
        threshold: Warning threshold as a percentage of the limit

    Returns:
        ``exceeded`` when spent > limit, ``warning`` when spent > limit x threshold%,
        ``ok`` otherwise, and ``unset`` without a limit
    """
    spent = round(spent, 2)

    if not limit:
        return LimitStatus(spent=spent, status='unset')

    if spent > limit:
        status = 'exceeded'
    elif spent > limit * threshold / 100:
        status = 'warning'
    else:
        status = 'ok'

    return LimitStatus(
        limit=limit,
        spent=spent,
        remaining=round(limit - spent, 2),
        percentage_used=round(spent / limit * 100, 2),
        status=status
    )


def budget_alerts(label: str, limit_status: LimitStatus) -> List[str]:
    """Human-readable alert for a limit in the warning or exceeded state."""
    symbol = config.CURRENCY_SYMBOL

    if limit_status.status == 'exceeded':
        excess = limit_status.spent - limit_status.limit
        return [
            f"{label} budget exceeded! Your {label.lower()} limit was {symbol}{limit_status.limit:,.2f} "
            f"but you've spent {symbol}{limit_status.spent:,.2f}. That's {symbol}{excess:,.2f} over budget."
        ]

    if limit_status.status == 'warning':
        return [
            f"{label} budget warning: you're near your {symbol}{limit_status.limit:,.2f} limit. "
            f"Current spending: {symbol}{limit_status.spent:,.2f}"
        ]

    return []


class PreferencesService:
    """Service for managing user preferences."""

    def __init__(
        self,
        table_name: Optional[str] = None,
        repository: Optional[ExpenseRepository] = None
    ):
        """
        Initialize preferences service.

        Args:
            table_name: Preferences table (default: PREFERENCES_TABLE)
            repository: Expense store used for budget status
        """
        self.preferences_table = DynamoDBClient(table_name or config.PREFERENCES_TABLE)
        self.repository = repository or ExpenseRepository()

    def get_preferences(self, user_id: str) -> Preferences:
        """Return the user's preferences, or the defaults when none are stored."""
        item = self.preferences_table.get_item({'user_id': user_id})
        if not item:
            return Preferences()
        return Preferences(**{k: v for k, v in item.items() if k != 'user_id'})

    def update_preferences(self, user_id: str, data: Dict[str, Any]) -> Preferences:
        """
        Merge the given fields into the stored preferences.

        Args:
            user_id: User ID
            data: Request body

        Returns:
            Updated preferences

        Raises:
            ValidationError: If validation fails or the body is empty
        """
        payload = validate_payload(PreferencesUpdate, data)
        changes = payload.model_dump(exclude_unset=True)

        if not changes:
            raise ValidationError("No updates provided")

        current = self.get_preferences(user_id)
        merged = current.model_copy(update={**changes, 'updated_at': utc_now()})

        item = merged.model_dump(exclude={'updated_at'})
        item['user_id'] = user_id
        item['updated_at'] = to_timestamp(merged.updated_at)
        self.preferences_table.put_item({k: v for k, v in item.items() if v is not None})

        logger.info(f"Updated preferences for {user_id}")
        return merged

    def reset_preferences(self, user_id: str) -> Preferences:
        """Delete stored preferences and return the defaults."""
        self.preferences_table.delete_item({'user_id': user_id})
        logger.info(f"Reset preferences for {user_id}")
        return Preferences()

    def budget_status(self, user_id: str) -> BudgetStatus:
        """
        Evaluate today's and this month's spending against the user's limits.

        Args:
            user_id: User ID

        Returns:
            Budget status with alerts when notifications are enabled
        """
        preferences = self.get_preferences(user_id)
        now = utc_now()

        month_start, month_end = month_bounds(now.year, now.month)
        month_expenses = self.repository.find_in_range(user_id, start=month_start, end=month_end)

        day_start = datetime.combine(now.date(), time.min)
        day_end = datetime.combine(now.date(), time(23, 59, 59))

        monthly_spent = 0.0
        daily_spent = 0.0
        for expense in month_expenses:
            amount = float(expense.get('amount', 0))
            monthly_spent += amount
            date = datetime.fromisoformat(expense['date'])
            if day_start <= date <= day_end:
                daily_spent += amount

        threshold = preferences.warning_threshold
        daily = evaluate_limit(preferences.daily_limit, daily_spent, threshold)
        monthly = evaluate_limit(preferences.monthly_limit, monthly_spent, threshold)

        alerts = []
        if preferences.notifications_enabled:
            alerts.extend(budget_alerts('Daily', daily))
            alerts.extend(budget_alerts('Monthly', monthly))

        return BudgetStatus(
            daily=daily,
            monthly=monthly,
            warning_threshold=threshold,
            alerts=alerts
        )
