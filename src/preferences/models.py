"""User preference data models."""

from typing import List, Optional
from datetime import datetime

from pydantic import Field, field_validator

from shared.models import CamelModel
from shared.validators import validate_amount, validate_threshold

DEFAULT_WARNING_THRESHOLD = 80


def _optional_amount(value, field: str):
    # null or 0 clears a limit
    if value is None or value == 0:
        return None
    return float(validate_amount(value, field=field))


class Preferences(CamelModel):
    """Budget settings owned by the server, one record per user."""

    daily_limit: Optional[float] = None
    monthly_limit: Optional[float] = None
    notifications_enabled: bool = True
    warning_threshold: int = DEFAULT_WARNING_THRESHOLD
    monthly_income: Optional[float] = None
    savings_goal: Optional[float] = None
    updated_at: Optional[datetime] = None


class PreferencesUpdate(CamelModel):
    """Partial update of preferences; only fields present in the body change."""

    daily_limit: Optional[float] = None
    monthly_limit: Optional[float] = None
    notifications_enabled: Optional[bool] = None
    warning_threshold: Optional[int] = None
    monthly_income: Optional[float] = None
    savings_goal: Optional[float] = None

    @field_validator('daily_limit', mode='before')
    @classmethod
    def _daily_limit(cls, value):
        return _optional_amount(value, 'Daily limit')

    @field_validator('monthly_limit', mode='before')
    @classmethod
    def _monthly_limit(cls, value):
        return _optional_amount(value, 'Monthly limit')

    @field_validator('monthly_income', mode='before')
    @classmethod
    def _monthly_income(cls, value):
        return _optional_amount(value, 'Monthly income')

    @field_validator('savings_goal', mode='before')
    @classmethod
    def _savings_goal(cls, value):
        return _optional_amount(value, 'Savings goal')

    @field_validator('warning_threshold', mode='before')
    @classmethod
    def _warning_threshold(cls, value):
        if value is None:
            return DEFAULT_WARNING_THRESHOLD
        return validate_threshold(value)

    @field_validator('notifications_enabled', mode='before')
    @classmethod
    def _notifications_enabled(cls, value):
        if value is None:
            raise ValueError("Notifications flag must be true or false")
        return value


class LimitStatus(CamelModel):
    """Spending against one limit.

    ``status`` is one of ``exceeded``, ``warning``, ``ok`` or ``unset``.
    """

    limit: Optional[float] = None
    spent: float
    remaining: Optional[float] = None
    percentage_used: Optional[float] = None
    status: str


class BudgetStatus(CamelModel):
    daily: LimitStatus
    monthly: LimitStatus
    warning_threshold: int
    alerts: List[str] = Field(default_factory=list)
