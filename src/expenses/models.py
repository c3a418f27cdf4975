"""Expense data models."""

from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import Field, field_validator

from shared.dates import to_storage_date, to_timestamp
from shared.models import CamelModel
from shared.validators import (
    DEFAULT_CATEGORY,
    DEFAULT_PAYMENT_METHOD,
    DESCRIPTION_MAX_LENGTH,
    parse_datetime,
    sanitize_string,
    validate_amount,
    validate_category,
    validate_payment_method,
    validate_tags,
    validate_title
)


def _optional_text(value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    value = sanitize_string(value, max_length=max_length)
    return value or None


class ExpenseFields(CamelModel):
    """Validators shared by the create and update payloads."""

    @field_validator('title', mode='before', check_fields=False)
    @classmethod
    def _title(cls, value):
        return validate_title(value)

    @field_validator('amount', mode='before', check_fields=False)
    @classmethod
    def _amount(cls, value):
        return float(validate_amount(value))

    @field_validator('category', mode='before', check_fields=False)
    @classmethod
    def _category(cls, value):
        return validate_category(value)

    @field_validator('payment_method', mode='before', check_fields=False)
    @classmethod
    def _payment_method(cls, value):
        return validate_payment_method(value)

    @field_validator('description', mode='before', check_fields=False)
    @classmethod
    def _description(cls, value):
        return _optional_text(value, DESCRIPTION_MAX_LENGTH)

    @field_validator('ai_suggestions', mode='before', check_fields=False)
    @classmethod
    def _ai_suggestions(cls, value):
        return _optional_text(value, 1000)

    @field_validator('ai_category', mode='before', check_fields=False)
    @classmethod
    def _ai_category(cls, value):
        return None if value is None else validate_category(value)

    @field_validator('tags', mode='before', check_fields=False)
    @classmethod
    def _tags(cls, value):
        return validate_tags(value)


class ExpenseCreate(ExpenseFields):
    """
    Expense creation request model.

    ``date`` defaults to the creation time and is stored truncated to whole
    seconds, so sub-second input does not survive a create/get round trip.
    """

    title: str
    amount: float
    category: str = DEFAULT_CATEGORY
    description: Optional[str] = None
    date: Optional[datetime] = None
    payment_method: str = DEFAULT_PAYMENT_METHOD
    is_recurring: bool = False
    tags: List[str] = Field(default_factory=list)
    ai_category: Optional[str] = None
    ai_confidence: Optional[float] = Field(None, ge=0, le=1)
    ai_suggestions: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def _date(cls, value):
        return None if value is None else parse_datetime(value)

    def to_item(self, user_id: str, expense_id: str, now: datetime) -> Dict[str, Any]:
        """Build the DynamoDB item for a new expense."""
        item = {
            'user_id': user_id,
            'expense_id': expense_id,
            'title': self.title,
            'amount': self.amount,
            'category': self.category,
            'description': self.description,
            'date': to_storage_date(self.date or now),
            'payment_method': self.payment_method,
            'is_recurring': self.is_recurring,
            'tags': self.tags,
            'ai_category': self.ai_category,
            'ai_confidence': self.ai_confidence,
            'ai_suggestions': self.ai_suggestions,
            'created_at': to_timestamp(now),
            'updated_at': to_timestamp(now)
        }
        return {k: v for k, v in item.items() if v is not None}


class ExpenseUpdate(ExpenseFields):
    """Expense update request model. Only fields present in the body change."""

    title: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    payment_method: Optional[str] = None
    is_recurring: Optional[bool] = None
    tags: Optional[List[str]] = None
    ai_category: Optional[str] = None
    ai_confidence: Optional[float] = Field(None, ge=0, le=1)
    ai_suggestions: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def _date(cls, value):
        return parse_datetime(value)

    @field_validator('is_recurring', mode='before')
    @classmethod
    def _is_recurring(cls, value):
        if value is None:
            raise ValueError("Recurring flag must be true or false")
        return value

    def to_updates(self) -> Dict[str, Any]:
        """Return the attributes to overwrite, keyed by storage name."""
        updates = self.model_dump(exclude_unset=True)
        if 'date' in updates:
            updates['date'] = to_storage_date(updates['date'])
        return updates


class Expense(CamelModel):
    """Expense model as returned by the API."""

    id: str
    title: str
    amount: float
    category: str
    description: Optional[str] = None
    date: datetime
    payment_method: str = DEFAULT_PAYMENT_METHOD
    is_recurring: bool = False
    tags: List[str] = Field(default_factory=list)
    ai_category: Optional[str] = None
    ai_confidence: Optional[float] = None
    ai_suggestions: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Expense':
        """Build from a stored DynamoDB item."""
        fields = {k: v for k, v in item.items() if k not in ('user_id', 'expense_id')}
        return cls(id=item['expense_id'], **fields)
