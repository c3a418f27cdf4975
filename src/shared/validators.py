"""Validation utilities for the expense tracker application."""

import re
from typing import Any, List, Optional
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from dateutil.parser import isoparse

from .exceptions import ValidationError


# Expense categories, in the order used for prompts and keyword matching
VALID_CATEGORIES = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Travel",
    "Education",
    "Groceries",
    "Personal Care",
    "Home & Garden",
    "Insurance",
    "Investments",
    "Gifts & Donations",
    "Business",
    "Other"
]

DEFAULT_CATEGORY = "Other"

VALID_PAYMENT_METHODS = [
    "Cash",
    "Credit Card",
    "Debit Card",
    "UPI",
    "Net Banking",
    "Other"
]

DEFAULT_PAYMENT_METHOD = "Cash"

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def validate_email(email: str) -> str:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        Validated email

    Raises:
        ValidationError: If email is invalid
    """
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")

    email = email.strip().lower()
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

    if not re.match(pattern, email):
        raise ValidationError("Invalid email format")

    return email


def validate_password(password: str) -> str:
    """
    Validate password strength.

    Raises:
        ValidationError: If password is invalid
    """
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")

    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', password):
        raise ValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', password):
        raise ValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', password):
        raise ValidationError("Password must contain at least one number")

    return password


def validate_amount(amount: Any, field: str = "Amount") -> Decimal:
    """
    Validate monetary amount.

    Args:
        amount: Amount to validate
        field: Field label used in error messages

    Returns:
        Validated amount as Decimal

    Raises:
        ValidationError: If amount is invalid
    """
    if amount is None or isinstance(amount, bool):
        raise ValidationError(f"{field} is required")

    try:
        decimal_amount = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field.lower()} format")

    if not decimal_amount.is_finite():
        raise ValidationError(f"Invalid {field.lower()} format")

    if decimal_amount <= 0:
        raise ValidationError(f"{field} must be greater than 0")

    if decimal_amount > Decimal('9999999.99'):
        raise ValidationError(f"{field} is too large")

    # Ensure at most 2 decimal places
    if decimal_amount.normalize().as_tuple().exponent < -2:
        raise ValidationError(f"{field} can have at most 2 decimal places")

    return decimal_amount


def validate_category(category: Optional[str]) -> str:
    """
    Validate expense category.

    Raises:
        ValidationError: If category is invalid
    """
    if not category:
        raise ValidationError("Category is required")

    if category not in VALID_CATEGORIES:
        raise ValidationError(
            f"Invalid category. Must be one of: {', '.join(VALID_CATEGORIES)}"
        )

    return category


def validate_payment_method(payment_method: Optional[str]) -> str:
    """Validate payment method against the fixed list."""
    if not payment_method:
        raise ValidationError("Payment method is required")

    if payment_method not in VALID_PAYMENT_METHODS:
        raise ValidationError(
            f"Invalid payment method. Must be one of: {', '.join(VALID_PAYMENT_METHODS)}"
        )

    return payment_method


def validate_title(title: Any) -> str:
    """Validate and trim an expense title."""
    if title is None:
        raise ValidationError("Expense title is required")

    title = sanitize_string(title)
    if not title:
        raise ValidationError("Expense title is required")

    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

    return title


def validate_tags(tags: Any) -> List[str]:
    """Validate tags as a list of strings, trimming each and dropping blanks."""
    if tags is None:
        return []

    if not isinstance(tags, list):
        raise ValidationError("Tags must be a list of strings")

    cleaned = []
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationError("Tags must be a list of strings")
        tag = tag.strip()
        if tag:
            cleaned.append(tag)

    return cleaned


def parse_datetime(value: Any) -> datetime:
    """
    Parse an ISO 8601 date or datetime into a naive UTC datetime.

    Date-only strings resolve to midnight. Aware values are converted to UTC.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = isoparse(value.strip())
        except ValueError:
            raise ValidationError("Invalid date format. Use ISO 8601 (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS)")
    else:
        raise ValidationError("Date is required")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)

    return parsed


def validate_year_month(year: Any, month: Any) -> tuple:
    """
    Validate a calendar year and month.

    Returns:
        (year, month) as integers

    Raises:
        ValidationError: If either value does not form a valid calendar month
    """
    try:
        year = int(year)
        month = int(month)
    except (TypeError, ValueError):
        raise ValidationError("Year and month must be integers")

    if year < 1 or year > 9999:
        raise ValidationError("Year must be between 1 and 9999")

    if month < 1 or month > 12:
        raise ValidationError("Month must be between 1 and 12")

    return year, month


def validate_positive_int(value: Any, field: str, default: int, maximum: Optional[int] = None) -> int:
    """
    Validate an optional positive integer, typically from a query string.

    Raises:
        ValidationError: If the value is not an integer >= 1
    """
    if value is None or value == '':
        return default

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")

    if number < 1:
        raise ValidationError(f"{field} must be at least 1")

    if maximum is not None:
        number = min(number, maximum)

    return number


def validate_threshold(threshold: Any) -> int:
    """
    Validate alert threshold percentage.

    Raises:
        ValidationError: If threshold is invalid
    """
    try:
        threshold = int(threshold)
    except (ValueError, TypeError):
        raise ValidationError("Threshold must be an integer")

    if threshold < 0 or threshold > 100:
        raise ValidationError("Threshold must be between 0 and 100")

    return threshold


def sanitize_string(value: Any, max_length: Optional[int] = None) -> str:
    """
    Sanitize string input by trimming surrounding whitespace.

    Raises:
        ValidationError: If value is not a string or is too long
    """
    if not isinstance(value, str):
        raise ValidationError("Value must be a string")

    value = value.strip()

    if max_length and len(value) > max_length:
        raise ValidationError(f"Value exceeds maximum length of {max_length}")

    return value
