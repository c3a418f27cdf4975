"""Expense service for managing expenses."""

import math
import uuid
from typing import Dict, Any, Optional
from datetime import datetime, time
import logging

from shared import config
from shared.dates import utc_now, to_timestamp
from shared.models import validate_payload
from shared.validators import (
    parse_datetime,
    validate_category,
    validate_positive_int
)
from shared.exceptions import ValidationError, NotFoundError
from expenses.models import Expense, ExpenseCreate, ExpenseUpdate
from expenses.repository import ExpenseRepository, SORT_FIELDS

logger = logging.getLogger(__name__)

SORT_ORDERS = ('asc', 'desc')


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, repository: Optional[ExpenseRepository] = None):
        """Initialize expense service."""
        self.repository = repository or ExpenseRepository()

    def get_expense(self, user_id: str, expense_id: str) -> Dict[str, Any]:
        """
        Get expense by ID.

        Args:
            user_id: User ID
            expense_id: Expense ID

        Returns:
            Expense data

        Raises:
            NotFoundError: If expense not found
        """
        item = self.repository.get(user_id, expense_id)

        if not item:
            raise NotFoundError("Expense not found")

        return Expense.from_item(item).to_response()

    def list_expenses(
        self,
        user_id: str,
        page: Any = None,
        limit: Any = None,
        category: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        List expenses for a user with optional filters.

        Args:
            user_id: User ID
            page: 1-based page number (default: 1)
            limit: Page size (default: 10, capped at 100)
            category: Optional category filter ("all" means no filter)
            start_date: Optional start date or datetime (inclusive)
            end_date: Optional end date or datetime (inclusive; a bare date covers the whole day)
            sort_by: date, amount, title, category, createdAt or updatedAt
            sort_order: asc or desc

        Returns:
            Dictionary with the page of expenses and pagination info

        Raises:
            ValidationError: If any parameter is invalid
        """
        page = validate_positive_int(page, 'page', default=1)
        limit = validate_positive_int(
            limit, 'limit', default=config.DEFAULT_PAGE_SIZE, maximum=config.MAX_PAGE_SIZE
        )

        sort_by = sort_by or 'date'
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"Invalid sortBy. Must be one of: {', '.join(SORT_FIELDS)}")

        sort_order = (sort_order or 'desc').lower()
        if sort_order not in SORT_ORDERS:
            raise ValidationError("Invalid sortOrder. Must be 'asc' or 'desc'")

        if category and category.lower() != 'all':
            category = validate_category(category)
        else:
            category = None

        start = parse_datetime(start_date) if start_date else None
        end = self._parse_end_date(end_date) if end_date else None

        items, total = self.repository.find_page(
            user_id,
            category=category,
            start=start,
            end=end,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit
        )

        total_pages = math.ceil(total / limit)

        return {
            'expenses': [Expense.from_item(item).to_response() for item in items],
            'pagination': {
                'currentPage': page,
                'totalPages': total_pages,
                'totalItems': total,
                'itemsPerPage': limit,
                'hasNextPage': page < total_pages,
                'hasPrevPage': page > 1
            }
        }

    def create_expense(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an expense.

        Args:
            user_id: User ID
            data: Request body

        Returns:
            Created expense

        Raises:
            ValidationError: If validation fails
        """
        payload = validate_payload(ExpenseCreate, data)

        expense_id = str(uuid.uuid4())
        item = payload.to_item(user_id, expense_id, utc_now())
        self.repository.put(item)

        logger.info(f"Created expense {expense_id}")
        return Expense.from_item(item).to_response()

    def update_expense(
        self,
        user_id: str,
        expense_id: str,
        updates: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Update expense.

        Args:
            user_id: User ID
            expense_id: Expense ID
            updates: Fields to update

        Returns:
            Updated expense

        Raises:
            NotFoundError: If expense not found
            ValidationError: If validation fails
        """
        payload = validate_payload(ExpenseUpdate, updates)
        changes = payload.to_updates()

        if not changes:
            raise ValidationError("No updates provided")

        # Verify expense exists
        if not self.repository.get(user_id, expense_id):
            raise NotFoundError("Expense not found")

        changes['updated_at'] = to_timestamp(utc_now())
        updated = self.repository.update(user_id, expense_id, changes)

        logger.info(f"Updated expense {expense_id}")
        return Expense.from_item(updated).to_response()

    def delete_expense(self, user_id: str, expense_id: str) -> Dict[str, Any]:
        """
        Delete expense.

        Returns:
            The deleted expense

        Raises:
            NotFoundError: If expense not found
        """
        item = self.repository.get(user_id, expense_id)
        if not item:
            raise NotFoundError("Expense not found")

        self.repository.delete(user_id, expense_id)

        logger.info(f"Deleted expense {expense_id}")
        return Expense.from_item(item).to_response()

    @staticmethod
    def _parse_end_date(value: str) -> datetime:
        end = parse_datetime(value)
        if len(value.strip()) == 10:
            end = datetime.combine(end.date(), time(23, 59, 59))
        return end
