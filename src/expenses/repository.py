"""Expense store backed by DynamoDB."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr, Key

from shared import config
from shared.dates import to_storage_date
from shared.dynamodb import DynamoDBClient

logger = logging.getLogger(__name__)

DATE_INDEX = 'user-date-index'
CREATED_INDEX = 'user-created-index'

# API sort field -> stored attribute
SORT_FIELDS = {
    'date': 'date',
    'amount': 'amount',
    'title': 'title',
    'category': 'category',
    'createdAt': 'created_at',
    'updatedAt': 'updated_at'
}


class ExpenseRepository:
    """
    Persists expenses keyed by (user_id, expense_id).

    The table carries two global secondary indexes: ``user-date-index``
    (user_id, date) for range queries and ``user-created-index``
    (user_id, created_at) for the activity feed.
    """

    def __init__(self, table_name: Optional[str] = None):
        self.table = DynamoDBClient(table_name or config.EXPENSES_TABLE)

    def put(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return self.table.put_item(item)

    def get(self, user_id: str, expense_id: str) -> Optional[Dict[str, Any]]:
        return self.table.get_item({'user_id': user_id, 'expense_id': expense_id})

    def update(self, user_id: str, expense_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self.table.set_attributes(
            {'user_id': user_id, 'expense_id': expense_id},
            updates
        )

    def delete(self, user_id: str, expense_id: str) -> None:
        self.table.delete_item({'user_id': user_id, 'expense_id': expense_id})

    def find_in_range(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        category: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Return every expense whose date lies in ``[start, end]`` (both inclusive).

        Either bound may be omitted. Results come back in ascending date order.
        """
        key_condition = Key('user_id').eq(user_id)
        if start and end:
            key_condition = key_condition & Key('date').between(
                to_storage_date(start), to_storage_date(end)
            )
        elif start:
            key_condition = key_condition & Key('date').gte(to_storage_date(start))
        elif end:
            key_condition = key_condition & Key('date').lte(to_storage_date(end))

        filter_expr = Attr('category').eq(category) if category else None

        return self.table.query_all(
            key_condition_expression=key_condition,
            filter_expression=filter_expr,
            index_name=DATE_INDEX
        )

    def find_page(
        self,
        user_id: str,
        category: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        sort_by: str = 'date',
        sort_order: str = 'desc',
        page: int = 1,
        limit: int = config.DEFAULT_PAGE_SIZE
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Filter, sort and paginate a user's expenses.

        Returns:
            (items on the requested page, total matching items)
        """
        items = self.find_in_range(user_id, start=start, end=end, category=category)

        attribute = SORT_FIELDS.get(sort_by, 'date')
        missing = 0 if attribute == 'amount' else ''
        items.sort(
            key=lambda item: item.get(attribute, missing),
            reverse=(sort_order == 'desc')
        )

        offset = (page - 1) * limit
        return items[offset:offset + limit], len(items)

    def recent(self, user_id: str, limit: int = config.RECENT_EXPENSES_LIMIT) -> List[Dict[str, Any]]:
        """Most recently created expenses, newest first."""
        result = self.table.query(
            key_condition_expression=Key('user_id').eq(user_id),
            index_name=CREATED_INDEX,
            scan_forward=False,
            limit=limit
        )
        return result['items']
