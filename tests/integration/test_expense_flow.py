"""Integration tests for the expense, analytics and preferences flow against mocked DynamoDB."""

import pytest
from unittest.mock import patch
from datetime import datetime
from moto import mock_aws
import boto3
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from analytics.service import AnalyticsService
from expenses.repository import ExpenseRepository
from expenses.service import ExpenseService
from preferences.service import PreferencesService
from shared.exceptions import NotFoundError

EXPENSES_TABLE = 'test-expenses'
PREFERENCES_TABLE = 'test-preferences'


@pytest.fixture
def aws_credentials():
    """Mock AWS Credentials for moto."""
    os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
    os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    os.environ['AWS_SECURITY_TOKEN'] = 'testing'
    os.environ['AWS_SESSION_TOKEN'] = 'testing'
    os.environ['AWS_DEFAULT_REGION'] = 'us-east-1'


@pytest.fixture
def dynamodb(aws_credentials):
    """Create mock DynamoDB tables."""
    with mock_aws():
        dynamodb = boto3.resource('dynamodb', region_name='us-east-1')

        dynamodb.create_table(
            TableName=EXPENSES_TABLE,
            KeySchema=[
                {'AttributeName': 'user_id', 'KeyType': 'HASH'},
                {'AttributeName': 'expense_id', 'KeyType': 'RANGE'}
            ],
            AttributeDefinitions=[
                {'AttributeName': 'user_id', 'AttributeType': 'S'},
                {'AttributeName': 'expense_id', 'AttributeType': 'S'},
                {'AttributeName': 'date', 'AttributeType': 'S'},
                {'AttributeName': 'created_at', 'AttributeType': 'S'}
            ],
            BillingMode='PAY_PER_REQUEST',
            GlobalSecondaryIndexes=[
                {
                    'IndexName': 'user-date-index',
                    'KeySchema': [
                        {'AttributeName': 'user_id', 'KeyType': 'HASH'},
                        {'AttributeName': 'date', 'KeyType': 'RANGE'}
                    ],
                    'Projection': {'ProjectionType': 'ALL'}
                },
                {
                    'IndexName': 'user-created-index',
                    'KeySchema': [
                        {'AttributeName': 'user_id', 'KeyType': 'HASH'},
                        {'AttributeName': 'created_at', 'KeyType': 'RANGE'}
                    ],
                    'Projection': {'ProjectionType': 'ALL'}
                }
            ]
        )

        dynamodb.create_table(
            TableName=PREFERENCES_TABLE,
            KeySchema=[{'AttributeName': 'user_id', 'KeyType': 'HASH'}],
            AttributeDefinitions=[{'AttributeName': 'user_id', 'AttributeType': 'S'}],
            BillingMode='PAY_PER_REQUEST'
        )

        yield dynamodb


@pytest.fixture
def repository(dynamodb):
    return ExpenseRepository(table_name=EXPENSES_TABLE)


@pytest.fixture
def expense_service(repository):
    return ExpenseService(repository=repository)


@pytest.fixture
def seeded(expense_service):
    """Store a small set of expenses across two months for two users."""
    expenses = [
        {'title': 'Groceries run', 'amount': 1200.50, 'category': 'Groceries', 'date': '2024-03-03'},
        {'title': 'Metro card', 'amount': 500, 'category': 'Transportation', 'date': '2024-03-10'},
        {'title': 'Vegetables', 'amount': 300.25, 'category': 'Groceries', 'date': '2024-03-15T18:30:00'},
        {'title': 'Movie night', 'amount': 800, 'category': 'Entertainment', 'date': '2024-03-31T23:00:00'},
        {'title': 'Rent top-up', 'amount': 2000, 'category': 'Bills & Utilities', 'date': '2024-04-01'},
        {'title': 'Late February snack', 'amount': 90, 'category': 'Food & Dining', 'date': '2024-02-29'}
    ]
    created = [expense_service.create_expense('user123', expense) for expense in expenses]
    expense_service.create_expense('other-user', {
        'title': 'Not mine', 'amount': 99999, 'category': 'Groceries', 'date': '2024-03-05'
    })
    return created


class TestExpenseFlow:
    """Integration tests for expense storage and retrieval."""

    def test_create_and_get(self, expense_service):
        created = expense_service.create_expense('user123', {
            'title': 'Coffee beans',
            'amount': 450.75,
            'category': 'Groceries',
            'paymentMethod': 'UPI',
            'tags': ['home'],
            'date': '2024-03-03T09:15:00'
        })

        fetched = expense_service.get_expense('user123', created['id'])

        assert fetched == created
        assert fetched['amount'] == 450.75
        assert fetched['date'] == '2024-03-03T09:15:00'

    def test_expenses_are_scoped_to_user(self, expense_service, seeded):
        with pytest.raises(NotFoundError):
            expense_service.get_expense('other-user', seeded[0]['id'])

    def test_list_filters_and_paginates(self, expense_service, seeded):
        first = expense_service.list_expenses(
            'user123', start_date='2024-03-01', end_date='2024-03-31', sort_by='amount', limit=2
        )
        second = expense_service.list_expenses(
            'user123', start_date='2024-03-01', end_date='2024-03-31', sort_by='amount', limit=2, page=2
        )

        assert [e['amount'] for e in first['expenses']] == [1200.5, 800]
        assert [e['amount'] for e in second['expenses']] == [500, 300.25]
        assert first['pagination']['totalItems'] == 4
        assert first['pagination']['totalPages'] == 2
        assert second['pagination']['hasNextPage'] is False

    def test_list_by_category_ascending_date(self, expense_service, seeded):
        result = expense_service.list_expenses('user123', category='Groceries', sort_order='asc')

        assert [e['title'] for e in result['expenses']] == ['Groceries run', 'Vegetables']

    def test_update_and_delete(self, expense_service, seeded):
        expense_id = seeded[1]['id']

        updated = expense_service.update_expense('user123', expense_id, {'amount': 650, 'title': 'Metro pass'})

        assert updated['amount'] == 650
        assert updated['title'] == 'Metro pass'
        assert updated['category'] == 'Transportation'

        expense_service.delete_expense('user123', expense_id)

        with pytest.raises(NotFoundError):
            expense_service.get_expense('user123', expense_id)


class TestAnalyticsFlow:
    """Integration tests for aggregation over stored expenses."""

    def test_monthly_summary(self, repository, seeded):
        summary = AnalyticsService(repository=repository).monthly_summary('user123', 2024, 3)

        assert [row.category for row in summary] == ['Groceries', 'Entertainment', 'Transportation']
        groceries = summary[0]
        assert groceries.total_amount == 1500.75
        assert groceries.count == 2
        assert groceries.avg_amount == 750.38

    def test_monthly_summary_boundaries(self, repository, expense_service):
        for title, date in [
            ('Leap day late', '2024-02-29T23:59:59'),
            ('First second', '2024-03-01T00:00:00'),
            ('Last second', '2024-03-31T23:59:59'),
            ('Next month', '2024-04-01T00:00:00')
        ]:
            expense_service.create_expense('edge-user', {
                'title': title, 'amount': 100, 'category': 'Shopping', 'date': date
            })
        analytics_service = AnalyticsService(repository=repository)

        march = analytics_service.monthly_summary('edge-user', 2024, 3)
        february = analytics_service.monthly_summary('edge-user', 2024, 2)

        assert [(row.category, row.count, row.total_amount) for row in march] == [('Shopping', 2, 200)]
        assert february[0].count == 1

    def test_empty_month(self, repository, seeded):
        assert AnalyticsService(repository=repository).monthly_summary('user123', 2023, 1) == []

    @patch('analytics.service.utc_now')
    def test_dashboard(self, mock_now, repository, seeded):
        mock_now.return_value = datetime(2024, 4, 15, 12, 0, 0)

        dashboard = AnalyticsService(repository=repository).dashboard('user123')

        assert dashboard.current_month.total == 2000
        assert dashboard.current_month.transaction_count == 1
        assert dashboard.last_month.total == 2800.75
        assert dashboard.last_month.transaction_count == 4
        assert dashboard.comparison.difference == -800.75
        assert dashboard.comparison.percentage_change == -28.59
        assert len(dashboard.recent_expenses) == 6


class TestPreferencesFlow:
    """Integration tests for stored preferences and budget status."""

    @pytest.fixture
    def preferences_service(self, repository):
        return PreferencesService(table_name=PREFERENCES_TABLE, repository=repository)

    def test_update_and_reset(self, preferences_service):
        preferences_service.update_preferences('user123', {'monthlyLimit': 5000, 'warningThreshold': 75})

        stored = preferences_service.get_preferences('user123')
        assert stored.monthly_limit == 5000
        assert stored.warning_threshold == 75
        assert stored.updated_at is not None

        reset = preferences_service.reset_preferences('user123')
        assert reset.monthly_limit is None
        assert preferences_service.get_preferences('user123').warning_threshold == 80

    @patch('preferences.service.utc_now')
    def test_budget_status(self, mock_now, preferences_service, seeded):
        mock_now.return_value = datetime(2024, 3, 10, 20, 0, 0)
        preferences_service.update_preferences('user123', {'dailyLimit': 400, 'monthlyLimit': 3000})

        status = preferences_service.budget_status('user123')

        assert status.daily.spent == 500
        assert status.daily.status == 'exceeded'
        assert status.monthly.spent == 2800.75
        assert status.monthly.status == 'warning'
        assert len(status.alerts) == 2
