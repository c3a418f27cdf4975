"""Unit tests for preferences service."""

import pytest
from unittest.mock import Mock, patch
from datetime import datetime
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from preferences.models import BudgetStatus, LimitStatus
from preferences.service import PreferencesService, budget_alerts, evaluate_limit
from shared.exceptions import ValidationError


class TestEvaluateLimit:
    """Test cases for limit evaluation."""

    def test_unset(self):
        status = evaluate_limit(None, 250, 80)

        assert status.status == 'unset'
        assert status.spent == 250
        assert status.remaining is None

    def test_exceeded(self):
        status = evaluate_limit(1000, 1200, 80)

        assert status.status == 'exceeded'
        assert status.remaining == -200
        assert status.percentage_used == 120.0

    def test_warning_above_threshold(self):
        assert evaluate_limit(1000, 850, 80).status == 'warning'

    def test_ok_at_threshold(self):
        assert evaluate_limit(1000, 800, 80).status == 'ok'

    def test_at_limit_is_warning(self):
        assert evaluate_limit(1000, 1000, 80).status == 'warning'

    def test_alert_messages(self):
        exceeded = budget_alerts('Monthly', evaluate_limit(1000, 1200, 80))
        ok = budget_alerts('Daily', evaluate_limit(1000, 100, 80))

        assert exceeded == [
            "Monthly budget exceeded! Your monthly limit was ₹1,000.00 "
            "but you've spent ₹1,200.00. That's ₹200.00 over budget."
        ]
        assert ok == []

    def test_budget_status_alerts_not_shared(self):
        unset = LimitStatus(spent=0, status='unset')
        first = BudgetStatus(daily=unset, monthly=unset, warning_threshold=80)
        second = BudgetStatus(daily=unset, monthly=unset, warning_threshold=80)

        first.alerts.append('Daily budget warning')

        assert second.alerts == []
        assert BudgetStatus.model_fields['alerts'].default_factory is list


class TestPreferencesService:
    """Test cases for PreferencesService."""

    @pytest.fixture
    def repository(self):
        return Mock()

    @pytest.fixture
    def preferences_service(self, repository):
        """Create preferences service with a mocked table."""
        with patch('preferences.service.DynamoDBClient'):
            service = PreferencesService(repository=repository)
            service.preferences_table = Mock()
            return service

    def test_get_defaults(self, preferences_service):
        preferences_service.preferences_table.get_item.return_value = None

        preferences = preferences_service.get_preferences('user123')

        assert preferences.warning_threshold == 80
        assert preferences.notifications_enabled is True
        assert preferences.daily_limit is None

    def test_get_stored(self, preferences_service):
        preferences_service.preferences_table.get_item.return_value = {
            'user_id': 'user123',
            'daily_limit': 500,
            'warning_threshold': 90,
            'notifications_enabled': False,
            'updated_at': '2024-05-01T10:00:00.000000'
        }

        preferences = preferences_service.get_preferences('user123')

        assert preferences.daily_limit == 500
        assert preferences.warning_threshold == 90
        assert preferences.notifications_enabled is False

    @patch('preferences.service.utc_now')
    def test_update_merges_fields(self, mock_now, preferences_service):
        mock_now.return_value = datetime(2024, 5, 2, 9, 0, 0)
        preferences_service.preferences_table.get_item.return_value = {
            'user_id': 'user123',
            'daily_limit': 500,
            'warning_threshold': 90
        }

        preferences = preferences_service.update_preferences(
            'user123', {'monthlyLimit': 20000, 'savingsGoal': '5000.50'}
        )

        assert preferences.daily_limit == 500
        assert preferences.monthly_limit == 20000
        assert preferences.savings_goal == 5000.5
        item = preferences_service.preferences_table.put_item.call_args[0][0]
        assert item['user_id'] == 'user123'
        assert item['monthly_limit'] == 20000
        assert item['warning_threshold'] == 90
        assert item['updated_at'] == '2024-05-02T09:00:00.000000'
        assert 'monthly_income' not in item

    def test_update_clears_limit(self, preferences_service):
        preferences_service.preferences_table.get_item.return_value = {
            'user_id': 'user123', 'daily_limit': 500
        }

        preferences = preferences_service.update_preferences('user123', {'dailyLimit': None})

        assert preferences.daily_limit is None
        item = preferences_service.preferences_table.put_item.call_args[0][0]
        assert 'daily_limit' not in item

    @pytest.mark.parametrize('body', [
        {'warningThreshold': 150},
        {'dailyLimit': -5},
        {'notificationsEnabled': None},
        {}
    ])
    def test_update_rejects_invalid(self, preferences_service, body):
        preferences_service.preferences_table.get_item.return_value = None

        with pytest.raises(ValidationError):
            preferences_service.update_preferences('user123', body)

        preferences_service.preferences_table.put_item.assert_not_called()

    def test_reset(self, preferences_service):
        preferences = preferences_service.reset_preferences('user123')

        preferences_service.preferences_table.delete_item.assert_called_once_with({'user_id': 'user123'})
        assert preferences.warning_threshold == 80

    @patch('preferences.service.utc_now')
    def test_budget_status(self, mock_now, preferences_service, repository):
        mock_now.return_value = datetime(2024, 5, 20, 15, 0, 0)
        preferences_service.preferences_table.get_item.return_value = {
            'user_id': 'user123',
            'daily_limit': 1000,
            'monthly_limit': 10000,
            'warning_threshold': 80,
            'notifications_enabled': True
        }
        repository.find_in_range.return_value = [
            {'amount': 700, 'date': '2024-05-20T08:00:00'},
            {'amount': 200, 'date': '2024-05-20T12:30:00'},
            {'amount': 3000, 'date': '2024-05-02T09:00:00'}
        ]

        status = preferences_service.budget_status('user123')

        repository.find_in_range.assert_called_once_with(
            'user123',
            start=datetime(2024, 5, 1),
            end=datetime(2024, 5, 31, 23, 59, 59)
        )
        assert status.daily.spent == 900
        assert status.daily.status == 'warning'
        assert status.monthly.spent == 3900
        assert status.monthly.status == 'ok'
        assert len(status.alerts) == 1
        assert status.alerts[0].startswith('Daily budget warning')

    @patch('preferences.service.utc_now')
    def test_budget_status_without_notifications(self, mock_now, preferences_service, repository):
        mock_now.return_value = datetime(2024, 5, 20, 15, 0, 0)
        preferences_service.preferences_table.get_item.return_value = {
            'user_id': 'user123',
            'monthly_limit': 1000,
            'notifications_enabled': False
        }
        repository.find_in_range.return_value = [{'amount': 5000, 'date': '2024-05-03T09:00:00'}]

        status = preferences_service.budget_status('user123')

        assert status.monthly.status == 'exceeded'
        assert status.daily.status == 'unset'
        assert status.alerts == []
