"""Unit tests for deterministic insight fallbacks."""

import pytest
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from analytics.models import CategorySummary
from insights.fallback import (
    fallback_budgeting_tips,
    fallback_categorization,
    fallback_monthly_summary,
    keyword_category,
    no_data_summary,
    starter_spending_insights,
    trend_observations
)


def row(category, total, count=1):
    return CategorySummary(
        category=category,
        total_amount=total,
        count=count,
        avg_amount=round(total / count, 2)
    )


class TestKeywordCategory:
    """Test cases for keyword categorization."""

    @pytest.mark.parametrize('title,description,expected', [
        ('Uber ride to airport', None, 'Transportation'),
        ('Pizza night', '', 'Food & Dining'),
        ('Weekly supermarket run', None, 'Groceries'),
        ('Electricity BILL', None, 'Bills & Utilities'),
        ('Payment', 'pharmacy medicines', 'Healthcare'),
        ('Netflix', None, 'Entertainment'),
        ('Hotel in Goa', None, 'Travel'),
        ('Haircut', None, 'Personal Care'),
        ('Car insurance premium', None, 'Insurance'),
        ('Birthday gift', None, 'Gifts & Donations'),
        ('xyz123', None, 'Other'),
    ])
    def test_keyword_matches(self, title, description, expected):
        assert keyword_category(title, description) == expected

    def test_first_category_in_order_wins(self):
        # "dinner" (Food & Dining) is checked before "train" (Transportation)
        assert keyword_category('Dinner on the train') == 'Food & Dining'

    def test_fallback_categorization_result(self):
        result = fallback_categorization(
            'xyz123', None, confidence=0.6, reasoning='fallback', original_response='???'
        )

        assert result.category == 'Other'
        assert result.confidence <= 0.6
        assert result.success is False
        assert result.source == 'fallback'
        assert result.to_response()['originalResponse'] == '???'


class TestFallbackMonthlySummary:
    """Test cases for the arithmetic monthly narrative."""

    def test_summary_content(self):
        summary = [row('Groceries', 8000, 4), row('Travel', 5000), row('Shopping', 2000), row('Other', 500)]

        narrative = fallback_monthly_summary(summary, 15500, 7)

        assert narrative.summary == 'You spent ₹15,500.00 across 7 transactions this month.'
        assert narrative.top_categories == ['Groceries', 'Travel', 'Shopping']
        assert narrative.insights[0] == 'Your highest spending category was Groceries'
        assert narrative.insights[2] == 'You spent across 4 different categories'
        assert narrative.overall_rating == 'Good'
        assert narrative.alerts == []
        assert narrative.success is False
        assert narrative.source == 'fallback'

    def test_single_category_insight(self):
        narrative = fallback_monthly_summary([row('Groceries', 100)], 100, 1)

        assert narrative.insights[2] == 'Consider diversifying your expense tracking'

    @pytest.mark.parametrize('total,rating', [
        (19999.99, 'Good'),
        (20000, 'Average'),
        (39999, 'Average'),
        (40000, 'High'),
    ])
    def test_rating_thresholds(self, total, rating):
        narrative = fallback_monthly_summary([row('Other', total)], total, 1)

        assert narrative.overall_rating == rating

    def test_alert_above_high_spending_threshold(self):
        at_threshold = fallback_monthly_summary([row('Other', 50000)], 50000, 1)
        above = fallback_monthly_summary([row('Other', 50000.5)], 50000.5, 1)

        assert at_threshold.alerts == []
        assert above.alerts == ['High spending detected: ₹50,000.50']


class TestStaticPayloads:
    """Test cases for fixed payloads."""

    def test_no_data_summary(self):
        payload = no_data_summary()

        assert payload['overallRating'] == 'No Data'
        assert payload['summary'] == 'No expenses recorded for this month'

    def test_fallback_budgeting_tips(self):
        tips = fallback_budgeting_tips().to_response()

        assert len(tips['tips']) == 3
        assert tips['budgetAllocation'] == {'needs': '50-60%', 'wants': '20-30%', 'savings': '20%'}
        assert tips['source'] == 'fallback'

    def test_starter_spending_insights(self):
        payload = starter_spending_insights().to_response()

        assert payload == {
            'insights': ['Start tracking expenses to see spending trends'],
            'recommendations': ['Begin recording your daily expenses']
        }


class TestTrendObservations:
    """Test cases for trend rules."""

    def test_increase(self):
        insights, recommendations = trend_observations(1000, 1300)

        assert insights[0] == 'Your spending increased significantly last month'
        assert len(recommendations) == 2

    def test_decrease(self):
        insights, _ = trend_observations(1000, 700)

        assert insights[0] == 'Your spending decreased compared to your average'

    def test_steady(self):
        insights, recommendations = trend_observations(1000, 1100)

        assert insights == ['Your average monthly spending is ₹1000.00']
        assert recommendations == ['Set monthly budgets based on your spending patterns']
