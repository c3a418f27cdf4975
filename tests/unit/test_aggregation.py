"""Unit tests for the aggregation functions."""

import pytest
from datetime import datetime
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from analytics.aggregation import (
    group_by_category,
    group_by_month,
    month_bounds,
    percentage_change,
    previous_month,
    shift_months,
    sum_totals
)
from shared.exceptions import ValidationError


def expense(amount, category, date='2024-05-10T12:00:00'):
    return {'amount': amount, 'category': category, 'date': date}


class TestMonthArithmetic:
    """Test cases for calendar helpers."""

    def test_month_bounds_leap_february(self):
        start, end = month_bounds(2024, 2)

        assert start == datetime(2024, 2, 1, 0, 0, 0)
        assert end == datetime(2024, 2, 29, 23, 59, 59)

    def test_month_bounds_december(self):
        start, end = month_bounds(2023, 12)

        assert start == datetime(2023, 12, 1)
        assert end == datetime(2023, 12, 31, 23, 59, 59)

    def test_previous_month_rolls_back_year(self):
        assert previous_month(2024, 1) == (2023, 12)
        assert previous_month(2024, 7) == (2024, 6)

    def test_shift_months_clamps_day(self):
        assert shift_months(datetime(2024, 3, 31, 9, 30), -1) == datetime(2024, 2, 29, 9, 30)
        assert shift_months(datetime(2023, 3, 31), -1) == datetime(2023, 2, 28)

    def test_shift_months_across_years(self):
        assert shift_months(datetime(2024, 1, 15), -6) == datetime(2023, 7, 15)
        assert shift_months(datetime(2023, 11, 30), 3) == datetime(2024, 2, 29)

    def test_shift_months_out_of_range(self):
        with pytest.raises(ValidationError):
            shift_months(datetime(2024, 1, 15), -30000)

        with pytest.raises(ValidationError):
            shift_months(datetime(9999, 6, 1), 12)


class TestGroupByCategory:
    """Test cases for category grouping."""

    def test_groups_sums_and_averages(self):
        expenses = [
            expense(100, 'Food & Dining'),
            expense(200, 'Food & Dining'),
            expense(50, 'Transportation')
        ]

        summary = group_by_category(expenses)

        assert [row.category for row in summary] == ['Food & Dining', 'Transportation']
        assert [row.total_amount for row in summary] == [300, 50]
        assert [row.count for row in summary] == [2, 1]
        assert [row.avg_amount for row in summary] == [150, 50]

    def test_equal_totals_ordered_by_name(self):
        expenses = [
            expense(40, 'Travel'),
            expense(40, 'Groceries'),
            expense(90, 'Shopping')
        ]

        summary = group_by_category(expenses)

        assert [row.category for row in summary] == ['Shopping', 'Groceries', 'Travel']

    def test_empty_input(self):
        assert group_by_category([]) == []

    def test_rounds_float_sums(self):
        summary = group_by_category([expense(0.1, 'Other'), expense(0.2, 'Other')])

        assert summary[0].total_amount == 0.3
        assert summary[0].avg_amount == 0.15


class TestGroupByMonth:
    """Test cases for monthly trend grouping."""

    def test_ascending_across_year_boundary(self):
        expenses = [
            expense(30, 'Other', '2024-01-05T10:00:00'),
            expense(10, 'Other', '2023-11-20T10:00:00'),
            expense(20, 'Other', '2023-12-01T00:00:00'),
            expense(5, 'Other', '2024-01-31T23:59:59')
        ]

        trends = group_by_month(expenses)

        assert [(point.year, point.month) for point in trends] == [(2023, 11), (2023, 12), (2024, 1)]
        assert trends[-1].total_amount == 35
        assert trends[-1].count == 2

    def test_empty_input(self):
        assert group_by_month([]) == []


class TestTotals:
    """Test cases for totals and percentage change."""

    def test_sum_totals(self):
        summary = group_by_category([expense(100, 'A'), expense(200, 'A'), expense(50, 'B')])

        assert sum_totals(summary) == (350, 3)

    def test_sum_totals_empty(self):
        assert sum_totals([]) == (0, 0)

    def test_percentage_change_without_baseline(self):
        assert percentage_change(0, 500) == 0

    def test_percentage_change_increase(self):
        assert percentage_change(1000, 1200) == 20.0

    def test_percentage_change_decrease(self):
        assert percentage_change(1000, 800) == -20.0

    def test_percentage_change_rounds(self):
        assert percentage_change(3, 4) == pytest.approx(33.33)
