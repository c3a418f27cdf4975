"""Lambda handler for AI-assisted insight operations."""

import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

from shared import config
from shared.dates import utc_now
from shared.request import get_query_params, get_user_id, parse_json_body
from shared.response import (
    error_response,
    exception_response,
    server_error_response,
    success_response,
    unauthorized_response,
    validation_error_response
)
from shared.validators import validate_amount, validate_positive_int
from shared.exceptions import ExpenseTrackerException
from analytics.aggregation import shift_months, sum_totals
from analytics.service import AnalyticsService
from insights.fallback import no_data_summary, starter_budgeting_tips
from insights.service import InsightService
from preferences.service import PreferencesService

# Configure logging
logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

# Initialize services
analytics_service = AnalyticsService()
insight_service = InsightService()
preferences_service = PreferencesService(repository=analytics_service.repository)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for AI insight operations.

    Handles:
    - POST /ai/categorize - Suggest a category for one expense
    - GET /ai/summary/{year}/{month} - Monthly narrative
    - GET /ai/budgeting-tips - Personalized budgeting tips
    - POST /ai/bulk-categorize - Categorize up to 50 expenses
    - GET /ai/spending-insights - Rule-based trend insights

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        # Log request
        logger.info(f"Request: {event.get('httpMethod')} {event.get('path')}")

        user_id = get_user_id(event)
        if not user_id:
            return unauthorized_response()

        http_method = event.get('httpMethod')
        parts = [part for part in (event.get('path') or '').split('/') if part]

        # Route request
        if parts == ['ai', 'categorize'] and http_method == 'POST':
            return handle_categorize(event)
        elif parts[:2] == ['ai', 'summary'] and len(parts) == 4 and http_method == 'GET':
            return handle_monthly_summary(parts[2], parts[3], user_id)
        elif parts == ['ai', 'budgeting-tips'] and http_method == 'GET':
            return handle_budgeting_tips(event, user_id)
        elif parts == ['ai', 'bulk-categorize'] and http_method == 'POST':
            return handle_bulk_categorize(event)
        elif parts == ['ai', 'spending-insights'] and http_method == 'GET':
            return handle_spending_insights(event, user_id)
        else:
            return error_response("Route not found", status_code=404, error_code="NOT_FOUND")

    except ExpenseTrackerException as e:
        logger.error(f"Application error: {e.message}")
        return exception_response(e)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return server_error_response("Internal server error", e)


def handle_categorize(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle single expense categorization.

    Args:
        event: Lambda event with ``{title, description?, amount?}``

    Returns:
        API Gateway response
    """
    body = parse_json_body(event)
    if not isinstance(body, dict) or not body.get('title'):
        return validation_error_response("Title is required for categorization")

    result = insight_service.categorize_expense(
        body.get('title'),
        body.get('description'),
        body.get('amount')
    )

    return success_response(data=result.to_response())


def handle_monthly_summary(year: str, month: str, user_id: str) -> Dict[str, Any]:
    """
    Handle the monthly narrative.

    A month without expenses gets a fixed "no data" payload and never reaches the AI.
    """
    summary = analytics_service.monthly_summary(user_id, year, month)

    if not summary:
        return success_response(
            data=no_data_summary(),
            message="No expenses found for this month"
        )

    year, month = int(year), int(month)
    month_label = datetime(year, month, 1).strftime('%B %Y')
    total_amount, total_transactions = sum_totals(summary)

    narrative = insight_service.generate_monthly_summary(summary, month_label)

    return success_response(data={
        'period': {'year': year, 'month': month, 'monthYear': month_label},
        'expenses': [row.to_response() for row in summary],
        'totals': {'amount': total_amount, 'transactions': total_transactions},
        'aiInsights': narrative.to_response()
    })


def handle_budgeting_tips(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """
    Handle budgeting tips over the trailing ``months`` window.

    Income and savings goal come from the query string, or from the stored
    preferences when absent.
    """
    query_params = get_query_params(event)
    months = validate_positive_int(
        query_params.get('months'), 'months',
        default=config.DEFAULT_TIPS_MONTHS, maximum=config.MAX_WINDOW_MONTHS
    )

    now = utc_now()
    summary = analytics_service.category_breakdown(user_id, shift_months(now, -months), now)

    if not summary:
        return success_response(data=starter_budgeting_tips().to_response())

    preferences = preferences_service.get_preferences(user_id)
    profile = {
        'income': _optional_number(query_params.get('income'), 'Income') or preferences.monthly_income,
        'savings_goal': (
            _optional_number(query_params.get('savingsGoal'), 'Savings goal') or preferences.savings_goal
        )
    }

    tips = insight_service.get_budgeting_tips(summary, profile)
    return success_response(data=tips.to_response())


def handle_bulk_categorize(event: Dict[str, Any]) -> Dict[str, Any]:
    """Handle bulk categorization. Each item succeeds or fails on its own."""
    body = parse_json_body(event)
    expenses: Optional[List[Any]] = body.get('expenses') if isinstance(body, dict) else None

    result = insight_service.bulk_categorize(expenses)

    logger.info(f"Bulk categorized {result.processed} expenses")
    return success_response(data=result.to_response())


def handle_spending_insights(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle spending insights over the trailing ``period`` months."""
    period = validate_positive_int(
        get_query_params(event).get('period'), 'period',
        default=config.DEFAULT_TREND_MONTHS, maximum=config.MAX_WINDOW_MONTHS
    )

    trends = analytics_service.spending_trends(user_id, period)
    insights = insight_service.spending_insights(trends, period)

    return success_response(data=insights.to_response())


def _optional_number(value: Any, field: str) -> Optional[float]:
    if value in (None, ''):
        return None
    return float(validate_amount(value, field=field))
