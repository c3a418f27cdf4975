"""Lambda handler for expense operations and expense analytics."""

import logging
from typing import Dict, Any, List

from shared import config
from shared.request import get_path_params, get_query_params, get_user_id, parse_json_body
from shared.response import (
    error_response,
    exception_response,
    server_error_response,
    success_response,
    unauthorized_response,
    validation_error_response
)
from shared.exceptions import ExpenseTrackerException
from analytics.aggregation import sum_totals
from analytics.service import AnalyticsService
from expenses.service import ExpenseService

# Configure logging
logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

# Initialize services
expense_service = ExpenseService()
analytics_service = AnalyticsService(repository=expense_service.repository)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for expense operations.

    Handles:
    - GET /expenses - List expenses (filter, sort, paginate)
    - POST /expenses - Create expense
    - GET /expenses/{id} - Get expense details
    - PUT /expenses/{id} - Update expense
    - DELETE /expenses/{id} - Delete expense
    - GET /expenses/summary/monthly/{year}/{month} - Monthly category summary
    - GET /expenses/trends/spending - Monthly spending trend
    - GET /expenses/analytics/dashboard - Dashboard analytics

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        # Log request
        logger.info(f"Request: {event.get('httpMethod')} {event.get('path')}")

        # Get user ID from Cognito authorizer
        user_id = get_user_id(event)
        if not user_id:
            return unauthorized_response()

        http_method = event.get('httpMethod')
        parts = _path_parts(event.get('path'))

        # Route request
        if parts == ['expenses'] and http_method == 'GET':
            return handle_list(event, user_id)
        elif parts == ['expenses'] and http_method == 'POST':
            return handle_create(event, user_id)
        elif parts[:3] == ['expenses', 'summary', 'monthly'] and len(parts) == 5 and http_method == 'GET':
            return handle_monthly_summary(parts[3], parts[4], user_id)
        elif parts == ['expenses', 'trends', 'spending'] and http_method == 'GET':
            return handle_trends(event, user_id)
        elif parts == ['expenses', 'analytics', 'dashboard'] and http_method == 'GET':
            return handle_dashboard(user_id)
        elif len(parts) == 2 and parts[0] == 'expenses':
            expense_id = get_path_params(event).get('id') or parts[1]
            if http_method == 'GET':
                return handle_get(expense_id, user_id)
            elif http_method == 'PUT':
                return handle_update(event, expense_id, user_id)
            elif http_method == 'DELETE':
                return handle_delete(expense_id, user_id)

        return error_response("Route not found", status_code=404, error_code="NOT_FOUND")

    except ExpenseTrackerException as e:
        logger.error(f"Application error: {e.message}")
        return exception_response(e)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return server_error_response("Internal server error", e)


def _path_parts(path: Any) -> List[str]:
    return [part for part in (path or '').split('/') if part]


def handle_list(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """
    Handle list expenses.

    Args:
        event: Lambda event
        user_id: User ID

    Returns:
        API Gateway response with a ``pagination`` block next to ``data``
    """
    query_params = get_query_params(event)

    result = expense_service.list_expenses(
        user_id=user_id,
        page=query_params.get('page'),
        limit=query_params.get('limit'),
        category=query_params.get('category'),
        start_date=query_params.get('startDate'),
        end_date=query_params.get('endDate'),
        sort_by=query_params.get('sortBy'),
        sort_order=query_params.get('sortOrder')
    )

    return success_response(
        data=result['expenses'],
        extra={'pagination': result['pagination']}
    )


def handle_create(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle create expense."""
    body = parse_json_body(event)
    if not body:
        return validation_error_response("Request body is required")

    expense = expense_service.create_expense(user_id, body)

    logger.info(f"Expense created successfully: {expense['id']}")

    return success_response(
        data=expense,
        message="Expense created successfully",
        status_code=201
    )


def handle_get(expense_id: str, user_id: str) -> Dict[str, Any]:
    """Handle get expense details."""
    expense = expense_service.get_expense(user_id, expense_id)
    return success_response(data=expense)


def handle_update(event: Dict[str, Any], expense_id: str, user_id: str) -> Dict[str, Any]:
    """
    Handle update expense.

    Args:
        event: Lambda event
        expense_id: Expense ID
        user_id: User ID

    Returns:
        API Gateway response
    """
    body = parse_json_body(event)
    if not body:
        return validation_error_response("No updates provided")

    updated_expense = expense_service.update_expense(user_id, expense_id, body)

    logger.info(f"Expense updated successfully: {expense_id}")

    return success_response(
        data=updated_expense,
        message="Expense updated successfully"
    )


def handle_delete(expense_id: str, user_id: str) -> Dict[str, Any]:
    """Handle delete expense."""
    deleted = expense_service.delete_expense(user_id, expense_id)

    logger.info(f"Expense deleted successfully: {expense_id}")

    return success_response(
        data=deleted,
        message="Expense deleted successfully"
    )


def handle_monthly_summary(year: str, month: str, user_id: str) -> Dict[str, Any]:
    """
    Handle monthly category summary.

    Returns:
        API Gateway response with ``summary``, ``totals`` and ``period``
    """
    summary = analytics_service.monthly_summary(user_id, year, month)
    total_amount, total_transactions = sum_totals(summary)

    return success_response(data={
        'summary': [row.to_response() for row in summary],
        'totals': {
            'amount': total_amount,
            'transactions': total_transactions
        },
        'period': {
            'year': int(year),
            'month': int(month)
        }
    })


def handle_trends(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Handle spending trends over the trailing ``months`` window."""
    months = get_query_params(event).get('months')
    trends = analytics_service.spending_trends(user_id, months)
    return success_response(data=[point.to_response() for point in trends])


def handle_dashboard(user_id: str) -> Dict[str, Any]:
    """Handle dashboard analytics."""
    dashboard = analytics_service.dashboard(user_id)
    return success_response(data=dashboard.to_response())
