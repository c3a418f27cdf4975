"""Lambda handler for user preference operations."""

import logging
from typing import Dict, Any

from shared import config
from shared.request import get_user_id, parse_json_body
from shared.response import (
    error_response,
    exception_response,
    server_error_response,
    success_response,
    unauthorized_response,
    validation_error_response
)
from shared.exceptions import ExpenseTrackerException
from preferences.service import PreferencesService

# Configure logging
logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

# Initialize service
preferences_service = PreferencesService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for preference operations.

    Handles:
    - GET /preferences - Get preferences (defaults when none stored)
    - PUT /preferences - Update preferences
    - DELETE /preferences - Reset preferences to defaults
    - GET /preferences/budget-status - Spending against daily and monthly limits

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
        path = (event.get('path') or '').rstrip('/')

        # Route request
        if path == '/preferences' and http_method == 'GET':
            return handle_get(user_id)
        elif path == '/preferences' and http_method == 'PUT':
            return handle_update(event, user_id)
        elif path == '/preferences' and http_method == 'DELETE':
            return handle_reset(user_id)
        elif path == '/preferences/budget-status' and http_method == 'GET':
            return handle_budget_status(user_id)
        else:
            return error_response("Route not found", status_code=404, error_code="NOT_FOUND")

    except ExpenseTrackerException as e:
        logger.error(f"Application error: {e.message}")
        return exception_response(e)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return server_error_response("Internal server error", e)


def handle_get(user_id: str) -> Dict[str, Any]:
    preferences = preferences_service.get_preferences(user_id)
    return success_response(data=preferences.to_response())


def handle_update(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """
    Handle update preferences.

    Args:
        event: Lambda event
        user_id: User ID

    Returns:
        API Gateway response
    """
    body = parse_json_body(event)
    if not body:
        return validation_error_response("No updates provided")

    preferences = preferences_service.update_preferences(user_id, body)

    return success_response(
        data=preferences.to_response(),
        message="Preferences updated successfully"
    )


def handle_reset(user_id: str) -> Dict[str, Any]:
    preferences = preferences_service.reset_preferences(user_id)
    return success_response(
        data=preferences.to_response(),
        message="Preferences reset to defaults"
    )


def handle_budget_status(user_id: str) -> Dict[str, Any]:
    status = preferences_service.budget_status(user_id)
    return success_response(data=status.to_response())
