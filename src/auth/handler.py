"""Lambda handler for authentication operations."""

import logging
from typing import Dict, Any

from shared import config
from shared.models import validate_payload
from shared.request import get_bearer_token, parse_json_body
from shared.response import (
    error_response,
    exception_response,
    server_error_response,
    success_response,
    unauthorized_response
)
from shared.exceptions import ExpenseTrackerException
from auth.cognito_utils import CognitoClient
from auth.models import LoginRequest, RefreshRequest, RegisterRequest

# Configure logging
logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

# Initialize client
cognito_client = CognitoClient()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for authentication operations.

    Handles:
    - POST /auth/register - Register new user
    - POST /auth/login - Sign in user
    - POST /auth/refresh - Refresh tokens
    - GET /auth/verify - Verify a bearer token and return its user

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        # Log request
        logger.info(f"Request: {event.get('httpMethod')} {event.get('path')}")

        http_method = event.get('httpMethod')
        path = (event.get('path') or '').rstrip('/')

        # Route request
        if path == '/auth/register' and http_method == 'POST':
            return handle_register(event)
        elif path == '/auth/login' and http_method == 'POST':
            return handle_login(event)
        elif path == '/auth/refresh' and http_method == 'POST':
            return handle_refresh(event)
        elif path == '/auth/verify' and http_method == 'GET':
            return handle_verify(event)
        else:
            return error_response("Route not found", status_code=404, error_code="NOT_FOUND")

    except ExpenseTrackerException as e:
        logger.error(f"Application error: {e.message}")
        return exception_response(e)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return server_error_response("Internal server error", e)


def _token_payload(tokens: Dict[str, Any]) -> Dict[str, Any]:
    payload = {
        'accessToken': tokens['access_token'],
        'idToken': tokens['id_token'],
        'expiresIn': tokens['expires_in'],
        'tokenType': tokens['token_type']
    }
    if tokens.get('refresh_token'):
        payload['refreshToken'] = tokens['refresh_token']
    return payload


def _user_payload(user_info: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'userId': user_info['user_sub'],
        'email': user_info['email'],
        'name': user_info['name']
    }


def handle_register(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle user registration.

    When ``AUTO_CONFIRM_USERS`` is enabled the account is confirmed and signed
    in straight away, so the response carries tokens.

    Args:
        event: Lambda event

    Returns:
        API Gateway response
    """
    request = validate_payload(RegisterRequest, parse_json_body(event))

    cognito_response = cognito_client.sign_up(request.email, request.password, request.name)

    data = {
        'user': {
            'userId': cognito_response['user_sub'],
            'email': request.email,
            'name': request.name
        },
        'userConfirmed': cognito_response['user_confirmed']
    }
    message = "User registered successfully. Please check your email to confirm your account."

    if config.AUTO_CONFIRM_USERS and not cognito_response['user_confirmed']:
        cognito_client.admin_confirm_sign_up(request.email)
        tokens = cognito_client.sign_in(request.email, request.password)
        data['userConfirmed'] = True
        data['tokens'] = _token_payload(tokens)
        message = "User registered successfully"

    logger.info(f"User registered successfully: {request.email}")

    return success_response(data=data, message=message, status_code=201)


def handle_login(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle user login.

    Args:
        event: Lambda event

    Returns:
        API Gateway response
    """
    request = validate_payload(LoginRequest, parse_json_body(event))

    # Authenticate with Cognito
    tokens = cognito_client.sign_in(request.email, request.password)
    user_info = cognito_client.get_user(tokens['access_token'])

    logger.info(f"User logged in successfully: {request.email}")

    return success_response(
        data={
            'user': _user_payload(user_info),
            'tokens': _token_payload(tokens)
        },
        message="Login successful"
    )


def handle_refresh(event: Dict[str, Any]) -> Dict[str, Any]:
    """Handle token refresh."""
    request = validate_payload(RefreshRequest, parse_json_body(event))

    tokens = cognito_client.refresh_token(request.refresh_token)

    logger.info("Tokens refreshed successfully")

    return success_response(
        data={'tokens': _token_payload(tokens)},
        message="Tokens refreshed successfully"
    )


def handle_verify(event: Dict[str, Any]) -> Dict[str, Any]:
    """Handle token verification against Cognito."""
    token = get_bearer_token(event)
    if not token:
        return unauthorized_response("Authorization token is required")

    user_info = cognito_client.get_user(token)

    return success_response(data={'valid': True, 'user': _user_payload(user_info)})
