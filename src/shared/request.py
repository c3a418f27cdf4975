"""Helpers for reading API Gateway proxy events."""

import json
from typing import Any, Dict, Optional

from .exceptions import ValidationError


def get_user_id(event: Dict[str, Any]) -> Optional[str]:
    """
    Extract user ID from the authorizer claims.

    The bearer token is verified by the API Gateway Cognito (REST) or JWT
    (HTTP API) authorizer before the handler runs.

    Args:
        event: Lambda event

    Returns:
        User ID (sub claim), or None when the request is unauthenticated
    """
    request_context = event.get('requestContext') or {}
    authorizer = request_context.get('authorizer') or {}
    claims = authorizer.get('claims') or (authorizer.get('jwt') or {}).get('claims') or {}
    return claims.get('sub')


def get_bearer_token(event: Dict[str, Any]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    headers = event.get('headers') or {}
    value = next(
        (v for k, v in headers.items() if k.lower() == 'authorization'),
        None
    )
    if not value:
        return None

    scheme, _, token = value.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def parse_json_body(event: Dict[str, Any]) -> Any:
    """
    Parse the JSON request body.

    Raises:
        ValidationError: If the body is not valid JSON
    """
    body = event.get('body')
    if not body:
        return {}

    try:
        return json.loads(body)
    except json.JSONDecodeError:
        raise ValidationError("Invalid JSON body")


def get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    """Return query string parameters, never None."""
    return event.get('queryStringParameters') or {}


def get_path_params(event: Dict[str, Any]) -> Dict[str, str]:
    """Return path parameters, never None."""
    return event.get('pathParameters') or {}
