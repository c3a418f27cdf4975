"""Response utilities for Lambda functions."""

import json
from typing import Any, Dict, List, Optional
from datetime import datetime, date
from decimal import Decimal

from .config import is_production
from .exceptions import (
    AuthenticationError,
    ConflictError,
    ExpenseTrackerException,
    NotFoundError,
    ValidationError
)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS"
}


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder for Decimal and datetime objects."""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return super().default(obj)


def _build(status_code: int, body: Dict[str, Any], headers: Optional[Dict[str, str]]) -> Dict[str, Any]:
    response_headers = dict(DEFAULT_HEADERS)
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(body, cls=DecimalEncoder)
    }


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
    extra: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Create a standardized success response.

    Args:
        data: Response data
        message: Optional success message
        status_code: HTTP status code (default: 200)
        headers: Optional additional headers
        extra: Optional top-level keys merged into the body (e.g. pagination)

    Returns:
        Lambda proxy response dictionary
    """
    body = {
        "success": True,
        "data": data
    }

    if message:
        body["message"] = message

    if extra:
        body.update(extra)

    return _build(status_code, body, headers)


def error_response(
    message: str,
    status_code: int = 500,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        message: Error message
        status_code: HTTP status code (default: 500)
        error_code: Optional error code
        details: Optional error details
        headers: Optional additional headers

    Returns:
        Lambda proxy response dictionary
    """
    body = {
        "success": False,
        "message": message,
        "error": {
            "message": message,
            "code": error_code or f"ERROR_{status_code}"
        }
    }

    if details:
        body["error"]["details"] = details

    return _build(status_code, body, headers)


def validation_error_response(
    message: str,
    errors: Optional[List[str]] = None
) -> Dict[str, Any]:
    """Create a validation error response with per-field messages."""
    return error_response(
        message=message,
        status_code=400,
        error_code="VALIDATION_ERROR",
        details={"errors": errors} if errors else None
    )


def not_found_response(message: str = "Resource not found") -> Dict[str, Any]:
    """Create a not found error response."""
    return error_response(
        message=message,
        status_code=404,
        error_code="NOT_FOUND"
    )


def unauthorized_response(message: str = "Unauthorized") -> Dict[str, Any]:
    """Create an unauthorized error response."""
    return error_response(
        message=message,
        status_code=401,
        error_code="UNAUTHORIZED"
    )


def server_error_response(message: str, exc: Exception, status_code: int = 500) -> Dict[str, Any]:
    """
    Create a 500-class response whose exception detail is hidden in production.

    Args:
        message: Generic, user-facing message
        exc: The exception that caused the failure
        status_code: HTTP status code (default: 500)
    """
    details = None if is_production() else {"error": str(exc)}
    return error_response(
        message=message,
        status_code=status_code,
        error_code="INTERNAL_ERROR",
        details=details
    )


def exception_response(exc: ExpenseTrackerException) -> Dict[str, Any]:
    """
    Map an application exception to its HTTP response.

    500-class errors get a generic message; their detail is only exposed
    outside production.
    """
    if isinstance(exc, ValidationError):
        return validation_error_response(exc.message, exc.errors)
    if isinstance(exc, NotFoundError):
        return not_found_response(exc.message)
    if isinstance(exc, AuthenticationError):
        return unauthorized_response(exc.message)
    if isinstance(exc, ConflictError):
        return error_response(exc.message, status_code=409, error_code="CONFLICT")
    if exc.status_code >= 500:
        return server_error_response("Internal server error", exc, status_code=exc.status_code)
    return error_response(exc.message, status_code=exc.status_code)
