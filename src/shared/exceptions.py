"""Custom exceptions for the expense tracker application."""

from typing import List, Optional


class ExpenseTrackerException(Exception):
    """Base exception for all expense tracker errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ExpenseTrackerException, ValueError):
    """Raised when input validation fails.

    Subclasses ValueError so pydantic field validators can raise it directly.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message, status_code=400)
        self.errors = errors or []


class AuthenticationError(ExpenseTrackerException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class NotFoundError(ExpenseTrackerException):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConflictError(ExpenseTrackerException):
    """Raised when there's a conflict (e.g., duplicate resource)."""

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message, status_code=409)


class DatabaseError(ExpenseTrackerException):
    """Raised when database operations fail."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, status_code=500)


class AIServiceError(ExpenseTrackerException):
    """Raised when the generative AI service is unavailable or errors."""

    def __init__(self, message: str = "AI service unavailable"):
        super().__init__(message, status_code=502)


class AIResponseParseError(ExpenseTrackerException):
    """Raised when an AI response does not contain the expected JSON shape."""

    def __init__(self, message: str = "Could not parse AI response", raw_text: str = ""):
        super().__init__(message, status_code=502)
        self.raw_text = raw_text
