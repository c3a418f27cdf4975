"""Environment configuration shared by all Lambda functions."""

import os

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# DynamoDB tables
EXPENSES_TABLE = os.environ.get('EXPENSES_TABLE', 'smart-expense-tracker-expenses')
PREFERENCES_TABLE = os.environ.get('PREFERENCES_TABLE', 'smart-expense-tracker-preferences')

# LocalStack
USE_LOCALSTACK = os.environ.get('USE_LOCALSTACK', 'false').lower() == 'true'
LOCALSTACK_ENDPOINT = os.environ.get('LOCALSTACK_ENDPOINT')

# Cognito
COGNITO_CLIENT_ID = os.environ.get('COGNITO_CLIENT_ID')
COGNITO_USER_POOL_ID = os.environ.get('COGNITO_USER_POOL_ID')
AUTO_CONFIRM_USERS = os.environ.get('AUTO_CONFIRM_USERS', 'false').lower() == 'true'

# Gemini
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')
AI_REQUEST_TIMEOUT = float(os.environ.get('AI_REQUEST_TIMEOUT', '30'))

# Bulk categorization
BULK_CATEGORIZE_DELAY = float(os.environ.get('BULK_CATEGORIZE_DELAY', '0.1'))
BULK_CATEGORIZE_MAX_ITEMS = int(os.environ.get('BULK_CATEGORIZE_MAX_ITEMS', '50'))

# Fallback confidence levels
FALLBACK_PARSE_CONFIDENCE = 0.6
FALLBACK_ERROR_CONFIDENCE = 0.5
BULK_FAILURE_CONFIDENCE = 0.3
DEFAULT_AI_CONFIDENCE = 0.8

# Currency-specific thresholds for the fallback monthly narrative
CURRENCY_SYMBOL = os.environ.get('CURRENCY_SYMBOL', '₹')
RATING_GOOD_THRESHOLD = float(os.environ.get('RATING_GOOD_THRESHOLD', '20000'))
RATING_AVERAGE_THRESHOLD = float(os.environ.get('RATING_AVERAGE_THRESHOLD', '40000'))
HIGH_SPENDING_THRESHOLD = float(os.environ.get('HIGH_SPENDING_THRESHOLD', '50000'))

# Analytics defaults
DEFAULT_TREND_MONTHS = 6
DEFAULT_TIPS_MONTHS = 3
MAX_WINDOW_MONTHS = 120
RECENT_EXPENSES_LIMIT = 10
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def is_production() -> bool:
    """Return True when running in the production stage."""
    return ENVIRONMENT.lower() == 'production'
