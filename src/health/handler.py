"""Lambda handler for the health check."""

import logging
from typing import Dict, Any

from shared import config
from shared.dates import to_timestamp, utc_now
from shared.response import success_response

logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

SERVICE_NAME = 'smart-expense-tracker'


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Always 200 with service status, environment and the current time (GET /health)."""
    logger.info(f"Request: {event.get('httpMethod')} {event.get('path')}")
    return success_response(data={
        'status': 'ok',
        'service': SERVICE_NAME,
        'environment': config.ENVIRONMENT,
        'timestamp': to_timestamp(utc_now())
    })
