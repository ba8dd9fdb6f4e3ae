"""
Health Check Service - store connectivity and application status.

Example usage:
    from src.services.health_service import get_health_status

    status = get_health_status()
    # {"message": "...", "store": True, "timestamp": "...", "version": "0.1.0"}
"""

import logging
from typing import Any, Dict

from src.services.exceptions import StoreError
from src.services.logging_utils import get_service_logger, log_operation
from src.services.store_gateway import get_gateway
from src.utils.config import get_config
from src.utils.constants import PACKAGES_TABLE
from src.utils.datetime_utils import utc_now

logger = get_service_logger(__name__)

HEALTHY_MESSAGE = "Service running"
DEGRADED_MESSAGE = "Service running; store unreachable"


def check_store_connection() -> bool:
    """
    Probe the store with a trivial count on the packages table.

    Returns:
        True if the store answered, False otherwise (the error is logged)
    """
    try:
        count = get_gateway().count(PACKAGES_TABLE)
    except StoreError as e:
        log_operation(
            logger,
            operation="check_store_connection",
            outcome="unreachable",
            level=logging.ERROR,
            error=str(e),
        )
        return False

    log_operation(
        logger,
        operation="check_store_connection",
        outcome="success",
        level=logging.DEBUG,
        package_count=count,
    )
    return True


def get_health_status() -> Dict[str, Any]:
    """
    Build the health payload reported to monitoring and the CLI.

    Returns:
        Dict with message, store (bool), timestamp (ISO-8601 UTC) and version
    """
    store_ok = check_store_connection()
    return {
        "message": HEALTHY_MESSAGE if store_ok else DEGRADED_MESSAGE,
        "store": store_ok,
        "timestamp": utc_now().isoformat(),
        "version": get_config().app_version,
    }
