"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across the package, directory and auth
services.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    # Log successful operation
    log_operation(
        logger,
        operation="set_package_status",
        outcome="success",
        package_id=12,
        status="delivered",
    )

    # Log validation failure
    log_operation(
        logger,
        operation="create_package",
        outcome="validation_failed",
        level=logging.WARNING,
        errors=["direccion: This field is required"],
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "parcel_tracker.services"

# Attribute names owned by logging.LogRecord; context keys must not clash
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance under the 'parcel_tracker.services' prefix.

    Example:
        >>> logger = get_service_logger("src.services.package_service")
        >>> logger.name
        'parcel_tracker.services.package_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging.
    Keys that collide with LogRecord attributes are prefixed with 'ctx_'.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "create_package", "login")
        outcome: Outcome description (e.g., "success", "validation_failed", "error")
        level: Log level (default: INFO). Use DEBUG for verbose/frequent logs.
        **context: Additional context fields (entity IDs, error details, etc.)
            Common fields:
            - package_id: Package being processed
            - person_id: Person being processed
            - status: Target package status
            - errors: Validation messages
            - error: Error message if outcome is "error"

    Example:
        >>> log_operation(
        ...     logger,
        ...     operation="delete_package",
        ...     outcome="not_found",
        ...     level=logging.WARNING,
        ...     package_id=99,
        ... )
        # Logs "delete_package: not_found" at WARNING with package_id context
    """
    extra = {"operation": operation, "outcome": outcome}
    for key, value in context.items():
        if key in _RESERVED_ATTRS:
            key = f"ctx_{key}"
        extra[key] = value
    logger.log(level, f"{operation}: {outcome}", extra=extra)
