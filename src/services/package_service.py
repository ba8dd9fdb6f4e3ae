"""
Package Service - lifecycle of parcels in the delivery network.

This service provides:
- Package creation with required-field and assignee validation
- Status changes with delivered_at stamping, optionally checked against the
  transition table (strict mode)
- Full-record updates and hard deletes
- Joined, denormalized reads (single package, all packages, packages in transit)

Every read goes through the store gateway's assignee join and the package
formatter, so callers always receive client-facing records.

Status changes and the read that follows are separate store round trips; a
concurrent change in between is visible in the returned record.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from src.models import PackageStatus, is_valid_transition
from src.services.delivery_person_service import is_delivery_person
from src.services.exceptions import NotFoundError, ValidationError
from src.services.logging_utils import get_service_logger, log_operation
from src.services.package_formatter import format_joined_package, format_packages
from src.services.store_gateway import JoinSpec, get_gateway
from src.utils.config import get_config
from src.utils.constants import (
    ERROR_INVALID_ASSIGNEE,
    MAX_ADDRESS_LENGTH,
    MAX_NAME_LENGTH,
    PACKAGES_TABLE,
    PERSONS_TABLE,
)
from src.utils.datetime_utils import utc_now
from src.utils.validators import (
    collect_errors,
    validate_required_string,
    validate_status,
    validate_string_length,
)

logger = get_service_logger(__name__)

# Packages reach their assignee through delivery_person_id
ASSIGNEE_JOIN = JoinSpec(table=PERSONS_TABLE, foreign_key="delivery_person_id")

StatusLike = Union[PackageStatus, str]


# ============================================================================
# Validation helpers
# ============================================================================


def _coerce_status(value: StatusLike) -> PackageStatus:
    """Turn a status string into a PackageStatus or raise ValidationError."""
    if isinstance(value, PackageStatus):
        return value
    is_valid, error = validate_status(value)
    if not is_valid:
        raise ValidationError([error])
    return PackageStatus(value)


def _validate_fields(destinatario: Optional[str], direccion: Optional[str]) -> List[str]:
    return collect_errors(
        validate_required_string(destinatario, "destinatario"),
        validate_string_length(destinatario, MAX_NAME_LENGTH, "destinatario"),
        validate_required_string(direccion, "direccion"),
        validate_string_length(direccion, MAX_ADDRESS_LENGTH, "direccion"),
    )


def _validate_assignee(delivery_person_id: Optional[int]) -> List[str]:
    if delivery_person_id is None:
        return []
    if (
        isinstance(delivery_person_id, bool)
        or not isinstance(delivery_person_id, int)
        or not is_delivery_person(delivery_person_id)
    ):
        return [f"delivery_person_id: {ERROR_INVALID_ASSIGNEE}"]
    return []


def _check_transition(current: PackageStatus, target: PackageStatus, strict: bool) -> None:
    if strict and not is_valid_transition(current, target):
        raise ValidationError(
            [f"status: Cannot transition from {current.value} to {target.value}"]
        )


def _resolve_strict(strict: Optional[bool]) -> bool:
    return get_config().strict_transitions if strict is None else strict


def _invalid(operation: str, errors: List[str], **context: Any) -> ValidationError:
    log_operation(
        logger,
        operation=operation,
        outcome="validation_failed",
        level=logging.WARNING,
        errors=errors,
        **context,
    )
    return ValidationError(errors)


def _fetch_formatted(package_id: int) -> Dict[str, Any]:
    row = get_gateway().select_by_id(PACKAGES_TABLE, package_id, join=ASSIGNEE_JOIN)
    return format_joined_package(row)


# ============================================================================
# Package CRUD Operations
# ============================================================================


def create_package(
    destinatario: str, direccion: str, delivery_person_id: Optional[int] = None
) -> Dict[str, Any]:
    """
    Register a new package.

    Args:
        destinatario: Recipient name (required)
        direccion: Delivery address (required)
        delivery_person_id: Assigned delivery person, or None for unassigned

    Returns:
        Formatted package in PENDING status with delivered_at unset

    Raises:
        ValidationError: If a required field is blank or the assignee is not a
            delivery person
        StoreError: If the store rejects the insert
    """
    errors = _validate_fields(destinatario, direccion)
    errors += _validate_assignee(delivery_person_id)
    if errors:
        raise _invalid("create_package", errors)

    row = get_gateway().insert(
        PACKAGES_TABLE,
        {
            "destinatario": destinatario.strip(),
            "direccion": direccion.strip(),
            "delivery_person_id": delivery_person_id,
            "status": PackageStatus.PENDING,
            "delivered_at": None,
        },
    )

    log_operation(
        logger,
        operation="create_package",
        outcome="success",
        package_id=row["id"],
        delivery_person_id=delivery_person_id,
    )
    return _fetch_formatted(row["id"])


def get_package(package_id: int) -> Dict[str, Any]:
    """
    Get one package with its assignee details.

    Raises:
        NotFoundError: If the package does not exist
        StoreError: If the store query fails
    """
    return _fetch_formatted(package_id)


def list_packages() -> List[Dict[str, Any]]:
    """
    Get all packages, newest first.

    Raises:
        StoreError: If the store query fails
    """
    rows = get_gateway().select_all(
        PACKAGES_TABLE, join=ASSIGNEE_JOIN, order_by="created_at", descending=True
    )
    log_operation(
        logger, operation="list_packages", outcome="success", level=logging.DEBUG, count=len(rows)
    )
    return format_packages(rows)


def list_in_transit_packages() -> List[Dict[str, Any]]:
    """
    Get the packages currently on the road, newest first (map view).

    Raises:
        StoreError: If the store query fails
    """
    rows = get_gateway().select_all(
        PACKAGES_TABLE,
        filters={"status": PackageStatus.IN_TRANSIT},
        join=ASSIGNEE_JOIN,
        order_by="created_at",
        descending=True,
    )
    return format_packages(rows)


def set_package_status(
    package_id: int, new_status: StatusLike, strict: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Move a package to a new status.

    Entering DELIVERED stamps delivered_at with the current time. Other
    statuses leave delivered_at untouched, so it is never cleared.

    Args:
        package_id: Package to update
        new_status: Target status (PackageStatus or its string value)
        strict: Enforce the transition table; None uses the configured default

    Returns:
        Formatted package after the change

    Raises:
        ValidationError: If the status is unknown, or (strict) the transition
            is not allowed; the package is left unmodified
        NotFoundError: If the package does not exist
        StoreError: If a store round trip fails
    """
    try:
        target = _coerce_status(new_status)
    except ValidationError as e:
        raise _invalid("set_package_status", e.errors, package_id=package_id) from None

    gateway = get_gateway()
    try:
        current_row = gateway.select_by_id(PACKAGES_TABLE, package_id)
    except NotFoundError:
        log_operation(
            logger,
            operation="set_package_status",
            outcome="not_found",
            level=logging.WARNING,
            package_id=package_id,
        )
        raise

    current = PackageStatus(current_row["status"])
    try:
        _check_transition(current, target, _resolve_strict(strict))
    except ValidationError as e:
        raise _invalid("set_package_status", e.errors, package_id=package_id) from None

    patch = {"status": target}
    if target is PackageStatus.DELIVERED and current is not PackageStatus.DELIVERED:
        patch["delivered_at"] = utc_now()

    gateway.update(PACKAGES_TABLE, package_id, patch)

    log_operation(
        logger,
        operation="set_package_status",
        outcome="success",
        package_id=package_id,
        previous_status=current.value,
        status=target.value,
    )
    return _fetch_formatted(package_id)


def update_package(
    package_id: int,
    destinatario: str,
    direccion: str,
    delivery_person_id: Optional[int],
    status: StatusLike,
    strict: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Overwrite every editable field of a package.

    The status must be a known value and the assignee must be a delivery
    person. Moving into DELIVERED stamps delivered_at as set_package_status
    does.

    Args:
        package_id: Package to update
        destinatario: Recipient name (required)
        direccion: Delivery address (required)
        delivery_person_id: Assignee, or None to unassign
        status: New status
        strict: Enforce the transition table when the status changes

    Returns:
        Formatted package after the update

    Raises:
        ValidationError: If any field is invalid
        NotFoundError: If the package does not exist
        StoreError: If a store round trip fails
    """
    errors = _validate_fields(destinatario, direccion)
    try:
        target = _coerce_status(status)
    except ValidationError as e:
        target = None
        errors += e.errors
    if errors:
        raise _invalid("update_package", errors, package_id=package_id)

    gateway = get_gateway()
    current_row = gateway.select_by_id(PACKAGES_TABLE, package_id)
    current = PackageStatus(current_row["status"])

    errors = _validate_assignee(delivery_person_id)
    if errors:
        raise _invalid("update_package", errors, package_id=package_id)

    if target is not current:
        try:
            _check_transition(current, target, _resolve_strict(strict))
        except ValidationError as e:
            raise _invalid("update_package", e.errors, package_id=package_id) from None

    patch = {
        "destinatario": destinatario.strip(),
        "direccion": direccion.strip(),
        "delivery_person_id": delivery_person_id,
        "status": target,
    }
    if target is PackageStatus.DELIVERED and current is not PackageStatus.DELIVERED:
        patch["delivered_at"] = utc_now()

    gateway.update(PACKAGES_TABLE, package_id, patch)

    log_operation(logger, operation="update_package", outcome="success", package_id=package_id)
    return _fetch_formatted(package_id)


def delete_package(package_id: int) -> None:
    """
    Permanently remove a package.

    Raises:
        NotFoundError: If the package does not exist
        StoreError: If the delete fails
    """
    try:
        get_gateway().delete(PACKAGES_TABLE, package_id)
    except NotFoundError:
        log_operation(
            logger,
            operation="delete_package",
            outcome="not_found",
            level=logging.WARNING,
            package_id=package_id,
        )
        raise

    log_operation(logger, operation="delete_package", outcome="success", package_id=package_id)
