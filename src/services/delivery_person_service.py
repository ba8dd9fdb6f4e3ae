"""
Delivery Person Service - directory of delivery accounts.

This service provides:
- Listing delivery people (role "delivery") without credentials
- Creating delivery accounts
- Looking up a single delivery person

Person accounts are provisioned elsewhere; apart from create, this module only
reads them.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from src.services.auth_service import hash_password, strip_credentials
from src.services.exceptions import NotFoundError, StoreError, ValidationError
from src.services.logging_utils import get_service_logger, log_operation
from src.services.store_gateway import get_gateway
from src.utils.constants import (
    ERROR_DUPLICATE_EMAIL,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    PERSON_STATUS_AVAILABLE,
    PERSONS_TABLE,
    ROLE_DELIVERY,
)
from src.utils.validators import (
    collect_errors,
    validate_email,
    validate_password,
    validate_required_string,
    validate_string_length,
)

logger = get_service_logger(__name__)


def list_delivery_persons() -> List[Dict[str, Any]]:
    """
    Get every person with the delivery role.

    Returns:
        Person dicts ordered by name, without credentials

    Raises:
        StoreError: If the store query fails
    """
    rows = get_gateway().select_all(
        PERSONS_TABLE, filters={"role": ROLE_DELIVERY}, order_by="name"
    )
    persons = [strip_credentials(row) for row in rows]
    log_operation(
        logger, operation="list_delivery_persons", outcome="success", count=len(persons)
    )
    return persons


def get_delivery_person(person_id: int) -> Dict[str, Any]:
    """
    Get one delivery person by ID.

    Raises:
        NotFoundError: If there is no delivery person with this ID
        StoreError: If the store query fails
    """
    row = get_gateway().select_by_id(PERSONS_TABLE, person_id)
    if row.get("role") != ROLE_DELIVERY:
        raise NotFoundError("Delivery person", person_id)
    return strip_credentials(row)


def is_delivery_person(person_id: int) -> bool:
    """True if person_id references an existing delivery-role account."""
    try:
        get_delivery_person(person_id)
    except NotFoundError:
        return False
    return True


def _is_duplicate_email(error: StoreError) -> bool:
    original = error.original_error
    return isinstance(original, IntegrityError) and "email" in str(original.orig)


def create_delivery_person(
    name: str, phone: Optional[str], email: str, password: Optional[str] = None
) -> Dict[str, Any]:
    """
    Create a delivery account.

    Args:
        name: Display name (required)
        phone: Contact phone
        email: Login email (required, unique)
        password: Optional initial password, stored only as a salted hash

    Returns:
        The created person, without credentials

    Raises:
        ValidationError: If a field is missing/invalid or the email is taken
        StoreError: If the insert fails for another reason
    """
    checks = [
        validate_required_string(name, "name"),
        validate_string_length(name, MAX_NAME_LENGTH, "name"),
        validate_string_length(phone, MAX_PHONE_LENGTH, "phone"),
        validate_email(email),
    ]
    if password is not None:
        checks.append(validate_password(password))
    errors = collect_errors(*checks)

    if not errors:
        email = email.strip()
        if get_gateway().count(PERSONS_TABLE, filters={"email": email}):
            errors.append(f"email: {ERROR_DUPLICATE_EMAIL}")

    if errors:
        log_operation(
            logger,
            operation="create_delivery_person",
            outcome="validation_failed",
            level=logging.WARNING,
            errors=errors,
        )
        raise ValidationError(errors)

    record = {
        "name": name.strip(),
        "phone": phone.strip() if phone else None,
        "email": email,
        "role": ROLE_DELIVERY,
        "status": PERSON_STATUS_AVAILABLE,
        "password_hash": hash_password(password) if password else None,
    }

    try:
        row = get_gateway().insert(PERSONS_TABLE, record)
    except StoreError as e:
        if _is_duplicate_email(e):
            # Lost a race with a concurrent create of the same email
            log_operation(
                logger,
                operation="create_delivery_person",
                outcome="validation_failed",
                level=logging.WARNING,
                errors=[f"email: {ERROR_DUPLICATE_EMAIL}"],
            )
            raise ValidationError([f"email: {ERROR_DUPLICATE_EMAIL}"]) from e
        log_operation(
            logger,
            operation="create_delivery_person",
            outcome="error",
            level=logging.ERROR,
            email=email,
        )
        raise

    log_operation(
        logger,
        operation="create_delivery_person",
        outcome="success",
        person_id=row["id"],
    )
    return strip_credentials(row)
