"""
Auth Service - credential checks for person accounts.

Passwords are stored as salted PBKDF2-SHA256 hashes produced by
werkzeug.security, in the form:

    pbkdf2:sha256:<iterations>$<salt>$<hash hex>

and compared in constant time. Every failed login raises the same
AuthenticationError, whether the email is unknown, the password is wrong or
the account has no password yet.
"""

import functools
import logging
import secrets
from typing import Any, Dict, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from src.services.exceptions import AuthenticationError, ValidationError
from src.services.logging_utils import get_service_logger, log_operation
from src.services.store_gateway import get_gateway
from src.utils.config import get_config
from src.utils.constants import CREDENTIAL_FIELDS, PERSONS_TABLE
from src.utils.validators import validate_password

logger = get_service_logger(__name__)


def strip_credentials(row: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a person row without any credential field."""
    return {key: value for key, value in row.items() if key not in CREDENTIAL_FIELDS}


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """
    Hash a password with a fresh random salt.

    Args:
        password: Plain-text password
        iterations: PBKDF2 rounds (defaults to the configured value)

    Returns:
        Werkzeug-encoded hash string
    """
    if iterations is None:
        iterations = get_config().password_iterations
    return generate_password_hash(password, method=f"pbkdf2:sha256:{iterations}")


def verify_password(password: str, encoded: Optional[str]) -> bool:
    """
    Check a password against an encoded hash.

    Malformed or missing hashes never match.
    """
    if not encoded:
        return False

    try:
        return check_password_hash(encoded, password)
    except ValueError:
        # Unknown hash method or unparsable iteration count
        return False


@functools.lru_cache(maxsize=1)
def _placeholder_hash() -> str:
    # Verified against when the email is unknown so both paths cost the same
    return hash_password(secrets.token_hex(16))


# ============================================================================
# Login
# ============================================================================


def login(email: str, password: str) -> Dict[str, Any]:
    """
    Authenticate a person by email and password.

    Args:
        email: Login email (exact match)
        password: Plain-text password

    Returns:
        The person, without credentials

    Raises:
        AuthenticationError: For any credential mismatch or missing input
        StoreError: If the lookup itself fails
    """
    if not email or not password:
        log_operation(
            logger,
            operation="login",
            outcome="missing_credentials",
            level=logging.WARNING,
            email=email,
        )
        raise AuthenticationError()

    log_operation(logger, operation="login", outcome="attempt", level=logging.DEBUG, email=email)

    rows = get_gateway().select_all(PERSONS_TABLE, filters={"email": email})
    person = rows[0] if rows else None
    encoded = person.get("password_hash") if person else None

    matched = verify_password(password, encoded or _placeholder_hash())
    if person is None or encoded is None or not matched:
        log_operation(
            logger,
            operation="login",
            outcome="rejected",
            level=logging.WARNING,
            email=email,
        )
        raise AuthenticationError()

    log_operation(
        logger,
        operation="login",
        outcome="success",
        person_id=person["id"],
        role=person.get("role"),
    )
    return strip_credentials(person)


def set_password(person_id: int, password: str) -> Dict[str, Any]:
    """
    Store a new password hash for a person (account provisioning).

    Raises:
        ValidationError: If the password is too weak
        NotFoundError: If the person does not exist
        StoreError: If the update fails
    """
    is_valid, error = validate_password(password)
    if not is_valid:
        raise ValidationError([error])

    row = get_gateway().update(PERSONS_TABLE, person_id, {"password_hash": hash_password(password)})
    log_operation(logger, operation="set_password", outcome="success", person_id=person_id)
    return strip_credentials(row)
