"""
Input validation functions for the Parcel Tracker application.

This module provides validation functions for user inputs including:
- Required string fields and length limits
- Package status membership
- Email format
- Password strength

Each validator returns a (is_valid, error_message) tuple so callers can
collect every problem before raising a single ValidationError.
"""

import re
from typing import Any, List, Optional, Tuple

from .constants import (
    PACKAGE_STATUSES,
    MAX_EMAIL_LENGTH,
    MIN_PASSWORD_LENGTH,
    ERROR_REQUIRED_FIELD,
    ERROR_INVALID_STATUS,
    ERROR_INVALID_EMAIL,
    ERROR_PASSWORD_TOO_SHORT,
)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_required_string(value: Optional[str], field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a string field is not empty.

    Args:
        value: The string value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or not isinstance(value, str) or value.strip() == "":
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    return True, ""


def validate_string_length(
    value: Optional[str], max_length: int, field_name: str = "Field"
) -> Tuple[bool, str]:
    """
    Validate that a string doesn't exceed maximum length.

    Args:
        value: The string value to validate
        max_length: Maximum allowed length
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value and len(value) > max_length:
        return False, f"{field_name}: Must be {max_length} characters or less"
    return True, ""


def validate_status(value: Any, field_name: str = "status") -> Tuple[bool, str]:
    """
    Validate that a value is one of the known package statuses.

    Args:
        value: Candidate status string
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value not in PACKAGE_STATUSES:
        return False, f"{field_name}: {ERROR_INVALID_STATUS}"
    return True, ""


def validate_email(value: Optional[str], field_name: str = "email") -> Tuple[bool, str]:
    """
    Validate a required email address.

    Args:
        value: The email to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_required_string(value, field_name)
    if not is_valid:
        return is_valid, error

    if len(value) > MAX_EMAIL_LENGTH or not _EMAIL_PATTERN.match(value.strip()):
        return False, f"{field_name}: {ERROR_INVALID_EMAIL}"
    return True, ""


def validate_password(value: Optional[str], field_name: str = "password") -> Tuple[bool, str]:
    """Validate a new password before it is hashed."""
    if not value:
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    if len(value) < MIN_PASSWORD_LENGTH:
        return False, f"{field_name}: {ERROR_PASSWORD_TOO_SHORT}"
    return True, ""


def collect_errors(*results: Tuple[bool, str]) -> List[str]:
    """
    Gather the messages of every failed validation result.

    Example:
        errors = collect_errors(
            validate_required_string(name, "name"),
            validate_email(email),
        )
        if errors:
            raise ValidationError(errors)
    """
    return [message for is_valid, message in results if not is_valid]
