"""
Constants for the Parcel Tracker application.

This module defines all system-wide constants including:
- Package statuses and person roles
- Field length limits
- Display labels for the relational projections
- Error messages
- Application metadata
"""

from typing import List

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Parcel Tracker"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "parcel_tracker.db"

# ============================================================================
# Package Statuses
# ============================================================================

STATUS_PENDING = "pending"
STATUS_IN_TRANSIT = "in_transit"
STATUS_DELIVERED = "delivered"
STATUS_CANCELLED = "cancelled"

PACKAGE_STATUSES: List[str] = [
    STATUS_PENDING,
    STATUS_IN_TRANSIT,
    STATUS_DELIVERED,
    STATUS_CANCELLED,
]

# ============================================================================
# Person Roles and Availability
# ============================================================================

ROLE_DELIVERY = "delivery"

PERSON_STATUS_AVAILABLE = "available"

# ============================================================================
# Table Names
# ============================================================================

PACKAGES_TABLE = "packages"
PERSONS_TABLE = "persons"

# ============================================================================
# Projection Labels
# ============================================================================

# Shown as delivery_name when a package has no (or a vanished) assignee
UNASSIGNED_LABEL = "unassigned"

# Fields that never leave the service layer
CREDENTIAL_FIELDS = ("password", "password_hash")

# ============================================================================
# Field Limits
# ============================================================================

MAX_NAME_LENGTH = 200
MAX_ADDRESS_LENGTH = 500
MAX_PHONE_LENGTH = 50
MAX_EMAIL_LENGTH = 254
MIN_PASSWORD_LENGTH = 6

# ============================================================================
# Password Hashing
# ============================================================================

DEFAULT_PASSWORD_ITERATIONS = 260000

# ============================================================================
# Error Messages
# ============================================================================

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_STATUS = "Invalid status. Must be one of: " + ", ".join(PACKAGE_STATUSES)
ERROR_INVALID_EMAIL = "Invalid email address"
ERROR_DUPLICATE_EMAIL = "An account with this email already exists"
ERROR_INVALID_ASSIGNEE = "Must reference an existing delivery person"
ERROR_INVALID_CREDENTIALS = "Invalid credentials"
ERROR_PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
