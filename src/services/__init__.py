"""Services package - Business logic layer for Parcel Tracker.

This package contains all service modules that provide business logic
and store access for the application.

Architecture:
- Services: Stateless functions organized by domain (packages, delivery people, auth)
- Store access: Only through store_gateway, which runs each call in session_scope()
- Exceptions: Consistent error handling via the ServiceError hierarchy
- Validation: Input validation before any write

Service Modules:
- package_service: Package lifecycle (create, status changes, update, delete, reads)
- package_formatter: Denormalized package + assignee projections
- delivery_person_service: Delivery person directory
- auth_service: Login and password hashing
- health_service: Store connectivity checks

Infrastructure:
- database: Engine and session management
- store_gateway: Table-level CRUD and single-hop joins
- exceptions: Custom exception classes for service layer errors
- logging_utils: Structured operation logging
"""

from . import (
    database,
    store_gateway,
    package_formatter,
    auth_service,
    delivery_person_service,
    package_service,
    health_service,
)

__all__ = [
    "database",
    "store_gateway",
    "package_formatter",
    "auth_service",
    "delivery_person_service",
    "package_service",
    "health_service",
]
