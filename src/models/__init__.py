"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .package_status import PackageStatus, VALID_TRANSITIONS, is_valid_transition
from .person import Person
from .package import Package

__all__ = [
    "Base",
    "BaseModel",
    "Package",
    "PackageStatus",
    "Person",
    "VALID_TRANSITIONS",
    "is_valid_transition",
]
