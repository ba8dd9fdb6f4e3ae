"""
Base model class for all database models.

Provides common functionality and fields for all models:
- Integer primary key assigned by the store
- created_at timestamp, set once on insert
- to_dict() / update_from_dict() helpers used by the store gateway
- SQLAlchemy declarative base
"""

import enum
from datetime import datetime
from typing import Any, Dict, Iterable

from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import declarative_base

from src.utils.datetime_utils import utc_now

# Create the declarative base for all models
Base = declarative_base()

# Columns that callers can never overwrite
IMMUTABLE_COLUMNS = ("id", "created_at")


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    All models should inherit from this class to get:
    - id: Primary key (Integer, store-assigned)
    - created_at: Timestamp when record was created
    - to_dict(): Convert model to dictionary
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    @classmethod
    def column_names(cls) -> Iterable[str]:
        """Names of all mapped columns."""
        return [column.name for column in cls.__table__.columns]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to a plain row dictionary.

        Enum values are flattened to their string value; datetimes are kept
        as datetime objects so the projection layer decides how to render them.

        Returns:
            Dictionary of column name to value
        """
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, enum.Enum):
                value = value.value
            result[column.name] = value
        return result

    def update_from_dict(self, data: Dict[str, Any]) -> None:
        """
        Update model instance from dictionary.

        Only updates mapped columns present in the dictionary; id and
        created_at are never touched.

        Args:
            data: Dictionary with field names and values
        """
        for column in self.__table__.columns:
            if column.name in data and column.name not in IMMUTABLE_COLUMNS:
                setattr(self, column.name, data[column.name])

    def __repr__(self) -> str:
        """
        String representation of model instance.

        Returns:
            String like "ClassName(id=1, ...)"
        """
        class_name = self.__class__.__name__
        attrs = []

        if getattr(self, "id", None) is not None:
            attrs.append(f"id={self.id}")

        if getattr(self, "name", None) is not None:
            attrs.append(f"name='{self.name}'")

        created = getattr(self, "created_at", None)
        if isinstance(created, datetime):
            attrs.append(f"created_at={created.isoformat()}")

        return f"{class_name}({', '.join(attrs)})"
