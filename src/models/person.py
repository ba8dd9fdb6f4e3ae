"""
Person model for user accounts.

Delivery people are persons with role "delivery"; other roles (e.g. admin)
share the same table and log in the same way.
"""

from sqlalchemy import Column, String, Index
from sqlalchemy.orm import relationship

from src.utils.constants import (
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_EMAIL_LENGTH,
    ROLE_DELIVERY,
    PERSON_STATUS_AVAILABLE,
)

from .base import BaseModel


class Person(BaseModel):
    """
    Person model representing an account.

    Attributes:
        name: Display name
        phone: Contact phone
        email: Login identifier (unique)
        role: "delivery" or another role
        status: Availability (e.g. "available", "busy")
        password_hash: Salted PBKDF2 hash, None until a password is set
    """

    __tablename__ = "persons"

    name = Column(String(MAX_NAME_LENGTH), nullable=False, index=True)
    phone = Column(String(MAX_PHONE_LENGTH), nullable=True)
    email = Column(String(MAX_EMAIL_LENGTH), nullable=False, unique=True)
    role = Column(String(50), nullable=False, default=ROLE_DELIVERY)
    status = Column(String(50), nullable=False, default=PERSON_STATUS_AVAILABLE)
    password_hash = Column(String(255), nullable=True)

    packages = relationship("Package", back_populates="delivery_person")

    __table_args__ = (Index("idx_person_role", "role"),)

    def __repr__(self) -> str:
        """String representation of person."""
        return f"Person(id={self.id}, name='{self.name}', role='{self.role}')"
