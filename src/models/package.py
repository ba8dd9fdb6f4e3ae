"""
Package model for tracking parcels through delivery.

This module contains:
- Package: A parcel with a recipient, an address, an optional assignee and a
  lifecycle status
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from src.utils.constants import MAX_NAME_LENGTH, MAX_ADDRESS_LENGTH

from .base import BaseModel
from .package_status import PackageStatus


class Package(BaseModel):
    """
    Package model representing a parcel in the delivery network.

    Attributes:
        destinatario: Recipient name
        direccion: Delivery address
        delivery_person_id: Assigned delivery person (None = unassigned)
        status: Lifecycle status (see PackageStatus)
        delivered_at: When the package entered DELIVERED; never cleared
    """

    __tablename__ = "packages"

    destinatario = Column(String(MAX_NAME_LENGTH), nullable=False)
    direccion = Column(String(MAX_ADDRESS_LENGTH), nullable=False)

    # A deleted assignee leaves the package unassigned rather than dangling
    delivery_person_id = Column(
        Integer, ForeignKey("persons.id", ondelete="SET NULL"), nullable=True, index=True
    )

    status = Column(
        SQLEnum(
            PackageStatus,
            name="package_status",
            values_callable=lambda statuses: [s.value for s in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=PackageStatus.PENDING,
    )
    delivered_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    delivery_person = relationship("Person", back_populates="packages", lazy="select")

    __table_args__ = (
        Index("idx_package_status", "status"),
        Index("idx_package_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        """String representation of package."""
        status = self.status.value if self.status else None
        return (
            f"Package(id={self.id}, destinatario='{self.destinatario}', status='{status}')"
        )
