"""
Package status enum for delivery lifecycle tracking.

This enum defines the four-state lifecycle of a parcel and the table of
transitions allowed when strict transition checking is enabled.
"""

import enum
from typing import Dict, FrozenSet


class PackageStatus(enum.Enum):
    """
    Package lifecycle status.

    Status transitions (strict mode):
        PENDING -> IN_TRANSIT (picked up by the delivery person)
        PENDING -> CANCELLED
        IN_TRANSIT -> DELIVERED (handed to the recipient)
        IN_TRANSIT -> CANCELLED

    Invalid transitions (strict mode):
        PENDING -> DELIVERED (must be in transit first)
        DELIVERED -> * (terminal)
        CANCELLED -> * (terminal)

    In loose mode any known status may follow any other.
    """

    PENDING = "pending"  # Registered, waiting for pickup
    IN_TRANSIT = "in_transit"  # On the way to the recipient
    DELIVERED = "delivered"  # Handed over
    CANCELLED = "cancelled"  # Withdrawn

    @classmethod
    def values(cls):
        """All status strings in lifecycle order."""
        return [status.value for status in cls]

    @property
    def is_terminal(self) -> bool:
        return not VALID_TRANSITIONS[self]


# Valid status transitions map
VALID_TRANSITIONS: Dict[PackageStatus, FrozenSet[PackageStatus]] = {
    PackageStatus.PENDING: frozenset({PackageStatus.IN_TRANSIT, PackageStatus.CANCELLED}),
    PackageStatus.IN_TRANSIT: frozenset({PackageStatus.DELIVERED, PackageStatus.CANCELLED}),
    PackageStatus.DELIVERED: frozenset(),
    PackageStatus.CANCELLED: frozenset(),
}


def is_valid_transition(current: PackageStatus, target: PackageStatus) -> bool:
    """Return True if the transition table allows current -> target."""
    return target in VALID_TRANSITIONS.get(current, frozenset())
