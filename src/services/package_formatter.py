"""
Package Formatter - denormalized, client-facing package records.

A package row from the store gateway may carry its joined assignee under the
"persons" key. The formatter flattens the assignee's name, phone and status
onto the package. A missing assignee (never assigned, or deleted) is a normal
case and yields the "unassigned" label with empty contact fields.
"""

from typing import Any, Dict, Iterable, List, Optional

from src.utils.constants import PERSONS_TABLE, UNASSIGNED_LABEL, CREDENTIAL_FIELDS
from src.utils.datetime_utils import to_iso

PACKAGE_DATETIME_FIELDS = ("created_at", "delivered_at")


def format_package(
    package_row: Dict[str, Any], assignee_row: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Merge a package row with its (possibly absent) assignee row.

    Args:
        package_row: Package columns; a nested "persons" entry is dropped
        assignee_row: Joined person columns, or None

    Returns:
        Package fields plus delivery_name, delivery_phone and delivery_status
    """
    formatted = {
        key: value for key, value in package_row.items() if key != PERSONS_TABLE
    }
    for field in PACKAGE_DATETIME_FIELDS:
        if field in formatted:
            formatted[field] = to_iso(formatted[field])

    if assignee_row:
        formatted["delivery_name"] = assignee_row.get("name") or UNASSIGNED_LABEL
        formatted["delivery_phone"] = assignee_row.get("phone")
        formatted["delivery_status"] = assignee_row.get("status")
    else:
        formatted["delivery_name"] = UNASSIGNED_LABEL
        formatted["delivery_phone"] = None
        formatted["delivery_status"] = None

    # Credential columns never ride along with a projection
    for field in CREDENTIAL_FIELDS:
        formatted.pop(field, None)

    return formatted


def format_joined_package(row: Dict[str, Any]) -> Dict[str, Any]:
    """Format a gateway row whose assignee is nested under "persons"."""
    return format_package(row, row.get(PERSONS_TABLE))


def format_packages(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Format a sequence of joined gateway rows, preserving order."""
    return [format_joined_package(row) for row in rows]
