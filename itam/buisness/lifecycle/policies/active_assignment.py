"""
Active Assignment Policy

Guards the single-active-assignment invariant around an asset.
"""

from typing import Optional
from itam.data.core.asset_info.assignment import Assignment
from itam.buisness.lifecycle.errors import ActiveAssignmentConflictError


class ActiveAssignmentPolicy:
    """
    An asset has at most one assignment without a return date, and it has one
    exactly when its status is Assigned.
    """

    @classmethod
    def find_active(cls, asset_id: int) -> Optional[Assignment]:
        return Assignment.query.filter(
            Assignment.asset_id == asset_id,
            Assignment.actual_return_date.is_(None)
        ).first()

    @classmethod
    def check_none_active(cls, asset_id: int, operation: str) -> None:
        """
        Raises:
            ActiveAssignmentConflictError: If the asset has an active assignment
        """
        active = cls.find_active(asset_id)
        if active is not None:
            raise ActiveAssignmentConflictError(
                f"Cannot {operation}: asset {asset_id} has an active assignment (ID: {active.id})",
                asset_id=asset_id, assignment_id=active.id
            )
