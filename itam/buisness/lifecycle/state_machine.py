"""
State machine for Asset.status

Encodes which administrative edits are legal. Assign and Return own the
Available <-> Assigned edges and go through their own guards.
"""

from typing import Dict, Set
from itam.data.core.enums import AssetStatus
from itam.buisness.lifecycle.errors import StatusTransitionError, AssetNotAvailableError, InvalidInputError


class AssetStatusMachine:
    """
    State machine for asset status.

    Administrative edits (UpdateAsset) may move between the non-assigned
    statuses and may take an Assigned asset out of service. Nothing reaches
    Assigned except Assign, and nothing leaves Assigned for Available except
    Return.
    """

    AVAILABLE = AssetStatus.AVAILABLE
    ASSIGNED = AssetStatus.ASSIGNED
    UNDER_MAINTENANCE = AssetStatus.UNDER_MAINTENANCE
    RETIRED = AssetStatus.RETIRED
    LOST = AssetStatus.LOST

    # Statuses an asset may be created with
    INITIAL_STATES = {AVAILABLE, UNDER_MAINTENANCE, RETIRED}

    # Administrative transitions: from_status -> allowed to_status values
    TRANSITIONS: Dict[AssetStatus, Set[AssetStatus]] = {
        AVAILABLE: {UNDER_MAINTENANCE, RETIRED, LOST},
        ASSIGNED: {UNDER_MAINTENANCE, RETIRED, LOST},
        UNDER_MAINTENANCE: {AVAILABLE, RETIRED, LOST},
        RETIRED: {AVAILABLE, UNDER_MAINTENANCE, LOST},
        LOST: {AVAILABLE, UNDER_MAINTENANCE, RETIRED},
    }

    @classmethod
    def can_transition(cls, from_status: AssetStatus, to_status: AssetStatus) -> bool:
        """
        Check if an administrative edit is valid.

        Args:
            from_status: Current status
            to_status: Target status

        Returns:
            bool: True if the edit is allowed
        """
        if from_status == to_status:
            return True
        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, from_status: AssetStatus, to_status: AssetStatus) -> None:
        """
        Validate an administrative edit and raise if invalid.

        Raises:
            StatusTransitionError: If the edit is not allowed
        """
        if cls.can_transition(from_status, to_status):
            return

        if to_status == cls.ASSIGNED:
            raise StatusTransitionError(
                "Status cannot be set to Assigned directly; use the assign command",
                from_status=from_status.value, to_status=to_status.value
            )
        if from_status == cls.ASSIGNED and to_status == cls.AVAILABLE:
            raise StatusTransitionError(
                "Asset has an active assignment; return it instead of setting Available",
                from_status=from_status.value, to_status=to_status.value
            )
        raise StatusTransitionError(
            f"Invalid status transition: {from_status.value} → {to_status.value}",
            from_status=from_status.value, to_status=to_status.value
        )

    @classmethod
    def validate_initial(cls, status: AssetStatus) -> None:
        """
        Raises:
            InvalidInputError: If an asset cannot start in this status
        """
        if status not in cls.INITIAL_STATES:
            raise InvalidInputError(
                f"Asset cannot be created with status {status.value}",
                status=status.value
            )

    @classmethod
    def validate_assignable(cls, status: AssetStatus) -> None:
        """
        Raises:
            AssetNotAvailableError: Unless the asset is Available
        """
        if status != cls.AVAILABLE:
            raise AssetNotAvailableError(
                f"Asset is {status.value}; only Available assets can be assigned",
                status=status.value
            )

    @classmethod
    def status_after_return(cls, current: AssetStatus) -> AssetStatus:
        """Return moves Assigned back to Available and leaves any administrative status alone"""
        if current == cls.ASSIGNED:
            return cls.AVAILABLE
        return current
