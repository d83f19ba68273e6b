"""
AssetLifecycleContext - Domain Facade for one asset's lifecycle aggregate

Holds the asset, its active assignment, the calling identity and the command
clock, and hands mutation work to the managers. One context lives for exactly
one command; the engine owns the transaction around it.
"""

import uuid
from datetime import datetime
from typing import List, Optional
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.asset_info.assignment import Assignment
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.errors import NotFoundError
from itam.buisness.lifecycle.event_recorder import EventRecorder
from itam.buisness.lifecycle.policies.active_assignment import ActiveAssignmentPolicy


class AssetLifecycleContext:
    """
    Domain Facade for the asset lifecycle aggregate.

    Pattern: Domain Facade / Aggregate Controller
    """

    def __init__(self, caller: Caller, now: datetime, asset: Optional[Asset] = None):
        """
        Initialize context for a command.

        Args:
            caller: Identity running the command
            now: Command timestamp, shared by every event it writes
            asset: The asset, or None while CreateAsset builds it
        """
        self.caller = caller
        self.now = now
        self.asset = asset
        self.group_key = uuid.uuid4().hex
        self.events: List = []

        self.recorder = EventRecorder(self)

        # Managers import the context for typing only
        from itam.buisness.lifecycle.asset_manager import AssetManager
        from itam.buisness.lifecycle.assignment_manager import AssignmentManager
        self.asset_manager = AssetManager(self)
        self.assignment_manager = AssignmentManager(self)

    @classmethod
    def for_new_asset(cls, caller: Caller, now: datetime) -> 'AssetLifecycleContext':
        return cls(caller, now)

    @classmethod
    def load(cls, asset_id, caller: Caller, now: datetime) -> 'AssetLifecycleContext':
        """
        Load context for an existing, non-deleted asset.

        Raises:
            NotFoundError: If the asset does not exist or was deleted
        """
        asset = db.session.get(Asset, asset_id) if asset_id is not None else None
        if asset is None or asset.is_deleted:
            raise NotFoundError(f"Asset {asset_id} not found", asset_id=asset_id)
        return cls(caller, now, asset=asset)

    @classmethod
    def for_assignment(cls, assignment_id, caller: Caller, now: datetime):
        """
        Load context through an assignment id.

        Returns:
            tuple: (context, assignment)

        Raises:
            NotFoundError: If the assignment or its asset does not exist
        """
        assignment = db.session.get(Assignment, assignment_id) if assignment_id is not None else None
        if assignment is None:
            raise NotFoundError(f"Assignment {assignment_id} not found", assignment_id=assignment_id)
        asset = db.session.get(Asset, assignment.asset_id)
        if asset is None:
            raise NotFoundError(f"Asset {assignment.asset_id} not found", asset_id=assignment.asset_id)
        return cls(caller, now, asset=asset), assignment

    # ========== Read Model Helpers ==========

    @property
    def asset_id(self) -> Optional[int]:
        return self.asset.id if self.asset is not None else None

    @property
    def active_assignment(self) -> Optional[Assignment]:
        if self.asset is None or self.asset.id is None:
            return None
        return ActiveAssignmentPolicy.find_active(self.asset.id)

    @property
    def has_active_assignment(self) -> bool:
        return self.active_assignment is not None
