"""
AssetManager - Domain service for asset record operations

Creates, edits, deletes and annotates assets. Status edits go through
AssetStatusMachine; leaving Assigned hands off to AssignmentManager to close
the active assignment in the same command.
"""

import uuid
from typing import Any, Dict, Optional, TYPE_CHECKING
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.location import Location
from itam.data.core.enums import AssetCondition, AssetStatus, TimelineType
from itam.buisness.core.data_insertion_mixin import plain_value
from itam.buisness.lifecycle.errors import ConflictError, InvalidInputError, StatusTransitionError
from itam.buisness.lifecycle.narrator import LifecycleNarrator
from itam.buisness.lifecycle.state_machine import AssetStatusMachine
from itam.buisness.lifecycle.policies.active_assignment import ActiveAssignmentPolicy
from itam.buisness.lifecycle.policies.assignability import AssignabilityPolicy
from itam.buisness.lifecycle.policies.asset_fields import AssetFieldPolicy

if TYPE_CHECKING:
    from itam.buisness.lifecycle.context import AssetLifecycleContext


class AssetManager:
    """
    Domain service for asset record operations.

    Responsibilities:
    - Validate and apply asset field changes
    - Apply administrative status transitions
    - Emit lifecycle events via the context's EventRecorder
    """

    def __init__(self, ctx: 'AssetLifecycleContext'):
        self.ctx = ctx

    @property
    def asset(self) -> Optional[Asset]:
        return self.ctx.asset

    def create(self, data: Dict[str, Any]) -> Asset:
        """
        Create a new asset and record its Created event.

        Args:
            data: Asset fields; category, brand and model are required

        Returns:
            Asset: The new asset (flushed, not committed)
        """
        values = AssetFieldPolicy.normalize_create(data)
        AssetStatusMachine.validate_initial(values['status'])

        if not values.get('asset_tag'):
            values['asset_tag'] = self.generate_asset_tag(values['category'])
        self._check_tag_free(values['asset_tag'])

        if values.get('location_id') is not None:
            AssignabilityPolicy.check_location(values['location_id'])

        asset = Asset(
            created_by_id=self.ctx.caller.user_id,
            updated_by_id=self.ctx.caller.user_id,
            **values
        )
        db.session.add(asset)
        db.session.flush()
        self.ctx.asset = asset

        self.ctx.recorder.record(
            TimelineType.CREATED,
            LifecycleNarrator.asset_created(asset),
            location_id=asset.location_id,
            to_status=asset.status
        )
        if asset.status == AssetStatus.UNDER_MAINTENANCE:
            self.ctx.recorder.record(
                TimelineType.MAINTENANCE,
                LifecycleNarrator.maintenance_started(),
                to_status=asset.status
            )
        return asset

    def update(self, patch: Dict[str, Any]) -> Asset:
        """
        Apply a field-level patch.

        Events, in order: Updated, LocationChanged, StatusChanged, Returned
        (when an active assignment is force-closed), Maintenance (when the
        asset enters UnderMaintenance). A patch that changes nothing writes
        nothing.
        """
        asset = self.asset
        values = AssetFieldPolicy.normalize_patch(patch)

        old_status = asset.status
        new_status = values.pop('status', old_status)
        status_changed = new_status != old_status
        if status_changed:
            AssetStatusMachine.validate_transition(old_status, new_status)
            if new_status == AssetStatus.AVAILABLE and self.ctx.has_active_assignment:
                raise StatusTransitionError(
                    "Asset has an active assignment; return it instead of setting Available",
                    from_status=old_status.value, to_status=new_status.value
                )

        old_location_id = asset.location_id
        new_location_id = values.pop('location_id', old_location_id)
        location_changed = new_location_id != old_location_id
        if location_changed and new_location_id is not None:
            AssignabilityPolicy.check_location(new_location_id)

        if 'asset_tag' in values and values['asset_tag'] != asset.asset_tag:
            self._check_tag_free(values['asset_tag'], exclude_id=asset.id)

        AssetFieldPolicy.check_warranty_after_purchase(
            values.get('purchase_date', asset.purchase_date),
            values.get('warranty_expiry', asset.warranty_expiry)
        )

        changes = {}
        for name, value in values.items():
            old_value = getattr(asset, name)
            if old_value != value:
                changes[name] = [plain_value(old_value), plain_value(value)]
                setattr(asset, name, value)
        if location_changed:
            changes['location_id'] = [old_location_id, new_location_id]
        if status_changed:
            changes['status'] = [old_status.value, new_status.value]

        if not changes:
            return asset

        asset.updated_by_id = self.ctx.caller.user_id
        self.ctx.recorder.record(
            TimelineType.UPDATED,
            LifecycleNarrator.asset_updated(changes),
            changes=changes
        )

        if location_changed:
            asset.location_id = new_location_id
            self.ctx.recorder.record(
                TimelineType.LOCATION_CHANGED,
                LifecycleNarrator.location_changed(
                    db.session.get(Location, old_location_id) if old_location_id else None,
                    db.session.get(Location, new_location_id) if new_location_id else None
                ),
                location_id=new_location_id,
                changes={'location_id': [old_location_id, new_location_id]}
            )

        if status_changed:
            self._apply_status(old_status, new_status)

        return asset

    def _apply_status(self, old_status: AssetStatus, new_status: AssetStatus) -> None:
        asset = self.asset
        asset.status = new_status
        self.ctx.recorder.record(
            TimelineType.STATUS_CHANGED,
            LifecycleNarrator.status_changed(old_status, new_status),
            from_status=old_status,
            to_status=new_status
        )

        if old_status == AssetStatus.ASSIGNED:
            self.ctx.assignment_manager.force_close(new_status)

        if new_status == AssetStatus.UNDER_MAINTENANCE:
            self.ctx.recorder.record(
                TimelineType.MAINTENANCE,
                LifecycleNarrator.maintenance_started(),
                to_status=new_status
            )

    def change_condition(self, condition) -> Asset:
        """Set the condition. Always legal, always records Updated."""
        asset = self.asset
        new_condition = AssetFieldPolicy.parse_enum(AssetCondition, condition, 'condition')
        old_condition = asset.condition

        asset.condition = new_condition
        asset.updated_by_id = self.ctx.caller.user_id
        self.ctx.recorder.record(
            TimelineType.UPDATED,
            LifecycleNarrator.condition_changed(old_condition, new_condition),
            changes={'condition': [plain_value(old_condition), plain_value(new_condition)]}
        )
        return asset

    def record_support_ticket(self, ticket_number, description: Optional[str] = None) -> Asset:
        if ticket_number is None or not str(ticket_number).strip():
            raise InvalidInputError("ticket_number is required", field='ticket_number')
        ticket_number = str(ticket_number).strip()
        if description is not None:
            description = AssetFieldPolicy.parse_text(description, 'description')

        self.ctx.recorder.record(
            TimelineType.SUPPORT_TICKET,
            LifecycleNarrator.support_ticket(ticket_number, description),
            changes={'ticket_number': ticket_number}
        )
        return self.asset

    def delete(self) -> Asset:
        """
        Soft delete the asset.

        Raises:
            ActiveAssignmentConflictError: If an active assignment exists
        """
        asset = self.asset
        ActiveAssignmentPolicy.check_none_active(asset.id, 'delete asset')

        self.ctx.recorder.record(
            TimelineType.DELETED,
            LifecycleNarrator.asset_deleted(asset),
            from_status=asset.status
        )
        asset.is_deleted = True
        asset.deleted_at = self.ctx.now
        asset.updated_by_id = self.ctx.caller.user_id
        return asset

    @staticmethod
    def generate_asset_tag(category) -> str:
        prefix = category.value[:3].upper()
        return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"

    @staticmethod
    def _check_tag_free(asset_tag: str, exclude_id: Optional[int] = None) -> None:
        """Tags stay reserved by soft-deleted assets too"""
        query = Asset.query.filter(Asset.asset_tag == asset_tag)
        if exclude_id is not None:
            query = query.filter(Asset.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Asset tag {asset_tag} is already in use", asset_tag=asset_tag)
