"""
EventRecorder - Appends lifecycle events for the context's asset

Owns the per-asset sequence counter and the strictly increasing timestamp
rule. Bumping the counter dirties the asset row, so every command that
records an event also passes the asset's optimistic version check.
"""

from datetime import timedelta
from typing import Optional, TYPE_CHECKING
from itam import db
from itam.data.core.event_info.lifecycle_event import LifecycleEvent
from itam.data.core.enums import TimelineType

if TYPE_CHECKING:
    from itam.buisness.lifecycle.context import AssetLifecycleContext


class EventRecorder:

    TICK = timedelta(microseconds=1)

    def __init__(self, ctx: 'AssetLifecycleContext'):
        self.ctx = ctx

    def record(
        self,
        event_type: TimelineType,
        description: str,
        employee_id: Optional[int] = None,
        location_id: Optional[int] = None,
        assignment_id: Optional[int] = None,
        from_status=None,
        to_status=None,
        changes: Optional[dict] = None
    ) -> LifecycleEvent:
        """
        Append one event to the asset's log.

        Args:
            event_type: Timeline type of the event
            description: Narrator text
            employee_id: Linked employee, if any
            location_id: Linked location, if any
            assignment_id: Linked assignment, if any
            from_status: Status before a status change
            to_status: Status after a status change
            changes: Field -> [old, new] map for edits

        Returns:
            LifecycleEvent: The pending event (flushed with the command)
        """
        asset = self.ctx.asset
        asset.event_sequence = (asset.event_sequence or 0) + 1

        timestamp = self.ctx.now
        if asset.last_event_at is not None and timestamp <= asset.last_event_at:
            timestamp = asset.last_event_at + self.TICK
        asset.last_event_at = timestamp

        event = LifecycleEvent(
            asset_id=asset.id,
            sequence=asset.event_sequence,
            group_key=self.ctx.group_key,
            event_type=event_type,
            timestamp=timestamp,
            actor=self.ctx.caller.name,
            actor_id=self.ctx.caller.user_id,
            description=description,
            employee_id=employee_id,
            location_id=location_id,
            assignment_id=assignment_id,
            from_status=from_status,
            to_status=to_status,
            changes=changes,
        )
        db.session.add(event)
        self.ctx.events.append(event)
        return event
