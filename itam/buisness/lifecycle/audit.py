"""
Audit log derivation

Audit rows are not stored separately; they are a projection of the lifecycle
event log onto the audit action vocabulary.
"""

from datetime import datetime
from typing import Dict, Optional
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.event_info.lifecycle_event import LifecycleEvent
from itam.data.core.enums import AuditAction, TimelineType
from itam.buisness.core.data_insertion_mixin import plain_value


# Maintenance and support tickets are timeline-only
AUDIT_ACTIONS: Dict[TimelineType, AuditAction] = {
    TimelineType.CREATED: AuditAction.CREATED,
    TimelineType.UPDATED: AuditAction.UPDATED,
    TimelineType.ASSIGNED: AuditAction.ASSIGNED,
    TimelineType.RETURNED: AuditAction.UNASSIGNED,
    TimelineType.STATUS_CHANGED: AuditAction.STATUS_CHANGED,
    TimelineType.LOCATION_CHANGED: AuditAction.LOCATION_CHANGED,
    TimelineType.DELETED: AuditAction.DELETED,
}


class AuditLogProjector:

    @staticmethod
    def build_query(
        asset_id: Optional[int] = None,
        employee_id: Optional[int] = None,
        action: Optional[AuditAction] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ):
        """Events that have an audit action, newest first"""
        if action is not None:
            types = [t for t, a in AUDIT_ACTIONS.items() if a == action]
        else:
            types = list(AUDIT_ACTIONS)

        query = LifecycleEvent.query.filter(LifecycleEvent.event_type.in_(types))
        if asset_id is not None:
            query = query.filter(LifecycleEvent.asset_id == asset_id)
        if employee_id is not None:
            query = query.filter(LifecycleEvent.employee_id == employee_id)
        if date_from is not None:
            query = query.filter(LifecycleEvent.timestamp >= date_from)
        if date_to is not None:
            query = query.filter(LifecycleEvent.timestamp <= date_to)
        return query.order_by(LifecycleEvent.timestamp.desc(), LifecycleEvent.id.desc())

    @staticmethod
    def to_audit_row(event: LifecycleEvent) -> dict:
        asset = db.session.get(Asset, event.asset_id)
        return {
            'id': event.id,
            'action': AUDIT_ACTIONS[event.event_type].value,
            'entity_type': 'Asset',
            'entity_id': event.asset_id,
            'asset_tag': asset.asset_tag if asset else None,
            'employee_id': event.employee_id,
            'description': event.description,
            'user_name': event.actor,
            'user_id': event.actor_id,
            'timestamp': plain_value(event.timestamp),
            'old_values': {k: v[0] for k, v in (event.changes or {}).items() if isinstance(v, list)} or None,
            'new_values': {k: v[1] for k, v in (event.changes or {}).items() if isinstance(v, list)} or None,
        }
