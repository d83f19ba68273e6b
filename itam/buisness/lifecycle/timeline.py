"""
Timeline Projector

Rebuilds an asset's history from the lifecycle event log, newest first.

A Timeline is lazy and restartable: nothing is read until it is iterated, and
each iteration re-reads the log in keyset batches. With a limit, whole groups
(events written by one command) are emitted or none of the group is.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterator, List, Optional
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.event_info.lifecycle_event import LifecycleEvent
from itam.data.core.enums import AssetStatus, TimelineStatus, TimelineType
from itam.buisness.core.data_insertion_mixin import plain_value
from itam.buisness.lifecycle.errors import InvalidInputError, NotFoundError


# Fixed classification for every type whose status does not depend on later events
BASE_CLASSIFICATION: Dict[TimelineType, TimelineStatus] = {
    TimelineType.CREATED: TimelineStatus.COMPLETED,
    TimelineType.ASSIGNED: TimelineStatus.COMPLETED,
    TimelineType.RETURNED: TimelineStatus.COMPLETED,
    TimelineType.UPDATED: TimelineStatus.COMPLETED,
    TimelineType.LOCATION_CHANGED: TimelineStatus.COMPLETED,
    TimelineType.SUPPORT_TICKET: TimelineStatus.COMPLETED,
    TimelineType.STATUS_CHANGED: TimelineStatus.COMPLETED,
    TimelineType.MAINTENANCE: TimelineStatus.IN_PROGRESS,
    TimelineType.DELETED: TimelineStatus.ERROR,
}

# Marker for "asset deleted while under maintenance"
_DELETED = 'Deleted'


def classify(event_type: TimelineType, to_status: Optional[AssetStatus] = None,
             maintenance_exit=None) -> TimelineStatus:
    """
    Classification of one event.

    Args:
        event_type: Type of the event
        to_status: New status for StatusChanged events
        maintenance_exit: For Maintenance events, where the asset went when it
            next left UnderMaintenance (None while the spell is still open)
    """
    if event_type == TimelineType.STATUS_CHANGED and to_status == AssetStatus.LOST:
        return TimelineStatus.WARNING
    if event_type == TimelineType.MAINTENANCE:
        if maintenance_exit is None:
            return TimelineStatus.IN_PROGRESS
        return TimelineStatus.PENDING
    return BASE_CLASSIFICATION[event_type]


@dataclass(frozen=True)
class TimelineEntry:
    sequence: int
    type: TimelineType
    timestamp: datetime
    actor: str
    status: TimelineStatus
    description: str
    group_key: str
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    location_id: Optional[int] = None
    location_name: Optional[str] = None
    assignment_id: Optional[int] = None

    def to_dict(self):
        return {
            'sequence': self.sequence,
            'type': self.type.value,
            'timestamp': plain_value(self.timestamp),
            'actor': self.actor,
            'status': self.status.value,
            'description': self.description,
            'group_key': self.group_key,
            'employee_id': self.employee_id,
            'employee_name': self.employee_name,
            'location_id': self.location_id,
            'location_name': self.location_name,
            'assignment_id': self.assignment_id,
        }


class Timeline:
    """
    Lazy, restartable, newest-first view of one asset's events.
    """

    BATCH_SIZE = 100

    def __init__(self, asset_id: int, limit: Optional[int] = None):
        self.asset_id = asset_id
        self.limit = limit

    def __iter__(self) -> Iterator[TimelineEntry]:
        emitted = 0
        group: List[TimelineEntry] = []
        for entry in self._entries():
            if group and entry.group_key != group[0].group_key:
                if not self._fits(emitted, len(group)):
                    return
                yield from group
                emitted += len(group)
                group = []
            group.append(entry)
        if group and self._fits(emitted, len(group)):
            yield from group

    def _fits(self, emitted: int, group_size: int) -> bool:
        return self.limit is None or emitted + group_size <= self.limit

    def _entries(self) -> Iterator[TimelineEntry]:
        """Classified entries, newest first, one pass over the log"""
        maintenance_exit = None
        for event in self._events():
            if event.event_type == TimelineType.STATUS_CHANGED and event.from_status == AssetStatus.UNDER_MAINTENANCE:
                maintenance_exit = event.to_status
            elif event.event_type == TimelineType.DELETED:
                maintenance_exit = _DELETED

            status = classify(event.event_type, event.to_status, maintenance_exit)

            if event.event_type == TimelineType.MAINTENANCE:
                maintenance_exit = None

            yield TimelineEntry(
                sequence=event.sequence,
                type=event.event_type,
                timestamp=event.timestamp,
                actor=event.actor,
                status=status,
                description=event.description,
                group_key=event.group_key,
                employee_id=event.employee_id,
                employee_name=event.employee.full_name if event.employee else None,
                location_id=event.location_id,
                location_name=event.location.full_location if event.location else None,
                assignment_id=event.assignment_id,
            )

    def _events(self) -> Iterator[LifecycleEvent]:
        """Keyset-paged read of the log, highest sequence first"""
        before = None
        while True:
            query = LifecycleEvent.query.filter(LifecycleEvent.asset_id == self.asset_id)
            if before is not None:
                query = query.filter(LifecycleEvent.sequence < before)
            batch = query.order_by(LifecycleEvent.sequence.desc()).limit(self.BATCH_SIZE).all()
            if not batch:
                return
            yield from batch
            if len(batch) < self.BATCH_SIZE:
                return
            before = batch[-1].sequence

    def to_list(self) -> List[TimelineEntry]:
        return list(self)


class TimelineProjector:
    """Builds Timeline views; deleted assets keep a readable timeline"""

    @staticmethod
    def get_timeline(asset_id, limit: Optional[int] = None) -> Timeline:
        """
        Raises:
            NotFoundError: If the asset never existed
            InvalidInputError: If limit is given and below 1
        """
        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
                raise InvalidInputError("limit must be a positive integer", field='limit')
        asset = db.session.get(Asset, asset_id) if asset_id is not None else None
        if asset is None:
            raise NotFoundError(f"Asset {asset_id} not found", asset_id=asset_id)
        return Timeline(asset.id, limit)
