"""
Report Service
Report queries: warranty expiry, lost or never-assigned assets, monthly
activity trends and the derived audit log.
"""

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import List, Optional
from flask import current_app
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import and_, exists, or_
from itam.data.core.asset_info.asset import Asset
from itam.data.core.asset_info.assignment import Assignment
from itam.data.core.event_info.lifecycle_event import LifecycleEvent
from itam.data.core.enums import AssetStatus, AuditAction, TimelineType
from itam.buisness.lifecycle.audit import AuditLogProjector
from itam.buisness.lifecycle.errors import InvalidInputError
from itam.services.core.paging import paginate
from itam.utils.time import utcnow


class ReportService:

    TREND_TYPES = (TimelineType.CREATED, TimelineType.ASSIGNED, TimelineType.RETURNED)

    @staticmethod
    def warranty_expiring(days: Optional[int] = None, now: Optional[datetime] = None) -> List[Asset]:
        """Non-deleted assets whose warranty ends within the window, soonest first"""
        if days is None:
            days = current_app.config.get('WARRANTY_EXPIRY_DAYS', 30)
        if days < 0:
            raise InvalidInputError("days must be zero or more", field='days')
        today = (now or utcnow()).date()
        return Asset.query.filter(
            Asset.is_deleted.is_(False),
            Asset.warranty_expiry.isnot(None),
            Asset.warranty_expiry >= today,
            Asset.warranty_expiry <= today + timedelta(days=days)
        ).order_by(Asset.warranty_expiry, Asset.id).all()

    @staticmethod
    def lost_or_unassigned() -> List[Asset]:
        """Lost assets, plus Available assets that were never assigned"""
        ever_assigned = exists().where(Assignment.asset_id == Asset.id)
        return Asset.query.filter(
            Asset.is_deleted.is_(False),
            or_(
                Asset.status == AssetStatus.LOST,
                and_(Asset.status == AssetStatus.AVAILABLE, ~ever_assigned)
            )
        ).order_by(Asset.id).all()

    @staticmethod
    def monthly_trends(months: int = 12, now: Optional[datetime] = None) -> List[dict]:
        """
        Created / assigned / returned counts per calendar month, oldest month first.

        Args:
            months: Number of months, including the current one
        """
        if months < 1:
            raise InvalidInputError("months must be 1 or greater", field='months')
        now = now or utcnow()

        buckets = OrderedDict()
        year, month = now.year, now.month
        for _ in range(months):
            buckets[(year, month)] = {'created': 0, 'assigned': 0, 'returned': 0}
            year, month = (year, month - 1) if month > 1 else (year - 1, 12)
        buckets = OrderedDict(reversed(list(buckets.items())))

        first_year, first_month = next(iter(buckets))
        start = datetime(first_year, first_month, 1)

        events = LifecycleEvent.query.filter(
            LifecycleEvent.event_type.in_(ReportService.TREND_TYPES),
            LifecycleEvent.timestamp >= start
        ).with_entities(LifecycleEvent.event_type, LifecycleEvent.timestamp).all()

        keys = {
            TimelineType.CREATED: 'created',
            TimelineType.ASSIGNED: 'assigned',
            TimelineType.RETURNED: 'returned',
        }
        for event_type, timestamp in events:
            bucket = buckets.get((timestamp.year, timestamp.month))
            if bucket is not None:
                bucket[keys[event_type]] += 1

        return [
            {'month': f'{y:04d}-{m:02d}', **counts}
            for (y, m), counts in buckets.items()
        ]

    @staticmethod
    def audit_logs(
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        asset_id: Optional[int] = None,
        employee_id: Optional[int] = None,
        action: Optional[AuditAction] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> Pagination:
        """Paginated audit log derived from lifecycle events, newest first"""
        if date_from and date_to and date_to < date_from:
            raise InvalidInputError("date_to cannot be earlier than date_from", field='date_to')
        query = AuditLogProjector.build_query(
            asset_id=asset_id,
            employee_id=employee_id,
            action=action,
            date_from=date_from,
            date_to=date_to
        )
        return paginate(query, page, page_size)
