"""
Dashboard Service
Aggregate counts for the dashboard.

All counts come from one SELECT (assets joined to their active assignment,
holder and location), so every number in a summary describes the same
instant.
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Optional
from flask import current_app
from sqlalchemy import and_, select
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.asset_info.assignment import Assignment
from itam.data.core.employee import Employee
from itam.data.core.location import Location
from itam.data.core.enums import AssetCategory, AssetCondition, AssetStatus
from itam.utils.time import utcnow

UNASSIGNED_DEPARTMENT = 'Unassigned'
NO_LOCATION = 'No location'


class DashboardService:

    @staticmethod
    def snapshot_statement():
        return (
            select(
                Asset.status,
                Asset.category,
                Asset.condition,
                Asset.warranty_expiry,
                Location.building,
                Location.floor,
                Location.room,
                Employee.department,
                Assignment.id.label('assignment_id'),
                Assignment.expected_return_date,
            )
            .select_from(Asset)
            .outerjoin(Assignment, and_(
                Assignment.asset_id == Asset.id,
                Assignment.actual_return_date.is_(None)
            ))
            .outerjoin(Employee, Employee.id == Assignment.employee_id)
            .outerjoin(Location, Location.id == Asset.location_id)
            .where(Asset.is_deleted.is_(False))
        )

    @staticmethod
    def summary(now: Optional[datetime] = None, warranty_days: Optional[int] = None) -> dict:
        """
        Build the dashboard summary.

        Args:
            now: Reference time for overdue and warranty windows
            warranty_days: Warranty window, defaults to WARRANTY_EXPIRY_DAYS

        Returns:
            dict: totals, per-status/category/condition/location/department
                  counts, warranty_expiring and overdue_assignments
        """
        now = now or utcnow()
        if warranty_days is None:
            warranty_days = current_app.config.get('WARRANTY_EXPIRY_DAYS', 30)
        today = now.date()
        warranty_end = today + timedelta(days=warranty_days)

        rows = db.session.execute(DashboardService.snapshot_statement()).all()

        by_status = Counter({status.value: 0 for status in AssetStatus})
        by_category = Counter()
        by_condition = Counter({condition.value: 0 for condition in AssetCondition})
        by_location = Counter()
        by_department = Counter()
        warranty_expiring = 0
        overdue = 0
        active_assignments = 0

        for row in rows:
            by_status[row.status.value] += 1
            by_category[row.category.value] += 1
            by_condition[row.condition.value] += 1
            by_location[DashboardService._location_label(row)] += 1

            if row.warranty_expiry is not None and today <= row.warranty_expiry <= warranty_end:
                warranty_expiring += 1

            if row.assignment_id is not None:
                active_assignments += 1
                by_department[row.department or UNASSIGNED_DEPARTMENT] += 1
                if row.expected_return_date is not None and now > row.expected_return_date:
                    overdue += 1

        return {
            'total_assets': len(rows),
            'by_status': dict(by_status),
            'by_category': {c.value: by_category[c.value] for c in AssetCategory if by_category[c.value]},
            'by_condition': dict(by_condition),
            'by_location': dict(by_location),
            'by_department': dict(by_department),
            'active_assignments': active_assignments,
            'warranty_expiring': warranty_expiring,
            'warranty_days': warranty_days,
            'overdue_assignments': overdue,
            'generated_at': now.isoformat(),
        }

    @staticmethod
    def _location_label(row) -> str:
        if row.building is None:
            return NO_LOCATION
        parts = [row.building]
        if row.floor is not None:
            parts.append(f'Floor {row.floor}')
        if row.room:
            parts.append(f'Room {row.room}')
        return ' - '.join(parts)
