"""
JSON shapes returned by the API
"""

from datetime import datetime
from typing import Callable, Optional
from itam.buisness.core.data_insertion_mixin import plain_value
from itam.utils.time import utcnow

# Bookkeeping columns that never leave the service
ASSET_INTERNAL_FIELDS = ('version_id', 'event_sequence', 'last_event_at', 'is_deleted', 'deleted_at')


def serialize_asset(asset, now: Optional[datetime] = None) -> dict:
    data = asset.to_dict(exclude=ASSET_INTERNAL_FIELDS)
    data['location_name'] = asset.location.full_location if asset.location else None
    data['is_available'] = asset.is_available

    active = asset.active_assignment
    data['current_assignment'] = {
        'id': active.id,
        'employee_id': active.employee_id,
        'employee_name': active.employee.full_name,
        'assigned_date': plain_value(active.assigned_date),
        'expected_return_date': plain_value(active.expected_return_date),
        'is_overdue': active.is_overdue(now),
    } if active else None
    return data


def serialize_assignment(assignment, now: Optional[datetime] = None) -> dict:
    now = now or utcnow()
    data = assignment.to_dict()
    data['is_active'] = assignment.is_active
    data['is_overdue'] = assignment.is_overdue(now)
    data['days_assigned'] = assignment.days_assigned(now)
    data['asset_tag'] = assignment.asset.asset_tag if assignment.asset else None
    data['employee_name'] = assignment.employee.full_name if assignment.employee else None
    data['location_name'] = assignment.location.full_location if assignment.location else None
    return data


def serialize_employee(employee) -> dict:
    data = employee.to_dict()
    data['full_name'] = employee.full_name
    data['work_location_name'] = employee.work_location.full_location if employee.work_location else None
    return data


def serialize_location(location) -> dict:
    data = location.to_dict()
    data['full_location'] = location.full_location
    return data


def serialize_user(user) -> dict:
    data = user.to_dict(exclude=('password_hash',))
    data['display_name'] = user.display_name
    return data


def serialize_page(pagination, item_fn: Callable) -> dict:
    return {
        'items': [item_fn(item) for item in pagination.items],
        'page': pagination.page,
        'page_size': pagination.per_page,
        'total': pagination.total,
        'pages': pagination.pages,
    }
