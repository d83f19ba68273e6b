"""
Core models package for the IT asset lifecycle
"""

from .enums import (
    AssetStatus,
    AssetCategory,
    AssetCondition,
    UserRole,
    TimelineType,
    TimelineStatus,
    AuditAction,
)
from .user_info.user import User
from .location import Location
from .employee import Employee
from .asset_info.asset import Asset
from .asset_info.assignment import Assignment
from .event_info.lifecycle_event import LifecycleEvent

__all__ = [
    'AssetStatus',
    'AssetCategory',
    'AssetCondition',
    'UserRole',
    'TimelineType',
    'TimelineStatus',
    'AuditAction',
    'User',
    'Location',
    'Employee',
    'Asset',
    'Assignment',
    'LifecycleEvent',
]
