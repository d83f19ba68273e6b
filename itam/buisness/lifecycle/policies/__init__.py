"""
Business policies for the asset lifecycle

Each policy exposes a ``check`` style classmethod that raises a lifecycle
domain error when its rule is violated.
"""

from itam.buisness.lifecycle.policies.permissions import Action, PermissionPolicy
from itam.buisness.lifecycle.policies.active_assignment import ActiveAssignmentPolicy
from itam.buisness.lifecycle.policies.assignability import AssignabilityPolicy
from itam.buisness.lifecycle.policies.asset_fields import AssetFieldPolicy

__all__ = [
    'Action',
    'PermissionPolicy',
    'ActiveAssignmentPolicy',
    'AssignabilityPolicy',
    'AssetFieldPolicy',
]
