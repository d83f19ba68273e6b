"""
Permission Policy

Pure table of which role may perform which action.
"""

from enum import Enum
from typing import Dict, FrozenSet
from itam.data.core.enums import UserRole
from itam.buisness.lifecycle.errors import ForbiddenError


class Action(str, Enum):
    CREATE = 'create'
    EDIT = 'edit'
    DELETE = 'delete'
    ASSIGN = 'assign'
    RETURN = 'return'
    MANAGE_USERS = 'manageUsers'


class PermissionPolicy:
    """
    Role x action permission table.

    Viewers are read-only, IT officers run the day-to-day lifecycle, admins
    may additionally delete assets and manage user accounts.
    """

    GRANTS: Dict[UserRole, FrozenSet[Action]] = {
        UserRole.VIEWER: frozenset(),
        UserRole.IT_OFFICER: frozenset({Action.CREATE, Action.EDIT, Action.ASSIGN, Action.RETURN}),
        UserRole.ADMIN: frozenset(Action),
    }

    @classmethod
    def authorize(cls, role, action) -> bool:
        """
        Check whether a role may perform an action.

        Unknown roles or actions are denied.
        """
        try:
            role = UserRole.decode(role)
            action = Action(action)
        except ValueError:
            return False
        return action in cls.GRANTS[role]

    @classmethod
    def check(cls, caller, action) -> None:
        """
        Check the caller against the table.

        Raises:
            ForbiddenError: If the caller's role lacks the permission
        """
        if caller is None or not cls.authorize(caller.role, action):
            role = getattr(caller, 'role', None)
            role_name = role.value if isinstance(role, UserRole) else role
            action_name = action.value if isinstance(action, Action) else action
            raise ForbiddenError(
                f"Role {role_name} may not perform '{action_name}'",
                role=role_name, action=action_name
            )
