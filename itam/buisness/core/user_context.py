"""
User Context (Core)
Provides a clean interface for managing user accounts.

Handles:
- User creation with password policy and uniqueness checks
- Role and active flag changes
All operations require the manageUsers permission.
"""

from typing import Optional
from itam import db
from itam.data.core.user_info.user import User
from itam.data.core.user_info.password_validator import PasswordValidator
from itam.data.core.enums import UserRole
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.errors import ConflictError, InvalidInputError, InvalidStateError, NotFoundError
from itam.buisness.lifecycle.policies.permissions import Action, PermissionPolicy
from itam.utils.logger import get_logger

logger = get_logger("itam.buisness.core.user_context")


class UserContext:
    """
    Core context for user account operations.
    """

    def __init__(self, user: User):
        self._user = user
        self._user_id = user.id

    @property
    def user(self) -> User:
        return self._user

    @property
    def user_id(self) -> int:
        return self._user_id

    @classmethod
    def load(cls, user_id) -> 'UserContext':
        user = db.session.get(User, user_id) if user_id is not None else None
        if user is None:
            raise NotFoundError(f"User {user_id} not found", user_id=user_id)
        return cls(user)

    @classmethod
    def create(
        cls,
        caller: Caller,
        username: str,
        email: str,
        password: str,
        role=UserRole.VIEWER,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        is_active: bool = True,
        is_system: bool = False,
        commit: bool = True
    ) -> 'UserContext':
        """
        Create a new user account.

        Raises:
            ForbiddenError: If the caller may not manage users
            InvalidInputError: For missing fields, an unknown role or a weak password
            ConflictError: If username or email already exists
        """
        PermissionPolicy.check(caller, Action.MANAGE_USERS)

        username = (username or '').strip()
        email = (email or '').strip().lower()
        if not username or not email:
            raise InvalidInputError("username and email are required")

        try:
            role = UserRole.decode(role)
        except ValueError:
            raise InvalidInputError(f"Invalid role: {role!r}", field='role')

        is_valid, error_message = PasswordValidator.validate(password)
        if not is_valid:
            raise InvalidInputError(error_message, field='password')

        if User.query.filter_by(username=username).first():
            raise ConflictError(f"Username '{username}' already exists", field='username')
        if User.query.filter_by(email=email).first():
            raise ConflictError(f"Email '{email}' already exists", field='email')

        user = User(
            username=username,
            email=email,
            role=role,
            first_name=first_name,
            last_name=last_name,
            is_active=is_active,
            is_system=is_system
        )
        user.set_password(password)
        db.session.add(user)

        if commit:
            db.session.commit()
            logger.info(f"Created user: {username} (ID: {user.id}, role: {role.value}) by {caller.name}")
        else:
            db.session.flush()

        return cls(user)

    def set_role(self, caller: Caller, role, commit: bool = True) -> 'UserContext':
        PermissionPolicy.check(caller, Action.MANAGE_USERS)
        if self._user.is_system:
            raise InvalidStateError("System user cannot be changed", user_id=self._user_id)
        try:
            self._user.role = UserRole.decode(role)
        except ValueError:
            raise InvalidInputError(f"Invalid role: {role!r}", field='role')

        if commit:
            db.session.commit()
            logger.info(f"User {self._user.username} role set to {self._user.role.value} by {caller.name}")
        return self

    def set_active(self, caller: Caller, is_active: bool, commit: bool = True) -> 'UserContext':
        PermissionPolicy.check(caller, Action.MANAGE_USERS)
        if self._user.is_system:
            raise InvalidStateError("System user cannot be changed", user_id=self._user_id)
        if caller.user_id == self._user_id and not is_active:
            raise InvalidStateError("You cannot deactivate your own account", user_id=self._user_id)
        self._user.is_active = bool(is_active)

        if commit:
            db.session.commit()
            logger.info(f"User {self._user.username} active={self._user.is_active} by {caller.name}")
        return self
