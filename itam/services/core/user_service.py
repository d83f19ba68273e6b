"""
User Service
Read-side queries for user account lists.
"""

from typing import Optional
from flask_sqlalchemy.pagination import Pagination
from itam.data.core.user_info.user import User
from itam.data.core.enums import UserRole
from itam.services.core.paging import paginate


class UserService:

    @staticmethod
    def build_filtered_query(
        role: Optional[UserRole] = None,
        active: Optional[bool] = None,
        include_system: bool = False
    ):
        """
        Build a filtered user query.

        Args:
            role: Filter by role
            active: Filter by active status
            include_system: Whether to list the system account
        """
        query = User.query

        if role:
            query = query.filter(User.role == role)

        if active is not None:
            query = query.filter(User.is_active == active)

        if not include_system:
            query = query.filter(User.is_system.is_(False))

        return query.order_by(User.username)

    @staticmethod
    def list_users(page: Optional[int] = None, page_size: Optional[int] = None, **filters) -> Pagination:
        return paginate(UserService.build_filtered_query(**filters), page, page_size)
