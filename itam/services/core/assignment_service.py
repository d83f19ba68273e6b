"""
Assignment Service
Read-side queries over assignments. Overdue is always computed at read time.
"""

from datetime import datetime
from typing import List, Optional
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import and_, not_
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.asset_info.assignment import Assignment
from itam.buisness.lifecycle.errors import NotFoundError
from itam.services.core.paging import paginate
from itam.utils.time import utcnow


class AssignmentService:

    @staticmethod
    def get_assignment(assignment_id) -> Assignment:
        assignment = db.session.get(Assignment, assignment_id) if assignment_id is not None else None
        if assignment is None:
            raise NotFoundError(f"Assignment {assignment_id} not found", assignment_id=assignment_id)
        return assignment

    @staticmethod
    def is_overdue(assignment: Assignment, now: Optional[datetime] = None) -> bool:
        """Active with a passed expected return date; no expected date is never overdue"""
        return assignment.is_overdue(now)

    @staticmethod
    def build_filtered_query(
        is_active: Optional[bool] = None,
        is_overdue: Optional[bool] = None,
        asset_id: Optional[int] = None,
        employee_id: Optional[int] = None,
        now: Optional[datetime] = None
    ):
        """
        Build a filtered assignment query, newest assignment first.

        Args:
            is_active: Only open (True) or only returned (False) assignments
            is_overdue: Only overdue (True) or only not-overdue (False) assignments
            asset_id: Filter by asset
            employee_id: Filter by employee
            now: Reference time for the overdue filter
        """
        query = Assignment.query

        if is_active is True:
            query = query.filter(Assignment.actual_return_date.is_(None))
        elif is_active is False:
            query = query.filter(Assignment.actual_return_date.isnot(None))

        if is_overdue is not None:
            overdue = and_(
                Assignment.actual_return_date.is_(None),
                Assignment.expected_return_date.isnot(None),
                Assignment.expected_return_date < (now or utcnow())
            )
            query = query.filter(overdue if is_overdue else not_(overdue))

        if asset_id:
            query = query.filter(Assignment.asset_id == asset_id)

        if employee_id:
            query = query.filter(Assignment.employee_id == employee_id)

        return query.order_by(Assignment.assigned_date.desc(), Assignment.id.desc())

    @staticmethod
    def list_assignments(page: Optional[int] = None, page_size: Optional[int] = None, **filters) -> Pagination:
        return paginate(AssignmentService.build_filtered_query(**filters), page, page_size)

    @staticmethod
    def overdue_assignments(now: Optional[datetime] = None) -> List[Assignment]:
        """Overdue assignments, most overdue first"""
        return AssignmentService.build_filtered_query(is_overdue=True, now=now).order_by(None).order_by(
            Assignment.expected_return_date, Assignment.id
        ).all()

    @staticmethod
    def asset_history(asset_id) -> List[Assignment]:
        """All assignments of an asset, oldest first. Deleted assets keep their history."""
        if db.session.get(Asset, asset_id) is None:
            raise NotFoundError(f"Asset {asset_id} not found", asset_id=asset_id)
        return Assignment.query.filter(Assignment.asset_id == asset_id).order_by(
            Assignment.assigned_date, Assignment.id
        ).all()
