"""
Reference Data Service
Read-side queries for employees and locations.
"""

from typing import Optional
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import or_
from itam import db
from itam.data.core.employee import Employee
from itam.data.core.location import Location
from itam.buisness.lifecycle.errors import NotFoundError
from itam.services.core.paging import paginate


class EmployeeService:

    @staticmethod
    def get_employee(employee_id) -> Employee:
        employee = db.session.get(Employee, employee_id) if employee_id is not None else None
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found", employee_id=employee_id)
        return employee

    @staticmethod
    def build_filtered_query(
        search: Optional[str] = None,
        department: Optional[str] = None,
        active: Optional[bool] = None
    ):
        query = Employee.query

        if search:
            like = f'%{search.strip()}%'
            query = query.filter(or_(
                Employee.first_name.ilike(like),
                Employee.last_name.ilike(like),
                Employee.email.ilike(like),
                Employee.employee_number.ilike(like),
            ))

        if department:
            query = query.filter(Employee.department == department)

        if active is not None:
            query = query.filter(Employee.is_active == active)

        return query.order_by(Employee.last_name, Employee.first_name, Employee.id)

    @staticmethod
    def list_employees(page: Optional[int] = None, page_size: Optional[int] = None, **filters) -> Pagination:
        return paginate(EmployeeService.build_filtered_query(**filters), page, page_size)


class LocationService:

    @staticmethod
    def get_location(location_id) -> Location:
        location = db.session.get(Location, location_id) if location_id is not None else None
        if location is None:
            raise NotFoundError(f"Location {location_id} not found", location_id=location_id)
        return location

    @staticmethod
    def build_filtered_query(building: Optional[str] = None, active: Optional[bool] = None):
        query = Location.query

        if building:
            query = query.filter(Location.building.ilike(f'%{building.strip()}%'))

        if active is not None:
            query = query.filter(Location.is_active == active)

        return query.order_by(Location.building, Location.floor, Location.room, Location.id)

    @staticmethod
    def list_locations(page: Optional[int] = None, page_size: Optional[int] = None, **filters) -> Pagination:
        return paginate(LocationService.build_filtered_query(**filters), page, page_size)
