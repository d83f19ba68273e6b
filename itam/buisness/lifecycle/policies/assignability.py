"""
Assignability Policy

Employees and locations referenced by a command must exist and be active.
"""

from itam import db
from itam.data.core.employee import Employee
from itam.data.core.location import Location
from itam.buisness.lifecycle.errors import NotFoundError, InactiveError


class AssignabilityPolicy:

    @classmethod
    def check_employee(cls, employee_id) -> Employee:
        """
        Raises:
            NotFoundError: If the employee does not exist
            InactiveError: If the employee is deactivated
        """
        employee = db.session.get(Employee, employee_id) if employee_id is not None else None
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found", employee_id=employee_id)
        if not employee.is_active:
            raise InactiveError(
                f"Employee {employee.full_name} is inactive",
                employee_id=employee.id
            )
        return employee

    @classmethod
    def check_location(cls, location_id) -> Location:
        """
        Raises:
            NotFoundError: If the location does not exist
            InactiveError: If the location is deactivated
        """
        location = db.session.get(Location, location_id) if location_id is not None else None
        if location is None:
            raise NotFoundError(f"Location {location_id} not found", location_id=location_id)
        if not location.is_active:
            raise InactiveError(
                f"Location {location.full_location} is inactive",
                location_id=location.id
            )
        return location
