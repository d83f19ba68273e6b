"""
Reference Data Context (Core)
Maintains the employees and locations the lifecycle engine validates against.

Deactivating an employee or location never touches existing assignments; it
only stops new assignments from referencing them.
"""

from typing import Any, Dict
from itam import db
from itam.data.core.employee import Employee
from itam.data.core.location import Location
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.errors import ConflictError, InvalidInputError, NotFoundError
from itam.buisness.lifecycle.policies.assignability import AssignabilityPolicy
from itam.buisness.lifecycle.policies.asset_fields import AssetFieldPolicy
from itam.buisness.lifecycle.policies.permissions import Action, PermissionPolicy
from itam.utils.logger import get_logger

logger = get_logger("itam.buisness.core.reference_data")


class ReferenceDataContext:

    EMPLOYEE_FIELDS = (
        'employee_number', 'first_name', 'last_name', 'email',
        'department', 'job_title', 'work_location_id',
    )
    EMPLOYEE_REQUIRED = ('employee_number', 'first_name', 'last_name', 'email')

    LOCATION_FIELDS = ('building', 'floor', 'room', 'description')
    LOCATION_REQUIRED = ('building',)

    # ========== Employees ==========

    @classmethod
    def create_employee(cls, caller: Caller, data: Dict[str, Any], commit: bool = True) -> Employee:
        """
        Raises:
            ForbiddenError: Without create permission
            InvalidInputError: For missing or unknown fields
            ConflictError: For a duplicate employee number or email
        """
        PermissionPolicy.check(caller, Action.CREATE)
        values = cls._clean(data, cls.EMPLOYEE_FIELDS, cls.EMPLOYEE_REQUIRED)
        values['email'] = str(values['email']).lower()

        if values.get('work_location_id') is not None:
            values['work_location_id'] = AssetFieldPolicy.parse_id(values['work_location_id'], 'work_location_id')
            AssignabilityPolicy.check_location(values['work_location_id'])

        if Employee.query.filter_by(employee_number=values['employee_number']).first():
            raise ConflictError(f"Employee number {values['employee_number']} already exists")
        if Employee.query.filter_by(email=values['email']).first():
            raise ConflictError(f"Employee email {values['email']} already exists")

        employee = Employee.from_dict(values, user_id=caller.user_id)
        db.session.add(employee)
        cls._finish(commit, f"Created employee {employee.employee_number} by {caller.name}")
        return employee

    @classmethod
    def set_employee_active(cls, caller: Caller, employee_id, is_active: bool, commit: bool = True) -> Employee:
        PermissionPolicy.check(caller, Action.EDIT)
        employee = db.session.get(Employee, employee_id) if employee_id is not None else None
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found", employee_id=employee_id)
        employee.is_active = bool(is_active)
        employee.updated_by_id = caller.user_id
        cls._finish(commit, f"Employee {employee.employee_number} active={employee.is_active} by {caller.name}")
        return employee

    # ========== Locations ==========

    @classmethod
    def create_location(cls, caller: Caller, data: Dict[str, Any], commit: bool = True) -> Location:
        PermissionPolicy.check(caller, Action.CREATE)
        values = cls._clean(data, cls.LOCATION_FIELDS, cls.LOCATION_REQUIRED)
        if values.get('floor') is not None:
            try:
                values['floor'] = int(values['floor'])
            except (TypeError, ValueError):
                raise InvalidInputError("floor must be an integer", field='floor')

        location = Location.from_dict(values, user_id=caller.user_id)
        db.session.add(location)
        cls._finish(commit, f"Created location {location.full_location} by {caller.name}")
        return location

    @classmethod
    def set_location_active(cls, caller: Caller, location_id, is_active: bool, commit: bool = True) -> Location:
        PermissionPolicy.check(caller, Action.EDIT)
        location = db.session.get(Location, location_id) if location_id is not None else None
        if location is None:
            raise NotFoundError(f"Location {location_id} not found", location_id=location_id)
        location.is_active = bool(is_active)
        location.updated_by_id = caller.user_id
        cls._finish(commit, f"Location {location.full_location} active={location.is_active} by {caller.name}")
        return location

    # ========== Helpers ==========

    @staticmethod
    def _clean(data, allowed, required) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise InvalidInputError("Payload must be an object")
        unknown = [key for key in data if key not in allowed]
        if unknown:
            raise InvalidInputError(f"Unknown field(s): {', '.join(unknown)}", fields=unknown)

        values = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip() or None
            values[key] = value

        missing = [key for key in required if values.get(key) is None]
        if missing:
            raise InvalidInputError(f"Missing required field(s): {', '.join(missing)}", fields=missing)
        return values

    @staticmethod
    def _finish(commit: bool, message: str) -> None:
        if commit:
            db.session.commit()
            logger.info(message)
        else:
            db.session.flush()
