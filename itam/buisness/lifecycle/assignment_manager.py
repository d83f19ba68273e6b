"""
AssignmentManager - Domain service for assign / return operations

Owns the Available <-> Assigned edges of the asset status machine and the
single-active-assignment invariant.
"""

from typing import Optional, TYPE_CHECKING
from itam import db
from itam.data.core.asset_info.assignment import Assignment
from itam.data.core.enums import AssetStatus, TimelineType
from itam.buisness.lifecycle.errors import AssignmentAlreadyReturnedError, InvalidInputError
from itam.buisness.lifecycle.narrator import LifecycleNarrator
from itam.buisness.lifecycle.state_machine import AssetStatusMachine
from itam.buisness.lifecycle.policies.active_assignment import ActiveAssignmentPolicy
from itam.buisness.lifecycle.policies.assignability import AssignabilityPolicy
from itam.buisness.lifecycle.policies.asset_fields import AssetFieldPolicy

if TYPE_CHECKING:
    from itam.buisness.lifecycle.context import AssetLifecycleContext


class AssignmentManager:
    """
    Domain service for assignment operations.

    Responsibilities:
    - Create the active assignment and move the asset to Assigned
    - Close assignments on return or on an administrative status change
    - Emit Assigned / Returned events via the context's EventRecorder
    """

    def __init__(self, ctx: 'AssetLifecycleContext'):
        self.ctx = ctx

    def assign(
        self,
        employee_id,
        location_id=None,
        expected_return_date=None,
        notes: Optional[str] = None
    ) -> Assignment:
        """
        Assign the context's asset to an employee.

        Args:
            employee_id: Employee receiving the asset
            location_id: Optional location; the asset moves there. Defaults to the
                asset's current location, which must still be active
            expected_return_date: Optional date or datetime the asset is due back
            notes: Optional free text

        Returns:
            Assignment: The new active assignment

        Raises:
            AssetNotAvailableError: Unless the asset is Available
            ActiveAssignmentConflictError: If an active assignment already exists
            NotFoundError / InactiveError: For a missing or deactivated employee or location
            InvalidInputError: For malformed input or a due date in the past
        """
        asset = self.ctx.asset
        AssetStatusMachine.validate_assignable(asset.status)
        ActiveAssignmentPolicy.check_none_active(asset.id, 'assign asset')

        if employee_id is None:
            raise InvalidInputError("employee_id is required", field='employee_id')
        employee = AssignabilityPolicy.check_employee(AssetFieldPolicy.parse_id(employee_id, 'employee_id'))

        location = None
        if location_id is not None:
            location = AssignabilityPolicy.check_location(AssetFieldPolicy.parse_id(location_id, 'location_id'))
        elif asset.location_id is not None:
            location = AssignabilityPolicy.check_location(asset.location_id)

        expected = AssetFieldPolicy.parse_datetime(expected_return_date, 'expected_return_date')
        if expected is not None and expected < self.ctx.now:
            raise InvalidInputError(
                "expected_return_date cannot be in the past",
                field='expected_return_date'
            )
        if notes is not None:
            notes = AssetFieldPolicy.parse_text(notes, 'notes')

        assignment = Assignment(
            asset_id=asset.id,
            employee_id=employee.id,
            location_id=location.id if location else None,
            assigned_date=self.ctx.now,
            expected_return_date=expected,
            notes=notes,
            created_by_id=self.ctx.caller.user_id,
            updated_by_id=self.ctx.caller.user_id,
        )
        db.session.add(assignment)

        asset.status = AssetStatus.ASSIGNED
        asset.updated_by_id = self.ctx.caller.user_id
        if location is not None:
            asset.location_id = location.id
        db.session.flush()

        self.ctx.recorder.record(
            TimelineType.ASSIGNED,
            LifecycleNarrator.assigned(employee, location, expected),
            employee_id=employee.id,
            location_id=assignment.location_id,
            assignment_id=assignment.id,
            from_status=AssetStatus.AVAILABLE,
            to_status=AssetStatus.ASSIGNED
        )
        return assignment

    def return_assignment(
        self,
        assignment: Assignment,
        actual_return_date=None,
        return_notes: Optional[str] = None
    ) -> Assignment:
        """
        Close an active assignment.

        The asset goes back to Available if it is still Assigned; an
        administrative status set in the meantime is left untouched.

        Raises:
            AssignmentAlreadyReturnedError: If the assignment is already closed
            InvalidInputError: If the return date precedes the assigned date or lies in the future
        """
        if not assignment.is_active:
            raise AssignmentAlreadyReturnedError(
                f"Assignment {assignment.id} was already returned on "
                f"{assignment.actual_return_date.strftime('%Y-%m-%d %H:%M')}",
                assignment_id=assignment.id
            )

        now = self.ctx.now
        returned_at = AssetFieldPolicy.parse_datetime(actual_return_date, 'actual_return_date') or now
        if returned_at > now:
            if returned_at.date() != now.date():
                raise InvalidInputError(
                    "actual_return_date cannot be in the future",
                    field='actual_return_date'
                )
            returned_at = now
        if returned_at < assignment.assigned_date:
            raise InvalidInputError(
                "actual_return_date cannot be earlier than the assigned date",
                field='actual_return_date'
            )
        if return_notes is not None:
            return_notes = AssetFieldPolicy.parse_text(return_notes, 'return_notes')

        assignment.actual_return_date = returned_at
        assignment.return_notes = return_notes
        assignment.updated_by_id = self.ctx.caller.user_id

        asset = self.ctx.asset
        old_status = asset.status
        new_status = AssetStatusMachine.status_after_return(old_status)
        asset.status = new_status
        asset.updated_by_id = self.ctx.caller.user_id

        self.ctx.recorder.record(
            TimelineType.RETURNED,
            LifecycleNarrator.returned(assignment.employee, return_notes),
            employee_id=assignment.employee_id,
            location_id=assignment.location_id,
            assignment_id=assignment.id,
            from_status=old_status,
            to_status=new_status
        )
        return assignment

    def force_close(self, to_status: AssetStatus) -> Optional[Assignment]:
        """
        Close the active assignment because an administrative edit moved the
        asset off Assigned. The caller has already set the new status.
        """
        assignment = self.ctx.active_assignment
        if assignment is None:
            return None

        assignment.actual_return_date = self.ctx.now
        assignment.return_notes = LifecycleNarrator.force_return_notes(to_status)
        assignment.closed_by_status = to_status
        assignment.updated_by_id = self.ctx.caller.user_id

        self.ctx.recorder.record(
            TimelineType.RETURNED,
            LifecycleNarrator.force_returned(assignment.employee, to_status),
            employee_id=assignment.employee_id,
            location_id=assignment.location_id,
            assignment_id=assignment.id,
            from_status=AssetStatus.ASSIGNED,
            to_status=to_status
        )
        return assignment
