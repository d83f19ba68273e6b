from flask import jsonify
from flask_login import login_required
from itam.services.core.assignment_service import AssignmentService
from itam.presentation.routes.api import api_bp, get_engine
from itam.presentation.routes.api.params import (
    arg_bool, arg_int, body_value, current_caller, json_body, page_args
)
from itam.presentation.routes.api.serializers import serialize_assignment, serialize_page


@api_bp.get('/assignments')
@login_required
def list_assignments():
    pagination = AssignmentService.list_assignments(
        is_active=arg_bool('is_active', 'isActive'),
        is_overdue=arg_bool('is_overdue', 'isOverdue'),
        asset_id=arg_int('asset_id', 'assetId'),
        employee_id=arg_int('employee_id', 'employeeId'),
        **page_args()
    )
    return jsonify(serialize_page(pagination, serialize_assignment))


@api_bp.get('/assignments/overdue')
@login_required
def overdue_assignments():
    return jsonify([serialize_assignment(a) for a in AssignmentService.overdue_assignments()])


@api_bp.get('/assignments/<int:assignment_id>')
@login_required
def get_assignment(assignment_id):
    return jsonify(serialize_assignment(AssignmentService.get_assignment(assignment_id)))


@api_bp.post('/assignments')
@login_required
def create_assignment():
    data = json_body()
    assignment = get_engine().assign(
        current_caller(),
        body_value(data, 'asset_id', 'assetId'),
        body_value(data, 'employee_id', 'employeeId'),
        location_id=body_value(data, 'location_id', 'locationId'),
        expected_return_date=body_value(data, 'expected_return_date', 'expectedReturnDate'),
        notes=data.get('notes')
    )
    return jsonify(serialize_assignment(assignment)), 201


@api_bp.post('/assignments/<int:assignment_id>/return')
@login_required
def return_assignment(assignment_id):
    data = json_body(required=False)
    assignment = get_engine().return_assignment(
        current_caller(),
        assignment_id,
        actual_return_date=body_value(data, 'actual_return_date', 'actualReturnDate'),
        return_notes=body_value(data, 'return_notes', 'returnNotes')
    )
    return jsonify(serialize_assignment(assignment))
