from flask import jsonify
from flask_login import login_required
from itam.buisness.core.reference_data_context import ReferenceDataContext
from itam.services.core.reference_data_service import EmployeeService, LocationService
from itam.presentation.routes.api import api_bp
from itam.presentation.routes.api.params import arg_bool, arg_str, current_caller, json_body, page_args
from itam.presentation.routes.api.serializers import serialize_employee, serialize_location, serialize_page


# ========== Employees ==========

@api_bp.get('/employees')
@login_required
def list_employees():
    pagination = EmployeeService.list_employees(
        search=arg_str('q', 'search'),
        department=arg_str('department'),
        active=arg_bool('active', 'isActive'),
        **page_args()
    )
    return jsonify(serialize_page(pagination, serialize_employee))


@api_bp.get('/employees/<int:employee_id>')
@login_required
def get_employee(employee_id):
    return jsonify(serialize_employee(EmployeeService.get_employee(employee_id)))


@api_bp.post('/employees')
@login_required
def create_employee():
    employee = ReferenceDataContext.create_employee(current_caller(), json_body())
    return jsonify(serialize_employee(employee)), 201


@api_bp.post('/employees/<int:employee_id>/deactivate')
@login_required
def deactivate_employee(employee_id):
    employee = ReferenceDataContext.set_employee_active(current_caller(), employee_id, False)
    return jsonify(serialize_employee(employee))


@api_bp.post('/employees/<int:employee_id>/activate')
@login_required
def activate_employee(employee_id):
    employee = ReferenceDataContext.set_employee_active(current_caller(), employee_id, True)
    return jsonify(serialize_employee(employee))


# ========== Locations ==========

@api_bp.get('/locations')
@login_required
def list_locations():
    pagination = LocationService.list_locations(
        building=arg_str('building'),
        active=arg_bool('active', 'isActive'),
        **page_args()
    )
    return jsonify(serialize_page(pagination, serialize_location))


@api_bp.get('/locations/<int:location_id>')
@login_required
def get_location(location_id):
    return jsonify(serialize_location(LocationService.get_location(location_id)))


@api_bp.post('/locations')
@login_required
def create_location():
    location = ReferenceDataContext.create_location(current_caller(), json_body())
    return jsonify(serialize_location(location)), 201


@api_bp.post('/locations/<int:location_id>/deactivate')
@login_required
def deactivate_location(location_id):
    location = ReferenceDataContext.set_location_active(current_caller(), location_id, False)
    return jsonify(serialize_location(location))


@api_bp.post('/locations/<int:location_id>/activate')
@login_required
def activate_location(location_id):
    location = ReferenceDataContext.set_location_active(current_caller(), location_id, True)
    return jsonify(serialize_location(location))
