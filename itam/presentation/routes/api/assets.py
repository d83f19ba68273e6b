from flask import jsonify
from flask_login import login_required
from itam.data.core.enums import AssetCategory, AssetStatus
from itam.buisness.lifecycle.timeline import TimelineProjector
from itam.services.core.asset_service import AssetService
from itam.services.core.assignment_service import AssignmentService
from itam.presentation.routes.api import api_bp, get_engine
from itam.presentation.routes.api.params import (
    arg_enum, arg_int, arg_str, body_value, current_caller, json_body, page_args
)
from itam.presentation.routes.api.serializers import serialize_asset, serialize_assignment, serialize_page


@api_bp.get('/assets')
@login_required
def list_assets():
    pagination = AssetService.list_assets(
        search=arg_str('q', 'search'),
        category=arg_enum('category', AssetCategory),
        status=arg_enum('status', AssetStatus),
        brand=arg_str('brand'),
        location_id=arg_int('location_id', 'locationId'),
        employee_id=arg_int('employee_id', 'employeeId'),
        warranty_expiring_days=arg_int('warranty_expiring_days', 'warrantyExpiringDays'),
        **page_args()
    )
    return jsonify(serialize_page(pagination, serialize_asset))


@api_bp.get('/assets/available')
@login_required
def available_assets():
    assets = AssetService.find_available_assets(
        category=arg_enum('category', AssetCategory),
        location_id=arg_int('location_id', 'locationId')
    )
    return jsonify([serialize_asset(asset) for asset in assets])


@api_bp.get('/assets/<int:asset_id>')
@login_required
def get_asset(asset_id):
    return jsonify(serialize_asset(AssetService.get_asset(asset_id)))


@api_bp.get('/assets/by-tag/<asset_tag>')
@login_required
def get_asset_by_tag(asset_tag):
    return jsonify(serialize_asset(AssetService.get_by_tag(asset_tag)))


@api_bp.post('/assets')
@login_required
def create_asset():
    asset = get_engine().create_asset(current_caller(), json_body())
    return jsonify(serialize_asset(asset)), 201


@api_bp.route('/assets/<int:asset_id>', methods=['PATCH', 'PUT'])
@login_required
def update_asset(asset_id):
    asset = get_engine().update_asset(current_caller(), asset_id, json_body())
    return jsonify(serialize_asset(asset))


@api_bp.delete('/assets/<int:asset_id>')
@login_required
def delete_asset(asset_id):
    get_engine().delete_asset(current_caller(), asset_id)
    return '', 204


@api_bp.put('/assets/<int:asset_id>/condition')
@login_required
def change_condition(asset_id):
    data = json_body()
    asset = get_engine().change_condition(current_caller(), asset_id, data.get('condition'))
    return jsonify(serialize_asset(asset))


@api_bp.post('/assets/<int:asset_id>/support-tickets')
@login_required
def record_support_ticket(asset_id):
    data = json_body()
    asset = get_engine().record_support_ticket(
        current_caller(),
        asset_id,
        body_value(data, 'ticket_number', 'ticketNumber'),
        data.get('description')
    )
    return jsonify(serialize_asset(asset)), 201


@api_bp.get('/assets/<int:asset_id>/timeline')
@login_required
def asset_timeline(asset_id):
    timeline = TimelineProjector.get_timeline(asset_id, arg_int('limit'))
    return jsonify([entry.to_dict() for entry in timeline])


@api_bp.get('/assets/<int:asset_id>/assignments')
@login_required
def asset_assignment_history(asset_id):
    history = AssignmentService.asset_history(asset_id)
    return jsonify([serialize_assignment(assignment) for assignment in history])
