from flask import jsonify
from flask_login import login_required
from itam.data.core.enums import AuditAction
from itam.buisness.lifecycle.audit import AuditLogProjector
from itam.services.core.dashboard_service import DashboardService
from itam.services.core.report_service import ReportService
from itam.presentation.routes.api import api_bp
from itam.presentation.routes.api.params import arg_datetime, arg_enum, arg_int, page_args
from itam.presentation.routes.api.serializers import serialize_asset, serialize_page


@api_bp.get('/dashboard')
@login_required
def dashboard_summary():
    return jsonify(DashboardService.summary(warranty_days=arg_int('days')))


@api_bp.get('/reports/warranty-expiring')
@login_required
def warranty_expiring():
    return jsonify([serialize_asset(asset) for asset in ReportService.warranty_expiring(arg_int('days'))])


@api_bp.get('/reports/lost-unassigned')
@login_required
def lost_or_unassigned():
    return jsonify([serialize_asset(asset) for asset in ReportService.lost_or_unassigned()])


@api_bp.get('/reports/monthly-trends')
@login_required
def monthly_trends():
    months = arg_int('months')
    return jsonify(ReportService.monthly_trends(months if months is not None else 12))


@api_bp.get('/reports/audit-logs')
@login_required
def audit_logs():
    pagination = ReportService.audit_logs(
        asset_id=arg_int('asset_id', 'assetId'),
        employee_id=arg_int('employee_id', 'employeeId'),
        action=arg_enum('action', AuditAction),
        date_from=arg_datetime('date_from', 'dateFrom', start_of_day=True),
        date_to=arg_datetime('date_to', 'dateTo'),
        **page_args()
    )
    return jsonify(serialize_page(pagination, AuditLogProjector.to_audit_row))
