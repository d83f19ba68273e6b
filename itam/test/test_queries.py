"""
Tests for the read-side services: assets, assignments, dashboard and reports
"""
from datetime import datetime, timedelta

import pytest
from itam.buisness.lifecycle.audit import AuditLogProjector
from itam.buisness.lifecycle.errors import InvalidInputError, NotFoundError
from itam.data.core.enums import AssetCategory, AuditAction
from itam.services.core.asset_service import AssetService
from itam.services.core.assignment_service import AssignmentService
from itam.services.core.dashboard_service import DashboardService
from itam.services.core.report_service import ReportService
from itam.utils.time import utcnow


@pytest.fixture
def fleet(engine, officer, location, other_location):
    """Four assets across two locations and categories"""
    def make(**data):
        return engine.create_asset(officer, data)

    return {
        'laptop': make(asset_tag='LAP-1', category='Laptop', brand='Dell', model='Latitude', location_id=location.id),
        'laptop2': make(asset_tag='LAP-2', category='Laptop', brand='Lenovo', model='T14', serial_number='SN-XY'),
        'monitor': make(asset_tag='MON-1', category='Monitor', brand='Dell', model='U2720', condition='Good',
                        location_id=other_location.id),
        'phone': make(asset_tag='PHN-1', category='MobilePhone', brand='Apple', model='iPhone'),
    }


# ========== AssetService ==========

def test_search_matches_tag_brand_model_serial(fleet):
    def tags(**filters):
        return [a.asset_tag for a in AssetService.build_filtered_query(**filters).all()]

    assert tags(search='dell') == ['LAP-1', 'MON-1']
    assert tags(search='xy') == ['LAP-2']
    assert tags(search='MON') == ['MON-1']
    assert tags(category=AssetCategory.LAPTOP, brand='len') == ['LAP-2']


def test_filter_by_holder(engine, officer, fleet, employee):
    engine.assign(officer, fleet['phone'].id, employee.id)
    assets = AssetService.build_filtered_query(employee_id=employee.id).all()
    assert [a.asset_tag for a in assets] == ['PHN-1']


def test_find_available_assets_is_stable(engine, officer, fleet, employee, location):
    engine.assign(officer, fleet['laptop2'].id, employee.id)

    available = AssetService.find_available_assets()
    assert [a.asset_tag for a in available] == ['LAP-1', 'MON-1', 'PHN-1']
    assert [a.asset_tag for a in AssetService.find_available_assets(location_id=location.id)] == ['LAP-1']
    assert [a.id for a in AssetService.find_available_assets()] == [a.id for a in available]


def test_list_assets_paginates(fleet):
    page = AssetService.list_assets(page=2, page_size=3)
    assert page.total == 4
    assert [a.asset_tag for a in page.items] == ['PHN-1']


def test_list_assets_rejects_bad_page(fleet):
    with pytest.raises(InvalidInputError):
        AssetService.list_assets(page=0)


def test_deleted_assets_are_hidden(engine, admin, fleet):
    engine.delete_asset(admin, fleet['phone'].id)
    assert AssetService.list_assets().total == 3
    with pytest.raises(NotFoundError):
        AssetService.get_by_tag('PHN-1')


def test_is_available(fleet):
    assert AssetService.is_available(fleet['laptop']) is True


# ========== AssignmentService ==========

def test_overdue_is_computed_on_read(engine, officer, fleet, employee, clock):
    due = engine.assign(officer, fleet['laptop'].id, employee.id, expected_return_date=clock.now + timedelta(days=1))
    open_ended = engine.assign(officer, fleet['monitor'].id, employee.id)

    later = clock.now + timedelta(days=2)
    assert AssignmentService.is_overdue(due, now=clock.now) is False
    assert AssignmentService.is_overdue(due, now=later) is True
    assert AssignmentService.is_overdue(open_ended, now=later) is False
    assert [a.id for a in AssignmentService.overdue_assignments(now=later)] == [due.id]
    assert AssignmentService.build_filtered_query(is_overdue=False, now=later).count() == 1


def test_returned_assignment_is_never_overdue(engine, officer, fleet, employee, clock):
    assignment = engine.assign(officer, fleet['laptop'].id, employee.id, expected_return_date=clock.now + timedelta(days=1))
    engine.return_assignment(officer, assignment.id)
    assert AssignmentService.is_overdue(assignment, now=clock.now + timedelta(days=30)) is False


def test_asset_history_survives_delete(engine, officer, admin, fleet, employee, other_employee):
    asset = fleet['laptop']
    first = engine.assign(officer, asset.id, employee.id)
    engine.return_assignment(officer, first.id)
    second = engine.assign(officer, asset.id, other_employee.id)
    engine.return_assignment(officer, second.id)
    engine.delete_asset(admin, asset.id)

    history = AssignmentService.asset_history(asset.id)
    assert [a.id for a in history] == [first.id, second.id]
    assert AssignmentService.build_filtered_query(is_active=False, asset_id=asset.id).count() == 2


# ========== DashboardService ==========

def test_dashboard_summary(engine, officer, admin, fleet, employee, other_employee, clock):
    engine.assign(officer, fleet['laptop'].id, employee.id, expected_return_date=clock.now + timedelta(days=1))
    engine.assign(officer, fleet['phone'].id, other_employee.id)
    engine.update_asset(officer, fleet['monitor'].id, {'status': 'Lost'})
    engine.update_asset(officer, fleet['laptop2'].id, {'warranty_expiry': (clock.now + timedelta(days=10)).date()})

    summary = DashboardService.summary(now=clock.now + timedelta(days=2))

    assert summary['total_assets'] == 4
    assert summary['by_status'] == {
        'Available': 1, 'Assigned': 2, 'UnderMaintenance': 0, 'Retired': 0, 'Lost': 1,
    }
    assert summary['by_category'] == {'Laptop': 2, 'Monitor': 1, 'MobilePhone': 1}
    assert summary['by_condition']['New'] == 3
    assert summary['by_condition']['Good'] == 1
    assert summary['by_location'] == {
        'HQ - Floor 2 - Room 201': 1, 'Annex - Floor 1 - Room 110': 1, 'No location': 2,
    }
    assert summary['by_department'] == {'Engineering': 1, 'Finance': 1}
    assert summary['active_assignments'] == 2
    assert summary['overdue_assignments'] == 1
    assert summary['warranty_expiring'] == 1


def test_dashboard_skips_deleted_assets(engine, admin, fleet, clock):
    engine.delete_asset(admin, fleet['phone'].id)
    summary = DashboardService.summary(now=clock.now)
    assert summary['total_assets'] == 3
    assert 'MobilePhone' not in summary['by_category']


def test_dashboard_groups_assets_without_location(fleet, clock):
    summary = DashboardService.summary(now=clock.now)
    assert summary['by_location']['No location'] == 2


# ========== ReportService ==========

def test_warranty_expiring_report(engine, officer, fleet):
    today = utcnow().date()
    engine.update_asset(officer, fleet['laptop'].id, {'warranty_expiry': (today + timedelta(days=5)).isoformat()})
    engine.update_asset(officer, fleet['monitor'].id, {'warranty_expiry': (today + timedelta(days=90)).isoformat()})
    engine.update_asset(officer, fleet['phone'].id, {'warranty_expiry': (today - timedelta(days=1)).isoformat()})

    assert [a.asset_tag for a in ReportService.warranty_expiring(days=30)] == ['LAP-1']
    assert [a.asset_tag for a in ReportService.warranty_expiring(days=120)] == ['LAP-1', 'MON-1']


def test_lost_or_unassigned_report(engine, officer, fleet, employee):
    assignment = engine.assign(officer, fleet['laptop'].id, employee.id)
    engine.return_assignment(officer, assignment.id)
    engine.update_asset(officer, fleet['monitor'].id, {'status': 'Lost'})
    engine.update_asset(officer, fleet['phone'].id, {'status': 'Retired'})

    assert [a.asset_tag for a in ReportService.lost_or_unassigned()] == ['LAP-2', 'MON-1']


def test_monthly_trends(engine, officer, fleet, employee, clock):
    assignment = engine.assign(officer, fleet['laptop'].id, employee.id)
    engine.return_assignment(officer, assignment.id)

    trends = ReportService.monthly_trends(months=3, now=clock.now)

    assert [t['month'] for t in trends] == ['2025-01', '2025-02', '2025-03']
    assert trends[-1] == {'month': '2025-03', 'created': 4, 'assigned': 1, 'returned': 1}
    assert trends[0]['created'] == 0


def test_monthly_trends_crosses_year_boundary(app):
    trends = ReportService.monthly_trends(months=2, now=datetime(2025, 1, 15))
    assert [t['month'] for t in trends] == ['2024-12', '2025-01']


def test_audit_log_is_derived_from_events(engine, officer, fleet, employee):
    asset = fleet['laptop']
    assignment = engine.assign(officer, asset.id, employee.id)
    engine.return_assignment(officer, assignment.id)
    engine.update_asset(officer, asset.id, {'status': 'UnderMaintenance'})
    engine.record_support_ticket(officer, asset.id, 'SUP-7')

    rows = [AuditLogProjector.to_audit_row(e) for e in AuditLogProjector.build_query(asset_id=asset.id)]
    actions = [row['action'] for row in rows]

    assert actions == ['StatusChanged', 'Updated', 'Unassigned', 'Assigned', 'Created']
    assert rows[0]['asset_tag'] == 'LAP-1'
    assert rows[0]['user_name'] == 'officer'
    assert rows[1]['old_values'] == {'status': 'Available'}
    assert rows[1]['new_values'] == {'status': 'UnderMaintenance'}


def test_audit_log_filters(engine, officer, fleet, employee):
    engine.assign(officer, fleet['laptop'].id, employee.id)

    page = ReportService.audit_logs(action=AuditAction.ASSIGNED)
    assert page.total == 1
    assert ReportService.audit_logs(employee_id=employee.id).total == 1
    assert ReportService.audit_logs(action=AuditAction.CREATED).total == 4


def test_audit_log_rejects_inverted_range(app):
    with pytest.raises(InvalidInputError):
        ReportService.audit_logs(date_from=datetime(2025, 2, 1), date_to=datetime(2025, 1, 1))
