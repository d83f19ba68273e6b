#!/usr/bin/env python3
"""
Debug Data Manager
Central controller for demo data insertion

Handles:
- Loading the demo data JSON file
- Checking if data is already present
- Inserting reference data, then driving assets through the lifecycle engine
- Fail-fast error handling
"""

from pathlib import Path
import json
from itam import db
from itam.utils.logger import get_logger

logger = get_logger("itam.debug_data_manager")


def insert_debug_data(enabled=True, data_file=None):
    """
    Insert demo data.

    Every asset, assignment and status change goes through LifecycleEngine,
    so the demo database carries a real event log.

    Args:
        enabled (bool): Whether to insert debug data (default: True)
        data_file (Path, optional): JSON file to load (default: debug/data/demo.json)

    Returns:
        dict: Summary of inserted data

    Raises:
        Exception: If any insertion fails (fail-fast)
    """
    if not enabled:
        logger.info("Debug data insertion is disabled")
        return {}

    debug_data = _load_debug_data_file(data_file)
    if not debug_data:
        logger.info("No debug data file found, skipping")
        return {'status': 'skipped', 'reason': 'file_not_found'}

    if _check_debug_data_present(debug_data):
        logger.info("Debug data already present, skipping")
        return {'status': 'skipped', 'reason': 'data_present'}

    from itam.buisness.lifecycle.caller import Caller
    caller = Caller.system()

    try:
        locations = _insert_locations(caller, debug_data.get('Locations', {}))
        employees = _insert_employees(caller, debug_data.get('Employees', {}), locations)
        assets = _insert_assets(caller, debug_data.get('Assets', {}), locations)
        assignments = _insert_assignments(caller, debug_data.get('Assignments', []), assets, employees, locations)
        _insert_status_changes(caller, debug_data.get('StatusChanges', []), assets)
        _insert_support_tickets(caller, debug_data.get('SupportTickets', []), assets)
    except Exception as e:
        logger.error(f"Failed to insert debug data: {e}")
        db.session.rollback()
        raise

    summary = {
        'status': 'inserted',
        'locations': len(locations),
        'employees': len(employees),
        'assets': len(assets),
        'assignments': assignments,
    }
    logger.info(f"Debug data insertion completed successfully: {summary}")
    return summary


def _load_debug_data_file(data_file=None):
    debug_file = Path(data_file) if data_file else Path(__file__).parent / 'data' / 'demo.json'

    if not debug_file.exists():
        return None

    try:
        with open(debug_file, 'r') as f:
            data = json.load(f)
        logger.debug(f"Loaded debug data file: {debug_file}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {debug_file}: {e}")
        raise


def _check_debug_data_present(debug_data):
    """Demo data counts as present once any of its asset tags exists"""
    from itam.data.core.asset_info.asset import Asset

    for asset_tag in debug_data.get('Assets', {}):
        if Asset.query.filter_by(asset_tag=asset_tag).first():
            return True
    return False


def _insert_locations(caller, locations_data):
    from itam.buisness.core.reference_data_context import ReferenceDataContext

    locations = {}
    for key, location_data in locations_data.items():
        locations[key] = ReferenceDataContext.create_location(caller, location_data)
        logger.debug(f"Inserted location: {key}")
    return locations


def _insert_employees(caller, employees_data, locations):
    from itam.buisness.core.reference_data_context import ReferenceDataContext

    employees = {}
    for employee_number, employee_data in employees_data.items():
        data = dict(employee_data)
        work_location = data.pop('work_location', None)
        data['employee_number'] = employee_number
        if work_location:
            data['work_location_id'] = locations[work_location].id
        employees[employee_number] = ReferenceDataContext.create_employee(caller, data)
        logger.debug(f"Inserted employee: {employee_number}")
    return employees


def _insert_assets(caller, assets_data, locations):
    from itam.buisness.lifecycle.engine import LifecycleEngine

    engine = LifecycleEngine()
    assets = {}
    for asset_tag, asset_data in assets_data.items():
        data = dict(asset_data)
        location = data.pop('location', None)
        data['asset_tag'] = asset_tag
        if location:
            data['location_id'] = locations[location].id
        assets[asset_tag] = engine.create_asset(caller, data)
        logger.debug(f"Inserted asset: {asset_tag}")
    return assets


def _insert_assignments(caller, assignments_data, assets, employees, locations):
    from itam.buisness.lifecycle.engine import LifecycleEngine

    engine = LifecycleEngine()
    count = 0
    for assignment_data in assignments_data:
        location = assignment_data.get('location')
        assignment = engine.assign(
            caller,
            assets[assignment_data['asset_tag']].id,
            employees[assignment_data['employee_number']].id,
            location_id=locations[location].id if location else None,
            notes=assignment_data.get('notes')
        )
        count += 1

        if 'return' in assignment_data:
            engine.return_assignment(
                caller,
                assignment.id,
                return_notes=assignment_data['return'].get('return_notes')
            )
    return count


def _insert_status_changes(caller, changes_data, assets):
    from itam.buisness.lifecycle.engine import LifecycleEngine

    engine = LifecycleEngine()
    for change in changes_data:
        engine.update_asset(caller, assets[change['asset_tag']].id, {'status': change['status']})


def _insert_support_tickets(caller, tickets_data, assets):
    from itam.buisness.lifecycle.engine import LifecycleEngine

    engine = LifecycleEngine()
    for ticket in tickets_data:
        engine.record_support_ticket(
            caller,
            assets[ticket['asset_tag']].id,
            ticket['ticket_number'],
            description=ticket.get('description')
        )
