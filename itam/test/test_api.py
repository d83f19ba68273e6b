"""
Tests for the JSON API: authentication, status mapping and the main flows
"""
from datetime import timedelta

import pytest
from itam.data.core.enums import UserRole
from itam.test.helpers import login_user
from itam.utils.time import utcnow

LAPTOP = {'assetTag': 'LAP-0001', 'category': 'Laptop', 'brand': 'Dell', 'model': 'Latitude 7440'}


# ========== Authentication ==========

def test_api_requires_login(client):
    response = client.get('/api/assets')
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Unauthorized'


def test_login_and_me(client, make_user):
    make_user('dana', UserRole.IT_OFFICER)

    response = login_user(client, 'dana')
    assert response.status_code == 200
    assert response.get_json()['role'] == 'ITOfficer'
    assert 'password_hash' not in response.get_json()

    me = client.get('/me')
    assert me.get_json()['username'] == 'dana'


def test_login_with_wrong_password(client, make_user):
    make_user('dana', UserRole.IT_OFFICER)
    response = login_user(client, 'dana', 'Wrong-passw0rd')
    assert response.status_code == 401


def test_login_requires_credentials(client):
    response = client.post('/login', json={'username': 'dana'})
    assert response.status_code == 400


def test_security_headers(client):
    response = client.get('/api/assets')
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


# ========== Status mapping ==========

def test_viewer_gets_forbidden(login_as):
    client = login_as(UserRole.VIEWER)
    response = client.post('/api/assets', json=LAPTOP)
    assert response.status_code == 403
    assert response.get_json()['error'] == 'Forbidden'


def test_viewer_can_read(login_as):
    client = login_as(UserRole.VIEWER)
    response = client.get('/api/assets')
    assert response.status_code == 200
    assert response.get_json()['total'] == 0


def test_invalid_input_is_400(login_as):
    client = login_as(UserRole.IT_OFFICER)
    response = client.post('/api/assets', json={'category': 'Laptop'})
    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'InvalidInput'
    assert body['details']['fields'] == ['brand', 'model']


def test_non_object_body_is_400(login_as):
    client = login_as(UserRole.IT_OFFICER)
    response = client.post('/api/assets', json=['not', 'an', 'object'])
    assert response.status_code == 400


def test_missing_asset_is_404(login_as):
    client = login_as(UserRole.VIEWER)
    response = client.get('/api/assets/42')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'NotFound'


def test_bad_query_parameter_is_400(login_as):
    client = login_as(UserRole.VIEWER)
    assert client.get('/api/assets?status=Broken').status_code == 400
    assert client.get('/api/assets?page=abc').status_code == 400


def test_invalid_state_and_conflict_are_409(login_as, employee):
    client = login_as(UserRole.ADMIN)
    asset = client.post('/api/assets', json=LAPTOP).get_json()

    response = client.patch(f"/api/assets/{asset['id']}", json={'status': 'Assigned'})
    assert response.status_code == 409
    assert response.get_json()['error'] == 'InvalidState'

    client.post('/api/assignments', json={'assetId': asset['id'], 'employeeId': employee.id})
    response = client.delete(f"/api/assets/{asset['id']}")
    assert response.status_code == 409
    assert response.get_json()['error'] == 'Conflict'


def test_inactive_employee_is_422(login_as, employee):
    client = login_as(UserRole.ADMIN)
    asset = client.post('/api/assets', json=LAPTOP).get_json()
    client.post(f'/api/employees/{employee.id}/deactivate')

    response = client.post('/api/assignments', json={'asset_id': asset['id'], 'employee_id': employee.id})
    assert response.status_code == 422
    assert response.get_json()['error'] == 'Inactive'


# ========== Flows ==========

def test_asset_assignment_flow(login_as, employee):
    client = login_as(UserRole.IT_OFFICER)

    response = client.post('/api/assets', json=LAPTOP)
    assert response.status_code == 201
    asset = response.get_json()
    assert asset['status'] == 'Available'
    assert asset['asset_tag'] == 'LAP-0001'
    assert 'version_id' not in asset

    due = (utcnow() + timedelta(days=7)).date().isoformat()
    response = client.post('/api/assignments', json={
        'assetId': asset['id'], 'employeeId': employee.id, 'expectedReturnDate': due,
    })
    assert response.status_code == 201
    assignment = response.get_json()
    assert assignment['is_active'] is True
    assert assignment['is_overdue'] is False
    assert assignment['employee_name'] == 'Dana Okafor'

    current = client.get(f"/api/assets/{asset['id']}").get_json()
    assert current['status'] == 'Assigned'
    assert current['current_assignment']['id'] == assignment['id']

    response = client.post(f"/api/assignments/{assignment['id']}/return")
    assert response.status_code == 200
    assert response.get_json()['is_active'] is False

    response = client.post(f"/api/assignments/{assignment['id']}/return", json={})
    assert response.status_code == 409

    timeline = client.get(f"/api/assets/{asset['id']}/timeline").get_json()
    assert [entry['type'] for entry in timeline] == ['Returned', 'Assigned', 'Created']
    assert [entry['status'] for entry in timeline] == ['Completed'] * 3

    limited = client.get(f"/api/assets/{asset['id']}/timeline?limit=1").get_json()
    assert [entry['type'] for entry in limited] == ['Returned']


def test_officer_cannot_delete_but_admin_can(client, make_user):
    make_user('officer', UserRole.IT_OFFICER)
    make_user('boss', UserRole.ADMIN)

    login_user(client, 'officer')
    asset = client.post('/api/assets', json=LAPTOP).get_json()
    assert client.delete(f"/api/assets/{asset['id']}").status_code == 403
    client.post('/logout')

    login_user(client, 'boss')
    assert client.delete(f"/api/assets/{asset['id']}").status_code == 204
    assert client.get(f"/api/assets/{asset['id']}").status_code == 404
    assert client.get(f"/api/assets/{asset['id']}/timeline").status_code == 200


def test_condition_and_support_ticket_endpoints(login_as):
    client = login_as(UserRole.IT_OFFICER)
    asset = client.post('/api/assets', json=LAPTOP).get_json()

    response = client.put(f"/api/assets/{asset['id']}/condition", json={'condition': 'Good'})
    assert response.get_json()['condition'] == 'Good'

    response = client.post(f"/api/assets/{asset['id']}/support-tickets", json={'ticketNumber': 'SUP-1'})
    assert response.status_code == 201

    timeline = client.get(f"/api/assets/{asset['id']}/timeline").get_json()
    assert [entry['type'] for entry in timeline] == ['SupportTicket', 'Updated', 'Created']


def test_invalid_timeline_limit(login_as):
    client = login_as(UserRole.IT_OFFICER)
    asset = client.post('/api/assets', json=LAPTOP).get_json()
    assert client.get(f"/api/assets/{asset['id']}/timeline?limit=0").status_code == 400


def test_dashboard_and_reports(login_as):
    client = login_as(UserRole.VIEWER)

    summary = client.get('/api/dashboard').get_json()
    assert summary['total_assets'] == 0
    assert summary['by_status']['Available'] == 0

    assert client.get('/api/reports/warranty-expiring?days=30').status_code == 200
    assert client.get('/api/reports/lost-unassigned').get_json() == []
    assert len(client.get('/api/reports/monthly-trends?months=6').get_json()) == 6
    assert client.get('/api/reports/audit-logs?action=Assigned').get_json()['total'] == 0
    assert client.get('/api/reports/audit-logs?date_from=2025-02-01&date_to=2025-01-01').status_code == 400


# ========== Reference data and users ==========

def test_reference_data_endpoints(login_as):
    client = login_as(UserRole.IT_OFFICER)

    response = client.post('/api/locations', json={'building': 'HQ', 'floor': '3', 'room': '305'})
    assert response.status_code == 201
    location = response.get_json()
    assert location['full_location'] == 'HQ - Floor 3 - Room 305'

    response = client.post('/api/employees', json={
        'employee_number': 'E2001', 'first_name': 'Sam', 'last_name': 'Keller',
        'email': 'Sam.Keller@Example.com', 'work_location_id': location['id'],
    })
    assert response.status_code == 201
    assert response.get_json()['email'] == 'sam.keller@example.com'

    duplicate = client.post('/api/employees', json={
        'employee_number': 'E2001', 'first_name': 'Sam', 'last_name': 'K', 'email': 'other@example.com',
    })
    assert duplicate.status_code == 409

    listing = client.get('/api/employees?search=keller').get_json()
    assert listing['total'] == 1


def test_user_management_is_admin_only(client, make_user):
    make_user('officer', UserRole.IT_OFFICER)
    login_user(client, 'officer')
    assert client.get('/api/users').status_code == 403


def test_admin_manages_users(login_as):
    client = login_as(UserRole.ADMIN)

    response = client.post('/api/users', json={
        'username': 'newbie', 'email': 'newbie@example.com', 'password': 'Sup3r-secret', 'role': 'Viewer',
    })
    assert response.status_code == 201
    user = response.get_json()

    response = client.patch(f"/api/users/{user['id']}", json={'role': 'ITOfficer'})
    assert response.get_json()['role'] == 'ITOfficer'

    weak = client.post('/api/users', json={'username': 'weak', 'email': 'weak@example.com', 'password': 'short'})
    assert weak.status_code == 400

    usernames = [u['username'] for u in client.get('/api/users').get_json()['items']]
    assert 'newbie' in usernames
