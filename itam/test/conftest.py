"""
Pytest configuration and fixtures for the lifecycle and API tests
"""
import pytest
from itam import create_app
from itam import db as _db
from itam.buisness.core.reference_data_context import ReferenceDataContext
from itam.buisness.core.user_context import UserContext
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.engine import LifecycleEngine
from itam.data.core.enums import UserRole
from itam.test.helpers import TEST_CONFIG, TEST_PASSWORD, FakeClock, login_user


@pytest.fixture
def app():
    """Flask application with a fresh in-memory database"""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(app, clock):
    return LifecycleEngine(clock=clock)


@pytest.fixture
def admin():
    return Caller(role=UserRole.ADMIN, name='admin')


@pytest.fixture
def officer():
    return Caller(role=UserRole.IT_OFFICER, name='officer')


@pytest.fixture
def viewer():
    return Caller(role=UserRole.VIEWER, name='viewer')


@pytest.fixture
def location(app, admin):
    return ReferenceDataContext.create_location(admin, {'building': 'HQ', 'floor': 2, 'room': '201'})


@pytest.fixture
def other_location(app, admin):
    return ReferenceDataContext.create_location(admin, {'building': 'Annex', 'floor': 1, 'room': '110'})


@pytest.fixture
def employee(app, admin, location):
    return ReferenceDataContext.create_employee(admin, {
        'employee_number': 'E1001',
        'first_name': 'Dana',
        'last_name': 'Okafor',
        'email': 'dana.okafor@example.com',
        'department': 'Engineering',
        'work_location_id': location.id,
    })


@pytest.fixture
def other_employee(app, admin):
    return ReferenceDataContext.create_employee(admin, {
        'employee_number': 'E1002',
        'first_name': 'Priya',
        'last_name': 'Raman',
        'email': 'priya.raman@example.com',
        'department': 'Finance',
    })


@pytest.fixture
def asset(engine, officer, location):
    return engine.create_asset(officer, {
        'asset_tag': 'LAP-0001',
        'category': 'Laptop',
        'brand': 'Dell',
        'model': 'Latitude 7440',
        'location_id': location.id,
    })


# ========== API helpers ==========

@pytest.fixture
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(username, role):
        ctx = UserContext.create(
            Caller.system(),
            username=username,
            email=f'{username}@example.com',
            password=TEST_PASSWORD,
            role=role
        )
        return ctx.user
    return _make


@pytest.fixture
def login_as(client, make_user):
    """Create a user with the given role and log the test client in as them"""
    def _login(role, username=None):
        user = make_user(username or role.value.lower(), role)
        response = login_user(client, user.username)
        assert response.status_code == 200
        return client
    return _login
