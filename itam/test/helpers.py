"""
Shared helpers for the test modules
"""
from datetime import datetime, timedelta

from itam.data.core.event_info.lifecycle_event import LifecycleEvent

TEST_PASSWORD = 'Passw0rd!test'

TEST_CONFIG = {
    'SECRET_KEY': 'test-secret-key',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'TESTING': True,
    'WTF_CSRF_ENABLED': False,
    'RATELIMIT_ENABLED': False,
    'ENABLE_HTTPS': False,
    'FORCE_HTTPS_REDIRECT': False,
    'SESSION_COOKIE_SECURE': False,
    'REMEMBER_COOKIE_SECURE': False,
}


class FakeClock:
    """Deterministic clock handed to the engine; advance() moves it forward"""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 3, 10, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


def event_types(asset_id):
    """Event types of an asset's log in sequence order"""
    events = LifecycleEvent.query.filter_by(asset_id=asset_id).order_by(LifecycleEvent.sequence).all()
    return [event.event_type.value for event in events]


def login_user(client, username, password=TEST_PASSWORD):
    """Helper function to login a user"""
    return client.post('/login', json={'username': username, 'password': password})
