"""
Tests for the role x action permission table
"""
import pytest
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.errors import ForbiddenError
from itam.buisness.lifecycle.policies.permissions import Action, PermissionPolicy
from itam.data.core.enums import UserRole


@pytest.mark.parametrize('action', list(Action))
def test_viewer_is_read_only(action):
    assert PermissionPolicy.authorize(UserRole.VIEWER, action) is False


@pytest.mark.parametrize('action,allowed', [
    (Action.CREATE, True),
    (Action.EDIT, True),
    (Action.ASSIGN, True),
    (Action.RETURN, True),
    (Action.DELETE, False),
    (Action.MANAGE_USERS, False),
])
def test_it_officer_grants(action, allowed):
    assert PermissionPolicy.authorize(UserRole.IT_OFFICER, action) is allowed


@pytest.mark.parametrize('action', list(Action))
def test_admin_may_do_everything(action):
    assert PermissionPolicy.authorize(UserRole.ADMIN, action) is True


def test_loose_role_and_action_inputs_are_decoded():
    assert PermissionPolicy.authorize('ITOfficer', 'assign') is True
    assert PermissionPolicy.authorize(3, 'manageUsers') is True
    assert PermissionPolicy.authorize('viewer', 'create') is False


def test_unknown_role_or_action_is_denied():
    assert PermissionPolicy.authorize('Superuser', Action.CREATE) is False
    assert PermissionPolicy.authorize(UserRole.ADMIN, 'launch') is False
    assert PermissionPolicy.authorize(None, Action.EDIT) is False


def test_check_raises_forbidden_with_details():
    with pytest.raises(ForbiddenError) as excinfo:
        PermissionPolicy.check(Caller(role=UserRole.IT_OFFICER, name='officer'), Action.DELETE)

    assert excinfo.value.kind == 'Forbidden'
    assert excinfo.value.details == {'role': 'ITOfficer', 'action': 'delete'}


def test_check_rejects_missing_caller():
    with pytest.raises(ForbiddenError):
        PermissionPolicy.check(None, Action.CREATE)
