"""
Tests for password policy enforcement and user account management
"""
import pytest
from itam.buisness.core.user_context import UserContext
from itam.buisness.lifecycle.caller import Caller
from itam.buisness.lifecycle.errors import (
    ConflictError, ForbiddenError, InvalidInputError, InvalidStateError
)
from itam.data.core.enums import UserRole
from itam.data.core.user_info.password_validator import PasswordValidator


@pytest.mark.parametrize("password,should_pass", [
    ("short", False),
    ("NoDigit!", False),
    ("nouppercase1!", False),
    ("NOLOWERCASE1!", False),
    ("NoSpecialChar1", False),
    ("", False),
    ("A1!" + "a" * 200, False),
    ("ValidPass1!", True),
    ("AnotherValid99@", True),
])
def test_password_complexity(password, should_pass):
    is_valid, error_message = PasswordValidator.validate(password)
    assert is_valid is should_pass
    assert bool(error_message) is not should_pass


def test_requirements_text_lists_every_rule():
    text = PasswordValidator.get_requirements_text()
    assert "At least 8 characters long" in text
    assert "uppercase" in text and "special character" in text


def test_weak_password_rejected_on_create(app):
    with pytest.raises(InvalidInputError) as exc:
        UserContext.create(Caller.system(), username='weak', email='weak@example.com', password='weakpass')
    assert exc.value.details['field'] == 'password'


def test_password_is_hashed(app):
    ctx = UserContext.create(Caller.system(), username='dana', email='Dana@Example.com', password='ValidPass1!')
    user = ctx.user

    assert user.email == 'dana@example.com'
    assert user.password_hash != 'ValidPass1!'
    assert user.check_password('ValidPass1!')
    assert not user.check_password('validpass1!')
    assert user.role == UserRole.VIEWER


def test_duplicate_username_and_email(app):
    UserContext.create(Caller.system(), username='dana', email='dana@example.com', password='ValidPass1!')

    with pytest.raises(ConflictError):
        UserContext.create(Caller.system(), username='dana', email='other@example.com', password='ValidPass1!')
    with pytest.raises(ConflictError):
        UserContext.create(Caller.system(), username='other', email='dana@example.com', password='ValidPass1!')


def test_unknown_role_rejected(app):
    with pytest.raises(InvalidInputError):
        UserContext.create(
            Caller.system(), username='dana', email='dana@example.com', password='ValidPass1!', role='Root'
        )


def test_only_admins_manage_users(app, officer):
    with pytest.raises(ForbiddenError):
        UserContext.create(officer, username='dana', email='dana@example.com', password='ValidPass1!')


def test_role_and_active_changes(app, admin):
    ctx = UserContext.create(admin, username='dana', email='dana@example.com', password='ValidPass1!')

    ctx.set_role(admin, 'ITOfficer')
    assert ctx.user.role == UserRole.IT_OFFICER

    ctx.set_active(admin, False)
    assert ctx.user.is_active is False


def test_system_user_cannot_be_changed(app, admin):
    ctx = UserContext.create(
        Caller.system(), username='system', email='system@itam.local', password='ValidPass1!',
        role='Admin', is_system=True, is_active=False
    )
    with pytest.raises(InvalidStateError):
        ctx.set_role(admin, 'Viewer')


def test_cannot_deactivate_self(app):
    ctx = UserContext.create(
        Caller.system(), username='boss', email='boss@example.com', password='ValidPass1!', role='Admin'
    )
    me = Caller(role=UserRole.ADMIN, name='boss', user_id=ctx.user.id)
    with pytest.raises(InvalidStateError):
        ctx.set_active(me, False)
