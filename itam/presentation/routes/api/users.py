from flask import jsonify
from flask_login import login_required
from itam.data.core.enums import UserRole
from itam.buisness.core.user_context import UserContext
from itam.buisness.lifecycle.errors import InvalidInputError
from itam.buisness.lifecycle.policies.permissions import Action, PermissionPolicy
from itam.services.core.user_service import UserService
from itam.presentation.routes.api import api_bp
from itam.presentation.routes.api.params import arg_bool, arg_enum, current_caller, json_body, page_args
from itam.presentation.routes.api.serializers import serialize_page, serialize_user


@api_bp.get('/users')
@login_required
def list_users():
    PermissionPolicy.check(current_caller(), Action.MANAGE_USERS)
    pagination = UserService.list_users(
        role=arg_enum('role', UserRole),
        active=arg_bool('active', 'isActive'),
        **page_args()
    )
    return jsonify(serialize_page(pagination, serialize_user))


@api_bp.post('/users')
@login_required
def create_user():
    data = json_body()
    ctx = UserContext.create(
        current_caller(),
        username=data.get('username'),
        email=data.get('email'),
        password=data.get('password'),
        role=data.get('role', UserRole.VIEWER.value),
        first_name=data.get('first_name', data.get('firstName')),
        last_name=data.get('last_name', data.get('lastName'))
    )
    return jsonify(serialize_user(ctx.user)), 201


@api_bp.patch('/users/<int:user_id>')
@login_required
def update_user(user_id):
    data = json_body()
    unknown = [key for key in data if key not in ('role', 'is_active', 'isActive')]
    if unknown or not data:
        raise InvalidInputError("Only role and is_active can be changed", fields=unknown)

    caller = current_caller()
    PermissionPolicy.check(caller, Action.MANAGE_USERS)
    ctx = UserContext.load(user_id)
    if 'role' in data:
        ctx.set_role(caller, data['role'])
    is_active = data.get('is_active', data.get('isActive'))
    if is_active is not None:
        ctx.set_active(caller, bool(is_active))
    return jsonify(serialize_user(ctx.user))
