from flask import Blueprint, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf
from itam import db, limiter
from itam.data.core.user_info.user import User
from itam.presentation.routes.api.serializers import serialize_user
from itam.utils.logger import get_logger
from itam.utils.time import utcnow

logger = get_logger("itam.auth")
auth = Blueprint('auth', __name__)


def _credentials():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data.get('username'), data.get('password')
    return request.form.get('username'), request.form.get('password')


@auth.post('/login')
@limiter.limit("10 per minute")
def login():
    if current_user.is_authenticated:
        logger.debug(f"User {current_user.username} already authenticated")
        return jsonify(serialize_user(current_user))

    username, password = _credentials()
    logger.debug(f"Login attempt for username: {username}")

    if not username or not password:
        logger.warning(f"Login attempt with missing credentials for username: {username}")
        return jsonify({'error': 'InvalidInput', 'message': 'Please enter both username and password'}), 400

    user = User.query.filter_by(username=username).first()

    if user is None or not user.check_password(password):
        logger.warning(f"Failed login attempt for username: {username}")
        return jsonify({'error': 'Unauthorized', 'message': 'Invalid username or password'}), 401

    if not user.is_active or user.is_system:
        logger.warning(f"Login attempt for disabled account: {username}")
        return jsonify({'error': 'Forbidden', 'message': 'Account is disabled'}), 403

    login_user(user, remember=bool(request.args.get('remember')))
    user.last_login_at = utcnow()
    db.session.commit()
    logger.info(f"Successful login for user: {username}")
    return jsonify(serialize_user(user))


@auth.post('/logout')
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    return '', 204


@auth.get('/me')
@login_required
def me():
    return jsonify(serialize_user(current_user))


@auth.get('/csrf-token')
def csrf_token():
    return jsonify({'csrf_token': generate_csrf()})
