"""
JSON API blueprint

Domain errors raised by the lifecycle layer are mapped to HTTP status codes
here and nowhere else.
"""

from flask import Blueprint, jsonify
from itam.buisness.lifecycle.errors import LifecycleDomainError
from itam.utils.logger import get_logger

logger = get_logger("itam.routes.api")

api_bp = Blueprint('api', __name__)

STATUS_CODES = {
    'NotFound': 404,
    'Forbidden': 403,
    'InvalidInput': 400,
    'Inactive': 422,
    'InvalidState': 409,
    'Conflict': 409,
}


@api_bp.errorhandler(LifecycleDomainError)
def handle_domain_error(error: LifecycleDomainError):
    status = STATUS_CODES.get(error.kind, 400)
    logger.debug(f"API {error.kind} ({status}): {error.message}")
    return jsonify(error.to_dict()), status


def get_engine():
    """Engine used by the API; LIFECYCLE_CLOCK in config overrides the clock"""
    from flask import current_app
    from itam.buisness.lifecycle.engine import LifecycleEngine
    return LifecycleEngine(clock=current_app.config.get('LIFECYCLE_CLOCK'))
