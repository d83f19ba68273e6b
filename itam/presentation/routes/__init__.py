"""
Routes package for the IT asset lifecycle service
JSON API blueprints, all mounted under /api
"""

from itam.utils.logger import get_logger

logger = get_logger("itam.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .api import api_bp
    # Importing the modules attaches their routes to api_bp
    from .api import assets, assignments, reports, reference, users  # noqa: F401

    app.register_blueprint(api_bp, url_prefix='/api')
    logger.info("Registered API blueprint at /api")
