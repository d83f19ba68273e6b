#!/usr/bin/env python3
"""
Main build orchestrator for the IT asset tracker
Creates tables, ensures critical users exist and optionally loads demo data
"""

import os
from itam import create_app, db
from itam.utils.logger import get_logger

logger = get_logger("itam.build")

# Users that must always exist. Passwords come from the environment (see generate_env.py)
CRITICAL_USERS = {
    'system': {
        'username': 'system',
        'email': 'system@itam.local',
        'first_name': 'System',
        'role': 'Admin',
        'is_system': True,
        'is_active': False,
        'password_env': 'SYSTEM_USER_PASSWORD',
    },
    'admin': {
        'username': 'admin',
        'email': 'admin@itam.local',
        'first_name': 'Admin',
        'role': 'Admin',
        'is_system': False,
        'is_active': True,
        'password_env': 'ADMIN_USER_PASSWORD',
    },
}


def verify_critical_data():
    """
    Verify that critical users are present

    Returns:
        bool: True if all critical users exist
    """
    from itam.data.core.user_info.user import User

    for key, user_data in CRITICAL_USERS.items():
        if not User.query.filter_by(username=user_data['username']).first():
            logger.warning(f"Critical user '{key}' not found")
            return False
    logger.info("Critical data verification passed")
    return True


def insert_critical_data():
    """
    Insert the system and admin users if they are missing.

    Called on every build regardless of flags.

    Raises:
        RuntimeError: If a password is missing from the environment or insertion fails
    """
    from itam.data.core.user_info.user import User
    from itam.buisness.core.user_context import UserContext
    from itam.buisness.lifecycle.caller import Caller
    from itam.buisness.lifecycle.errors import LifecycleDomainError

    if verify_critical_data():
        logger.info("Critical data already present, skipping insertion")
        return

    logger.warning("Critical data missing, attempting insertion...")
    caller = Caller.system()

    try:
        for key, user_data in CRITICAL_USERS.items():
            if User.query.filter_by(username=user_data['username']).first():
                continue
            password = os.environ.get(user_data['password_env'])
            if not password:
                raise RuntimeError(f"{user_data['password_env']} is not set; run generate_env.py first")
            UserContext.create(
                caller,
                username=user_data['username'],
                email=user_data['email'],
                password=password,
                role=user_data['role'],
                first_name=user_data['first_name'],
                is_active=user_data['is_active'],
                is_system=user_data['is_system'],
                commit=False
            )
            logger.info(f"Inserted critical user: {user_data['username']}")

        db.session.commit()
        logger.info("Successfully inserted critical data")
    except LifecycleDomainError as e:
        db.session.rollback()
        logger.error(f"Critical data insertion failed: {e.message}")
        raise RuntimeError(f"Critical data insertion failed: {e.message}") from e
    except Exception:
        db.session.rollback()
        raise

    if not verify_critical_data():
        raise RuntimeError("Critical data insertion completed but verification failed")


def build_models():
    """Create every table; the models are registered by create_app"""
    db.create_all()
    logger.info("All database tables created")


def build_database(build_tables=True, enable_debug_data=True, app=None):
    """
    Main build orchestrator

    Args:
        build_tables (bool): Create missing tables
        enable_debug_data (bool): Insert demo data after critical data
        app: Flask app to build against (a new one is created when omitted)
    """
    app = app or create_app()

    with app.app_context():
        logger.info(f"Starting database build - tables: {build_tables}, debug data: {enable_debug_data}")

        if build_tables:
            build_models()

        logger.info("Verifying and inserting critical data (always required)...")
        try:
            insert_critical_data()
        except Exception as e:
            logger.error(f"Critical data insertion failed: {e}")
            logger.error("Application cannot continue without critical data. Stopping build.")
            raise

        if enable_debug_data:
            from itam.debug.debug_data_manager import insert_debug_data
            logger.info("Inserting debug data...")
            insert_debug_data(enabled=True)

        logger.info("Database build completed successfully")


if __name__ == '__main__':
    build_database()
