#!/usr/bin/env python3
"""
Run script for the IT asset tracker
"""

import argparse
import os
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from itam import create_app
from itam.build import build_database
from itam.utils.logger import get_logger

# Note: Default user credentials are configured via environment variables.
# Run 'python generate_env.py' to create .env file with secure passwords.

logger = get_logger("itam.run")


def parse_arguments():
    """Parse command line arguments for the build step"""
    parser = argparse.ArgumentParser(description='IT Asset Tracker')
    parser.add_argument('--build-only', action='store_true',
                        help='Build database tables and critical users, then exit without starting the server')
    parser.add_argument('--enable-debug-data', action='store_true', default=True,
                        help='Insert demo data (default: enabled if flag not present)')
    parser.add_argument('--no-debug-data', action='store_false', dest='enable_debug_data',
                        help='Disable demo data insertion')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting IT Asset Tracker...")
    app = create_app()

    # Critical users are ALWAYS checked and inserted regardless of flags
    build_database(
        build_tables=True,
        enable_debug_data=args.enable_debug_data and not args.build_only,
        app=app
    )

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
