#!/usr/bin/env python3
"""
Run script for the Retail Manager
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file before the app reads them
load_dotenv()

from retail import create_app
from retail.build import build_database
from retail.logger import get_logger

# Note: admin credentials are configured via environment variables.
# Run 'python generate_env.py' to create a .env file with a secure password.

logger = get_logger("retail_manager.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='Retail Manager')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and the admin user, then exit without starting the server')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()
    app = create_app()

    logger.debug("Starting Retail Manager...")
    build_database(app)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST: Server host (default: 127.0.0.1 for security)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')

    # FLASK_PORT: Server port (default: 5000)
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=host, port=port)
