#!/usr/bin/env python3
"""
Run script for the Stock Ledger API
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file before the config classes are imported
load_dotenv()

from stock_ledger import create_app
from stock_ledger.build import build_database
from stock_ledger.config import Config, DevelopmentConfig
from stock_ledger.logger import get_logger

# Note: credentials and the secret key come from environment variables.
# Run 'python generate_env.py' to create a .env file.

logger = get_logger("stock_ledger.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Stock Ledger API')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit without starting the web server')
    parser.add_argument('--seed-demo-data', action='store_true',
                        help='Insert a small demo catalog when the product table is empty')
    parser.add_argument('--dev', action='store_true',
                        help='Use the development configuration (insecure cookies, DEBUG logs)')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    app = create_app(DevelopmentConfig if args.dev else Config)
    build_database(app, seed_demo_data=args.seed_demo_data)

    if args.build_only:
        logger.info("Build completed. Exiting without starting web server.")
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
