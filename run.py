#!/usr/bin/env python3
"""
Entry point for the Portfolio Relay.

Usage:
    python run.py

Environment Variables (a .env file in the working directory is loaded first):
    FLASK_ENV: development, production or testing (default: development)
    PORT: Port to run on (default: 3000)
    NETLIFY_TOKEN: Netlify personal access token
    LOG_LEVEL: Python logging level (default: INFO)
"""
import logging
import os

from dotenv import load_dotenv


def configure_logging():
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )


def run_relay():
    """Run the relay service."""
    load_dotenv()
    configure_logging()

    # Config classes read the environment at import time, after load_dotenv
    from relay.app import create_app

    app = create_app()
    port = int(os.getenv('PORT', 3000))
    debug = os.getenv('FLASK_ENV', 'development') == 'development'

    logging.getLogger(__name__).info(f"Starting relay on port {port}...")
    app.run(host='0.0.0.0', port=port, debug=debug)


if __name__ == '__main__':
    run_relay()
