#!/usr/bin/env python3
"""
MongoDB healthcheck.

Usage:
    MONGODB_URI='mongodb+srv://...' python -m opstools.healthcheck

Prints the raw ping reply ({'ok': 1.0}) and exits 0 when the server answers;
exits 1 when MONGODB_URI is unset or the server is unreachable.
"""

import logging
import sys

from pymongo.errors import OperationFailure

from opstools.config import get_settings
from opstools.storage import mongo_connection, ping
from opstools.utils.logging import configure_logging

# Server codes for failed authentication
AUTH_FAILURE_CODES = (18, 8000)


def run() -> int:
    """
    Ping the configured MongoDB server once.

    Returns:
        Process exit code: 0 if the server answered, 1 on a configuration,
        connectivity or server error
    """
    configure_logging()
    settings = get_settings()

    is_valid, error = settings.validate_mongodb_config()
    if not is_valid:
        logging.error(error)
        return 1

    try:
        with mongo_connection(settings.mongodb_uri, settings.server_selection_timeout_ms) as client:
            result = ping(client)
    except OperationFailure as e:
        if e.code in AUTH_FAILURE_CODES:
            logging.error(
                "MongoDB auth failed. If the password contains special characters (@:/#?&% etc.), "
                "URL-encode it using urllib.parse.quote_plus()."
            )
        logging.error(f"MongoDB healthcheck failed: {e}")
        return 1
    except Exception as e:
        logging.error(f"MongoDB healthcheck failed: {e}")
        return 1

    print("MongoDB ping OK:", result)
    return 0


def main():
    """Console entry point: exit with the code from run()."""
    sys.exit(run())


if __name__ == "__main__":
    main()
