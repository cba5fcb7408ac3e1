#!/usr/bin/env python3
"""
Seed the sample_items collection with three fixed sample documents.

Usage:
    MONGODB_URI='mongodb+srv://...' python -m opstools.seed

Not idempotent: every run inserts three new documents.
"""

import logging
import sys

from opstools.config import get_settings
from opstools.models import SampleItem, register_model
from opstools.storage import get_database, mongo_connection
from opstools.utils.logging import configure_logging


SEED_DATA = [
    {"name": "Sample A"},
    {"name": "Sample B"},
    {"name": "Sample C"},
]


def run() -> int:
    """
    Insert the sample documents in order, stopping at the first failure.

    Returns:
        Process exit code: 0 if every document was inserted, 1 on a
        configuration, validation or insertion error
    """
    configure_logging()
    settings = get_settings()

    is_valid, error = settings.validate_mongodb_config()
    if not is_valid:
        logging.error(error)
        return 1

    sample_model = register_model("SampleItem", SampleItem, settings.sample_collection)

    try:
        with mongo_connection(settings.mongodb_uri, settings.server_selection_timeout_ms) as client:
            sample_model.insert_many(get_database(client), SEED_DATA)
    except Exception as e:
        logging.error(f"Seeding failed: {e}")
        return 1

    print(f"Seeded {len(SEED_DATA)} items into {sample_model.collection}")
    return 0


def main():
    """Console entry point: exit with the code from run()."""
    sys.exit(run())


if __name__ == "__main__":
    main()
