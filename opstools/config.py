"""Application configuration and settings.

MongoDB operational tools: healthcheck and sample seeding.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Project-root .env; values already present in the environment win
ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

SERVER_SELECTION_TIMEOUT_MS = 5000
SAMPLE_COLLECTION = "sample_items"


class AppSettings:
    """
    Settings loaded from environment variables.

    The only configurable value is the connection string (``MONGODB_URI``);
    everything else is fixed for these tools.
    """

    def __init__(self):
        """Initialize settings from environment variables."""
        if ENV_FILE.exists():
            load_dotenv(ENV_FILE)

        self.mongodb_uri = (os.getenv("MONGODB_URI") or "").strip() or None
        self.server_selection_timeout_ms = SERVER_SELECTION_TIMEOUT_MS
        self.sample_collection = SAMPLE_COLLECTION

    def validate_mongodb_config(self) -> tuple[bool, Optional[str]]:
        """
        Validate MongoDB configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not self.mongodb_uri:
            return False, "MONGODB_URI is not set"

        if not (self.mongodb_uri.startswith("mongodb+srv://") or
                self.mongodb_uri.startswith("mongodb://")):
            return False, "Invalid MongoDB connection string format. Use mongodb+srv://... or mongodb://..."

        return True, None

    @staticmethod
    def mask_connection_string(uri: str) -> str:
        """
        Mask password in MongoDB connection string for safe logging.

        Args:
            uri: MongoDB connection string

        Returns:
            Connection string with password masked as ***
        """
        if not uri or "://" not in uri:
            return uri

        scheme, rest = uri.split("://", 1)

        # user:password@host
        if "@" in rest:
            user_part, tail = rest.rsplit("@", 1)
            if ":" in user_part:
                username, _ = user_part.split(":", 1)
                return f"{scheme}://{username}:***@{tail}"

        return uri


@lru_cache
def get_settings() -> AppSettings:
    """Get the cached settings instance."""
    return AppSettings()
