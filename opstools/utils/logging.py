"""Logging utilities for secret scrubbing.

MongoDB operational tools: healthcheck and sample seeding.
"""

import logging
import re
import sys


# Secret scrubbing regex
SECRET_URI_RE = re.compile(r"(mongodb\+srv://|mongodb://)([^:@/]+):([^@/]+)@")

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def scrub_secrets(msg: str) -> str:
    """Scrub secrets (MongoDB connection strings) from log messages.

    Args:
        msg: Log message that may contain secrets

    Returns:
        Message with secrets redacted
    """
    if not msg:
        return msg
    return SECRET_URI_RE.sub(r"\1***:***@", msg)


class SecretScrubbingFilter(logging.Filter):
    """Filter that redacts MongoDB credentials from every record it sees."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = str(record.getMessage() or "")
        scrubbed = scrub_secrets(msg)
        if scrubbed != msg:
            record.msg = scrubbed
            record.args = None
        return True


# Singleton instance for reuse
_secret_filter = SecretScrubbingFilter()


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr and attach the secret filter to every root handler."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    for handler in logging.getLogger().handlers:
        if _secret_filter not in handler.filters:
            handler.addFilter(_secret_filter)
