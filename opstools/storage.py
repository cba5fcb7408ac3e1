"""MongoDB connection handling.

MongoDB operational tools: healthcheck and sample seeding.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator
from urllib.parse import parse_qsl

import certifi
from pymongo import MongoClient
from pymongo.database import Database

from opstools.config import AppSettings, SERVER_SELECTION_TIMEOUT_MS


DEFAULT_DATABASE = "test"

# URI options that mean the deployment brings its own TLS trust setup
_URI_TLS_TRUST_OPTIONS = ("tlscafile", "tlscertificatekeyfile", "tlsinsecure")


def _uri_options(uri: str) -> Dict[str, str]:
    """Query-string options of a connection string, keys lowercased."""
    query = uri.split("?", 1)[1] if "?" in uri else ""
    return {key.lower(): value for key, value in parse_qsl(query)}


def _wants_certifi_bundle(uri: str) -> bool:
    """
    Decide whether to hand the certifi CA bundle to the driver.

    SRV URIs default to TLS, plain URIs only when the query string asks for it;
    an explicit tls/ssl flag wins either way. URIs that already name a CA file,
    client certificate or tlsInsecure are left to the driver untouched.
    """
    options = _uri_options(uri)
    if any(key in options for key in _URI_TLS_TRUST_OPTIONS):
        return False
    flag = options.get("tls", options.get("ssl"))
    if flag is not None:
        return flag.lower() == "true"
    return uri.startswith("mongodb+srv://")


def connect(uri: str, timeout_ms: int = SERVER_SELECTION_TIMEOUT_MS) -> MongoClient:
    """
    Create a MongoDB client with a bounded server-selection timeout.

    Args:
        uri: MongoDB connection string (already validated by the caller)
        timeout_ms: Upper bound on server selection, in milliseconds

    Returns:
        MongoClient instance (caller owns it and must close it)
    """
    masked_uri = AppSettings.mask_connection_string(uri)
    logging.info(f"MongoDB: connecting with URI {masked_uri}")

    options: Dict[str, Any] = {"serverSelectionTimeoutMS": timeout_ms}
    if _wants_certifi_bundle(uri):
        options["tlsCAFile"] = certifi.where()

    return MongoClient(uri, **options)


@contextmanager
def mongo_connection(uri: str, timeout_ms: int = SERVER_SELECTION_TIMEOUT_MS) -> Iterator[MongoClient]:
    """Yield a connected client and close it on every exit path."""
    client = connect(uri, timeout_ms)
    try:
        yield client
    finally:
        client.close()
        logging.info("MongoDB: connection closed")


def get_database(client: MongoClient) -> Database:
    """Database named in the connection string, or ``test`` when the URI names none."""
    return client.get_default_database(default=DEFAULT_DATABASE)


def ping(client: MongoClient) -> Dict[str, Any]:
    """Run the admin ping and return the raw server reply."""
    return client.admin.command("ping")
