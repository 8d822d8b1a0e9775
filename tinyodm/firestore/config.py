"""Shared Firestore constants.

This module centralizes the service domain, resource-name markers and URL
helpers used by the path algebra and the REST transport.
"""

from __future__ import annotations

import os

FIRESTORE_API_DOMAIN = "firestore.googleapis.com"
API_VERSION = "v1"

# Fixed segments of every resource name:
#   projects/<project>/databases/(default)/documents/...
PROJECTS_MARKER = "projects"
DATABASES_MARKER = "databases"
DEFAULT_DATABASE = "(default)"
DOCUMENTS_MARKER = "documents"

# When set, requests go to a local emulator over plain HTTP without auth.
EMULATOR_HOST_ENV = "FIRESTORE_EMULATOR_HOST"

DEFAULT_TIMEOUT_SECONDS = 30.0


def get_emulator_host() -> str | None:
    """Return the emulator host from the environment, if configured."""
    host = os.environ.get(EMULATOR_HOST_ENV, "").strip()
    return host or None


def get_base_url(emulator_host: str | None = None) -> str:
    """Get the REST base URL, including the API version.

    Args:
        emulator_host: Optional ``host:port`` of a local emulator

    Returns:
        Base URL string

    Examples:
        >>> get_base_url()
        'https://firestore.googleapis.com/v1'
        >>> get_base_url("localhost:8080")
        'http://localhost:8080/v1'
    """
    if emulator_host:
        return f"http://{emulator_host}/{API_VERSION}"
    return f"https://{FIRESTORE_API_DOMAIN}/{API_VERSION}"
