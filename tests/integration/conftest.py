"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless FIRESTORE_EMULATOR_HOST is set
pytestmark = pytest.mark.skipif(
    not os.environ.get("FIRESTORE_EMULATOR_HOST"),
    reason="Requires a Firestore emulator. Set FIRESTORE_EMULATOR_HOST=host:port to run",
)
