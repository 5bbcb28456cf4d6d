"""
End-to-End Test Fixtures.

Fixtures for E2E tests - the full client stack against the reference item
service, driven the way an operator would drive it.
"""

import logging

import pytest

from item_client.client.handle import get_client_handle


@pytest.fixture(autouse=True)
def _isolate_cli_state():
    """cli.main() reconfigures the root logger and may cache the handle."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    get_client_handle.cache_clear()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    get_client_handle.cache_clear()
