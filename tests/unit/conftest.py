"""
Unit Test Fixtures.

Fixtures for unit tests - the remote service is always mocked.
Unit tests should be fast and isolated, never touching a network.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from item_client.rpc.address import Address
from item_client.rpc.schemas import (
    DeleteItemResponse,
    GetItemResponse,
    PingResponse,
    PostItemResponse,
    SetItemResponse,
)


# =============================================================================
# Client Handle Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_handle() -> MagicMock:
    """
    Mock client handle with one AsyncMock per remote operation.

    Usage:
        def test_get(mock_handle):
            mock_handle.get_item.return_value = GetItemResponse(value="v")
            calls = ItemCalls(mock_handle)
    """
    handle = MagicMock()
    handle.service_name = "volo-example"
    handle.address = Address("127.0.0.1", 10818)
    handle.get_item = AsyncMock(return_value=GetItemResponse(value="value"))
    handle.set_item = AsyncMock(return_value=SetItemResponse(message="OK"))
    handle.delete_item = AsyncMock(return_value=DeleteItemResponse(count=1))
    handle.ping = AsyncMock(return_value=PingResponse(message="pong"))
    handle.post_item = AsyncMock(return_value=PostItemResponse())
    handle.aclose = AsyncMock()
    return handle


@pytest.fixture
def mock_calls() -> MagicMock:
    """
    Mock ItemCalls for shell and startup tests.

    Usage:
        async def test_get(mock_calls):
            mock_calls.get.return_value = GetItemResponse(value="1")
    """
    calls = MagicMock()
    calls.get = AsyncMock(return_value=GetItemResponse())
    calls.set = AsyncMock(return_value=SetItemResponse(message="OK"))
    calls.delete = AsyncMock(return_value=DeleteItemResponse())
    calls.ping = AsyncMock(return_value=PingResponse(message="pong"))
    calls.post = AsyncMock(return_value=PostItemResponse())
    return calls


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("item_client.client.policy.logger", mock_logger):
                ...
                mock_logger.error.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
