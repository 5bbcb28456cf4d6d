"""
Integration Test Fixtures.

Fixtures for integration tests - the real stub, layers and wrappers talk to
the in-memory reference item service defined in the root conftest.py.
"""

import httpx
import pytest

from item_client.client.calls import ItemCalls
from item_client.client.handle import create_client_handle


@pytest.fixture
async def unreachable_calls():
    """
    Fail-soft wrappers whose every request is refused at the transport.

    Usage:
        async def test_down(unreachable_calls):
            assert await unreachable_calls.get("a") == GetItemResponse()
    """
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    handle = create_client_handle(
        "volo-example",
        "127.0.0.1:10818",
        transport=httpx.MockTransport(refuse),
    )
    yield ItemCalls(handle)
    await handle.aclose()
