"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Reference Item Service:
    Integration and e2e tests talk to an in-memory item service built with
    FastAPI. The real ItemServiceClient reaches it through httpx.ASGITransport,
    so requests go through the full HTTP encode/decode path without a socket.
"""

from collections.abc import AsyncGenerator
from itertools import count

import pytest
from fastapi import FastAPI
from httpx import ASGITransport

from item_client.client.calls import ItemCalls
from item_client.client.handle import ClientHandle, create_client_handle
from item_client.rpc.schemas import (
    DeleteItemRequest,
    DeleteItemResponse,
    GetItemRequest,
    GetItemResponse,
    Item,
    PingRequest,
    PingResponse,
    PostItemRequest,
    PostItemResponse,
    SetItemRequest,
    SetItemResponse,
)

TEST_SERVICE_NAME = "volo-example"
TEST_ADDRESS = "127.0.0.1:10818"


# =============================================================================
# Reference Item Service
# =============================================================================


def create_item_service_app() -> FastAPI:
    """Build an in-memory item service speaking the client's wire format."""
    app = FastAPI(title="Reference Item Service")
    store: dict[str, str] = {}
    ids = count(1)

    @app.post("/ItemService/GetItem", response_model=GetItemResponse)
    async def get_item(request: GetItemRequest) -> GetItemResponse:
        return GetItemResponse(value=store.get(request.key, ""))

    @app.post("/ItemService/SetItem", response_model=SetItemResponse)
    async def set_item(request: SetItemRequest) -> SetItemResponse:
        store[request.kv.key] = request.kv.value
        return SetItemResponse(message="OK")

    @app.post("/ItemService/DeleteItem", response_model=DeleteItemResponse)
    async def delete_item(request: DeleteItemRequest) -> DeleteItemResponse:
        deleted = 0
        for key in request.keys:
            if store.pop(key, None) is not None:
                deleted += 1
        return DeleteItemResponse(count=deleted)

    @app.post("/ItemService/Ping", response_model=PingResponse)
    async def ping(request: PingRequest) -> PingResponse:
        if request.message is None:
            return PingResponse(message="PONG")
        return PingResponse(message=request.message)

    @app.post("/ItemService/PostItem", response_model=PostItemResponse)
    async def post_item(request: PostItemRequest) -> PostItemResponse:
        return PostItemResponse(item=Item(id=next(ids), name=request.name))

    return app


@pytest.fixture
def item_service_app() -> FastAPI:
    """Fresh reference service with an empty store."""
    return create_item_service_app()


@pytest.fixture
def asgi_transport(item_service_app: FastAPI) -> ASGITransport:
    return ASGITransport(app=item_service_app)


@pytest.fixture
async def client_handle(asgi_transport: ASGITransport) -> AsyncGenerator[ClientHandle, None]:
    """Client handle wired to the reference service."""
    handle = create_client_handle(TEST_SERVICE_NAME, TEST_ADDRESS, transport=asgi_transport)
    yield handle
    await handle.aclose()


@pytest.fixture
def item_calls(client_handle: ClientHandle) -> ItemCalls:
    """Fail-soft call wrappers bound to the reference service."""
    return ItemCalls(client_handle)
