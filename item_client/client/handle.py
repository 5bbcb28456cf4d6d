"""
Client Handle.

The single shared connection to the item service. Build it once at startup
and pass it to everything that makes calls.

Usage:
    handle = create_client_handle("volo-example", "127.0.0.1:10818")
    response = await handle.get_item(GetItemRequest(key="a"))

    # Or the cached instance built from configuration
    handle = get_client_handle()
"""

from dataclasses import dataclass
from functools import lru_cache

import httpx

from item_client.core.config import get_client_target
from item_client.core.logging import get_logger
from item_client.rpc.address import Address, parse_address
from item_client.rpc.layers import LogLayer
from item_client.rpc.schemas import (
    DeleteItemRequest,
    DeleteItemResponse,
    GetItemRequest,
    GetItemResponse,
    PingRequest,
    PingResponse,
    PostItemRequest,
    PostItemResponse,
    SetItemRequest,
    SetItemResponse,
)
from item_client.rpc.stub import DEFAULT_TIMEOUT, ItemServiceClient, ItemServiceClientBuilder

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClientHandle:
    """Immutable wrapper around the item service stub."""

    service_name: str
    address: Address
    stub: ItemServiceClient

    async def get_item(self, request: GetItemRequest) -> GetItemResponse:
        return await self.stub.get_item(request)

    async def set_item(self, request: SetItemRequest) -> SetItemResponse:
        return await self.stub.set_item(request)

    async def delete_item(self, request: DeleteItemRequest) -> DeleteItemResponse:
        return await self.stub.delete_item(request)

    async def ping(self, request: PingRequest) -> PingResponse:
        return await self.stub.ping(request)

    async def post_item(self, request: PostItemRequest) -> PostItemResponse:
        return await self.stub.post_item(request)

    async def aclose(self) -> None:
        await self.stub.aclose()


def create_client_handle(
    service_name: str,
    address: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ClientHandle:
    """
    Build a client handle with the logging layer installed.

    Args:
        service_name: Client identifier sent with every call.
        address: Target as ``host:port``.
        timeout: Transport timeout in seconds.
        transport: Optional httpx transport override.

    Raises:
        InvalidAddressError: If ``address`` is malformed.
    """
    target = parse_address(address)

    builder = (
        ItemServiceClientBuilder(service_name)
        .layer_outer(LogLayer())
        .address(target)
        .timeout(timeout)
    )
    if transport is not None:
        builder = builder.transport(transport)

    logger.debug("Client handle created", service_name=service_name, address=str(target))
    return ClientHandle(service_name=service_name, address=target, stub=builder.build())


@lru_cache
def get_client_handle() -> ClientHandle:
    """Get the process-wide client handle built from configuration."""
    service_name, address, timeout = get_client_target()
    return create_client_handle(service_name, address, timeout=timeout)
