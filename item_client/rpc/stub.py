"""
Item Service RPC Stub.

Async client exposing one method per remote operation of the item service.
Calls are JSON over HTTP: ``POST /<Service>/<Method>`` with the request model
as the body. A 2xx reply carries the response model, anything else carries an
ErrorEnvelope.

Every failure surfaces as an RpcError subclass:
    RpcTransportError - no response (connect refused, timeout, I/O)
    RpcStatusError    - non-2xx reply from the service
    RpcDecodeError    - reply body does not match the response schema
"""

from functools import partial
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from item_client.core.exceptions import (
    RpcDecodeError,
    RpcStatusError,
    RpcTransportError,
)
from item_client.rpc.address import Address
from item_client.rpc.layers import Handler, Layer
from item_client.rpc.schemas import (
    DeleteItemRequest,
    DeleteItemResponse,
    ErrorEnvelope,
    GetItemRequest,
    GetItemResponse,
    PingRequest,
    PingResponse,
    PostItemRequest,
    PostItemResponse,
    SetItemRequest,
    SetItemResponse,
)

SERVICE_PATH = "ItemService"
DEFAULT_TIMEOUT = 10.0

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ItemServiceClient:
    """
    RPC stub for the item service.

    Build it with ItemServiceClientBuilder. The instance is not mutated after
    construction and can be shared by any number of callers.

    Usage:
        client = ItemServiceClientBuilder("volo-example").address(addr).build()
        response = await client.get_item(GetItemRequest(key="a"))
    """

    def __init__(
        self,
        service_name: str,
        address: Address,
        layers: tuple[Layer, ...] = (),
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the stub.

        Args:
            service_name: Client identifier sent with every call.
            address: Parsed target address.
            layers: Outbound layers, outermost first.
            timeout: Transport timeout in seconds.
            transport: Optional httpx transport (tests pass an ASGITransport).
        """
        self.service_name = service_name
        self.address = address
        self.layers = layers
        self._http = httpx.AsyncClient(
            base_url=address.base_url,
            timeout=timeout,
            headers={"X-Client-ID": service_name},
            transport=transport,
        )

    async def get_item(self, request: GetItemRequest) -> GetItemResponse:
        return await self._call("GetItem", request, GetItemResponse)

    async def set_item(self, request: SetItemRequest) -> SetItemResponse:
        return await self._call("SetItem", request, SetItemResponse)

    async def delete_item(self, request: DeleteItemRequest) -> DeleteItemResponse:
        return await self._call("DeleteItem", request, DeleteItemResponse)

    async def ping(self, request: PingRequest) -> PingResponse:
        return await self._call("Ping", request, PingResponse)

    async def post_item(self, request: PostItemRequest) -> PostItemResponse:
        return await self._call("PostItem", request, PostItemResponse)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def _call(
        self,
        method: str,
        request: BaseModel,
        response_cls: type[ResponseT],
    ) -> ResponseT:
        handler: Handler = partial(self._send, response_cls=response_cls)
        for layer in reversed(self.layers):
            handler = partial(layer, handler)
        return await handler(method, request)

    async def _send(
        self,
        method: str,
        request: BaseModel,
        response_cls: type[ResponseT],
    ) -> ResponseT:
        """Send one request over HTTP and decode the reply."""
        path = f"/{SERVICE_PATH}/{method}"

        try:
            response = await self._http.post(path, json=request.model_dump(mode="json"))
        except httpx.HTTPError as e:
            raise RpcTransportError(
                f"{type(e).__name__}: {e}" if str(e) else type(e).__name__,
                method=method,
            ) from e

        if not response.is_success:
            raise _status_error(method, response)

        try:
            return response_cls.model_validate_json(response.content)
        except ValidationError as e:
            raise RpcDecodeError(
                f"Invalid {response_cls.__name__} body: {e.error_count()} error(s)",
                method=method,
            ) from e


def _status_error(method: str, response: httpx.Response) -> RpcStatusError:
    """Convert a non-2xx reply into an RpcStatusError."""
    try:
        envelope = ErrorEnvelope.model_validate_json(response.content)
    except ValidationError:
        return RpcStatusError(
            response.text or response.reason_phrase,
            code=f"HTTP_{response.status_code}",
            method=method,
            status_code=response.status_code,
        )
    return RpcStatusError(
        envelope.error.message,
        code=envelope.error.code,
        method=method,
        status_code=response.status_code,
    )


class ItemServiceClientBuilder:
    """
    Builder for ItemServiceClient.

    Usage:
        client = (
            ItemServiceClientBuilder("volo-example")
            .layer_outer(LogLayer())
            .address(parse_address("127.0.0.1:10818"))
            .build()
        )
    """

    def __init__(self, service_name: str) -> None:
        self._service_name = service_name
        self._layers: list[Layer] = []
        self._address: Address | None = None
        self._timeout = DEFAULT_TIMEOUT
        self._transport: httpx.AsyncBaseTransport | None = None

    def layer_outer(self, layer: Layer) -> "ItemServiceClientBuilder":
        """Wrap the layers added so far with ``layer``."""
        self._layers.insert(0, layer)
        return self

    def layer_inner(self, layer: Layer) -> "ItemServiceClientBuilder":
        """Add ``layer`` inside the layers added so far, closest to the network."""
        self._layers.append(layer)
        return self

    def address(self, address: Address) -> "ItemServiceClientBuilder":
        self._address = address
        return self

    def timeout(self, seconds: float) -> "ItemServiceClientBuilder":
        self._timeout = seconds
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> "ItemServiceClientBuilder":
        self._transport = transport
        return self

    def build(self) -> ItemServiceClient:
        if self._address is None:
            raise ValueError("ItemServiceClientBuilder requires an address")
        return ItemServiceClient(
            service_name=self._service_name,
            address=self._address,
            layers=tuple(self._layers),
            timeout=self._timeout,
            transport=self._transport,
        )
