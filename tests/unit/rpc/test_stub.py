"""Unit tests for the item service RPC stub."""

import json

import httpx
import pytest

from item_client.core.exceptions import (
    RpcDecodeError,
    RpcError,
    RpcStatusError,
    RpcTransportError,
)
from item_client.rpc.address import Address
from item_client.rpc.schemas import (
    DeleteItemRequest,
    GetItemRequest,
    GetItemResponse,
    PingRequest,
    PingResponse,
)
from item_client.rpc.stub import ItemServiceClient, ItemServiceClientBuilder

ADDRESS = Address("127.0.0.1", 10818)


def _client(handler, layers=()) -> ItemServiceClient:
    return ItemServiceClient(
        "volo-example",
        ADDRESS,
        layers=tuple(layers),
        transport=httpx.MockTransport(handler),
    )


class TestItemServiceClient:
    """Tests for request encoding and response decoding."""

    @pytest.mark.asyncio
    async def test_posts_to_method_path(self) -> None:
        """Each call is a POST to /ItemService/<Method> with the JSON request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"value": "v"})

        client = _client(handler)
        response = await client.get_item(GetItemRequest(key="k"))
        await client.aclose()

        assert response == GetItemResponse(value="v")
        assert seen[0].method == "POST"
        assert seen[0].url == "http://127.0.0.1:10818/ItemService/GetItem"
        assert json.loads(seen[0].content) == {"key": "k"}

    @pytest.mark.asyncio
    async def test_sends_client_identifier_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"count": 0})

        client = _client(handler)
        await client.delete_item(DeleteItemRequest(keys=[]))
        await client.aclose()

        assert seen[0].headers["X-Client-ID"] == "volo-example"

    @pytest.mark.asyncio
    async def test_ping_without_message_sends_null(self) -> None:
        """A missing message is sent as null, not as an empty string."""
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"message": "pong"})

        client = _client(handler)
        await client.ping(PingRequest())
        await client.ping(PingRequest(message=""))
        await client.aclose()

        assert bodies == [{"message": None}, {"message": ""}]

    @pytest.mark.asyncio
    async def test_missing_response_fields_use_defaults(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={}))
        response = await client.ping(PingRequest(message="x"))
        await client.aclose()

        assert response == PingResponse(message="")

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = _client(handler)
        with pytest.raises(RpcTransportError) as exc_info:
            await client.get_item(GetItemRequest(key="k"))
        await client.aclose()

        assert exc_info.value.method == "GetItem"
        assert "Connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_status_error_with_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500,
                json={"success": False, "error": {"code": "STORE_DOWN", "message": "store unavailable"}},
            )

        client = _client(handler)
        with pytest.raises(RpcStatusError) as exc_info:
            await client.get_item(GetItemRequest(key="k"))
        await client.aclose()

        assert exc_info.value.code == "STORE_DOWN"
        assert exc_info.value.message == "store unavailable"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_status_error_without_envelope(self) -> None:
        client = _client(lambda request: httpx.Response(404, text="no such method"))
        with pytest.raises(RpcStatusError) as exc_info:
            await client.ping(PingRequest())
        await client.aclose()

        assert exc_info.value.code == "HTTP_404"
        assert exc_info.value.message == "no such method"

    @pytest.mark.asyncio
    async def test_decode_error(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"count": "many"}))
        with pytest.raises(RpcDecodeError):
            await client.delete_item(DeleteItemRequest(keys=["a"]))
        await client.aclose()

    @pytest.mark.asyncio
    async def test_errors_share_base_class(self) -> None:
        client = _client(lambda request: httpx.Response(200, content=b"not json"))
        with pytest.raises(RpcError):
            await client.get_item(GetItemRequest(key="k"))
        await client.aclose()


class TestLayers:
    """Tests for outbound layer ordering."""

    @pytest.mark.asyncio
    async def test_layers_wrap_outermost_first(self) -> None:
        order: list[str] = []

        def make_layer(name: str):
            async def layer(handler, method, request):
                order.append(f"{name}:in")
                response = await handler(method, request)
                order.append(f"{name}:out")
                return response
            return layer

        client = (
            ItemServiceClientBuilder("volo-example")
            .layer_outer(make_layer("inner"))
            .layer_outer(make_layer("outer"))
            .layer_inner(make_layer("innermost"))
            .address(ADDRESS)
            .transport(httpx.MockTransport(lambda request: httpx.Response(200, json={})))
            .build()
        )
        await client.ping(PingRequest())
        await client.aclose()

        assert order == [
            "outer:in", "inner:in", "innermost:in",
            "innermost:out", "inner:out", "outer:out",
        ]

    @pytest.mark.asyncio
    async def test_layer_sees_method_and_request(self) -> None:
        seen: list[tuple] = []

        async def layer(handler, method, request):
            seen.append((method, request))
            return await handler(method, request)

        client = _client(lambda request: httpx.Response(200, json={}), layers=[layer])
        await client.get_item(GetItemRequest(key="k"))
        await client.aclose()

        assert seen == [("GetItem", GetItemRequest(key="k"))]


class TestItemServiceClientBuilder:
    """Tests for the builder."""

    def test_build_requires_address(self) -> None:
        with pytest.raises(ValueError, match="address"):
            ItemServiceClientBuilder("volo-example").build()

    @pytest.mark.asyncio
    async def test_build_sets_fields(self) -> None:
        client = ItemServiceClientBuilder("svc").address(ADDRESS).timeout(2.5).build()

        assert client.service_name == "svc"
        assert client.address == ADDRESS
        assert client.layers == ()
        await client.aclose()
