"""
Call Wrappers.

One coroutine per remote operation. Each builds the request from plain
arguments, invokes the shared client handle and hands the outcome to the
configured CallPolicy.

Usage:
    calls = ItemCalls(get_client_handle())
    await calls.set("a", "1")
    response = await calls.get("a")   # GetItemResponse(value='1')
"""

from item_client.client.handle import ClientHandle
from item_client.client.policy import CallPolicy, FailSoftPolicy
from item_client.rpc.schemas import (
    DeleteItemRequest,
    DeleteItemResponse,
    GetItemRequest,
    GetItemResponse,
    Kv,
    PingRequest,
    PingResponse,
    PostItemRequest,
    PostItemResponse,
    SetItemRequest,
    SetItemResponse,
)


def _none() -> None:
    return None


class ItemCalls:
    """
    Call wrappers bound to one client handle.

    With the default FailSoftPolicy no method raises RpcError. A failed call
    is logged and answered with the zero-valued response. ``post`` is the
    exception: it answers None because nobody relies on its result.
    """

    def __init__(self, handle: ClientHandle, policy: CallPolicy | None = None) -> None:
        self.handle = handle
        self.policy: CallPolicy = policy if policy is not None else FailSoftPolicy()

    async def get(self, key: str) -> GetItemResponse:
        request = GetItemRequest(key=key)
        return await self.policy.run(
            "get", lambda: self.handle.get_item(request), GetItemResponse,
        )

    async def set(self, key: str, value: str) -> SetItemResponse:
        request = SetItemRequest(kv=Kv(key=key, value=value))
        return await self.policy.run(
            "set", lambda: self.handle.set_item(request), SetItemResponse,
        )

    async def delete(self, keys: list[str]) -> DeleteItemResponse:
        request = DeleteItemRequest(keys=list(keys))
        return await self.policy.run(
            "delete", lambda: self.handle.delete_item(request), DeleteItemResponse,
        )

    async def ping(self, message: str | None = None) -> PingResponse:
        request = PingRequest(message=message)
        return await self.policy.run(
            "ping", lambda: self.handle.ping(request), PingResponse,
        )

    async def post(self, name: str) -> PostItemResponse | None:
        request = PostItemRequest(name=name)
        return await self.policy.run(
            "post", lambda: self.handle.post_item(request), _none,
        )
