"""
Item Service Client.

Shared client handle, call wrappers and RPC error policies.
"""

from item_client.client.calls import ItemCalls
from item_client.client.handle import ClientHandle, create_client_handle, get_client_handle
from item_client.client.policy import CallPolicy, FailFastPolicy, FailSoftPolicy

__all__ = [
    "CallPolicy",
    "ClientHandle",
    "FailFastPolicy",
    "FailSoftPolicy",
    "ItemCalls",
    "create_client_handle",
    "get_client_handle",
]
