"""
Item Service RPC Layer.

Transport stub, wire schemas, address parsing and outbound call layers.
"""

from item_client.rpc.address import Address, parse_address
from item_client.rpc.layers import LogLayer
from item_client.rpc.stub import ItemServiceClient, ItemServiceClientBuilder

__all__ = [
    "Address",
    "ItemServiceClient",
    "ItemServiceClientBuilder",
    "LogLayer",
    "parse_address",
]
