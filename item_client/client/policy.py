"""
Call Error Policies.

Decide what a call wrapper does when the remote call raises an RpcError.

    FailSoftPolicy - log the error and return a default response (interactive use)
    FailFastPolicy - let the error propagate (tests, scripted use)

Errors that are not RpcError always propagate.
"""

from typing import Awaitable, Callable, Protocol, TypeVar

from item_client.core.exceptions import RpcError
from item_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

T = TypeVar("T")


class CallPolicy(Protocol):
    async def run(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        default: Callable[[], T],
    ) -> T: ...


class FailSoftPolicy:
    """
    Convert RPC errors into default responses.

    Callers never see an exception. They detect failure from the response
    contents (empty value, zero count).
    """

    async def run(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        default: Callable[[], T],
    ) -> T:
        try:
            return await call()
        except RpcError as e:
            log_with_source(
                logger,
                "rpc",
                "error",
                "RPC call failed",
                operation=operation,
                method=e.method,
                error_code=e.code,
                error=e.message,
                exc_info=e,
            )
            return default()


class FailFastPolicy:
    """Propagate RPC errors unchanged."""

    async def run(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        default: Callable[[], T],
    ) -> T:
        return await call()
