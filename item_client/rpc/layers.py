"""
Outbound Call Layers.

A layer wraps every remote call made through ItemServiceClient. It receives
the next handler in the chain, the remote method name and the request, and
must return the handler's result (or let its exception propagate).

Usage:
    client = (
        ItemServiceClientBuilder("volo-example")
        .layer_outer(LogLayer())
        .address(parse_address("127.0.0.1:10818"))
        .build()
    )
"""

import time
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from item_client.core.exceptions import RpcError
from item_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

Handler = Callable[[str, BaseModel], Awaitable[BaseModel]]
Layer = Callable[[Handler, str, BaseModel], Awaitable[BaseModel]]


class LogLayer:
    """
    Layer that logs every outgoing call.

    Logs:
    - Method name and request payload (debug)
    - Elapsed time and outcome
    - RPC errors (warning; the caller decides whether it is fatal)

    Requests and responses pass through unchanged.
    """

    def __init__(self, source: str = "rpc") -> None:
        self.source = source

    async def __call__(self, handler: Handler, method: str, request: BaseModel) -> Any:
        start_time = time.perf_counter()

        log_with_source(
            logger,
            self.source,
            "debug",
            "RPC call started",
            method=method,
            request=request.model_dump(),
        )

        try:
            response = await handler(method, request)
        except RpcError as e:
            log_with_source(
                logger,
                self.source,
                "warning",
                "RPC call failed",
                method=method,
                error_code=e.code,
                error=e.message,
                elapsed_ms=_elapsed_ms(start_time),
            )
            raise

        log_with_source(
            logger,
            self.source,
            "info",
            "RPC call completed",
            method=method,
            elapsed_ms=_elapsed_ms(start_time),
        )
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
