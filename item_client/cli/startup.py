"""
Startup Checks.

A fixed, ordered script of calls run once before the interactive shell
starts. The first step whose result differs from its expectation raises
StartupCheckError, and the shell never starts.

Default order:
    post("ddd")           result logged, not checked
    set("key", "value")   message == "OK"
    get("key")            value == "value"
    delete(["key"])       count == 1
    ping("ping N")        message echoed exactly, 100ms pause after each
    ping()                message.lower() == "pong"
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from item_client.client.calls import ItemCalls
from item_client.core.exceptions import StartupCheckError
from item_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_PING_COUNT = 3
DEFAULT_PING_PAUSE = 0.1


@dataclass(frozen=True)
class StartupStep:
    """
    One call plus the value it must produce.

    ``check`` projects the response onto the value compared with
    ``expected``. A step without ``check`` only logs its result.
    """

    name: str
    call: Callable[[ItemCalls], Awaitable[Any]]
    check: Callable[[Any], Any] | None = None
    expected: Any = None
    pause: float = 0.0


def _ping_step(index: int, pause: float) -> StartupStep:
    message = f"ping {index}"
    return StartupStep(
        name=f"ping {index}",
        call=lambda calls: calls.ping(message),
        check=lambda resp: resp.message,
        expected=message,
        pause=pause,
    )


def default_startup_steps(
    ping_count: int = DEFAULT_PING_COUNT,
    ping_pause: float = DEFAULT_PING_PAUSE,
) -> list[StartupStep]:
    """Build the standard smoke-test script."""
    steps = [
        StartupStep(name="post", call=lambda calls: calls.post("ddd")),
        StartupStep(
            name="set",
            call=lambda calls: calls.set("key", "value"),
            check=lambda resp: resp.message,
            expected="OK",
        ),
        StartupStep(
            name="get",
            call=lambda calls: calls.get("key"),
            check=lambda resp: resp.value,
            expected="value",
        ),
        StartupStep(
            name="delete",
            call=lambda calls: calls.delete(["key"]),
            check=lambda resp: resp.count,
            expected=1,
        ),
    ]
    steps.extend(_ping_step(i, ping_pause) for i in range(ping_count))
    steps.append(
        StartupStep(
            name="ping",
            call=lambda calls: calls.ping(None),
            check=lambda resp: resp.message.lower(),
            expected="pong",
        )
    )
    return steps


async def run_startup_sequence(
    calls: ItemCalls,
    steps: list[StartupStep] | None = None,
) -> None:
    """
    Execute startup steps in order.

    Args:
        calls: Call wrappers bound to the shared client handle.
        steps: Script to run. Defaults to default_startup_steps().

    Raises:
        StartupCheckError: On the first step whose result is unexpected.
    """
    if steps is None:
        steps = default_startup_steps()

    for step in steps:
        response = await step.call(calls)

        if step.pause:
            await asyncio.sleep(step.pause)

        log_with_source(logger, "startup", "info", "Startup step finished", step=step.name, response=repr(response))

        if step.check is None:
            continue

        actual = step.check(response)
        if actual != step.expected:
            log_with_source(
                logger,
                "startup",
                "error",
                "Startup check failed",
                step=step.name,
                expected=step.expected,
                actual=actual,
            )
            raise StartupCheckError(step.name, step.expected, actual)

    log_with_source(logger, "startup", "info", "Startup checks passed", steps=len(steps))
