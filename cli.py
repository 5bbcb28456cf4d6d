#!/usr/bin/env python3
"""
Item Service Client CLI.

Connects to the item service, runs the startup checks, then opens the
interactive shell.

Usage:
    python cli.py
    python cli.py --address 127.0.0.1:10818 --verbose
    python cli.py --service-name volo-example --debug
    python cli.py --skip-startup-checks
"""

import asyncio
import sys
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from item_client.cli.shell import InteractiveShell
from item_client.cli.startup import default_startup_steps, run_startup_sequence
from item_client.client.calls import ItemCalls
from item_client.client.handle import ClientHandle, create_client_handle, get_client_handle
from item_client.core.config import get_app_config, get_client_target, validate_project_root
from item_client.core.exceptions import (
    ConfigurationError,
    InputStreamError,
    StartupCheckError,
)
from item_client.core.logging import get_logger, setup_logging


def _fail(logger, message: str, **context) -> None:
    """Report a fatal error and exit with status 1."""
    logger.error(message, **context)
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _build_handle(address: str | None, service_name: str | None) -> ClientHandle:
    """Use the cached configured handle unless a flag overrides the target."""
    if address is None and service_name is None:
        return get_client_handle()

    configured_name, configured_address, timeout = get_client_target()
    return create_client_handle(
        service_name or configured_name,
        address or configured_address,
        timeout=timeout,
    )


async def _run(handle: ClientHandle, startup: bool) -> None:
    """Run startup checks and the shell, then release the connection."""
    calls = ItemCalls(handle)
    try:
        if startup:
            startup_config = get_app_config().application.startup
            steps = default_startup_steps(
                ping_count=startup_config.ping_count,
                ping_pause=startup_config.ping_pause_ms / 1000,
            )
            await run_startup_sequence(calls, steps)

        await InteractiveShell(calls).run()
    finally:
        await handle.aclose()


@click.command()
@click.option(
    "--address", "-a",
    default=None,
    help="Item service address (host:port). Overrides config.",
)
@click.option(
    "--service-name",
    default=None,
    help="Client identifier sent to the service. Overrides config.",
)
@click.option(
    "--skip-startup-checks",
    is_flag=True,
    help="Open the shell without running the startup checks.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(
    address: str | None,
    service_name: str | None,
    skip_startup_checks: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Item Service Client CLI.

    Runs the startup checks against the item service, then reads
    commands from stdin until 'exit'.

    \b
    Commands:
        get <key>
        set <key> <value>
        delete <key>...
        ping [message...]
        help
        exit
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    try:
        startup = get_app_config().application.startup.enabled and not skip_startup_checks
        handle = _build_handle(address, service_name)
    except ConfigurationError as e:
        _fail(logger, e.message, code=e.code)
    except (FileNotFoundError, ValueError) as e:
        _fail(logger, f"Could not load configuration: {e}")

    logger.debug("CLI invoked", address=str(handle.address), startup=startup)

    try:
        asyncio.run(_run(handle, startup))
    except StartupCheckError as e:
        _fail(logger, e.message, step=e.step)
    except InputStreamError as e:
        _fail(logger, e.message)


if __name__ == "__main__":
    main()
