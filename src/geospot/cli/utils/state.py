"""
CLI State Management

Global CLI state plus settings, logging and async helpers shared by commands.
"""

import asyncio
import logging
from typing import Any

import typer
from rich.logging import RichHandler

from geospot.api.core.exceptions import ConfigurationError
from geospot.api.core.settings import Settings, get_settings
from geospot.cli.utils.output import console, print_error


logger = logging.getLogger(__name__)


# Global state for CLI
state: dict[str, bool] = {
    "verbose": False,
}


def configure_logging(level: str) -> None:
    """
    Route log records to the console through Rich.

    Args:
        level: Log level name (e.g. "DEBUG", "WARNING")
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    logger.debug(f"Logging configured at {level.upper()}")


def load_cli_settings() -> Settings:
    """
    Get settings, exiting with an error message if they are invalid.

    Unless --verbose was given, logging follows the configured log level.

    Raises:
        typer.Exit: If the configuration is invalid
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not state["verbose"]:
        configure_logging(settings.log_level)
    return settings


def run_async(coro: Any) -> Any:
    """
    Run an async coroutine from a sync context.

    This is a helper function for CLI commands that need to call async
    geocoding and search functions.

    Args:
        coro: The coroutine to run

    Returns:
        The result of the coroutine
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    coro.close()
    raise RuntimeError("Cannot run async code from within an async context in CLI")
