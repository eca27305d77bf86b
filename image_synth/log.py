"""Logging setup shared by the CLI and the web server."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Route root logging through a rich handler.

    Args:
        level: Logging level name.
        console: Console to write to; stderr if not provided.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # The SDK's HTTP client is chatty at INFO
    logging.getLogger("httpx").setLevel(max(logging.getLevelName(level), logging.WARNING))


__all__ = ["configure_logging"]
