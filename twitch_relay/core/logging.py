"""Logging configuration"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from twitch_relay.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging with Rich handler"""

    level = getattr(logging, settings.log_level, logging.INFO)

    # Test runs auto-detect the terminal
    console = Console(
        force_terminal=None if settings.is_test else True,
        width=120,
    )

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        tracebacks_width=120,
    )

    rich_handler.setFormatter(
        logging.Formatter(fmt="%(message)s", datefmt="[%Y-%m-%d %H:%M:%S]")
    )

    # force=True: uvicorn configures the root logger first
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[rich_handler],
        force=True,
    )

    # Quieter uvicorn access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging: {settings.log_level} | Env: {settings.environment}")
