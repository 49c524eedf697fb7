"""
Logging configuration for the combat engine.

Everything the engine reports goes through the ``pubfight`` logger. The
terminal driver attaches a rich handler on stderr, so log lines never mix
with the fight output printed on stdout.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("pubfight")


def setup_logging(level: int = logging.INFO) -> None:
    """
    Routes the engine logs to a rich handler on stderr.

    Args:
        level (int): Lowest level that gets printed. Defaults to logging.INFO.

    """
    handler = RichHandler(
        console=Console(width=120, stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    details = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{details}]"


def log_error(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs a broken catalog entry or a rejected fight setup.

    Args:
        message (str): What went wrong.
        context (dict[str, Any] | None): Ids of the involved entries.

    """
    logger.error(_with_context(message, context))


def log_warning(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs something the engine tolerated but probably should not see."""
    logger.warning(_with_context(message, context))


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs a fight milestone: creation, end, outcome."""
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Logs a single step of a fight (spins, hits, passives, turns).

    The message is only formatted when debug output is enabled, since the
    wheel alone logs once per spin.

    Args:
        message (str): The step.
        context (dict[str, Any] | None): Values worth seeing next to it.

    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(_with_context(message, context))
