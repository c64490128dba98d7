"""Centralized logging configuration for Scriptorium."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "SCRIPTORIUM_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)

if TYPE_CHECKING:

    class _ManagedRichHandler(RichHandler):
        _scriptorium_managed: bool

else:
    _ManagedRichHandler = RichHandler


def _resolve_level(log_level: str | None = None) -> int:
    """Return the logging level from the argument or the environment."""
    level_name = (log_level or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(log_level: str | None = None) -> None:
    """Configure logging once with a Rich handler.

    Calling this repeatedly reuses the handler installed by the first call
    instead of stacking new ones on the root logger.
    """
    root_logger = logging.getLogger()
    level = _resolve_level(log_level)

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_scriptorium_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._scriptorium_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(level)

    # Quieten down noisy libraries
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
    logging.captureWarnings(True)
