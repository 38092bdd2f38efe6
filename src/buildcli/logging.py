"""Logging setup for buildcli.

Update-flow messages go through the ``buildcli`` logger hierarchy and are
rendered on stderr by a Rich handler, independently of the banner which is
written to plain stdout.

A record may carry a ``style`` extra (any Rich style string) to highlight
the whole line::

    logger.warning("ATTENTION: ...", extra={"style": "bold yellow"})

When Rich is not installed a plain :class:`logging.StreamHandler` is used
and the style is ignored.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from buildcli.config import LoggingConfig

ROOT_LOGGER_NAME = "buildcli"

DEFAULT_LOG_FORMAT = "%(levelname)s %(message)s"


def _build_rich_handler() -> logging.Handler:
    """Return a Rich handler that applies per-record ``style`` extras."""
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.text import Text

    class StyledRichHandler(RichHandler):
        def render_message(self, record: logging.LogRecord, message: str) -> Any:
            rendered = super().render_message(record, message)
            style = getattr(record, "style", None)
            if style and isinstance(rendered, Text):
                rendered.stylize(style)
            return rendered

    return StyledRichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    level: str = "INFO",
) -> logging.Logger:
    """Configure the ``buildcli`` logger and return it.

    Args:
        config: Optional logging section of the loaded configuration.
            When given, its ``level`` overrides *level*.
        level: Log level name used when no config is provided.

    Returns:
        The package root logger.
    """
    if config is not None:
        level = config.level
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler: logging.Handler
    try:
        handler = _build_rich_handler()
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the ``buildcli`` logger for *name*.

    The ``buildcli.`` prefix is added when missing so that every module
    shares the configuration installed by :func:`setup_logging`.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
