"""Logging setup: structlog rendering on top of stdlib logging."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: int | str = "WARNING", *, use_colors: bool | None = None) -> None:
    """Send structlog events through a stderr handler at the given level.

    Args:
        level: Logging level name or number
        use_colors: Colorize console output (default: only when stderr is a TTY)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    if use_colors is None:
        use_colors = sys.stderr.isatty()

    logging.basicConfig(
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
        format="%(message)s",  # structlog renders the line
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=use_colors),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the logger for a module, namespaced under 'userjs_updater'."""
    if not name.startswith("userjs_updater"):
        name = f"userjs_updater.{name}"
    return structlog.get_logger(name)
