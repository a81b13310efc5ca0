"""Logging setup. Call setup_logging() once at startup."""

from __future__ import annotations

import logging


def setup_logging(debug_mode: bool = False, log_level: int | None = None) -> None:
    """Configure the root logger.

    Args:
        debug_mode: If True, log at DEBUG (unless log_level is given).
        log_level: Explicit level, overrides debug_mode.
    """
    if log_level is None:
        log_level = logging.DEBUG if debug_mode else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger("haven").debug(
        f"Logging configured with level: {logging.getLevelName(log_level)}"
    )
