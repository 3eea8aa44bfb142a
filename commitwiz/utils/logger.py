"""Loguru setup for the commit wizard.

Level and optional log file come from :class:`commitwiz.config.Settings`
(``COMMITWIZ_LOG_LEVEL``, ``COMMITWIZ_LOG_FILE``). The default level is
WARNING because the prompts share the terminal with stderr.
"""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from commitwiz.config import Settings, get_settings


def configure_logger(
    extra_sink: Optional[str] = None,
    level: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Replace loguru's sinks with the wizard's stderr sink and an optional file sink."""

    settings = settings or get_settings()
    level = (level or settings.log_level).upper()
    extra_sink = extra_sink or settings.log_file

    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True)
    if extra_sink:
        logger.add(extra_sink, level=level, rotation="1 week", enqueue=True)


configure_logger()

__all__ = ["logger", "configure_logger"]
