"""Shared logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Attach a terse stream handler to the root logger.

    Library modules only create ``logging.getLogger(__name__)`` loggers; the host
    process decides whether to call this. ``force=True`` replaces handlers that
    are already installed.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
