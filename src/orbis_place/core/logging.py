"""Logging setup for the API process."""

from __future__ import annotations

import logging

from orbis_place.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the ``orbis_place`` logger.

    Calling this more than once replaces the handler rather than stacking them.
    """
    logger = logging.getLogger("orbis_place")
    logger.setLevel((level or settings.log_level).upper())
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
