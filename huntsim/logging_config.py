"""Logging setup for hosts that drive the simulation headless.

Library modules only call ``logging.getLogger(__name__)``; nothing under
``huntsim`` installs handlers on import. A host calls :func:`configure_logging`
once at startup.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "HUNTSIM_LOG_LEVEL"
PACKAGE_LOGGER = "huntsim"


def _resolve_level(level: str | None) -> str:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or "INFO"
    return level.upper()


def configure_logging(
    *,
    level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Install a root handler and set the ``huntsim`` logger level.

    The level comes from ``level`` when given, else from the
    ``HUNTSIM_LOG_LEVEL`` environment variable, else INFO. Names in
    ``extra_loggers`` (typically the host's own loggers) get the same level.
    """
    resolved = _resolve_level(level)
    logging.basicConfig(level=resolved, format=format, datefmt=datefmt)

    for name in (PACKAGE_LOGGER, *(extra_loggers or ())):
        logging.getLogger(name).setLevel(resolved)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.debug("Log level set to %s", resolved)
    return package_logger
