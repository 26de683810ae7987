from __future__ import annotations

import logging
from typing import Sequence

from webservice.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PACKAGE_LOGGER = "webservice"


def resolve_level(level: str | None = None) -> int:
    name = (level or get_settings().log_level).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level: str | None = None, *, extra_handlers: Sequence[logging.Handler] | None = None) -> int:
    """Set up logging for applications embedding the request executor.

    The level defaults to ``WEBSERVICE_LOG_LEVEL`` and is applied to the
    ``webservice`` logger as well, so request and keystore messages follow it
    even when the root logger was configured elsewhere. ``extra_handlers``
    are attached to the ``webservice`` logger. Returns the resolved level.
    """

    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved)
    for handler in extra_handlers or ():
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return resolved


__all__ = ["LOG_FORMAT", "configure_logging", "resolve_level"]
