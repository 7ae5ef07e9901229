"""Console logging for the ensure-version command."""

from __future__ import annotations

import logging

from ensure_version.config import LOG_LEVEL


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Catalog fetches go through requests/urllib3, which log every connection.
HTTP_LOGGERS = ("requests", "urllib3")

_LOGGING_CONFIGURED = False


def setup_logging(level: str | None = None) -> None:
    """Route upgrade advisories to the console; later calls only adjust the level."""
    global _LOGGING_CONFIGURED
    log_level = (level or LOG_LEVEL or "INFO").upper()

    if not _LOGGING_CONFIGURED:
        logging.basicConfig(level=log_level, format=LOG_FORMAT)
        _LOGGING_CONFIGURED = True
    elif level:
        logging.getLogger().setLevel(log_level)

    _quiet_http_loggers()


def _quiet_http_loggers() -> None:
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
