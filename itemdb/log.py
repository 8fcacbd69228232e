"""Logging setup for the command-line tool and the HTTP server."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

LOGGER_NAMES = ("itemdb", "catalog_server")


def setup_logging(level: str = "INFO") -> None:
    """Attach one stream handler to each of the project's root loggers.

    Safe to call more than once; later calls only change the level.
    """
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level.upper())

        if not any(getattr(h, "_itemdb", False) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            handler._itemdb = True
            logger.addHandler(handler)
