"""Console logging setup for applications embedding the world.

The library itself only creates module loggers; call :func:`setup_logging`
once from the application entry point.
"""

import logging
from logging import StreamHandler

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a single console handler to the root logger.

    Safe to call multiple times: the handler is installed once and later calls
    only adjust the level.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    if getattr(logger, "_cache_universe_handler_installed", False):
        for handler in logger.handlers:
            if getattr(handler, "_cache_universe", False):
                handler.setLevel(level)
        return logger

    console_handler = StreamHandler()
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    console_handler.setLevel(level)
    console_handler._cache_universe = True  # type: ignore[attr-defined]
    logger.addHandler(console_handler)

    logger._cache_universe_handler_installed = True  # type: ignore[attr-defined]
    logger.debug("Logging initialized.")
    return logger
