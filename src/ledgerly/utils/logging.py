"""Logging setup shared by the command line entry points."""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every statement at INFO
NOISY_LOGGERS = ["sqlalchemy.engine"]


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the root logger once and return the ``ledgerly`` logger.

    Args:
        level: Logging level name ("INFO") or number

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logging.getLogger("ledgerly")
