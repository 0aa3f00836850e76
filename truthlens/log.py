"""Logging configuration with Rich formatting.

setup_logging() is called once by the app factory; modules take their logger
from get_logger(__name__).
"""

import logging
from rich.logging import RichHandler


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)]
    )

    # requests logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str):
    return logging.getLogger(name)
