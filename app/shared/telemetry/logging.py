"""Process-wide logging: one stdout handler, level from DEBUG."""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Every Snipe-IT page fetch would otherwise log an INFO line.
_CHATTY_LIBRARIES = ("httpx", "httpcore")


def setup_logging() -> None:
    """Install the stdout handler and quieten HTTP client libraries.

    Calling it again (tests build several apps) replaces the handler
    instead of stacking another one.
    """
    debug = get_settings().debug
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(level if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
