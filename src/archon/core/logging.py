"""
Logging configuration.

All package modules log through children of the "archon" logger. Hosts call
setup_logging() once at startup (usually via Settings.configure_logging());
calling it again reconfigures instead of stacking handlers.
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here, so a repeat call can swap them out
_OWNED_ATTR = "_archon_handler"


def _own(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    setattr(handler, _OWNED_ATTR, True)
    return handler


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure the archon logger with stderr and optional file output.

    Handlers from an earlier call are closed and replaced; handlers added
    by the host application are left alone.
    """
    logger = logging.getLogger("archon")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED_ATTR, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    logger.addHandler(_own(logging.StreamHandler(sys.stderr), formatter))

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _own(logging.FileHandler(log_file, encoding="utf-8"), formatter)
        )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger."""
    return logging.getLogger(f"archon.{name}")
