"""Logging setup shared by the command line tool and the GUI.

Modules log through ``logging.getLogger(__name__)`` so everything ends up
under the ``pybuild`` logger configured here.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "pybuild"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "pybuild.log"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 3


def setup_logging(debug: bool = False, log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the ``pybuild`` logger.

    A stderr handler always reports warnings (or everything when ``debug`` is
    set).  If ``log_dir`` is given, a rotating file handler additionally
    records debug output there, rotating at 10MB with 3 backups.

    Calling this again replaces the previously installed handlers.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path / LOG_FILE_NAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.info("Log file: %s", path / LOG_FILE_NAME)

    return logger
