"""
Design (logging_config.py)
- Purpose: Configure the "pingwatch" logger once at startup.
    console: stdout, INFO and up, short one-line format
    file: optional rotating log (config.LOG_TO_FILE / LOG_FILE), DEBUG and up, with thread names
          so per-target probe workers can be told apart
- Side effects: Replaces handlers on the "pingwatch" logger; may create ~/.pingwatch/logs.
- Thread-safety: Call before the monitor thread starts.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import LOG_DIR_NAME, LOG_FILE, LOG_LEVEL, LOG_TO_FILE

LOGGER_NAME = "pingwatch"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)-22s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def default_log_path() -> Path:
    return Path.home() / LOG_DIR_NAME / "logs" / "pingwatch.log"


def setup_logging(
    level: str = LOG_LEVEL,
    to_file: bool = LOG_TO_FILE,
    log_file: Optional[str] = LOG_FILE,
    console: bool = True,
) -> logging.Logger:
    """
    Purpose: (Re)build the handlers of the "pingwatch" logger.
    Inputs: level name, whether to also log to a rotating file (and where), console toggle.
    Outputs: The configured logger; it does not propagate to the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
        logger.addHandler(stream)

    if to_file:
        path = Path(log_file) if log_file else default_log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        logger.addHandler(rotating)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
