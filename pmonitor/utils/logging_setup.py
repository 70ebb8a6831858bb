"""Logging configuration for p-monitor.

Diagnostics go to the console and, when a file is configured, to a rotating
log file. The log is an operator aid only; metric errors are also carried on
the snapshot itself.
"""

# Standard library imports
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(module)s: %(message)s"
LOG_DATEFMT = "%m/%d/%Y %H:%M:%S"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per file
LOG_BACKUP_COUNT = 3


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root logger.

    Calling this more than once only updates the level; handlers are added
    the first time.

    Args:
        level: Log level name (e.g., "INFO", "DEBUG").
        log_file: Optional path of a rotating log file.

    Returns:
        The configured root logger.

    Example:
        >>> logger = setup_logging("DEBUG", "data/pmonitor.log")
        >>> logger.info("Starting p-monitor...")
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if getattr(logger, "_pmonitor_configured", False):
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotating file handler
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._pmonitor_configured = True
    return logger
