"""
log_setup.py

Logging setup for programs that embed the table widget. The widget modules
only create loggers; handlers are attached here. Output goes to a rotating
file because console handlers would write over the curses screen.
"""

import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    log_file: str,
    level: int = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> logging.Handler:
    """
    Attach a rotating file handler to the root logger.

    Args:
        log_file (str): Path of the log file.
        level (int): Minimum level written to the file.
        max_bytes (int): Max size in bytes before rotating.
        backup_count (int): Number of rotated files to keep.

    Returns:
        logging.Handler: the handler that was added.
    """
    root = logging.getLogger()
    root.setLevel(level)

    handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    return handler
