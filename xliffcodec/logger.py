"""
Centralized Logging Module for the XLIFF codec.

Provides consistent logging across all modules with output to:
- Console (INFO and above)
- File (only when XLIFFCODEC_LOG_DIR is set, e.g. for batch runs)
"""
import logging
import os
import sys

LOG_DIR_ENV = "XLIFFCODEC_LOG_DIR"
LOG_FILE_NAME = "xliffcodec.log"

# Formatter with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_file() -> str:
    """Returns the log file path, or an empty string when file logging is off."""
    log_dir = os.environ.get(LOG_DIR_ENV, "")
    if not log_dir:
        return ""
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, LOG_FILE_NAME)


def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger instance.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        A logging.Logger instance configured for console (and optional file) output.
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    log_file = get_log_file()
    if log_file:
        # File Handler - captures everything (DEBUG and above)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    # Console Handler - only INFO and above; stderr keeps stdout clean for CLI output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    return logger
