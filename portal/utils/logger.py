"""
Logging configuration
"""
import logging
import sys
from portal.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    Setup logger with standard format

    Args:
        name: Logger name (usually __name__)
        level: Log level name; defaults to the configured LOG_LEVEL

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level = level or get_settings().log_level
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Console handler (only once per logger)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for a module"""
    return setup_logger(name)
