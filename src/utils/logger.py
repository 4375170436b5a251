"""
Logging Configuration Module
Provides consistent loguru logging for the query builder package
"""
import os
import sys
from pathlib import Path

from loguru import logger

# Log level, retention and directory come from environment variables
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_RETENTION = os.getenv("LOG_RETENTION", "7 days")
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

LOG_DIR.mkdir(parents=True, exist_ok=True)

logger.remove()  # drop loguru's default handler

# stderr
logger.add(
    sys.stderr,
    level=LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
)

# Application log file
logger.add(
    LOG_DIR / "app.log",
    rotation="1 day",
    retention=LOG_RETENTION,
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    encoding="utf-8",
)

# Errors are also written to their own file
logger.add(
    LOG_DIR / "error.log",
    rotation="1 day",
    retention=LOG_RETENTION,
    level="ERROR",
    format=LOG_FORMAT,
    encoding="utf-8",
)


def get_logger(name):
    """
    Get a logger bound to a name

    Args:
        name (str): Logger name (usually the module name)

    Returns:
        loguru.Logger: Configured logger instance
    """
    return logger.bind(name=name)
