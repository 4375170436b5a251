"""
Configuration Management Module
Loads and validates query builder settings from environment variables
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytz
from dotenv import load_dotenv

from src.utils.logger import get_logger

logger = get_logger(__name__)

# Load .env file
dotenv_path = Path(".env")
if dotenv_path.exists():
    logger.info(f"Loading environment from {dotenv_path.absolute()}")
    load_dotenv(dotenv_path)
else:
    logger.debug(f".env file not found at {dotenv_path.absolute()}")


@dataclass
class QueryConfig:
    """Query building configuration"""

    relation_separator: str = "."
    default_size: int = 10


@dataclass
class AppConfig:
    """Application-wide configuration"""

    query: QueryConfig
    timezone: str = "Asia/Tokyo"


def load_config() -> AppConfig:
    """
    Load settings from environment variables and return an AppConfig object

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    # Load query configuration
    separator = os.getenv("QUERY_RELATION_SEPARATOR", ".")
    if not separator:
        raise ValueError("QUERY_RELATION_SEPARATOR must not be empty")

    raw_size = os.getenv("QUERY_DEFAULT_SIZE", "10")
    try:
        default_size = int(raw_size)
    except ValueError:
        raise ValueError(f"QUERY_DEFAULT_SIZE must be an integer, got {raw_size!r}")
    if default_size < 0:
        raise ValueError(f"QUERY_DEFAULT_SIZE must not be negative, got {default_size}")

    # Timezone configuration
    timezone = os.getenv("TIMEZONE", "Asia/Tokyo")
    if timezone not in pytz.all_timezones_set:
        raise ValueError(f"TIMEZONE must be a known timezone name, got {timezone!r}")

    return AppConfig(
        query=QueryConfig(
            relation_separator=separator,
            default_size=default_size,
        ),
        timezone=timezone,
    )


# Global configuration object
config: Optional[AppConfig]
try:
    config = load_config()
    logger.debug(f"Configuration loaded successfully. Timezone: {config.timezone}")
except ValueError as e:
    logger.error(f"Failed to load configuration: {e}")
    config = None
