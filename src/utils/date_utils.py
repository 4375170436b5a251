"""
Date Utility Module
Provides timezone-aware formatting of dates used as query values
"""

import datetime
from typing import Any, Optional

import pytz

from src.utils.config import config
from src.utils.logger import get_logger

logger = get_logger(__name__)

# Timezone configuration
DEFAULT_TIMEZONE = pytz.timezone(config.timezone if config else "Asia/Tokyo")


def localize(dt: datetime.datetime, timezone: Optional[pytz.BaseTzInfo] = None) -> datetime.datetime:
    """
    Attach a timezone to a naive datetime

    Aware datetimes are returned unchanged.

    Args:
        dt: Datetime object
        timezone: Timezone (default timezone if not specified)

    Returns:
        datetime.datetime: Datetime object with timezone
    """
    if dt.tzinfo is not None:
        return dt
    tz = timezone or DEFAULT_TIMEZONE
    return tz.localize(dt)


def format_datetime(value: Any) -> Any:
    """
    Convert a datetime or date to an ISO 8601 string

    Values of any other type pass through untouched.
    """
    if isinstance(value, datetime.datetime):
        return localize(value).isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    return value
