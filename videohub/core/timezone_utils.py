"""
Timezone utilities for the VideoHub service.

Timestamps are persisted in UTC; the configured display timezone is only used
for log output and human-readable formatting.
"""

import datetime
import pytz
import logging
from typing import Optional


class TimezoneManager:
    """Manages timezone-aware datetime operations"""

    def __init__(self, timezone_name: str = "UTC"):
        self.timezone_name = timezone_name
        self.timezone = pytz.timezone(timezone_name)
        self.logger = logging.getLogger(__name__)

    def now(self) -> datetime.datetime:
        """Get current time in the configured timezone"""
        return datetime.datetime.now(self.timezone)

    def utc_now(self) -> datetime.datetime:
        """Get current UTC time"""
        return datetime.datetime.now(pytz.UTC)

    def to_local(self, dt: datetime.datetime) -> datetime.datetime:
        """Convert datetime to local timezone"""
        if dt.tzinfo is None:
            # Assume UTC if no timezone info
            dt = pytz.UTC.localize(dt)
        return dt.astimezone(self.timezone)

    def to_utc(self, dt: datetime.datetime) -> datetime.datetime:
        """Convert datetime to UTC"""
        if dt.tzinfo is None:
            # MongoDB hands back naive datetimes that are already UTC
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)

    def format_timestamp(self, dt: Optional[datetime.datetime] = None,
                         include_timezone: bool = True) -> str:
        """Format datetime as timestamp string in the local timezone"""
        dt = self.to_local(dt) if dt is not None else self.now()

        if include_timezone:
            return dt.strftime("%Y-%m-%d %H:%M:%S %Z")
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def format_filename_timestamp(self, dt: Optional[datetime.datetime] = None) -> str:
        """Format datetime for use in object keys (no special characters)"""
        if dt is None:
            dt = self.utc_now()
        return self.to_utc(dt).strftime("%Y%m%d%H%M%S")


# UTC manager shared by the persistence layer
utc_tz = TimezoneManager("UTC")


def utc_now() -> datetime.datetime:
    """Get current UTC time"""
    return utc_tz.utc_now()


def ensure_utc(dt: datetime.datetime) -> datetime.datetime:
    """Attach or convert to UTC"""
    return utc_tz.to_utc(dt)


def format_filename_timestamp(dt: Optional[datetime.datetime] = None) -> str:
    """Format timestamp for object keys"""
    return utc_tz.format_filename_timestamp(dt)


def log_time_info(timezone_name: str, logger: Optional[logging.Logger] = None) -> None:
    """Log current time information for the configured timezone"""
    if logger is None:
        logger = logging.getLogger(__name__)

    manager = TimezoneManager(timezone_name)
    now = manager.now()
    logger.info(f"Current local time: {manager.format_timestamp(now)}")
    logger.info(f"Current UTC time: {manager.utc_now().isoformat()}")
    logger.info(f"Timezone: {now.tzname()} (UTC{now.strftime('%z')})")
