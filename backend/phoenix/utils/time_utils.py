from datetime import datetime
from typing import Any, Optional

from pytz import timezone
from pytz.tzinfo import BaseTzInfo

# Default service timezone (Morocco), overridable through APP_TIMEZONE
DEFAULT_TZ_NAME = "Africa/Casablanca"


def get_timezone(tz_name: Optional[str] = None) -> BaseTzInfo:
    """Resolve a named timezone, falling back to the default one."""
    return timezone(tz_name or DEFAULT_TZ_NAME)


def get_current_time(tz_name: Optional[str] = None) -> datetime:
    """Get current time in the service timezone."""
    return datetime.now(get_timezone(tz_name))


def get_today_str(tz_name: Optional[str] = None) -> str:
    """Get today's date string in the service timezone (YYYY-MM-DD)."""
    return get_current_time(tz_name).strftime("%Y-%m-%d")


def from_timestamp(timestamp: Any, tz_name: Optional[str] = None) -> datetime:
    """Convert an upstream unix timestamp to an aware datetime (now if missing or malformed)."""
    try:
        seconds = int(timestamp)
    except (TypeError, ValueError):
        return get_current_time(tz_name)
    if seconds <= 0:
        return get_current_time(tz_name)
    return datetime.fromtimestamp(seconds, get_timezone(tz_name))
