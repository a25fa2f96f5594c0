import time
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz

DateLike = Union[date, datetime]


class TimeHelper:
    """A static helper class for standardized calendar-day operations."""
    DEFAULT_TZ = pytz.utc

    @staticmethod
    def get_timezone(tz_name: Optional[str]) -> pytz.BaseTzInfo:
        """Resolves a zone name, falling back to UTC for unknown or empty names."""

        if not tz_name:
            return TimeHelper.DEFAULT_TZ

        try:
            return pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            return TimeHelper.DEFAULT_TZ

    @staticmethod
    def now(tz: pytz.BaseTzInfo = DEFAULT_TZ) -> datetime:
        return datetime.now(tz)

    @staticmethod
    def get_local_date(tz: pytz.BaseTzInfo = DEFAULT_TZ) -> date:
        return datetime.now(tz).date()

    @staticmethod
    def to_local_date(value: DateLike, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> date:
        """
        Truncates a date or datetime to its calendar day in ``tz``.
        Naive datetimes are taken to already be local to ``tz``.
        """

        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.date()
            return value.astimezone(tz).date()

        return value

    @staticmethod
    def start_of_day(day: date, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> datetime:
        return tz.localize(datetime(day.year, day.month, day.day))

    @staticmethod
    def start_of_day_ms(day: date, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> int:
        """Millisecond Unix timestamp of local midnight on ``day``."""

        local_midnight = TimeHelper.start_of_day(day, tz)
        return int(round(local_midnight.timestamp() * 1000))

    @staticmethod
    def days_between(later: DateLike, earlier: DateLike, tz: pytz.BaseTzInfo = DEFAULT_TZ) -> int:
        """Number of calendar days from ``earlier`` to ``later``; negative if ``later`` is before."""

        return (TimeHelper.to_local_date(later, tz) - TimeHelper.to_local_date(earlier, tz)).days

    @staticmethod
    def add_days(day: date, days: int) -> date:
        return day + timedelta(days=days)

    @staticmethod
    def get_current_timestamp() -> int:
        """Returns the current Unix timestamp as an integer."""
        return int(time.time())
