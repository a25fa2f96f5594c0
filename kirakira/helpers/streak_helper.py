from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

import pytz

from ..models import StreakInfo
from .time_helper import DateLike, TimeHelper


class StreakHelper:
    """Daily unlock eligibility and streak bookkeeping. All comparisons are by calendar day."""

    @staticmethod
    def can_unlock_todays_element(
            last_unlock_date: Optional[DateLike],
            current_date: Optional[DateLike] = None,
            tz: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ,
    ) -> bool:
        """True when nothing was unlocked yet, or the last unlock was on an earlier calendar day."""

        if last_unlock_date is None:
            return True

        if current_date is None:
            current_date = TimeHelper.now(tz)

        today = TimeHelper.to_local_date(current_date, tz)
        last_unlock = TimeHelper.to_local_date(last_unlock_date, tz)
        return today > last_unlock

    @staticmethod
    def calculate_streak(
            unlock_dates: Sequence[DateLike],
            today: Optional[DateLike] = None,
            tz: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ,
    ) -> StreakInfo:
        """
        The current streak counts consecutive days back from the latest unlock, but only while that
        unlock was today or yesterday. The longest streak is the longest run of consecutive days.
        """

        if not unlock_dates:
            return StreakInfo(current=0, longest=0, last_unlock=None)

        if today is None:
            today = TimeHelper.now(tz)

        days = sorted((TimeHelper.to_local_date(d, tz) for d in unlock_dates), reverse=True)
        today_day = TimeHelper.to_local_date(today, tz)

        current_streak = 0
        if (today_day - days[0]).days <= 1:
            current_streak = 1
            for newer, older in zip(days, days[1:]):
                if (newer - older).days == 1:
                    current_streak += 1
                else:
                    break

        longest_streak = 0
        run = 1
        for newer, older in zip(days, days[1:]):
            if (newer - older).days == 1:
                run += 1
                longest_streak = max(longest_streak, run)
            else:
                run = 1
        longest_streak = max(longest_streak, run)

        return StreakInfo(current=current_streak, longest=longest_streak, last_unlock=days[0])

    @staticmethod
    def get_next_unlock_time(last_unlock_date: DateLike, tz: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ) -> datetime:
        """Local midnight after the last unlock day, when the next element becomes available."""

        last_unlock = TimeHelper.to_local_date(last_unlock_date, tz)
        return TimeHelper.start_of_day(last_unlock + timedelta(days=1), tz)

    @staticmethod
    def get_time_until_next_unlock(
            last_unlock_date: Optional[DateLike],
            now: Optional[datetime] = None,
            tz: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ,
    ) -> Tuple[int, int, bool]:
        """Returns ``(hours, minutes, can_unlock)`` until the next unlock."""

        if last_unlock_date is None:
            return 0, 0, True

        if now is None:
            now = TimeHelper.now(tz)
        elif now.tzinfo is None:
            now = tz.localize(now)

        next_unlock = StreakHelper.get_next_unlock_time(last_unlock_date, tz)
        if now >= next_unlock:
            return 0, 0, True

        remaining_seconds = int((next_unlock - now).total_seconds())
        hours, remainder = divmod(remaining_seconds, 3600)
        return hours, remainder // 60, False
