from datetime import date, datetime

import pytz

from kirakira.helpers import StreakHelper


def test_first_unlock_is_always_allowed():
    assert StreakHelper.can_unlock_todays_element(None, date(2024, 1, 1))


def test_same_day_is_refused():
    assert not StreakHelper.can_unlock_todays_element(date(2024, 1, 1), datetime(2024, 1, 1, 23, 59))


def test_next_day_is_allowed():
    assert StreakHelper.can_unlock_todays_element(date(2024, 1, 1), date(2024, 1, 2))


def test_calendar_day_follows_timezone():
    moscow = pytz.timezone("Europe/Moscow")
    late_utc_evening = datetime(2024, 1, 1, 22, 0, tzinfo=pytz.utc)

    assert not StreakHelper.can_unlock_todays_element(date(2024, 1, 1), late_utc_evening, pytz.utc)
    assert StreakHelper.can_unlock_todays_element(date(2024, 1, 1), late_utc_evening, moscow)


def test_empty_history():
    streak = StreakHelper.calculate_streak([], date(2024, 1, 1))

    assert (streak.current, streak.longest, streak.last_unlock) == (0, 0, None)


def test_current_and_longest_streak():
    today = date(2024, 3, 10)
    dates = [date(2024, 3, 10), date(2024, 3, 9), date(2024, 3, 8), date(2024, 3, 5)]

    streak = StreakHelper.calculate_streak(dates, today)

    assert (streak.current, streak.longest) == (3, 3)
    assert streak.last_unlock == date(2024, 3, 10)


def test_streak_survives_until_tomorrow():
    dates = [date(2024, 3, 9), date(2024, 3, 8)]
    assert StreakHelper.calculate_streak(dates, date(2024, 3, 10)).current == 2


def test_streak_broken_after_a_missed_day():
    dates = [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3), date(2024, 3, 4), date(2024, 3, 8)]

    streak = StreakHelper.calculate_streak(dates, date(2024, 3, 10))

    assert streak.current == 0
    assert streak.longest == 4


def test_unsorted_input():
    dates = [date(2024, 3, 8), date(2024, 3, 10), date(2024, 3, 9)]
    assert StreakHelper.calculate_streak(dates, date(2024, 3, 10)).current == 3


def test_streak_bounds():
    dates = [date(2024, 1, d) for d in (1, 2, 4, 5, 6, 9, 10)]
    streak = StreakHelper.calculate_streak(dates, date(2024, 1, 10))

    assert 0 <= streak.current <= streak.longest <= len(dates)
    assert (streak.current, streak.longest) == (2, 3)


def test_next_unlock_time_is_next_local_midnight():
    next_unlock = StreakHelper.get_next_unlock_time(date(2024, 1, 1), pytz.utc)
    assert next_unlock == datetime(2024, 1, 2, tzinfo=pytz.utc)


def test_time_until_next_unlock():
    assert StreakHelper.get_time_until_next_unlock(date(2024, 1, 1), datetime(2024, 1, 1, 22, 30)) == (1, 30, False)
    assert StreakHelper.get_time_until_next_unlock(date(2024, 1, 1), datetime(2024, 1, 2, 0, 0)) == (0, 0, True)
    assert StreakHelper.get_time_until_next_unlock(None) == (0, 0, True)
