"""
Rolling average module.

Slides a fixed-size window over the daily totals, in date order, and
averages each window. Windows are made of days present in the map: a day
without any events is not filled in with zeros.
"""

from datetime import date, timedelta
from typing import Iterable

from babyreport.models import DailySum, WindowMean


WINDOW_DAYS = 7


def sum_window(sums: Iterable[DailySum]) -> DailySum:
    """
    Add up every field of the given daily sums.
    """
    total = DailySum()
    for s in sums:
        total.total_diapers += s.total_diapers
        total.poo_diapers += s.poo_diapers
        total.bottle_oz += s.bottle_oz
        total.bottle_sessions += s.bottle_sessions
        total.breast_duration += s.breast_duration
        total.pumping_oz += s.pumping_oz
        total.tummy_time_duration += s.tummy_time_duration
        total.max_sleep_duration += s.max_sleep_duration
        total.total_sleep_duration += s.total_sleep_duration
    return total


def _mean_duration(total: timedelta, n: int) -> timedelta:
    return timedelta(seconds=int(total.total_seconds()) // n)


def mean_of(total: DailySum, n: int) -> DailySum:
    """
    Divide a summed window by its size. Counts use integer division,
    volumes real division, durations whole seconds.
    """
    return DailySum(
        total_diapers=total.total_diapers // n,
        poo_diapers=total.poo_diapers // n,
        bottle_oz=total.bottle_oz / n,
        bottle_sessions=total.bottle_sessions // n,
        breast_duration=_mean_duration(total.breast_duration, n),
        pumping_oz=total.pumping_oz / n,
        tummy_time_duration=_mean_duration(total.tummy_time_duration, n),
        max_sleep_duration=_mean_duration(total.max_sleep_duration, n),
        total_sleep_duration=_mean_duration(total.total_sleep_duration, n),
    )


def rolling_means(daily: dict[date, DailySum], window_days: int = WINDOW_DAYS) -> list[WindowMean]:
    """
    Average every run of window_days consecutive entries, oldest first.
    Returns an empty list when there are fewer entries than window_days.
    """
    if window_days < 1:
        raise ValueError(f"Window size must be at least 1 day, got {window_days}")

    days = sorted(daily.keys())
    windows = []
    for end in range(window_days, len(days) + 1):
        window = days[end - window_days:end]
        total = sum_window(daily[d] for d in window)
        windows.append(WindowMean(end_date=window[-1], mean=mean_of(total, window_days)))
    return windows
