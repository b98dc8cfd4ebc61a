"""
Reporting and output functions module.

This module handles all display and output operations:
- Formatting durations and daily sums
- Printing the rolling average timeline
- Printing the per-day totals
- Generating JSON output
- Saving JSON to file
"""

import json
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from babyreport.models import DailySum, WindowMean


def format_duration(duration: timedelta) -> str:
    """Compact duration such as '1h5m0s', '12m3s' or '40s'."""
    secs = int(duration.total_seconds())
    hours = secs // 3600
    secs -= hours * 3600
    minutes = secs // 60
    secs -= minutes * 60

    text = ''
    if hours > 0:
        text += f"{hours}h"
    if minutes > 0 or hours > 0:
        text += f"{minutes}m"
    return text + f"{secs}s"


def format_sum(s: DailySum) -> str:
    """
    Render the nine report lines for one sum, each ending with a newline.
    """
    per_session = s.ounces_per_session
    per_session_text = f"{per_session:.1f} oz" if per_session is not None else "n/a"

    return (
        f"Total Diapers: {s.total_diapers}\n"
        f"Poo Diapers: {s.poo_diapers}\n"
        f"Bottle: {s.bottle_oz:.1f} oz ({per_session_text} per session)\n"
        f"Bottle Sessions: {s.bottle_sessions}\n"
        f"Breast Feeding: {format_duration(s.breast_duration)}\n"
        f"Pumping: {s.pumping_oz:.1f} oz\n"
        f"Tummy Time: {format_duration(s.tummy_time_duration)}\n"
        f"Max Sleep: {format_duration(s.max_sleep_duration)}\n"
        f"Total Sleep: {format_duration(s.total_sleep_duration)}\n"
    )


def format_window(window: WindowMean) -> str:
    return f"{window.end_date.isoformat()}:\n{format_sum(window.mean)}"


def print_windows(windows: list[WindowMean]):
    """Print one block per window, in order."""
    for window in windows:
        print(format_window(window))


def print_daily_summaries(daily: dict[date, DailySum]):
    """Print the totals of every day in the log."""
    for day in sorted(daily.keys()):
        print(f"{day.isoformat()}:\n{format_sum(daily[day])}")


def sum_to_dict(s: DailySum) -> dict:
    per_session = s.ounces_per_session
    return {
        "total_diapers": s.total_diapers,
        "poo_diapers": s.poo_diapers,
        "bottle_oz": round(s.bottle_oz, 2),
        "bottle_oz_per_session": round(per_session, 2) if per_session is not None else None,
        "bottle_sessions": s.bottle_sessions,
        "breast_seconds": int(s.breast_duration.total_seconds()),
        "pumping_oz": round(s.pumping_oz, 2),
        "tummy_time_seconds": int(s.tummy_time_duration.total_seconds()),
        "max_sleep_seconds": int(s.max_sleep_duration.total_seconds()),
        "total_sleep_seconds": int(s.total_sleep_duration.total_seconds()),
    }


def generate_json_output(
    daily: dict[date, DailySum],
    windows: list[WindowMean],
    window_days: int
) -> dict:
    """
    Generate a JSON-serializable report with the daily totals and the rolling means.
    """
    days = sorted(daily.keys())

    output = {
        "metadata": {
            "generated_at": datetime.now(ZoneInfo('UTC')).isoformat(),
            "total_days": len(days),
            "window_days": window_days,
            "date_range": {
                "start": str(days[0]),
                "end": str(days[-1])
            } if days else None
        },
        "daily_totals": [
            {"date": str(day), **sum_to_dict(daily[day])} for day in days
        ],
        "rolling_means": [
            {"end_date": str(w.end_date), **sum_to_dict(w.mean)} for w in windows
        ]
    }

    return output


def save_json_output(output: dict, filepath: str):
    """
    Save the JSON report to a file.
    """
    with open(filepath, 'w') as f:
        json.dump(output, f, indent=2)
