"""
Daily aggregation module.

This module handles:
- Ordering events chronologically
- Folding the ordered events into per-day totals
- Counting bottle sessions, merging bottles given close together
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timedelta
from typing import Iterable, Optional

from babyreport.models import (
    Event,
    DailySum,
    Diaper,
    BottleFeeding,
    BreastFeeding,
    Pumping,
    TummyTime,
    Sleep,
    OtherEvent,
)


# A bottle less than this long after the previous one (same day) continues its session
BOTTLE_SESSION_GAP = timedelta(minutes=60)


@dataclass
class AggregationState:
    """Accumulator threaded through the fold: the daily map and the last bottle time."""
    daily: dict[date, DailySum] = field(default_factory=dict)
    prev_bottle: Optional[datetime] = None

    def day(self, day: date) -> DailySum:
        """Return the sum for a date, creating it on first use."""
        if day not in self.daily:
            self.daily[day] = DailySum()
        return self.daily[day]


def sort_events(events: Iterable[Event]) -> list[Event]:
    """
    Order events by timestamp. The sort is stable, so ties keep input order.
    """
    try:
        return sorted(events, key=lambda e: e.timestamp)
    except TypeError as e:
        # e.g. naive and timezone-aware timestamps in the same log
        raise ValueError(f"Cannot order events by timestamp: {e}")


def starts_bottle_session(prev: Optional[datetime], time: datetime) -> bool:
    if prev is None or prev.date() != time.date():
        return True
    return time - prev >= BOTTLE_SESSION_GAP


def apply_event(state: AggregationState, event: Event) -> None:
    """
    Add one event to the running totals. Events must arrive in order.
    """
    if isinstance(event, Diaper):
        s = state.day(event.time.date())
        s.total_diapers += 1
        if event.poo:
            s.poo_diapers += 1

    elif isinstance(event, BottleFeeding):
        s = state.day(event.time.date())
        if starts_bottle_session(state.prev_bottle, event.time):
            s.bottle_sessions += 1
        s.bottle_oz += event.ounces
        state.prev_bottle = event.time

    elif isinstance(event, BreastFeeding):
        s = state.day(event.time.date())
        s.breast_duration += event.duration

    elif isinstance(event, Pumping):
        s = state.day(event.start.date())
        s.pumping_oz += event.ounces

    elif isinstance(event, TummyTime):
        s = state.day(event.start.date())
        s.tummy_time_duration += event.duration

    elif isinstance(event, Sleep):
        # Still asleep: nothing to attribute yet
        if event.end is None:
            return
        s = state.day(event.end.date())
        if event.duration > s.max_sleep_duration:
            s.max_sleep_duration = event.duration
        s.total_sleep_duration += event.duration

    elif isinstance(event, OtherEvent):
        pass

    else:
        raise TypeError(f"Unhandled event kind: {type(event).__name__}")


def aggregate_by_day(events: Iterable[Event]) -> dict[date, DailySum]:
    """
    Sort the events and total them per calendar day.
    """
    state = AggregationState()
    for event in sort_events(events):
        apply_event(state, event)
    return state.daily
