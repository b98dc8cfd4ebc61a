"""
Data models for the Baby Care Report.

This module defines the data structures used throughout the application:
- Event variants: Diaper, BottleFeeding, Left/RightBreastFeeding, Pumping,
  TummyTime, Sleep and OtherEvent
- DailySum: Per-day accumulated totals
- WindowMean: Rolling mean over a window of daily totals
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timedelta
from typing import Optional, Union


@dataclass
class Diaper:
    """Diaper change."""
    time: datetime
    poo: bool = False

    @property
    def timestamp(self) -> datetime:
        return self.time


@dataclass
class Feeding:
    """Base for the feeding variants; all of them carry their own time."""
    time: datetime

    @property
    def timestamp(self) -> datetime:
        return self.time


@dataclass
class BottleFeeding(Feeding):
    ounces: float = 0.0


@dataclass
class BreastFeeding(Feeding):
    duration: timedelta = field(default_factory=timedelta)


class LeftBreastFeeding(BreastFeeding):
    pass


class RightBreastFeeding(BreastFeeding):
    pass


@dataclass
class Pumping:
    """Pumping session, attributed to the day it started."""
    start: datetime
    end: Optional[datetime] = None
    ounces: float = 0.0

    @property
    def timestamp(self) -> datetime:
        return self.start


@dataclass
class TummyTime:
    start: datetime
    duration: timedelta = field(default_factory=timedelta)

    @property
    def timestamp(self) -> datetime:
        return self.start


@dataclass
class Sleep:
    """Sleep session. Sessions still in progress have no end."""
    start: datetime
    end: Optional[datetime] = None
    duration: timedelta = field(default_factory=timedelta)

    @property
    def timestamp(self) -> datetime:
        return self.start


@dataclass
class OtherEvent:
    """Any logged activity the report does not track (bath, medicine, ...)."""
    time: datetime
    kind: str = 'other'

    @property
    def timestamp(self) -> datetime:
        return self.time


Event = Union[Diaper, Feeding, Pumping, TummyTime, Sleep, OtherEvent]


@dataclass
class DailySum:
    """Accumulated totals for one calendar day (or the mean of several)."""
    total_diapers: int = 0
    poo_diapers: int = 0
    bottle_oz: float = 0.0
    bottle_sessions: int = 0
    breast_duration: timedelta = field(default_factory=timedelta)
    pumping_oz: float = 0.0
    tummy_time_duration: timedelta = field(default_factory=timedelta)
    max_sleep_duration: timedelta = field(default_factory=timedelta)
    total_sleep_duration: timedelta = field(default_factory=timedelta)

    @property
    def ounces_per_session(self) -> Optional[float]:
        """Average bottle volume per session, or None without sessions."""
        if self.bottle_sessions == 0:
            return None
        return self.bottle_oz / self.bottle_sessions


@dataclass
class WindowMean:
    """Mean of a run of consecutive daily sums, labeled by its last date."""
    end_date: date
    mean: DailySum
