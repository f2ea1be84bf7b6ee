"""
Shift time window value object.

A window is a start and end time-of-day; overnight windows end on the
following calendar day. All arithmetic happens on concrete datetimes so
that rest gaps across midnight come out right.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

MINUTES_PER_DAY = 24 * 60


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class ShiftWindow:
    """Immutable time-of-day window, optionally spanning midnight."""

    start_time: time
    end_time: time
    is_overnight: bool = False

    def __post_init__(self):
        if not self.is_overnight and self.end_time <= self.start_time:
            raise ValueError(
                f"Window {self.start_time}-{self.end_time} ends before it starts; "
                "mark it overnight if it spans midnight"
            )
        if self.is_overnight and self.end_time > self.start_time:
            raise ValueError(
                f"Overnight window {self.start_time}-{self.end_time} does not span midnight"
            )

    @classmethod
    def spanning(cls, start_time: time, end_time: time) -> ShiftWindow:
        """Build a window, inferring the overnight flag from the times."""
        return cls(start_time, end_time, is_overnight=end_time <= start_time)

    @property
    def start_minute(self) -> int:
        return _minutes(self.start_time)

    @property
    def end_minute(self) -> int:
        """End offset in minutes from the start day's midnight."""
        end = _minutes(self.end_time)
        return end + MINUTES_PER_DAY if self.is_overnight else end

    @property
    def duration_hours(self) -> float:
        return (self.end_minute - self.start_minute) / 60

    def start_on(self, on_date: date) -> datetime:
        return datetime.combine(on_date, self.start_time)

    def end_on(self, on_date: date) -> datetime:
        """Effective end for a shift starting on ``on_date``."""
        end = datetime.combine(on_date, self.end_time)
        if self.is_overnight:
            end += timedelta(days=1)
        return end

    def fits_within(self, other: ShiftWindow) -> bool:
        """Check if this window lies inside ``other`` on the same start day."""
        return (
            other.start_minute <= self.start_minute
            and self.end_minute <= other.end_minute
        )

    def __str__(self) -> str:
        suffix = " (+1)" if self.is_overnight else ""
        return (
            f"{self.start_time.strftime('%H:%M')} - "
            f"{self.end_time.strftime('%H:%M')}{suffix}"
        )


def rest_hours_between(
    earlier_date: date,
    earlier: ShiftWindow,
    later_date: date,
    later: ShiftWindow,
) -> float:
    """
    Hours between the end of one shift and the start of the next.

    Negative when the shifts overlap.
    """
    gap = later.start_on(later_date) - earlier.end_on(earlier_date)
    return gap.total_seconds() / 3600
