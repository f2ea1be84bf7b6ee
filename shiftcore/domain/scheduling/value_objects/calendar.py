"""
Production calendar value objects.

A calendar day may close the plant, scale its capacity, or override the
staffing of individual shifts.
"""

from datetime import date, time
from uuid import UUID

from pydantic import Field, model_validator
from typing_extensions import Self

from ...shared.base import ValueObject
from .enums import DayOfWeek


class ShiftOverride(ValueObject):
    """Date-level adjustment of one shift's window or staffing bounds."""

    shift_id: UUID
    start_time: time | None = None
    end_time: time | None = None
    cancelled: bool = False
    min_workers: int | None = Field(default=None, ge=0)
    max_workers: int | None = Field(default=None, ge=0)


class CalendarDay(ValueObject):
    """One production calendar record."""

    date: date
    is_working_day: bool = True
    is_holiday: bool = False
    holiday_name: str | None = None
    is_planned_maintenance: bool = False
    capacity_percentage: int = Field(default=100, ge=0, le=100)
    shift_overrides: list[ShiftOverride] = Field(default_factory=list)
    notes: str | None = None

    @model_validator(mode="after")
    def _unique_overrides(self) -> Self:
        ids = [o.shift_id for o in self.shift_overrides]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate shift override on {self.date}")
        return self

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek.of(self.date)

    def override_for(self, shift_id: UUID) -> ShiftOverride | None:
        for override in self.shift_overrides:
            if override.shift_id == shift_id:
                return override
        return None


class DayContext(ValueObject):
    """Resolved view of a date for scheduling purposes."""

    date: date
    is_working_day: bool = True
    capacity_percentage: int = 100
    overrides: list[ShiftOverride] = Field(default_factory=list)

    @property
    def has_overrides(self) -> bool:
        return bool(self.overrides)

    @property
    def is_schedulable(self) -> bool:
        """Non-working days are still scheduled when they carry shift overrides."""
        return self.is_working_day or self.has_overrides

    def override_for(self, shift_id: UUID) -> ShiftOverride | None:
        for override in self.overrides:
            if override.shift_id == shift_id:
                return override
        return None
