"""
CalendarResolver Domain Service

Answers per-date questions from the production calendar and the shift
exceptions loaded for one tenant and date range.
"""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from ..entities.shift import Shift
from ..entities.shift_exception import ShiftException
from ..repositories.interfaces import UnitOfWork
from ..value_objects.calendar import CalendarDay, DayContext, ShiftOverride
from ..value_objects.time_window import ShiftWindow


class CalendarResolver:
    """
    Resolves working-day status, capacity and overrides for dates.

    A date without a calendar record is a working day at full capacity.
    When several exceptions exist for the same shift and date, the most
    recently created one applies.
    """

    def __init__(
        self,
        calendar_days: Iterable[CalendarDay] = (),
        exceptions: Iterable[ShiftException] = (),
    ):
        self._days: dict[date, CalendarDay] = {day.date: day for day in calendar_days}
        self._exceptions: dict[tuple[UUID, date], ShiftException] = {}
        for exception in sorted(exceptions, key=lambda e: e.created_at):
            self._exceptions[(exception.shift_id, exception.date)] = exception

    @classmethod
    def for_range(
        cls,
        uow: UnitOfWork,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
    ) -> "CalendarResolver":
        """Load calendar records and exceptions for the range in one read each."""
        return cls(
            uow.calendar.find_in_range(tenant_id, start_date, end_date),
            uow.exceptions.find_in_range(tenant_id, start_date, end_date, shift_ids),
        )

    def resolve(self, on_date: date) -> DayContext:
        day = self._days.get(on_date)
        if day is None:
            return DayContext(date=on_date)
        return DayContext(
            date=on_date,
            is_working_day=day.is_working_day,
            capacity_percentage=day.capacity_percentage,
            overrides=list(day.shift_overrides),
        )

    def exception_for(self, shift_id: UUID, on_date: date) -> ShiftException | None:
        return self._exceptions.get((shift_id, on_date))

    def override_for(self, shift_id: UUID, on_date: date) -> ShiftOverride | None:
        day = self._days.get(on_date)
        return day.override_for(shift_id) if day else None

    def is_shift_cancelled(self, shift_id: UUID, on_date: date) -> bool:
        """True when an exception or a calendar override cancels the shift."""
        exception = self.exception_for(shift_id, on_date)
        if exception is not None and exception.is_cancelled:
            return True
        override = self.override_for(shift_id, on_date)
        return override is not None and override.cancelled

    def effective_window(self, shift: Shift, on_date: date) -> ShiftWindow:
        """
        Time window the shift actually runs on a date.

        Exception alternate times take precedence over calendar override
        times, which take precedence over the shift definition.
        """
        exception = self.exception_for(shift.id, on_date)
        if exception is not None and exception.has_alternate_window:
            return ShiftWindow.spanning(
                exception.alternate_start_time, exception.alternate_end_time
            )

        override = self.override_for(shift.id, on_date)
        if override is not None and (
            override.start_time is not None or override.end_time is not None
        ):
            return ShiftWindow.spanning(
                override.start_time or shift.start_time,
                override.end_time or shift.end_time,
            )

        return shift.window
