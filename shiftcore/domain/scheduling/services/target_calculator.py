"""Required worker count for a shift on a date."""

from ..entities.shift import Shift
from ..entities.shift_exception import ShiftException
from ..value_objects.calendar import DayContext, ShiftOverride


def _scale_up(count: int, percentage: int) -> int:
    """ceil(count * percentage / 100) in integer arithmetic."""
    return -(-count * percentage // 100)


class TargetCalculator:
    """
    Derives the required head count of a shift for one date.

    Applied in order: the calendar override's minimum replaces the base
    target, then the exception's reduced capacity scales it, then the
    calendar capacity scales it when below 100. The result is clamped to
    the shift's own bounds.
    """

    @staticmethod
    def calculate(
        shift: Shift,
        day: DayContext | None = None,
        exception: ShiftException | None = None,
        override: ShiftOverride | None = None,
    ) -> int:
        if override is None and day is not None:
            override = day.override_for(shift.id)

        target = shift.target_workers
        if override is not None and override.min_workers is not None:
            target = override.min_workers

        if exception is not None and exception.reduced_capacity is not None:
            target = _scale_up(target, exception.reduced_capacity)

        if day is not None and day.capacity_percentage != 100:
            target = _scale_up(target, day.capacity_percentage)

        return max(shift.min_workers, min(target, shift.max_workers))
