"""
ConflictDetector Domain Service

Scans one worker's live assignments for double bookings, short rest
periods and weekly overtime. Findings are returned as data.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from ...shared.exceptions import InvalidDateRangeError
from ..entities.assignment import ShiftAssignment
from ..entities.shift import Shift
from ..repositories.interfaces import TransactionManager
from ..value_objects.enums import ConflictType
from ..value_objects.time_window import rest_hours_between
from .auto_assigner import iso_week_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleConflict:
    worker_id: str
    date: date
    conflict_type: ConflictType
    details: str
    assignment_ids: tuple[UUID, ...] = ()


class ConflictDetector:
    """
    Read-only rule checks over a worker's schedule.

    Weekly hours are summed over the whole ISO weeks touching the range, so
    shifts just outside the range still count towards the limit; only dates
    inside the range are reported.
    """

    def __init__(
        self,
        uow_manager: TransactionManager,
        min_rest_hours: float = 8.0,
        max_weekly_hours: float = 40.0,
    ):
        self._uow_manager = uow_manager
        self.min_rest_hours = min_rest_hours
        self.max_weekly_hours = max_weekly_hours

    def detect(
        self, tenant_id: str, worker_id: str, start_date: date, end_date: date
    ) -> list[ScheduleConflict]:
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)

        load_start = iso_week_bounds(start_date)[0]
        load_end = iso_week_bounds(end_date)[1]
        with self._uow_manager.transaction() as uow:
            assignments = uow.assignments.find_for_worker(
                tenant_id, worker_id, load_start, load_end, live_only=True
            )
            shift_ids = {a.shift_id for a in assignments}
            shifts = (
                {
                    s.id: s
                    for s in uow.shifts.find(
                        tenant_id, shift_ids=shift_ids, active_only=False
                    )
                }
                if shift_ids
                else {}
            )

        timeline = []
        for assignment in assignments:
            shift = shifts.get(assignment.shift_id)
            if shift is None:
                logger.warning(
                    f"Assignment {assignment.id} references unknown shift "
                    f"{assignment.shift_id}; ignored"
                )
                continue
            timeline.append((assignment, shift))
        timeline.sort(key=lambda pair: (pair[0].date, pair[1].start_time))

        in_range = [
            pair for pair in timeline if start_date <= pair[0].date <= end_date
        ]
        conflicts = (
            self._double_bookings(worker_id, in_range)
            + self._rest_periods(worker_id, in_range)
            + self._overtime(worker_id, timeline, start_date, end_date)
        )
        conflicts.sort(key=lambda c: c.date)

        logger.debug(
            f"Found {len(conflicts)} conflicts for worker {worker_id} "
            f"between {start_date} and {end_date}"
        )
        return conflicts

    def _double_bookings(
        self, worker_id: str, timeline: list[tuple[ShiftAssignment, Shift]]
    ) -> list[ScheduleConflict]:
        by_date: dict[date, list[ShiftAssignment]] = defaultdict(list)
        for assignment, _ in timeline:
            by_date[assignment.date].append(assignment)

        return [
            ScheduleConflict(
                worker_id=worker_id,
                date=on_date,
                conflict_type=ConflictType.DOUBLE_BOOKING,
                details=f"{len(same_day)} shifts assigned on {on_date.isoformat()}",
                assignment_ids=tuple(a.id for a in same_day),
            )
            for on_date, same_day in by_date.items()
            if len(same_day) > 1
        ]

    def _rest_periods(
        self, worker_id: str, timeline: list[tuple[ShiftAssignment, Shift]]
    ) -> list[ScheduleConflict]:
        conflicts = []
        for (prev, prev_shift), (curr, curr_shift) in zip(timeline, timeline[1:]):
            rest = rest_hours_between(
                prev.date, prev_shift.window, curr.date, curr_shift.window
            )
            if rest < self.min_rest_hours:
                conflicts.append(
                    ScheduleConflict(
                        worker_id=worker_id,
                        date=curr.date,
                        conflict_type=ConflictType.REST_PERIOD,
                        details=(
                            f"Only {rest:g} hours rest between shifts "
                            f"(minimum {self.min_rest_hours:g} required)"
                        ),
                        assignment_ids=(prev.id, curr.id),
                    )
                )
        return conflicts

    def _overtime(
        self,
        worker_id: str,
        timeline: list[tuple[ShiftAssignment, Shift]],
        start_date: date,
        end_date: date,
    ) -> list[ScheduleConflict]:
        weekly: dict[date, float] = defaultdict(float)
        for assignment, shift in timeline:
            weekly[iso_week_bounds(assignment.date)[0]] += shift.working_hours

        conflicts = []
        for assignment, _ in timeline:
            total = weekly[iso_week_bounds(assignment.date)[0]]
            if total > self.max_weekly_hours and start_date <= assignment.date <= end_date:
                conflicts.append(
                    ScheduleConflict(
                        worker_id=worker_id,
                        date=assignment.date,
                        conflict_type=ConflictType.OVERTIME_VIOLATION,
                        details=(
                            f"Weekly hours exceed limit: {total:g} hours "
                            f"(maximum {self.max_weekly_hours:g})"
                        ),
                        assignment_ids=(assignment.id,),
                    )
                )
        return conflicts
