"""
ScheduleGenerator Domain Service

Walks a date range and produces assignments for every applicable shift,
either as unassigned placeholders or through the AutoAssigner.
"""

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from uuid import UUID

from ...shared.exceptions import (
    AssignmentConflictError,
    GenerationCancelledError,
    InvalidDateRangeError,
)
from ..entities.assignment import ShiftAssignment
from ..entities.shift import Shift
from ..events.domain_events import EventSink, ScheduleGenerated
from ..repositories.interfaces import TransactionManager, UnitOfWork
from ..value_objects.calendar import DayContext
from ..value_objects.enums import TransactionPolicy
from .auto_assigner import AutoAssigner
from .calendar_resolver import CalendarResolver
from .shift_catalog import ShiftCatalog
from .target_calculator import TargetCalculator

logger = logging.getLogger(__name__)


def date_range(start_date: date, end_date: date) -> Iterator[date]:
    """Every date from start to end, inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


@dataclass(frozen=True)
class ScheduleRequest:
    """Parameters of one generation run."""

    start_date: date
    end_date: date
    shift_ids: list[UUID] | None = None
    department_id: str | None = None
    work_center_id: str | None = None
    auto_assign: bool = False
    respect_skill_requirements: bool = True
    balance_workload: bool = True

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise InvalidDateRangeError(self.start_date, self.end_date)


@dataclass(frozen=True)
class Shortfall:
    """A shift/date the AutoAssigner could not fully staff."""

    shift_id: UUID
    date: date
    required: int
    assigned: int


@dataclass
class GenerationResult:
    assignments: list[ShiftAssignment] = field(default_factory=list)
    shortfalls: list[Shortfall] = field(default_factory=list)

    @property
    def assignment_count(self) -> int:
        return len(self.assignments)


class CancellationToken:
    """Cooperative stop signal, checked between dates. Safe to set from another thread."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class ScheduleGenerator:
    """
    Orchestrates calendar resolution, targets and assignment over a range.

    Writes follow the configured transaction policy. Under
    ``per_shift_day`` every date/shift combination commits on its own and a
    combination rejected by the booking constraint is retried against fresh
    bookings. Under ``whole_batch`` the run is a single transaction and any
    failure, including cancellation, leaves nothing behind.
    """

    def __init__(
        self,
        uow_manager: TransactionManager,
        assigner: AutoAssigner,
        events: EventSink | None = None,
        policy: TransactionPolicy = TransactionPolicy.PER_SHIFT_DAY,
        conflict_retries: int = 1,
    ):
        self._uow_manager = uow_manager
        self._assigner = assigner
        self._events = events
        self._policy = policy
        self._conflict_retries = conflict_retries

    @property
    def policy(self) -> TransactionPolicy:
        return self._policy

    def generate(
        self,
        tenant_id: str,
        request: ScheduleRequest,
        cancellation: CancellationToken | None = None,
    ) -> GenerationResult:
        """
        Generate assignments for every applicable shift and date.

        Raises:
            NoShiftsMatchError: If the filters select no active shift
            GenerationCancelledError: If the token fires mid-run
            AssignmentConflictError: If bookings keep colliding after retries
        """
        with self._uow_manager.transaction() as uow:
            shifts = ShiftCatalog(uow.shifts).resolve(
                tenant_id,
                shift_ids=request.shift_ids,
                department_id=request.department_id,
                work_center_id=request.work_center_id,
            )
            calendar = CalendarResolver.for_range(
                uow,
                tenant_id,
                request.start_date,
                request.end_date,
                [s.id for s in shifts],
            )

        logger.info(
            f"Generating schedule for tenant {tenant_id} from {request.start_date} "
            f"to {request.end_date} over {len(shifts)} shifts ({self._policy.value})"
        )

        if self._policy == TransactionPolicy.WHOLE_BATCH:
            result = self._generate_whole_batch(
                tenant_id, request, shifts, calendar, cancellation
            )
        else:
            result = self._generate_per_shift_day(
                tenant_id, request, shifts, calendar, cancellation
            )

        logger.info(
            f"Generated {result.assignment_count} assignments for tenant {tenant_id}"
        )
        if self._events is not None:
            self._events.publish(
                ScheduleGenerated(
                    tenant_id=tenant_id,
                    start_date=request.start_date,
                    end_date=request.end_date,
                    assignment_count=result.assignment_count,
                )
            )
        return result

    def _generate_per_shift_day(
        self,
        tenant_id: str,
        request: ScheduleRequest,
        shifts: list[Shift],
        calendar: CalendarResolver,
        cancellation: CancellationToken | None,
    ) -> GenerationResult:
        result = GenerationResult()
        for on_date in date_range(request.start_date, request.end_date):
            if cancellation is not None and cancellation.is_cancelled:
                logger.warning(f"Generation for tenant {tenant_id} cancelled at {on_date}")
                raise GenerationCancelledError(on_date, result.assignments)

            for shift, day, target in self._combinations(shifts, calendar, on_date):
                attempt = 0
                while True:
                    try:
                        with self._uow_manager.transaction() as uow:
                            created = self._fill(
                                uow, tenant_id, request, shift, day, target, calendar, result
                            )
                        break
                    except AssignmentConflictError:
                        attempt += 1
                        if attempt > self._conflict_retries:
                            raise
                        logger.warning(
                            f"Booking conflict on {shift.shift_code} {on_date}, "
                            f"retry {attempt} of {self._conflict_retries}"
                        )
                result.assignments.extend(created)
        return result

    def _generate_whole_batch(
        self,
        tenant_id: str,
        request: ScheduleRequest,
        shifts: list[Shift],
        calendar: CalendarResolver,
        cancellation: CancellationToken | None,
    ) -> GenerationResult:
        result = GenerationResult()
        with self._uow_manager.transaction() as uow:
            for on_date in date_range(request.start_date, request.end_date):
                if cancellation is not None and cancellation.is_cancelled:
                    logger.warning(
                        f"Generation for tenant {tenant_id} cancelled at {on_date}; "
                        "discarding batch"
                    )
                    raise GenerationCancelledError(on_date)

                for shift, day, target in self._combinations(shifts, calendar, on_date):
                    created = self._fill(
                        uow, tenant_id, request, shift, day, target, calendar, result
                    )
                    result.assignments.extend(created)
        return result

    @staticmethod
    def _combinations(
        shifts: list[Shift], calendar: CalendarResolver, on_date: date
    ) -> Iterator[tuple[Shift, DayContext, int]]:
        """Shifts to staff on a date with their required head count."""
        day = calendar.resolve(on_date)
        if not day.is_schedulable:
            logger.debug(f"Skipping non-working day {on_date}")
            return

        for shift in shifts:
            if not ShiftCatalog.is_active_on(shift, on_date):
                continue
            if calendar.is_shift_cancelled(shift.id, on_date):
                logger.debug(f"Shift {shift.shift_code} cancelled on {on_date}")
                continue

            target = TargetCalculator.calculate(
                shift,
                day,
                exception=calendar.exception_for(shift.id, on_date),
                override=calendar.override_for(shift.id, on_date),
            )
            if target > 0:
                yield shift, day, target

    def _fill(
        self,
        uow: UnitOfWork,
        tenant_id: str,
        request: ScheduleRequest,
        shift: Shift,
        day: DayContext,
        target: int,
        calendar: CalendarResolver,
        result: GenerationResult,
    ) -> list[ShiftAssignment]:
        """Create and stage the assignments of one date/shift combination."""
        if request.auto_assign:
            assignments = self._assigner.assign(
                uow,
                tenant_id,
                shift,
                day.date,
                target,
                window=calendar.effective_window(shift, day.date),
                respect_skill_requirements=request.respect_skill_requirements,
                balance_workload=request.balance_workload,
            )
        else:
            assignments = [
                ShiftAssignment(
                    tenant_id=tenant_id,
                    shift_id=shift.id,
                    date=day.date,
                    work_center_id=request.work_center_id,
                )
                for _ in range(target)
            ]

        uow.assignments.add_all(assignments)
        if len(assignments) < target:
            result.shortfalls.append(Shortfall(shift.id, day.date, target, len(assignments)))
        return assignments
