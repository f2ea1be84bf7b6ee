"""
PatternApplier Domain Service

Projects a repeating sequence of shift codes onto workers over a range.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from ...shared.exceptions import InvalidDateRangeError, InvalidPatternError
from ..entities.assignment import ShiftAssignment
from ..events.domain_events import EventSink, PatternApplied
from ..repositories.interfaces import TransactionManager
from .schedule_generator import date_range
from .shift_catalog import ShiftCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftPattern:
    """
    Named rotation of shift codes.

    Day ``n`` after ``start_date`` uses ``shift_codes[n % len(shift_codes)]``.
    ``rotation_period`` is descriptive (for example 7 for a weekly rotation)
    and does not change the projection. Codes may repeat.
    """

    name: str
    shift_codes: tuple[str, ...]
    rotation_period: int = 7
    start_date: date | None = None

    def __post_init__(self):
        object.__setattr__(self, "shift_codes", tuple(self.shift_codes))
        if not self.shift_codes:
            raise InvalidPatternError(self.name, "pattern has no shift codes")
        if any(not code.strip() for code in self.shift_codes):
            raise InvalidPatternError(self.name, "blank shift code")
        if self.rotation_period < 1:
            raise InvalidPatternError(self.name, "rotation period must be positive")

    def code_on(self, on_date: date, default_start: date) -> str:
        start = self.start_date or default_start
        index = (on_date - start).days % len(self.shift_codes)
        return self.shift_codes[index].strip().upper()


class PatternApplier:
    """Creates pattern assignments, leaving existing bookings untouched."""

    def __init__(self, uow_manager: TransactionManager, events: EventSink | None = None):
        self._uow_manager = uow_manager
        self._events = events

    def apply(
        self,
        tenant_id: str,
        pattern: ShiftPattern,
        worker_ids: Iterable[str],
        start_date: date,
        end_date: date,
    ) -> list[ShiftAssignment]:
        """
        Apply the pattern to every worker and date in one transaction.

        Dates on which a worker already holds a live assignment are skipped,
        so applying the same pattern twice creates nothing the second time.

        Raises:
            ShiftCodeNotFoundError: If a pattern code does not resolve
        """
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)
        workers = list(dict.fromkeys(worker_ids))

        created: list[ShiftAssignment] = []
        with self._uow_manager.transaction() as uow:
            shifts = ShiftCatalog(uow.shifts).by_codes(
                tenant_id, pattern.shift_codes, pattern.name
            )

            for on_date in date_range(start_date, end_date):
                shift = shifts[pattern.code_on(on_date, start_date)]
                booked = uow.assignments.booked_worker_ids_on(tenant_id, on_date)
                for worker_id in workers:
                    if worker_id in booked:
                        logger.debug(f"Worker {worker_id} already booked on {on_date}")
                        continue
                    created.append(
                        ShiftAssignment(
                            tenant_id=tenant_id,
                            shift_id=shift.id,
                            date=on_date,
                            worker_id=worker_id,
                            work_center_id=shift.primary_work_center_id,
                            notes=f"Pattern: {pattern.name}",
                        )
                    )

            uow.assignments.add_all(created)

        logger.info(
            f"Pattern '{pattern.name}' created {len(created)} assignments "
            f"for {len(workers)} workers"
        )
        if self._events is not None:
            self._events.publish(
                PatternApplied(
                    tenant_id=tenant_id,
                    pattern_name=pattern.name,
                    worker_count=len(workers),
                    assignment_count=len(created),
                    start_date=start_date,
                    end_date=end_date,
                )
            )
        return created
