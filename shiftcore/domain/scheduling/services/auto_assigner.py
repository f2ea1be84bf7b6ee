"""
AutoAssigner Domain Service

Selects workers for a shift on a date: availability first, then skills,
then workload balance.
"""

import logging
from datetime import date, timedelta

from ..entities.assignment import ShiftAssignment
from ..entities.shift import Shift
from ..entities.worker import Worker
from ..repositories.interfaces import UnitOfWork
from ..value_objects.time_window import ShiftWindow
from .availability_gate import AvailabilityGate

logger = logging.getLogger(__name__)


def iso_week_bounds(on_date: date) -> tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``on_date``."""
    monday = on_date - timedelta(days=on_date.weekday())
    return monday, monday + timedelta(days=6)


class AutoAssigner:
    """
    Materialises scheduled assignments for the best eligible workers.

    Running short of eligible workers is not an error: the shift is simply
    generated understaffed.
    """

    def __init__(self, gate: AvailabilityGate):
        self._gate = gate

    def eligible_workers(
        self,
        uow: UnitOfWork,
        tenant_id: str,
        shift: Shift,
        on_date: date,
        window: ShiftWindow | None = None,
        respect_skill_requirements: bool = True,
        balance_workload: bool = True,
    ) -> list[Worker]:
        """
        Workers who could take the shift on the date, best candidates first.

        Args:
            uow: Active unit of work used for booking lookups
            tenant_id: Tenant owning the shift
            shift: Shift to staff
            on_date: Date of the shift
            window: Effective window of the day; defaults to the shift's own
            respect_skill_requirements: Drop workers missing a required skill
            balance_workload: Prefer workers with fewer shifts that week
        """
        window = window or shift.window

        candidates = self._gate.workers_in_department(tenant_id, shift.department_id)
        booked = uow.assignments.booked_worker_ids_on(tenant_id, on_date)
        candidates = [w for w in candidates if w.id not in booked]

        available = []
        for worker in candidates:
            result = self._gate.check_worker(worker, on_date, window, shift.working_hours)
            if result.available:
                available.append(worker)
            else:
                logger.debug(f"Skipping worker {worker.id} on {on_date}: {result.reason}")
        candidates = available

        if respect_skill_requirements and shift.skill_requirements:
            candidates = [
                w
                for w in candidates
                if all(w.meets(req) for req in shift.skill_requirements)
            ]

        if balance_workload and candidates:
            week_start, week_end = iso_week_bounds(on_date)
            load = uow.assignments.count_live_by_worker(
                tenant_id, [w.id for w in candidates], week_start, week_end
            )
            candidates.sort(key=lambda w: (load.get(w.id, 0), w.id))

        return candidates

    def assign(
        self,
        uow: UnitOfWork,
        tenant_id: str,
        shift: Shift,
        on_date: date,
        target: int,
        window: ShiftWindow | None = None,
        respect_skill_requirements: bool = True,
        balance_workload: bool = True,
    ) -> list[ShiftAssignment]:
        """
        Build up to ``target`` scheduled assignments, not yet stored.

        Returns:
            One assignment per selected worker
        """
        if target <= 0:
            return []

        selected = self.eligible_workers(
            uow,
            tenant_id,
            shift,
            on_date,
            window=window,
            respect_skill_requirements=respect_skill_requirements,
            balance_workload=balance_workload,
        )[:target]

        if len(selected) < target:
            logger.info(
                f"Shift {shift.shift_code} on {on_date} understaffed: "
                f"{len(selected)} of {target} workers available"
            )

        return [
            ShiftAssignment(
                tenant_id=tenant_id,
                shift_id=shift.id,
                date=on_date,
                worker_id=worker.id,
                work_center_id=shift.primary_work_center_id,
            )
            for worker in selected
        ]
