"""
CoverageAnalyzer Domain Service

Compares live, worker-filled assignments with each shift's static
staffing target.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from ...shared.exceptions import InvalidDateRangeError
from ..repositories.interfaces import TransactionManager
from .schedule_generator import date_range
from .shift_catalog import ShiftCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageReport:
    """Staffing of one shift on one date."""

    shift_id: UUID
    shift_code: str
    date: date
    required_workers: int
    assigned_workers: int
    coverage_percentage: float
    understaffed: bool
    overstaffed: bool


class CoverageAnalyzer:
    """
    Read-only coverage analysis.

    Required head count is the shift's ``target_workers``; calendar and
    exception adjustments are deliberately not re-applied here.
    """

    def __init__(self, uow_manager: TransactionManager):
        self._uow_manager = uow_manager

    def analyze(
        self,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
    ) -> list[CoverageReport]:
        """
        One report per shift and date on which the shift is active.

        Returns:
            Reports ordered by date, then shift priority and code
        """
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)

        ids = list(shift_ids) if shift_ids is not None else None
        with self._uow_manager.transaction() as uow:
            shifts = uow.shifts.find(tenant_id, shift_ids=ids, active_only=True)
            assignments = uow.assignments.find_in_range(
                tenant_id, start_date, end_date, shift_ids=ids, live_only=True
            )

        assigned = Counter(
            (a.shift_id, a.date) for a in assignments if a.worker_id is not None
        )
        shifts = sorted(shifts, key=lambda s: (s.priority, s.shift_code))

        reports = []
        for on_date in date_range(start_date, end_date):
            for shift in shifts:
                if not ShiftCatalog.is_active_on(shift, on_date):
                    continue
                count = assigned[(shift.id, on_date)]
                required = shift.target_workers
                reports.append(
                    CoverageReport(
                        shift_id=shift.id,
                        shift_code=shift.shift_code,
                        date=on_date,
                        required_workers=required,
                        assigned_workers=count,
                        coverage_percentage=count / required * 100 if required else 0.0,
                        understaffed=count < shift.min_workers,
                        overstaffed=count > shift.max_workers,
                    )
                )

        logger.debug(f"Coverage analysis for tenant {tenant_id}: {len(reports)} rows")
        return reports
