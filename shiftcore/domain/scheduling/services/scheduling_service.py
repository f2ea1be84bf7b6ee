"""
Shift Scheduling Service

Single entry point wiring the scheduling components together. Callers
authorise and resolve the tenant before calling in; every operation takes
the tenant id explicitly.
"""

import logging
from collections.abc import Iterable
from datetime import date
from uuid import UUID

from shiftcore.core.config import Settings, get_settings

from ...shared.exceptions import InvalidDateRangeError, ShiftNotFoundError
from ..entities.assignment import ShiftAssignment
from ..entities.worker import Worker
from ..events.domain_events import EventSink
from ..repositories.interfaces import TransactionManager, WorkerDirectory
from ..value_objects.enums import AssignmentStatus, TransactionPolicy
from .assignment_status_service import AssignmentStatusService
from .auto_assigner import AutoAssigner
from .availability_gate import AvailabilityGate
from .calendar_resolver import CalendarResolver
from .conflict_detector import ConflictDetector, ScheduleConflict
from .coverage_analyzer import CoverageAnalyzer, CoverageReport
from .pattern_applier import PatternApplier, ShiftPattern
from .schedule_generator import (
    CancellationToken,
    GenerationResult,
    ScheduleGenerator,
    ScheduleRequest,
)
from .shift_catalog import ShiftCatalog
from .swap_manager import ShiftSwapRequest, SwapManager

logger = logging.getLogger(__name__)


class ShiftSchedulingService:
    """
    Facade over the scheduling core.

    Labour-rule thresholds and the generation transaction policy are
    normally taken from ``Settings``.
    """

    def __init__(
        self,
        uow_manager: TransactionManager,
        worker_directory: WorkerDirectory,
        events: EventSink | None = None,
        min_rest_hours: float = 8.0,
        max_weekly_hours: float = 40.0,
        policy: TransactionPolicy = TransactionPolicy.PER_SHIFT_DAY,
        conflict_retries: int = 1,
    ):
        self._uow_manager = uow_manager
        self.gate = AvailabilityGate(worker_directory)
        self.assigner = AutoAssigner(self.gate)
        self.generator = ScheduleGenerator(
            uow_manager, self.assigner, events, policy, conflict_retries
        )
        self.coverage = CoverageAnalyzer(uow_manager)
        self.conflicts = ConflictDetector(uow_manager, min_rest_hours, max_weekly_hours)
        self.swaps = SwapManager(uow_manager, self.gate, events)
        self.patterns = PatternApplier(uow_manager, events)
        self.statuses = AssignmentStatusService(uow_manager, events)

    @classmethod
    def from_settings(
        cls,
        uow_manager: TransactionManager,
        worker_directory: WorkerDirectory,
        events: EventSink | None = None,
        settings: Settings | None = None,
    ) -> "ShiftSchedulingService":
        """Build the service with thresholds and policy from settings."""
        settings = settings or get_settings()
        return cls(
            uow_manager,
            worker_directory,
            events,
            min_rest_hours=settings.MIN_REST_HOURS,
            max_weekly_hours=settings.MAX_WEEKLY_HOURS,
            policy=settings.GENERATION_TRANSACTION_POLICY,
            conflict_retries=settings.UNIQUE_CONFLICT_RETRIES,
        )

    def generate_schedule(
        self,
        tenant_id: str,
        request: ScheduleRequest,
        cancellation: CancellationToken | None = None,
    ) -> GenerationResult:
        return self.generator.generate(tenant_id, request, cancellation)

    def analyze_coverage(
        self,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
    ) -> list[CoverageReport]:
        return self.coverage.analyze(tenant_id, start_date, end_date, shift_ids)

    def detect_conflicts(
        self, tenant_id: str, worker_id: str, start_date: date, end_date: date
    ) -> list[ScheduleConflict]:
        return self.conflicts.detect(tenant_id, worker_id, start_date, end_date)

    def request_shift_swap(
        self, tenant_id: str, request: ShiftSwapRequest
    ) -> ShiftAssignment:
        return self.swaps.swap(tenant_id, request)

    def apply_shift_pattern(
        self,
        tenant_id: str,
        pattern: ShiftPattern,
        worker_ids: Iterable[str],
        start_date: date,
        end_date: date,
    ) -> list[ShiftAssignment]:
        return self.patterns.apply(tenant_id, pattern, worker_ids, start_date, end_date)

    def update_assignment_status(
        self,
        tenant_id: str,
        assignment_id: UUID,
        new_status: AssignmentStatus,
        notes: str | None = None,
    ) -> ShiftAssignment:
        return self.statuses.update_status(tenant_id, assignment_id, new_status, notes)

    def get_worker_schedule(
        self,
        tenant_id: str,
        worker_id: str,
        start_date: date,
        end_date: date,
        include_cancelled: bool = False,
    ) -> list[ShiftAssignment]:
        """A worker's assignments in the range, ordered by date."""
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)
        with self._uow_manager.transaction() as uow:
            return uow.assignments.find_for_worker(
                tenant_id, worker_id, start_date, end_date, live_only=not include_cancelled
            )

    def get_available_workers(
        self, tenant_id: str, shift_id: UUID, on_date: date
    ) -> list[Worker]:
        """
        Workers who could still be assigned to a shift on a date.

        Returns an empty list when the shift does not run that day.

        Raises:
            ShiftNotFoundError: If the shift does not exist
        """
        with self._uow_manager.transaction() as uow:
            shift = uow.shifts.get_by_id(tenant_id, shift_id)
            if shift is None:
                raise ShiftNotFoundError(shift_id)
            if not ShiftCatalog.is_active_on(shift, on_date):
                return []
            calendar = CalendarResolver.for_range(
                uow, tenant_id, on_date, on_date, [shift.id]
            )
            if calendar.is_shift_cancelled(shift.id, on_date):
                return []
            return self.assigner.eligible_workers(
                uow,
                tenant_id,
                shift,
                on_date,
                window=calendar.effective_window(shift, on_date),
            )
