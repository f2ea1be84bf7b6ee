"""
SwapManager Domain Service

Hands one worker's assignment to another worker. The cancellation of the
original and the creation of its replacement commit together or not at all.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from ...shared.exceptions import (
    AssignmentConflictError,
    AssignmentNotFoundError,
    InvalidStatusTransitionError,
    ShiftNotFoundError,
    WorkerAlreadyBookedError,
    WorkerNotAssignedError,
    WorkerUnavailableError,
)
from ..entities.assignment import ShiftAssignment
from ..events.domain_events import EventSink, ShiftSwapped
from ..repositories.interfaces import TransactionManager
from ..value_objects.enums import AssignmentStatus
from .availability_gate import AvailabilityGate
from .calendar_resolver import CalendarResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftSwapRequest:
    from_worker_id: str
    to_worker_id: str
    assignment_id: UUID
    reason: str
    requested_by: str


class SwapManager:
    """Validates and performs shift swaps."""

    def __init__(
        self,
        uow_manager: TransactionManager,
        gate: AvailabilityGate,
        events: EventSink | None = None,
    ):
        self._uow_manager = uow_manager
        self._gate = gate
        self._events = events

    def swap(self, tenant_id: str, request: ShiftSwapRequest) -> ShiftAssignment:
        """
        Cancel the original assignment and create the replacement.

        Every precondition is checked before the first write.

        Returns:
            The new assignment for ``to_worker_id``

        Raises:
            AssignmentNotFoundError: If the assignment does not exist
            WorkerNotAssignedError: If ``from_worker_id`` does not own it
            InvalidStatusTransitionError: If it can no longer be cancelled
            WorkerUnavailableError: If the target worker is not available
            WorkerAlreadyBookedError: If the target worker is booked that day
        """
        with self._uow_manager.transaction() as uow:
            original = uow.assignments.get_by_id(tenant_id, request.assignment_id)
            if original is None:
                raise AssignmentNotFoundError(request.assignment_id)

            if original.worker_id != request.from_worker_id:
                raise WorkerNotAssignedError(original.id, request.from_worker_id)

            if not original.status.is_cancellable:
                raise InvalidStatusTransitionError(
                    original.id, original.status.value, AssignmentStatus.CANCELLED.value
                )

            shift = uow.shifts.get_by_id(tenant_id, original.shift_id)
            if shift is None:
                raise ShiftNotFoundError(original.shift_id)

            window = CalendarResolver.for_range(
                uow, tenant_id, original.date, original.date, [shift.id]
            ).effective_window(shift, original.date)
            availability = self._gate.check_availability(
                tenant_id,
                request.to_worker_id,
                original.date,
                window.start_time,
                window.end_time,
                hours_needed=shift.working_hours,
            )
            if not availability.available:
                logger.warning(
                    f"Swap of {original.id} rejected: worker {request.to_worker_id} "
                    f"unavailable ({availability.reason})"
                )
                raise WorkerUnavailableError(
                    request.to_worker_id, original.date, availability.reason
                )

            if uow.assignments.find_live_for_worker_on(
                tenant_id, request.to_worker_id, original.date
            ):
                raise WorkerAlreadyBookedError(request.to_worker_id, original.date)

            original.cancel(
                f"Swapped to worker {request.to_worker_id}: {request.reason}"
            )
            uow.assignments.update(original)

            replacement = original.replacement(
                request.to_worker_id,
                approved_by=request.requested_by,
                notes=f"Swapped from worker {request.from_worker_id}: {request.reason}",
            )
            try:
                uow.assignments.add(replacement)
            except AssignmentConflictError as e:
                raise WorkerAlreadyBookedError(request.to_worker_id, original.date) from e

        logger.info(
            f"Assignment {original.id} swapped from {request.from_worker_id} "
            f"to {request.to_worker_id}"
        )
        if self._events is not None:
            self._events.publish(
                ShiftSwapped(
                    tenant_id=tenant_id,
                    original_assignment_id=original.id,
                    new_assignment_id=replacement.id,
                    from_worker_id=request.from_worker_id,
                    to_worker_id=request.to_worker_id,
                    date=original.date,
                    shift_id=original.shift_id,
                    reason=request.reason,
                    requested_by=request.requested_by,
                )
            )
        return replacement
