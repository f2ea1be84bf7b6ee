"""Records externally driven assignment status changes."""

import logging
from uuid import UUID

from ...shared.exceptions import AssignmentNotFoundError
from ..entities.assignment import ShiftAssignment
from ..events.domain_events import AssignmentStatusUpdated, EventSink
from ..repositories.interfaces import TransactionManager
from ..value_objects.enums import AssignmentStatus

logger = logging.getLogger(__name__)


class AssignmentStatusService:
    """
    Applies status changes reported by other subsystems (time clock,
    supervisors) after checking them against the assignment state machine.
    """

    def __init__(self, uow_manager: TransactionManager, events: EventSink | None = None):
        self._uow_manager = uow_manager
        self._events = events

    def update_status(
        self,
        tenant_id: str,
        assignment_id: UUID,
        new_status: AssignmentStatus,
        notes: str | None = None,
    ) -> ShiftAssignment:
        """
        Move an assignment to ``new_status``.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist
            InvalidStatusTransitionError: If the state machine forbids the move
        """
        with self._uow_manager.transaction() as uow:
            assignment = uow.assignments.get_by_id(tenant_id, assignment_id)
            if assignment is None:
                raise AssignmentNotFoundError(assignment_id)

            old_status = assignment.status
            assignment.transition_to(new_status, notes)
            uow.assignments.update(assignment)

        logger.info(
            f"Assignment {assignment_id} moved from {old_status.value} to {new_status.value}"
        )
        if self._events is not None:
            self._events.publish(
                AssignmentStatusUpdated(
                    tenant_id=tenant_id,
                    assignment_id=assignment_id,
                    old_status=old_status,
                    new_status=new_status,
                )
            )
        return assignment
