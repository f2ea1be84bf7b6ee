"""ShiftAssignment entity: a worker (or an empty slot) bound to a shift on a date."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from ...shared.base import Entity, utcnow
from ...shared.exceptions import InvalidStatusTransitionError
from ..value_objects.enums import AssignmentStatus


class ShiftAssignment(Entity):
    """
    Shift assignment owned by the scheduling core.

    A (tenant, worker, date) triple may hold at most one live assignment.
    Placeholder assignments have no worker.
    """

    tenant_id: str = Field(min_length=1)
    shift_id: UUID
    date: date
    worker_id: str | None = None
    work_center_id: str | None = None
    status: AssignmentStatus = AssignmentStatus.SCHEDULED

    is_overtime: bool = False
    is_temporary: bool = False
    notes: str | None = None

    replacement_for_id: UUID | None = None
    approved_by_id: str | None = None
    approved_at: datetime | None = None

    def is_valid(self) -> bool:
        return self.replacement_for_id != self.id

    @property
    def is_live(self) -> bool:
        return self.status.is_live

    @property
    def is_placeholder(self) -> bool:
        return self.worker_id is None

    def transition_to(self, target: AssignmentStatus, notes: str | None = None) -> None:
        """
        Move to ``target`` following the assignment state machine.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed
        """
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransitionError(self.id, self.status.value, target.value)
        self.status = target
        if notes:
            self.notes = notes
        self.mark_updated()

    def cancel(self, notes: str) -> None:
        self.transition_to(AssignmentStatus.CANCELLED, notes)

    def replacement(self, worker_id: str, approved_by: str, notes: str) -> "ShiftAssignment":
        """New scheduled assignment for ``worker_id`` that replaces this one."""
        return ShiftAssignment(
            tenant_id=self.tenant_id,
            shift_id=self.shift_id,
            date=self.date,
            worker_id=worker_id,
            work_center_id=self.work_center_id,
            is_overtime=self.is_overtime,
            is_temporary=self.is_temporary,
            notes=notes,
            replacement_for_id=self.id,
            approved_by_id=approved_by,
            approved_at=utcnow(),
        )
