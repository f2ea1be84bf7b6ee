"""
Domain events emitted by the scheduling core.

Events are fire-and-forget: they are handed to an injected ``EventSink``
after the corresponding writes have committed. Delivery is the sink's
concern, not the core's.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import ClassVar
from uuid import UUID

from ...shared.base import DomainEvent
from ..value_objects.enums import AssignmentStatus


class ScheduleGenerated(DomainEvent):
    """Raised when a schedule has been generated for a date range."""

    event_name: ClassVar[str] = "schedule.generated"

    start_date: date
    end_date: date
    assignment_count: int


class ShiftSwapped(DomainEvent):
    """Raised when one worker's assignment is handed to another."""

    event_name: ClassVar[str] = "shift.swapped"

    original_assignment_id: UUID
    new_assignment_id: UUID
    from_worker_id: str
    to_worker_id: str
    date: date
    shift_id: UUID
    reason: str
    requested_by: str


class PatternApplied(DomainEvent):
    """Raised when a rotation pattern has been projected onto workers."""

    event_name: ClassVar[str] = "pattern.applied"

    pattern_name: str
    worker_count: int
    assignment_count: int
    start_date: date
    end_date: date


class AssignmentStatusUpdated(DomainEvent):
    """Raised when an assignment's status changes."""

    event_name: ClassVar[str] = "assignment.status.updated"

    assignment_id: UUID
    old_status: AssignmentStatus
    new_status: AssignmentStatus


class EventSink(ABC):
    """Destination for domain events, injected into each component."""

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Hand an event over for delivery."""
