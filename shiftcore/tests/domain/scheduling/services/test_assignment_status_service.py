from uuid import uuid4

import pytest

from shiftcore.domain.scheduling.events.domain_events import AssignmentStatusUpdated
from shiftcore.domain.scheduling.services.assignment_status_service import (
    AssignmentStatusService,
)
from shiftcore.domain.scheduling.value_objects.enums import AssignmentStatus
from shiftcore.domain.shared.exceptions import (
    AssignmentNotFoundError,
    ErrorType,
    InvalidStatusTransitionError,
)
from shiftcore.tests.factories import MONDAY, TENANT


@pytest.fixture
def service(uow_manager, event_bus):
    return AssignmentStatusService(uow_manager, event_bus)


@pytest.fixture
def assignment(add_shift, add_assignment):
    return add_assignment(add_shift(), MONDAY, "alice")


def _stored(uow_manager, assignment_id):
    with uow_manager.transaction() as uow:
        return uow.assignments.get_by_id(TENANT, assignment_id)


class TestUpdateStatus:
    def test_confirm_scheduled_assignment(self, service, assignment, uow_manager, event_bus):
        updated = service.update_status(
            TENANT, assignment.id, AssignmentStatus.CONFIRMED, notes="Confirmed by lead"
        )

        assert updated.status == AssignmentStatus.CONFIRMED
        stored = _stored(uow_manager, assignment.id)
        assert stored.status == AssignmentStatus.CONFIRMED
        assert stored.notes == "Confirmed by lead"

        [event] = event_bus.get_event_history(AssignmentStatusUpdated)
        assert event.assignment_id == assignment.id
        assert event.old_status == AssignmentStatus.SCHEDULED
        assert event.new_status == AssignmentStatus.CONFIRMED

    def test_full_lifecycle(self, service, assignment, uow_manager, event_bus):
        for status in (
            AssignmentStatus.CONFIRMED,
            AssignmentStatus.IN_PROGRESS,
            AssignmentStatus.COMPLETED,
        ):
            service.update_status(TENANT, assignment.id, status)

        assert _stored(uow_manager, assignment.id).status == AssignmentStatus.COMPLETED
        events = event_bus.get_event_history("assignment.status.updated")
        assert [e.old_status for e in events] == [
            AssignmentStatus.SCHEDULED,
            AssignmentStatus.CONFIRMED,
            AssignmentStatus.IN_PROGRESS,
        ]

    def test_invalid_transition_leaves_row_untouched(
        self, service, assignment, uow_manager, event_bus
    ):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            service.update_status(TENANT, assignment.id, AssignmentStatus.COMPLETED)

        assert exc_info.value.error_type == ErrorType.INVALID_REQUEST
        assert exc_info.value.details["current"] == "scheduled"
        assert _stored(uow_manager, assignment.id).status == AssignmentStatus.SCHEDULED
        assert event_bus.get_event_history() == []

    def test_cancelled_assignment_is_terminal(self, service, assignment):
        service.update_status(TENANT, assignment.id, AssignmentStatus.CANCELLED)
        with pytest.raises(InvalidStatusTransitionError):
            service.update_status(TENANT, assignment.id, AssignmentStatus.CONFIRMED)

    def test_unknown_assignment(self, service):
        with pytest.raises(AssignmentNotFoundError) as exc_info:
            service.update_status(TENANT, uuid4(), AssignmentStatus.CONFIRMED)
        assert exc_info.value.error_type == ErrorType.NOT_FOUND

    def test_other_tenant_cannot_see_assignment(self, service, assignment):
        with pytest.raises(AssignmentNotFoundError):
            service.update_status("tenant-b", assignment.id, AssignmentStatus.CONFIRMED)
