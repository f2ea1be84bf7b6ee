from datetime import date
from uuid import uuid4

from shiftcore.domain.scheduling.events.domain_events import (
    AssignmentStatusUpdated,
    ScheduleGenerated,
)
from shiftcore.domain.scheduling.value_objects.enums import AssignmentStatus


def test_event_names_and_payload():
    event = AssignmentStatusUpdated(
        tenant_id="tenant-a",
        assignment_id=uuid4(),
        old_status=AssignmentStatus.SCHEDULED,
        new_status=AssignmentStatus.CONFIRMED,
    )

    assert ScheduleGenerated.event_name == "schedule.generated"
    assert event.event_name == "assignment.status.updated"
    assert event.model_dump(mode="json")["old_status"] == "scheduled"
    assert event.timestamp.tzinfo is not None
    assert set(event.payload()) == {"timestamp", "assignment_id", "old_status", "new_status"}


def test_generated_event_carries_range():
    event = ScheduleGenerated(
        tenant_id="tenant-a",
        start_date=date(2024, 1, 8),
        end_date=date(2024, 1, 14),
        assignment_count=5,
    )

    assert event.payload()["assignment_count"] == 5
    assert event.model_dump(mode="json")["start_date"] == "2024-01-08"

