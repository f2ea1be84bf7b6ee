from datetime import date
from uuid import uuid4

import pytest

from shiftcore.domain.shared.exceptions import (
    AssignmentConflictError,
    ConflictError,
    DomainError,
    ErrorType,
    GenerationCancelledError,
    NoShiftsMatchError,
    NotFoundError,
    ShiftNotFoundError,
    WorkerAlreadyBookedError,
    WorkerUnavailableError,
)


def test_not_found_carries_entity_id():
    shift_id = uuid4()
    error = ShiftNotFoundError(shift_id)

    assert isinstance(error, NotFoundError)
    assert error.to_dict() == {
        "type": "not_found",
        "message": f"Shift not found: {shift_id}",
        "details": {"shift_id": str(shift_id), "entity_type": "shift"},
    }


def test_no_shifts_match_details():
    error = NoShiftsMatchError(department_id="assembly")
    assert error.details == {
        "shift_ids": None,
        "department_id": "assembly",
        "work_center_id": None,
    }


@pytest.mark.parametrize(
    "error",
    [
        WorkerUnavailableError("ana", date(2024, 1, 8), "Worker status is sick_leave"),
        WorkerAlreadyBookedError("ana", date(2024, 1, 8)),
        AssignmentConflictError("Worker already booked", {"operation": "add"}),
    ],
)
def test_conflicts_share_error_type(error):
    assert isinstance(error, ConflictError)
    assert error.error_type == ErrorType.CONFLICT
    assert error.to_dict()["type"] == "conflict"


def test_unavailable_reason_in_message():
    error = WorkerUnavailableError("ana", date(2024, 1, 8), None)
    assert str(error) == "Worker is not available: unknown reason"
    assert error.details["date"] == "2024-01-08"


def test_cancellation_reports_committed_work():
    error = GenerationCancelledError(date(2024, 1, 10), committed=["a", "b"])

    assert isinstance(error, DomainError)
    assert error.error_type == ErrorType.CANCELLED
    assert error.committed == ["a", "b"]
    assert error.details == {"stopped_at": "2024-01-10", "committed_count": 2}
