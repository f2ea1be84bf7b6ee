"""
Domain exceptions for the scheduling core.

Every error carries a discriminating ``error_type`` plus the entity ids
involved, so callers can decide whether to retry or correct their input.
Scheduling-rule findings (double booking, rest period, overtime) are data
returned by the conflict detector, not exceptions.
"""

from datetime import date
from enum import Enum
from uuid import UUID


class ErrorType(str, Enum):
    """Error type enumeration for discriminated handling."""

    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    CONFLICT = "conflict"
    CANCELLED = "cancelled"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(DomainError):
    """A referenced shift, assignment or filter set resolves to nothing."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.NOT_FOUND, details)


class InvalidRequestError(DomainError):
    """Structurally valid request that is semantically wrong."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.INVALID_REQUEST, details)


class ConflictError(DomainError):
    """A precondition about shared assignment state failed."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.CONFLICT, details)


# Not found
class ShiftNotFoundError(NotFoundError):
    """Raised when a shift is not found."""

    def __init__(self, shift_id: UUID) -> None:
        super().__init__(
            f"Shift not found: {shift_id}",
            {"shift_id": str(shift_id), "entity_type": "shift"},
        )
        self.shift_id = shift_id


class AssignmentNotFoundError(NotFoundError):
    """Raised when a shift assignment is not found."""

    def __init__(self, assignment_id: UUID) -> None:
        super().__init__(
            f"Shift assignment not found: {assignment_id}",
            {"assignment_id": str(assignment_id), "entity_type": "shift_assignment"},
        )
        self.assignment_id = assignment_id


class NoShiftsMatchError(NotFoundError):
    """Raised when schedule filters select no active shift."""

    def __init__(
        self,
        shift_ids: list[UUID] | None = None,
        department_id: str | None = None,
        work_center_id: str | None = None,
    ) -> None:
        super().__init__(
            "No shifts found for the specified criteria",
            {
                "shift_ids": ",".join(str(s) for s in shift_ids) if shift_ids else None,
                "department_id": department_id,
                "work_center_id": work_center_id,
            },
        )


class ShiftCodeNotFoundError(NotFoundError):
    """Raised when a pattern references shift codes that do not resolve."""

    def __init__(self, pattern_name: str, missing_codes: list[str]) -> None:
        super().__init__(
            f"Pattern '{pattern_name}' references unknown shift codes: "
            f"{', '.join(missing_codes)}",
            {"pattern": pattern_name, "missing_codes": ",".join(missing_codes)},
        )
        self.missing_codes = missing_codes


# Invalid request
class WorkerNotAssignedError(InvalidRequestError):
    """Raised when a swap names a worker who does not own the assignment."""

    def __init__(self, assignment_id: UUID, worker_id: str) -> None:
        super().__init__(
            f"Worker {worker_id} is not assigned to shift assignment {assignment_id}",
            {"assignment_id": str(assignment_id), "worker_id": worker_id},
        )


class InvalidStatusTransitionError(InvalidRequestError):
    """Raised when an assignment status change breaks the state machine."""

    def __init__(self, assignment_id: UUID, current: str, target: str) -> None:
        super().__init__(
            f"Assignment {assignment_id} cannot move from {current} to {target}",
            {"assignment_id": str(assignment_id), "current": current, "target": target},
        )


class InvalidPatternError(InvalidRequestError):
    """Raised when a shift pattern definition is unusable."""

    def __init__(self, pattern_name: str, reason: str) -> None:
        super().__init__(
            f"Invalid shift pattern '{pattern_name}': {reason}",
            {"pattern": pattern_name},
        )


class InvalidDateRangeError(InvalidRequestError):
    """Raised when a range ends before it starts."""

    def __init__(self, start_date: date, end_date: date) -> None:
        super().__init__(
            f"End date {end_date} is before start date {start_date}",
            {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )


# Conflict
class WorkerUnavailableError(ConflictError):
    """Raised when the availability collaborator rejects a worker."""

    def __init__(self, worker_id: str, on_date: date, reason: str | None) -> None:
        super().__init__(
            f"Worker is not available: {reason or 'unknown reason'}",
            {"worker_id": worker_id, "date": on_date.isoformat(), "reason": reason},
        )


class WorkerAlreadyBookedError(ConflictError):
    """Raised when a worker already holds a live assignment on the date."""

    def __init__(self, worker_id: str, on_date: date) -> None:
        super().__init__(
            "Worker already has a shift assignment on this date",
            {"worker_id": worker_id, "date": on_date.isoformat()},
        )


class AssignmentConflictError(ConflictError):
    """Raised when storage rejects a write on the one-booking-per-day rule."""

    def __init__(self, message: str, details: dict[str, str | int | bool | None]):
        super().__init__(message, details)


class GenerationCancelledError(DomainError):
    """
    Raised when schedule generation is stopped by its cancellation token.

    ``committed`` holds the assignments that remain written under the
    active transaction policy.
    """

    def __init__(self, stopped_at: date, committed: list | None = None) -> None:
        self.committed = committed or []
        super().__init__(
            f"Schedule generation cancelled before {stopped_at}",
            ErrorType.CANCELLED,
            {"stopped_at": stopped_at.isoformat(), "committed_count": len(self.committed)},
        )


# Repository
class DatabaseError(DomainError):
    """Raised when a storage operation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.REPOSITORY)
