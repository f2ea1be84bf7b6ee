"""SQLModel repository implementations."""

from .assignment_repository import SqlAssignmentRepository
from .base import SqlRepository, is_live_booking_violation
from .shift_repository import (
    SqlCalendarRepository,
    SqlShiftExceptionRepository,
    SqlShiftRepository,
)

__all__ = [
    "SqlAssignmentRepository",
    "SqlCalendarRepository",
    "SqlRepository",
    "SqlShiftExceptionRepository",
    "SqlShiftRepository",
    "is_live_booking_violation",
]
