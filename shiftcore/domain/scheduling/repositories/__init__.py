"""Repository and collaborator ports for the scheduling domain."""

from .interfaces import (
    AssignmentRepository,
    CalendarRepository,
    ShiftExceptionRepository,
    ShiftRepository,
    TransactionManager,
    UnitOfWork,
    WorkerDirectory,
)

__all__ = [
    "AssignmentRepository",
    "CalendarRepository",
    "ShiftExceptionRepository",
    "ShiftRepository",
    "TransactionManager",
    "UnitOfWork",
    "WorkerDirectory",
]
