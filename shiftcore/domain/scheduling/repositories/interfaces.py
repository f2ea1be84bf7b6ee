"""
Repository interfaces for the scheduling domain.

Defines the contracts the infrastructure layer implements. Every call takes
an explicit ``tenant_id``; nothing is read from ambient context.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import date
from uuid import UUID

from ..entities.assignment import ShiftAssignment
from ..entities.shift import Shift
from ..entities.shift_exception import ShiftException
from ..entities.worker import Worker
from ..value_objects.calendar import CalendarDay
from ..value_objects.enums import WorkerStatus


class ShiftRepository(ABC):
    """Read access to shift definitions."""

    @abstractmethod
    def get_by_id(self, tenant_id: str, shift_id: UUID) -> Shift | None:
        """Retrieve a shift by id, or None."""

    @abstractmethod
    def find(
        self,
        tenant_id: str,
        shift_ids: Iterable[UUID] | None = None,
        department_id: str | None = None,
        work_center_id: str | None = None,
        active_only: bool = True,
    ) -> list[Shift]:
        """
        Retrieve shifts matching all given filters.

        Returns:
            Shifts ordered by priority, then code
        """

    @abstractmethod
    def find_by_codes(self, tenant_id: str, codes: Iterable[str]) -> list[Shift]:
        """Retrieve shifts by code."""

    @abstractmethod
    def add(self, shift: Shift) -> Shift:
        """Store a shift definition (used by seeding and the shift collaborator)."""


class AssignmentRepository(ABC):
    """Read/write access to shift assignments."""

    @abstractmethod
    def get_by_id(self, tenant_id: str, assignment_id: UUID) -> ShiftAssignment | None:
        """Retrieve an assignment by id, or None."""

    @abstractmethod
    def add(self, assignment: ShiftAssignment) -> ShiftAssignment:
        """
        Stage a new assignment.

        Raises:
            AssignmentConflictError: If it breaks the one-booking-per-day rule
        """

    @abstractmethod
    def add_all(self, assignments: list[ShiftAssignment]) -> list[ShiftAssignment]:
        """Stage several new assignments."""

    @abstractmethod
    def update(self, assignment: ShiftAssignment) -> ShiftAssignment:
        """Stage changes to an existing assignment."""

    @abstractmethod
    def find_live_for_worker_on(
        self, tenant_id: str, worker_id: str, on_date: date
    ) -> ShiftAssignment | None:
        """The worker's non-cancelled assignment on a date, if any."""

    @abstractmethod
    def booked_worker_ids_on(self, tenant_id: str, on_date: date) -> set[str]:
        """Workers holding a non-cancelled assignment on a date."""

    @abstractmethod
    def find_for_worker(
        self,
        tenant_id: str,
        worker_id: str,
        start_date: date,
        end_date: date,
        live_only: bool = True,
    ) -> list[ShiftAssignment]:
        """A worker's assignments in the inclusive range, ordered by date."""

    @abstractmethod
    def count_live_by_worker(
        self,
        tenant_id: str,
        worker_ids: Iterable[str],
        start_date: date,
        end_date: date,
    ) -> dict[str, int]:
        """Non-cancelled assignment counts per worker in the inclusive range."""

    @abstractmethod
    def find_in_range(
        self,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
        live_only: bool = True,
    ) -> list[ShiftAssignment]:
        """Assignments in the inclusive range, ordered by date."""


class ShiftExceptionRepository(ABC):
    """Read access to shift exceptions."""

    @abstractmethod
    def find_in_range(
        self,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
    ) -> list[ShiftException]:
        """Exceptions in the inclusive range."""

    @abstractmethod
    def add(self, exception: ShiftException) -> ShiftException:
        """Store an exception (used by seeding and the planning collaborator)."""


class CalendarRepository(ABC):
    """Read access to the production calendar."""

    @abstractmethod
    def find_in_range(
        self, tenant_id: str, start_date: date, end_date: date
    ) -> list[CalendarDay]:
        """Calendar records in the inclusive range, ordered by date."""

    @abstractmethod
    def add(self, tenant_id: str, day: CalendarDay) -> CalendarDay:
        """Store a calendar record (used by seeding and the calendar collaborator)."""


class UnitOfWork(ABC):
    """
    Transactional boundary over all scheduling repositories.

    Used as a context manager: commits on clean exit, rolls back when the
    block raises.
    """

    shifts: ShiftRepository
    assignments: AssignmentRepository
    exceptions: ShiftExceptionRepository
    calendar: CalendarRepository

    @abstractmethod
    def __enter__(self) -> "UnitOfWork":
        """Enter the runtime context for the unit of work."""

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit the runtime context for the unit of work."""

    @abstractmethod
    def commit(self) -> None:
        """Commit all changes in the current transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Rollback all changes in the current transaction."""


class TransactionManager(ABC):
    """Opens units of work; each ``transaction()`` block is one atomic write."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager[UnitOfWork]:
        """Context manager yielding a unit of work that commits on clean exit."""


class WorkerDirectory(ABC):
    """
    Port to the external worker-management collaborator.

    Workers are owned elsewhere; the scheduling core only reads them.
    """

    @abstractmethod
    def get_worker(self, tenant_id: str, worker_id: str) -> Worker | None:
        """Retrieve a worker profile, or None."""

    @abstractmethod
    def find_workers(
        self,
        tenant_id: str,
        department_id: str | None = None,
        statuses: Iterable[WorkerStatus] | None = None,
    ) -> list[Worker]:
        """Workers filtered by department and status."""
