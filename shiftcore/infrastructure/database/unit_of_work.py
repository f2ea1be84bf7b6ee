"""
SQLModel unit of work.

Every mutating scheduling operation runs inside one unit of work: the block
commits on clean exit and rolls back when it raises, so no partial write
survives a failed call. Repositories flush as they write, which surfaces
booking-index violations at the offending call.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from shiftcore.domain.scheduling.repositories.interfaces import (
    TransactionManager,
    UnitOfWork,
)
from shiftcore.domain.shared.exceptions import DatabaseError

from .repositories import (
    SqlAssignmentRepository,
    SqlCalendarRepository,
    SqlShiftExceptionRepository,
    SqlShiftRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
SessionFactory = Callable[[], Session]


class SqlModelUnitOfWork(UnitOfWork):
    """One session, and the four scheduling repositories bound to it."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory
        self._session: Session | None = None

        self.shifts: SqlShiftRepository | None = None
        self.assignments: SqlAssignmentRepository | None = None
        self.exceptions: SqlShiftExceptionRepository | None = None
        self.calendar: SqlCalendarRepository | None = None

    def __enter__(self) -> "SqlModelUnitOfWork":
        session = self._session_factory()
        self._session = session
        self.shifts = SqlShiftRepository(session)
        self.assignments = SqlAssignmentRepository(session)
        self.exceptions = SqlShiftExceptionRepository(session)
        self.calendar = SqlCalendarRepository(session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                logger.error(
                    f"Rolling back unit of work after {exc_type.__name__}: {exc_val}"
                )
                self.rollback()
        finally:
            if self._session is not None:
                self._session.close()
            self._session = None

    def commit(self) -> None:
        """
        Commit everything written in this unit of work.

        Raises:
            DatabaseError: If the database refuses the commit
        """
        session = self.session
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise DatabaseError(f"Commit failed: {e}") from e

    def rollback(self) -> None:
        try:
            self.session.rollback()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Rollback failed: {e}") from e

    @property
    def session(self) -> Session:
        """
        Session of the open unit of work.

        Raises:
            DatabaseError: Outside a ``with`` block
        """
        if self._session is None:
            raise DatabaseError("Unit of work is not open")
        return self._session


class UnitOfWorkManager(TransactionManager):
    """
    Hands out units of work bound to one engine.

    Domain services receive the manager and open one ``transaction()`` per
    atomic write.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        session_factory: SessionFactory | None = None,
    ):
        """
        Args:
            engine: Engine to open sessions on
            session_factory: Replaces the engine-bound factory, mainly in tests
        """
        if session_factory is None:
            if engine is None:
                raise ValueError("UnitOfWorkManager needs an engine or a session factory")

            def session_factory() -> Session:
                return Session(engine, expire_on_commit=False)

        self._session_factory = session_factory
        self._uow_class: type[SqlModelUnitOfWork] = SqlModelUnitOfWork

    def create_unit_of_work(self) -> SqlModelUnitOfWork:
        """A new unit of work, not yet entered."""
        return self._uow_class(self._session_factory)

    @contextmanager
    def transaction(self) -> Iterator[SqlModelUnitOfWork]:
        """
        Open a unit of work for the duration of the block.

        Usage:
            with uow_manager.transaction() as uow:
                assignment = uow.assignments.get_by_id(tenant_id, assignment_id)
                assignment.cancel("No longer needed")
                uow.assignments.update(assignment)
        """
        with self.create_unit_of_work() as uow:
            yield uow

    def run(self, work: Callable[[UnitOfWork], T]) -> T:
        """Call ``work`` inside one transaction and return its result."""
        with self.transaction() as uow:
            return work(uow)

    def set_default_uow_class(self, uow_class: type[SqlModelUnitOfWork]) -> None:
        """Swap the unit-of-work class, for instrumentation."""
        self._uow_class = uow_class
