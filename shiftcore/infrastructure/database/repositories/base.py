"""
Base repository for SQLModel-backed scheduling repositories.

Concrete repositories share one session owned by the unit of work; they
never commit on their own.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from shiftcore.domain.shared.exceptions import AssignmentConflictError, DatabaseError

from ..models import LIVE_ASSIGNMENT_INDEX

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_live_booking_violation(error: IntegrityError) -> bool:
    """Check if an integrity error comes from the one-booking-per-day index."""
    message = str(error.orig) if error.orig is not None else str(error)
    return LIVE_ASSIGNMENT_INDEX in message or (
        "UNIQUE" in message.upper() and "shift_assignments" in message
    )


class SqlRepository:
    """Common session handling and error translation."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def _run(self, operation: str, action: Callable[[], T]) -> T:
        """
        Run a storage action, translating driver errors.

        Raises:
            AssignmentConflictError: If the live-booking index rejects a write
            DatabaseError: If any other database operation fails
        """
        try:
            return action()
        except IntegrityError as e:
            if is_live_booking_violation(e):
                logger.warning(f"Live booking constraint rejected {operation}")
                raise AssignmentConflictError(
                    "Worker already holds a live assignment on this date",
                    {"operation": operation},
                ) from e
            raise DatabaseError(f"Integrity error during {operation}: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during {operation}: {e}") from e
