"""SQL implementation of the shift assignment repository."""

import logging
from collections.abc import Iterable
from datetime import date
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select

from shiftcore.domain.scheduling.entities.assignment import ShiftAssignment
from shiftcore.domain.scheduling.repositories.interfaces import AssignmentRepository
from shiftcore.domain.scheduling.value_objects.enums import AssignmentStatus
from shiftcore.domain.shared.exceptions import AssignmentNotFoundError

from ..mappers import AssignmentMapper
from ..models import ShiftAssignmentRecord
from .base import SqlRepository

logger = logging.getLogger(__name__)

_CANCELLED = AssignmentStatus.CANCELLED.value


class SqlAssignmentRepository(SqlRepository, AssignmentRepository):
    """
    Shift assignments stored in the ``shift_assignments`` table.

    Writes are flushed immediately so that a violation of the live-booking
    index surfaces at the call that caused it.
    """

    def get_by_id(self, tenant_id: str, assignment_id: UUID) -> ShiftAssignment | None:
        def action():
            record = self._record(tenant_id, assignment_id)
            return AssignmentMapper.to_domain(record) if record else None

        return self._run("get_assignment", action)

    def add(self, assignment: ShiftAssignment) -> ShiftAssignment:
        assignment.validate_rules()

        def action():
            self.session.add(AssignmentMapper.to_record(assignment))
            self.session.flush()
            return assignment

        return self._run("add_assignment", action)

    def add_all(self, assignments: list[ShiftAssignment]) -> list[ShiftAssignment]:
        if not assignments:
            return []
        for assignment in assignments:
            assignment.validate_rules()

        def action():
            self.session.add_all([AssignmentMapper.to_record(a) for a in assignments])
            self.session.flush()
            logger.debug(f"Staged {len(assignments)} assignments")
            return assignments

        return self._run("add_assignments", action)

    def update(self, assignment: ShiftAssignment) -> ShiftAssignment:
        def action():
            record = self._record(assignment.tenant_id, assignment.id)
            if record is None:
                raise AssignmentNotFoundError(assignment.id)
            AssignmentMapper.apply(assignment, record)
            self.session.add(record)
            self.session.flush()
            return assignment

        return self._run("update_assignment", action)

    def find_live_for_worker_on(
        self, tenant_id: str, worker_id: str, on_date: date
    ) -> ShiftAssignment | None:
        def action():
            statement = select(ShiftAssignmentRecord).where(
                ShiftAssignmentRecord.tenant_id == tenant_id,
                ShiftAssignmentRecord.worker_id == worker_id,
                ShiftAssignmentRecord.date == on_date,
                ShiftAssignmentRecord.status != _CANCELLED,
            )
            record = self.session.exec(statement).first()
            return AssignmentMapper.to_domain(record) if record else None

        return self._run("find_live_for_worker_on", action)

    def booked_worker_ids_on(self, tenant_id: str, on_date: date) -> set[str]:
        def action():
            statement = select(ShiftAssignmentRecord.worker_id).where(
                ShiftAssignmentRecord.tenant_id == tenant_id,
                ShiftAssignmentRecord.date == on_date,
                ShiftAssignmentRecord.status != _CANCELLED,
                col(ShiftAssignmentRecord.worker_id).is_not(None),
            )
            return set(self.session.exec(statement).all())

        return self._run("booked_worker_ids_on", action)

    def find_for_worker(
        self,
        tenant_id: str,
        worker_id: str,
        start_date: date,
        end_date: date,
        live_only: bool = True,
    ) -> list[ShiftAssignment]:
        def action():
            statement = select(ShiftAssignmentRecord).where(
                ShiftAssignmentRecord.tenant_id == tenant_id,
                ShiftAssignmentRecord.worker_id == worker_id,
                ShiftAssignmentRecord.date >= start_date,
                ShiftAssignmentRecord.date <= end_date,
            )
            if live_only:
                statement = statement.where(ShiftAssignmentRecord.status != _CANCELLED)
            statement = statement.order_by(
                ShiftAssignmentRecord.date, ShiftAssignmentRecord.created_at
            )
            return [AssignmentMapper.to_domain(r) for r in self.session.exec(statement).all()]

        return self._run("find_for_worker", action)

    def count_live_by_worker(
        self,
        tenant_id: str,
        worker_ids: Iterable[str],
        start_date: date,
        end_date: date,
    ) -> dict[str, int]:
        ids = list(worker_ids)
        if not ids:
            return {}

        def action():
            statement = (
                select(ShiftAssignmentRecord.worker_id, func.count())
                .where(
                    ShiftAssignmentRecord.tenant_id == tenant_id,
                    col(ShiftAssignmentRecord.worker_id).in_(ids),
                    ShiftAssignmentRecord.date >= start_date,
                    ShiftAssignmentRecord.date <= end_date,
                    ShiftAssignmentRecord.status != _CANCELLED,
                )
                .group_by(ShiftAssignmentRecord.worker_id)
            )
            counts = {worker_id: 0 for worker_id in ids}
            for worker_id, count in self.session.exec(statement).all():
                counts[worker_id] = count
            return counts

        return self._run("count_live_by_worker", action)

    def find_in_range(
        self,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
        live_only: bool = True,
    ) -> list[ShiftAssignment]:
        def action():
            statement = select(ShiftAssignmentRecord).where(
                ShiftAssignmentRecord.tenant_id == tenant_id,
                ShiftAssignmentRecord.date >= start_date,
                ShiftAssignmentRecord.date <= end_date,
            )
            if live_only:
                statement = statement.where(ShiftAssignmentRecord.status != _CANCELLED)
            if shift_ids is not None:
                statement = statement.where(
                    col(ShiftAssignmentRecord.shift_id).in_(list(shift_ids))
                )
            statement = statement.order_by(
                ShiftAssignmentRecord.date, ShiftAssignmentRecord.created_at
            )
            return [AssignmentMapper.to_domain(r) for r in self.session.exec(statement).all()]

        return self._run("find_assignments_in_range", action)

    def _record(self, tenant_id: str, assignment_id: UUID) -> ShiftAssignmentRecord | None:
        statement = select(ShiftAssignmentRecord).where(
            ShiftAssignmentRecord.tenant_id == tenant_id,
            ShiftAssignmentRecord.id == assignment_id,
        )
        return self.session.exec(statement).first()
