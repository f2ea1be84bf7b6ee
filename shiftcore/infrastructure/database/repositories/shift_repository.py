"""SQL implementations of the shift, exception and calendar repositories."""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from sqlmodel import col, select

from shiftcore.domain.scheduling.entities.shift import Shift
from shiftcore.domain.scheduling.entities.shift_exception import ShiftException
from shiftcore.domain.scheduling.repositories.interfaces import (
    CalendarRepository,
    ShiftExceptionRepository,
    ShiftRepository,
)
from shiftcore.domain.scheduling.value_objects.calendar import CalendarDay

from ..mappers import CalendarMapper, ShiftExceptionMapper, ShiftMapper
from ..models import CalendarDayRecord, ShiftExceptionRecord, ShiftRecord
from .base import SqlRepository


class SqlShiftRepository(SqlRepository, ShiftRepository):
    """Shift definitions stored in the ``shifts`` table."""

    def get_by_id(self, tenant_id: str, shift_id: UUID) -> Shift | None:
        def action():
            statement = select(ShiftRecord).where(
                ShiftRecord.tenant_id == tenant_id, ShiftRecord.id == shift_id
            )
            record = self.session.exec(statement).first()
            return ShiftMapper.to_domain(record) if record else None

        return self._run("get_shift", action)

    def find(
        self,
        tenant_id: str,
        shift_ids: Iterable[UUID] | None = None,
        department_id: str | None = None,
        work_center_id: str | None = None,
        active_only: bool = True,
    ) -> list[Shift]:
        def action():
            statement = select(ShiftRecord).where(ShiftRecord.tenant_id == tenant_id)
            if active_only:
                statement = statement.where(ShiftRecord.is_active == True)  # noqa: E712
            if shift_ids is not None:
                statement = statement.where(col(ShiftRecord.id).in_(list(shift_ids)))
            if department_id is not None:
                statement = statement.where(ShiftRecord.department_id == department_id)
            statement = statement.order_by(ShiftRecord.priority, ShiftRecord.shift_code)
            records = self.session.exec(statement).all()
            # work_center_ids is a JSON column
            if work_center_id is not None:
                records = [r for r in records if work_center_id in (r.work_center_ids or [])]
            return [ShiftMapper.to_domain(r) for r in records]

        return self._run("find_shifts", action)

    def find_by_codes(self, tenant_id: str, codes: Iterable[str]) -> list[Shift]:
        wanted = sorted({code.strip().upper() for code in codes})

        def action():
            statement = select(ShiftRecord).where(
                ShiftRecord.tenant_id == tenant_id,
                col(ShiftRecord.shift_code).in_(wanted),
            )
            return [ShiftMapper.to_domain(r) for r in self.session.exec(statement).all()]

        return self._run("find_shifts_by_code", action)

    def add(self, shift: Shift) -> Shift:
        def action():
            self.session.add(ShiftMapper.to_record(shift))
            self.session.flush()
            return shift

        return self._run("add_shift", action)


class SqlShiftExceptionRepository(SqlRepository, ShiftExceptionRepository):
    """Shift exceptions stored in the ``shift_exceptions`` table."""

    def find_in_range(
        self,
        tenant_id: str,
        start_date: date,
        end_date: date,
        shift_ids: Iterable[UUID] | None = None,
    ) -> list[ShiftException]:
        def action():
            statement = select(ShiftExceptionRecord).where(
                ShiftExceptionRecord.tenant_id == tenant_id,
                ShiftExceptionRecord.date >= start_date,
                ShiftExceptionRecord.date <= end_date,
            )
            if shift_ids is not None:
                statement = statement.where(
                    col(ShiftExceptionRecord.shift_id).in_(list(shift_ids))
                )
            statement = statement.order_by(ShiftExceptionRecord.date)
            return [
                ShiftExceptionMapper.to_domain(r)
                for r in self.session.exec(statement).all()
            ]

        return self._run("find_exceptions", action)

    def add(self, exception: ShiftException) -> ShiftException:
        def action():
            self.session.add(ShiftExceptionMapper.to_record(exception))
            self.session.flush()
            return exception

        return self._run("add_exception", action)


class SqlCalendarRepository(SqlRepository, CalendarRepository):
    """Production calendar stored in the ``production_calendar`` table."""

    def find_in_range(
        self, tenant_id: str, start_date: date, end_date: date
    ) -> list[CalendarDay]:
        def action():
            statement = (
                select(CalendarDayRecord)
                .where(
                    CalendarDayRecord.tenant_id == tenant_id,
                    CalendarDayRecord.date >= start_date,
                    CalendarDayRecord.date <= end_date,
                )
                .order_by(CalendarDayRecord.date)
            )
            return [CalendarMapper.to_domain(r) for r in self.session.exec(statement).all()]

        return self._run("find_calendar", action)

    def add(self, tenant_id: str, day: CalendarDay) -> CalendarDay:
        def action():
            self.session.add(CalendarMapper.to_record(tenant_id, day))
            self.session.flush()
            return day

        return self._run("add_calendar_day", action)
