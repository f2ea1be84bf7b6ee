"""
Mappers between scheduling domain objects and SQL records.

Handles the translation of enums, value objects and JSON columns between
the domain layer and the persistence layer.
"""

from shiftcore.domain.scheduling.entities.assignment import ShiftAssignment
from shiftcore.domain.scheduling.entities.shift import Shift
from shiftcore.domain.scheduling.entities.shift_exception import ShiftException
from shiftcore.domain.scheduling.value_objects.calendar import CalendarDay
from shiftcore.domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    DayOfWeek,
    ExceptionType,
    ShiftType,
)
from shiftcore.domain.scheduling.value_objects.skill_requirement import SkillRequirement

from .models import (
    CalendarDayRecord,
    ShiftAssignmentRecord,
    ShiftExceptionRecord,
    ShiftRecord,
)


class ShiftMapper:
    """Converts between Shift entities and shift rows."""

    @staticmethod
    def to_record(shift: Shift) -> ShiftRecord:
        return ShiftRecord(
            id=shift.id,
            tenant_id=shift.tenant_id,
            shift_code=shift.shift_code,
            name=shift.name,
            description=shift.description,
            type=shift.type.value,
            start_time=shift.start_time,
            end_time=shift.end_time,
            is_overnight=shift.is_overnight,
            total_break_minutes=shift.total_break_minutes,
            work_days=[day.value for day in shift.work_days],
            min_workers=shift.min_workers,
            target_workers=shift.target_workers,
            max_workers=shift.max_workers,
            skill_requirements=[
                req.model_dump(mode="json") for req in shift.skill_requirements
            ],
            department_id=shift.department_id,
            work_center_ids=list(shift.work_center_ids),
            is_active=shift.is_active,
            priority=shift.priority,
            effective_from=shift.effective_from,
            effective_until=shift.effective_until,
            created_at=shift.created_at,
            updated_at=shift.updated_at,
        )

    @staticmethod
    def to_domain(record: ShiftRecord) -> Shift:
        return Shift(
            id=record.id,
            tenant_id=record.tenant_id,
            shift_code=record.shift_code,
            name=record.name,
            description=record.description,
            type=ShiftType(record.type),
            start_time=record.start_time,
            end_time=record.end_time,
            is_overnight=record.is_overnight,
            total_break_minutes=record.total_break_minutes,
            work_days=[DayOfWeek(day) for day in record.work_days or []],
            min_workers=record.min_workers,
            target_workers=record.target_workers,
            max_workers=record.max_workers,
            skill_requirements=[
                SkillRequirement.model_validate(req)
                for req in record.skill_requirements or []
            ],
            department_id=record.department_id,
            work_center_ids=list(record.work_center_ids or []),
            is_active=record.is_active,
            priority=record.priority,
            effective_from=record.effective_from,
            effective_until=record.effective_until,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class AssignmentMapper:
    """Converts between ShiftAssignment entities and assignment rows."""

    _MUTABLE_FIELDS = (
        "worker_id",
        "work_center_id",
        "is_overtime",
        "is_temporary",
        "notes",
        "replacement_for_id",
        "approved_by_id",
        "approved_at",
        "updated_at",
    )

    @staticmethod
    def to_record(assignment: ShiftAssignment) -> ShiftAssignmentRecord:
        return ShiftAssignmentRecord(
            id=assignment.id,
            tenant_id=assignment.tenant_id,
            shift_id=assignment.shift_id,
            date=assignment.date,
            worker_id=assignment.worker_id,
            work_center_id=assignment.work_center_id,
            status=assignment.status.value,
            is_overtime=assignment.is_overtime,
            is_temporary=assignment.is_temporary,
            notes=assignment.notes,
            replacement_for_id=assignment.replacement_for_id,
            approved_by_id=assignment.approved_by_id,
            approved_at=assignment.approved_at,
            created_at=assignment.created_at,
            updated_at=assignment.updated_at,
        )

    @staticmethod
    def to_domain(record: ShiftAssignmentRecord) -> ShiftAssignment:
        return ShiftAssignment(
            id=record.id,
            tenant_id=record.tenant_id,
            shift_id=record.shift_id,
            date=record.date,
            worker_id=record.worker_id,
            work_center_id=record.work_center_id,
            status=AssignmentStatus(record.status),
            is_overtime=record.is_overtime,
            is_temporary=record.is_temporary,
            notes=record.notes,
            replacement_for_id=record.replacement_for_id,
            approved_by_id=record.approved_by_id,
            approved_at=record.approved_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @classmethod
    def apply(cls, assignment: ShiftAssignment, record: ShiftAssignmentRecord) -> None:
        """Copy the mutable state of an entity onto its existing row."""
        record.status = assignment.status.value
        for field_name in cls._MUTABLE_FIELDS:
            setattr(record, field_name, getattr(assignment, field_name))


class ShiftExceptionMapper:
    """Converts between ShiftException entities and exception rows."""

    @staticmethod
    def to_record(exception: ShiftException) -> ShiftExceptionRecord:
        return ShiftExceptionRecord(
            id=exception.id,
            tenant_id=exception.tenant_id,
            shift_id=exception.shift_id,
            date=exception.date,
            type=exception.type.value,
            reason=exception.reason,
            is_cancelled=exception.is_cancelled,
            reduced_capacity=exception.reduced_capacity,
            alternate_start_time=exception.alternate_start_time,
            alternate_end_time=exception.alternate_end_time,
            notes=exception.notes,
            created_by_id=exception.created_by_id,
            created_at=exception.created_at,
        )

    @staticmethod
    def to_domain(record: ShiftExceptionRecord) -> ShiftException:
        return ShiftException(
            id=record.id,
            tenant_id=record.tenant_id,
            shift_id=record.shift_id,
            date=record.date,
            type=ExceptionType(record.type),
            reason=record.reason,
            is_cancelled=record.is_cancelled,
            reduced_capacity=record.reduced_capacity,
            alternate_start_time=record.alternate_start_time,
            alternate_end_time=record.alternate_end_time,
            notes=record.notes,
            created_by_id=record.created_by_id,
            created_at=record.created_at,
        )


class CalendarMapper:
    """Converts between CalendarDay value objects and calendar rows."""

    @staticmethod
    def to_record(tenant_id: str, day: CalendarDay) -> CalendarDayRecord:
        return CalendarDayRecord(
            tenant_id=tenant_id,
            date=day.date,
            day_of_week=day.day_of_week.value,
            is_working_day=day.is_working_day,
            is_holiday=day.is_holiday,
            holiday_name=day.holiday_name,
            is_planned_maintenance=day.is_planned_maintenance,
            capacity_percentage=day.capacity_percentage,
            shift_overrides=[o.model_dump(mode="json") for o in day.shift_overrides],
            notes=day.notes,
        )

    @staticmethod
    def to_domain(record: CalendarDayRecord) -> CalendarDay:
        return CalendarDay.model_validate(
            {
                "date": record.date,
                "is_working_day": record.is_working_day,
                "is_holiday": record.is_holiday,
                "holiday_name": record.holiday_name,
                "is_planned_maintenance": record.is_planned_maintenance,
                "capacity_percentage": record.capacity_percentage,
                "shift_overrides": record.shift_overrides or [],
                "notes": record.notes,
            }
        )
