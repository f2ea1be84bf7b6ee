"""
SQLModel table definitions for the scheduling core.

The partial unique index on ``shift_assignments`` is what guarantees one
live booking per worker and day under concurrent generation, pattern
application and swaps.
"""

from datetime import date, datetime, time
from uuid import UUID, uuid4

from sqlalchemy import JSON, CheckConstraint, Column, Index, UniqueConstraint, text
from sqlmodel import Field, SQLModel

from shiftcore.domain.shared.base import utcnow

LIVE_ASSIGNMENT_INDEX = "uq_shift_assignments_live_worker_day"

_LIVE_PREDICATE = "status <> 'cancelled' AND worker_id IS NOT NULL"
_STATUSES = "'scheduled', 'confirmed', 'in_progress', 'completed', 'absent', 'cancelled'"


class TimestampedModel(SQLModel):
    """Base model with timestamp fields."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None


class TenantModel(TimestampedModel):
    """Base model with UUID primary key, tenant and timestamps."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: str = Field(max_length=64, index=True)


class ShiftRecord(TenantModel, table=True):
    """Shift definition table."""

    __tablename__ = "shifts"
    __table_args__ = (
        UniqueConstraint("tenant_id", "shift_code", name="uq_shifts_tenant_code"),
        Index("ix_shifts_tenant_department", "tenant_id", "department_id"),
        CheckConstraint(
            "min_workers >= 0 AND min_workers <= target_workers "
            "AND target_workers <= max_workers",
            name="ck_shifts_staffing_bounds",
        ),
    )

    shift_code: str = Field(max_length=50)
    name: str = Field(max_length=100)
    description: str | None = None
    type: str = Field(default="morning", max_length=20)

    start_time: time
    end_time: time
    is_overnight: bool = False
    total_break_minutes: int = 0

    work_days: list[str] = Field(default_factory=list, sa_column=Column(JSON))

    min_workers: int = 0
    target_workers: int = 0
    max_workers: int = 0

    skill_requirements: list[dict] = Field(default_factory=list, sa_column=Column(JSON))

    department_id: str | None = Field(default=None, max_length=64)
    work_center_ids: list[str] = Field(default_factory=list, sa_column=Column(JSON))

    is_active: bool = True
    priority: int = 1
    effective_from: date | None = None
    effective_until: date | None = None


class ShiftAssignmentRecord(TenantModel, table=True):
    """Shift assignment table."""

    __tablename__ = "shift_assignments"
    __table_args__ = (
        Index(
            LIVE_ASSIGNMENT_INDEX,
            "tenant_id",
            "worker_id",
            "date",
            unique=True,
            sqlite_where=text(_LIVE_PREDICATE),
            postgresql_where=text(_LIVE_PREDICATE),
        ),
        Index("ix_shift_assignments_tenant_date", "tenant_id", "date"),
        Index("ix_shift_assignments_tenant_worker", "tenant_id", "worker_id"),
        CheckConstraint(f"status IN ({_STATUSES})", name="ck_shift_assignments_status"),
    )

    shift_id: UUID = Field(foreign_key="shifts.id", index=True)
    date: date
    worker_id: str | None = Field(default=None, max_length=64)
    work_center_id: str | None = Field(default=None, max_length=64)
    status: str = Field(default="scheduled", max_length=20)

    is_overtime: bool = False
    is_temporary: bool = False
    notes: str | None = None

    replacement_for_id: UUID | None = Field(default=None)
    approved_by_id: str | None = Field(default=None, max_length=64)
    approved_at: datetime | None = None


class ShiftExceptionRecord(TenantModel, table=True):
    """Shift exception table."""

    __tablename__ = "shift_exceptions"
    __table_args__ = (
        Index("ix_shift_exceptions_tenant_shift_date", "tenant_id", "shift_id", "date"),
    )

    shift_id: UUID = Field(foreign_key="shifts.id")
    date: date
    type: str = Field(default="special_event", max_length=50)
    reason: str = Field(max_length=255)
    is_cancelled: bool = False
    reduced_capacity: int | None = None
    alternate_start_time: time | None = None
    alternate_end_time: time | None = None
    notes: str | None = None
    created_by_id: str | None = Field(default=None, max_length=64)


class CalendarDayRecord(TenantModel, table=True):
    """Production calendar table, one row per tenant and date."""

    __tablename__ = "production_calendar"
    __table_args__ = (
        UniqueConstraint("tenant_id", "date", name="uq_production_calendar_tenant_date"),
        CheckConstraint(
            "capacity_percentage >= 0 AND capacity_percentage <= 100",
            name="ck_production_calendar_capacity",
        ),
    )

    date: date
    day_of_week: str = Field(max_length=10)
    is_working_day: bool = True
    is_holiday: bool = False
    holiday_name: str | None = Field(default=None, max_length=100)
    is_planned_maintenance: bool = False
    capacity_percentage: int = 100
    shift_overrides: list[dict] = Field(default_factory=list, sa_column=Column(JSON))
    notes: str | None = None
