"""Shift entity: a recurring time window with staffing bounds."""

from datetime import date, time

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from ...shared.base import Entity
from ..value_objects.enums import DayOfWeek, ShiftType
from ..value_objects.skill_requirement import SkillRequirement
from ..value_objects.time_window import ShiftWindow


class Shift(Entity):
    """
    Shift definition owned by the shift-management collaborator.

    The scheduling core only reads shifts. Staffing bounds must satisfy
    ``0 <= min_workers <= target_workers <= max_workers``.
    """

    tenant_id: str = Field(min_length=1)
    shift_code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    type: ShiftType = ShiftType.MORNING

    start_time: time
    end_time: time
    is_overnight: bool = False
    total_break_minutes: int = Field(default=0, ge=0)

    work_days: list[DayOfWeek] = Field(default_factory=DayOfWeek.weekdays)

    min_workers: int = Field(default=0, ge=0)
    target_workers: int = Field(default=0, ge=0)
    max_workers: int = Field(default=0, ge=0)

    skill_requirements: list[SkillRequirement] = Field(default_factory=list)

    department_id: str | None = None
    work_center_ids: list[str] = Field(default_factory=list)

    is_active: bool = True
    priority: int = 1
    effective_from: date | None = None
    effective_until: date | None = None

    @field_validator("shift_code")
    @classmethod
    def normalise_code(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def _check_rules(self) -> Self:
        if not self.min_workers <= self.target_workers <= self.max_workers:
            raise ValueError(
                f"Shift {self.shift_code}: staffing bounds must satisfy "
                f"min ({self.min_workers}) <= target ({self.target_workers}) "
                f"<= max ({self.max_workers})"
            )
        # window construction raises on an inconsistent overnight flag
        if self.total_break_minutes / 60 >= self.window.duration_hours:
            raise ValueError(f"Shift {self.shift_code}: breaks exceed shift length")
        if (
            self.effective_from
            and self.effective_until
            and self.effective_until < self.effective_from
        ):
            raise ValueError(f"Shift {self.shift_code}: effective range is reversed")
        return self

    def is_valid(self) -> bool:
        return 0 <= self.min_workers <= self.target_workers <= self.max_workers

    @property
    def window(self) -> ShiftWindow:
        return ShiftWindow(self.start_time, self.end_time, self.is_overnight)

    @property
    def duration_hours(self) -> float:
        return self.window.duration_hours

    @property
    def working_hours(self) -> float:
        """Paid hours: duration minus breaks."""
        return self.duration_hours - self.total_break_minutes / 60

    def is_active_on_day(self, day: DayOfWeek) -> bool:
        return day in self.work_days

    def is_effective_on(self, on_date: date) -> bool:
        if self.effective_from and on_date < self.effective_from:
            return False
        if self.effective_until and on_date > self.effective_until:
            return False
        return True

    @property
    def primary_work_center_id(self) -> str | None:
        return self.work_center_ids[0] if self.work_center_ids else None
