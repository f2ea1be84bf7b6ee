"""Read-only worker profile supplied by the worker-management collaborator."""

from datetime import time

from pydantic import Field

from ...shared.base import ValueObject
from ..value_objects.enums import DayOfWeek, WorkerStatus
from ..value_objects.skill_requirement import SkillRequirement, WorkerSkill
from ..value_objects.time_window import ShiftWindow


class DayAvailability(ValueObject):
    """Declared availability for one weekday. No times means all day."""

    available: bool = True
    start_time: time | None = None
    end_time: time | None = None

    @property
    def window(self) -> ShiftWindow | None:
        if self.start_time is None or self.end_time is None:
            return None
        return ShiftWindow.spanning(self.start_time, self.end_time)

    @property
    def hours(self) -> float:
        window = self.window
        return 24.0 if window is None else window.duration_hours


class Worker(ValueObject):
    """Worker snapshot. The scheduling core never writes workers."""

    id: str = Field(min_length=1)
    name: str | None = None
    status: WorkerStatus = WorkerStatus.AVAILABLE
    department_id: str | None = None
    skills: list[WorkerSkill] = Field(default_factory=list)
    availability: dict[DayOfWeek, DayAvailability] = Field(default_factory=dict)

    @property
    def is_schedulable(self) -> bool:
        return self.status.is_schedulable

    def availability_on(self, day: DayOfWeek) -> DayAvailability:
        return self.availability.get(day, DayAvailability())

    def skill_named(self, name: str) -> WorkerSkill | None:
        wanted = name.strip().lower()
        for skill in self.skills:
            if skill.name.strip().lower() == wanted:
                return skill
        return None

    def meets(self, requirement: SkillRequirement) -> bool:
        return any(skill.matches(requirement) for skill in self.skills)
