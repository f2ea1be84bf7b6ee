"""Scheduling value objects."""

from .calendar import CalendarDay, DayContext, ShiftOverride
from .enums import (
    AssignmentStatus,
    ConflictType,
    DayOfWeek,
    ExceptionType,
    ShiftType,
    SkillLevel,
    TransactionPolicy,
    WorkerStatus,
)
from .skill_requirement import SkillRequirement, WorkerSkill
from .time_window import ShiftWindow, rest_hours_between

__all__ = [
    "AssignmentStatus",
    "CalendarDay",
    "ConflictType",
    "DayContext",
    "DayOfWeek",
    "ExceptionType",
    "ShiftOverride",
    "ShiftType",
    "ShiftWindow",
    "SkillLevel",
    "SkillRequirement",
    "TransactionPolicy",
    "WorkerSkill",
    "WorkerStatus",
    "rest_hours_between",
]
