"""Domain enums for shift scheduling."""

from datetime import date
from enum import Enum


class ShiftType(str, Enum):
    """Shift type enumeration."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    ROTATING = "rotating"
    SPLIT = "split"
    FLEXIBLE = "flexible"
    WEEKEND = "weekend"


class DayOfWeek(str, Enum):
    """Weekday tags used by shift work days and worker availability."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, on_date: date) -> "DayOfWeek":
        """Weekday tag for a calendar date."""
        return _WEEKDAYS[on_date.weekday()]

    @classmethod
    def weekdays(cls) -> list["DayOfWeek"]:
        return _WEEKDAYS[:5]


_WEEKDAYS = [
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
    DayOfWeek.SATURDAY,
    DayOfWeek.SUNDAY,
]


class AssignmentStatus(str, Enum):
    """Shift assignment status enumeration."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABSENT = "absent"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Check if status is terminal (cannot transition further)."""
        return self in {
            AssignmentStatus.COMPLETED,
            AssignmentStatus.CANCELLED,
            AssignmentStatus.ABSENT,
        }

    @property
    def is_live(self) -> bool:
        """Live assignments count towards bookings, coverage and hours."""
        return self != AssignmentStatus.CANCELLED

    @property
    def is_cancellable(self) -> bool:
        return self in {AssignmentStatus.SCHEDULED, AssignmentStatus.CONFIRMED}

    def can_transition_to(self, target_status: "AssignmentStatus") -> bool:
        """Check if assignment can move from current status to target status."""
        valid_transitions = {
            AssignmentStatus.SCHEDULED: {
                AssignmentStatus.CONFIRMED,
                AssignmentStatus.CANCELLED,
                AssignmentStatus.ABSENT,
            },
            AssignmentStatus.CONFIRMED: {
                AssignmentStatus.IN_PROGRESS,
                AssignmentStatus.CANCELLED,
            },
            AssignmentStatus.IN_PROGRESS: {AssignmentStatus.COMPLETED},
            AssignmentStatus.COMPLETED: set(),  # Terminal state
            AssignmentStatus.ABSENT: set(),  # Terminal state
            AssignmentStatus.CANCELLED: set(),  # Terminal state
        }
        return target_status in valid_transitions.get(self, set())


class WorkerStatus(str, Enum):
    """Worker status as reported by the worker-management collaborator."""

    AVAILABLE = "available"
    WORKING = "working"
    BREAK = "break"
    OFF_DUTY = "off_duty"
    SICK_LEAVE = "sick_leave"
    VACATION = "vacation"
    TRAINING = "training"

    @property
    def is_schedulable(self) -> bool:
        """Check if a worker in this status may receive new shifts."""
        return self in {WorkerStatus.AVAILABLE, WorkerStatus.WORKING}


class SkillLevel(str, Enum):
    """Skill proficiency levels, ordered."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        return {
            SkillLevel.BEGINNER: 1,
            SkillLevel.INTERMEDIATE: 2,
            SkillLevel.ADVANCED: 3,
            SkillLevel.EXPERT: 4,
        }[self]

    def meets(self, required: "SkillLevel") -> bool:
        return self.rank >= required.rank


class ExceptionType(str, Enum):
    """Reason category of a shift exception."""

    HOLIDAY = "holiday"
    MAINTENANCE = "maintenance"
    EMERGENCY = "emergency"
    SPECIAL_EVENT = "special_event"


class ConflictType(str, Enum):
    """Scheduling-rule violation categories reported by the conflict detector."""

    DOUBLE_BOOKING = "double_booking"
    REST_PERIOD = "rest_period"
    OVERTIME_VIOLATION = "overtime_violation"


class TransactionPolicy(str, Enum):
    """How schedule generation groups its writes."""

    PER_SHIFT_DAY = "per_shift_day"  # commit each date x shift on its own
    WHOLE_BATCH = "whole_batch"  # one transaction for the whole range
