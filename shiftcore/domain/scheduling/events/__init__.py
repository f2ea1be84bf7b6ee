"""
Domain Events Module

Exports scheduling domain events and the event sink contract.
"""

from .domain_events import (
    AssignmentStatusUpdated,
    EventSink,
    PatternApplied,
    ScheduleGenerated,
    ShiftSwapped,
)

__all__ = [
    "AssignmentStatusUpdated",
    "EventSink",
    "PatternApplied",
    "ScheduleGenerated",
    "ShiftSwapped",
]
