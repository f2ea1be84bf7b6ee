"""Scheduling domain entities."""

from .assignment import ShiftAssignment
from .shift import Shift
from .shift_exception import ShiftException
from .worker import DayAvailability, Worker

__all__ = [
    "DayAvailability",
    "Shift",
    "ShiftAssignment",
    "ShiftException",
    "Worker",
]
