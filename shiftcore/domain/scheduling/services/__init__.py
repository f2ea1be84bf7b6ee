"""Scheduling domain services."""

from .assignment_status_service import AssignmentStatusService
from .auto_assigner import AutoAssigner, iso_week_bounds
from .availability_gate import AvailabilityGate, AvailabilityResult, SkillMatch
from .calendar_resolver import CalendarResolver
from .conflict_detector import ConflictDetector, ScheduleConflict
from .coverage_analyzer import CoverageAnalyzer, CoverageReport
from .pattern_applier import PatternApplier, ShiftPattern
from .schedule_generator import (
    CancellationToken,
    GenerationResult,
    ScheduleGenerator,
    ScheduleRequest,
    Shortfall,
    date_range,
)
from .scheduling_service import ShiftSchedulingService
from .shift_catalog import ShiftCatalog
from .swap_manager import ShiftSwapRequest, SwapManager
from .target_calculator import TargetCalculator

__all__ = [
    "AssignmentStatusService",
    "AutoAssigner",
    "AvailabilityGate",
    "AvailabilityResult",
    "CalendarResolver",
    "CancellationToken",
    "ConflictDetector",
    "CoverageAnalyzer",
    "CoverageReport",
    "GenerationResult",
    "PatternApplier",
    "ScheduleConflict",
    "ScheduleGenerator",
    "ScheduleRequest",
    "ShiftCatalog",
    "ShiftPattern",
    "ShiftSchedulingService",
    "ShiftSwapRequest",
    "Shortfall",
    "SkillMatch",
    "SwapManager",
    "TargetCalculator",
    "date_range",
    "iso_week_bounds",
]
