"""
End-to-end tests through the ShiftSchedulingService facade.
"""

from datetime import time, timedelta
from uuid import uuid4

import pytest

from shiftcore.domain.scheduling.services import scheduling_service
from shiftcore.domain.scheduling.services.pattern_applier import ShiftPattern
from shiftcore.domain.scheduling.services.schedule_generator import ScheduleRequest
from shiftcore.domain.scheduling.services.scheduling_service import ShiftSchedulingService
from shiftcore.domain.scheduling.services.swap_manager import ShiftSwapRequest
from shiftcore.domain.scheduling.value_objects.calendar import CalendarDay, ShiftOverride
from shiftcore.domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    TransactionPolicy,
)
from shiftcore.domain.shared.exceptions import (
    InvalidDateRangeError,
    ShiftNotFoundError,
)
from shiftcore.tests.factories import MONDAY, TENANT

FRIDAY = MONDAY + timedelta(days=4)
SUNDAY = MONDAY + timedelta(days=6)


@pytest.fixture
def service(uow_manager, worker_directory, event_bus, settings):
    return ShiftSchedulingService.from_settings(
        uow_manager, worker_directory, event_bus, settings=settings
    )


@pytest.fixture
def crew(add_worker):
    return [add_worker(worker_id) for worker_id in ("ana", "ben", "cho", "dev")]


@pytest.fixture
def morning(add_shift):
    return add_shift(department_id="assembly", work_center_ids=["wc-1"])


class TestFromSettings:
    def test_thresholds_come_from_settings(self, uow_manager, worker_directory, settings):
        strict = settings.model_copy(
            update={
                "MIN_REST_HOURS": 12.0,
                "MAX_WEEKLY_HOURS": 32.0,
                "GENERATION_TRANSACTION_POLICY": TransactionPolicy.WHOLE_BATCH,
            }
        )
        service = ShiftSchedulingService.from_settings(
            uow_manager, worker_directory, settings=strict
        )

        assert service.conflicts.min_rest_hours == 12.0
        assert service.conflicts.max_weekly_hours == 32.0
        assert service.generator.policy == TransactionPolicy.WHOLE_BATCH

    def test_process_settings_used_by_default(
        self, uow_manager, worker_directory, settings, monkeypatch
    ):
        monkeypatch.setattr(
            scheduling_service,
            "get_settings",
            lambda: settings.model_copy(update={"MAX_WEEKLY_HOURS": 36.0}),
        )

        service = ShiftSchedulingService.from_settings(uow_manager, worker_directory)

        assert service.conflicts.max_weekly_hours == 36.0
        assert service.conflicts.min_rest_hours == 8.0


class TestWeekLifecycle:
    def test_generate_analyze_swap_and_report(self, service, crew, morning, event_bus):
        result = service.generate_schedule(
            TENANT, ScheduleRequest(MONDAY, SUNDAY, auto_assign=True)
        )

        # two workers on each weekday, nobody at weekends
        assert result.assignment_count == 10
        assert result.shortfalls == []
        assert {a.work_center_id for a in result.assignments} == {"wc-1"}

        coverage = service.analyze_coverage(TENANT, MONDAY, SUNDAY)
        assert [r.date for r in coverage] == [MONDAY + timedelta(days=i) for i in range(5)]
        assert all(r.coverage_percentage == 100.0 for r in coverage)

        monday = [a for a in result.assignments if a.date == MONDAY]
        original = monday[0]
        standby = next(
            w.id for w in crew if w.id not in {a.worker_id for a in monday}
        )
        replacement = service.request_shift_swap(
            TENANT,
            ShiftSwapRequest(
                from_worker_id=original.worker_id,
                to_worker_id=standby,
                assignment_id=original.id,
                reason="Family event",
                requested_by="lead-1",
            ),
        )

        schedule = service.get_worker_schedule(TENANT, standby, MONDAY, SUNDAY)
        assert replacement.id in {a.id for a in schedule}
        history = service.get_worker_schedule(
            TENANT, original.worker_id, MONDAY, MONDAY, include_cancelled=True
        )
        assert [a.status for a in history] == [AssignmentStatus.CANCELLED]

        service.update_assignment_status(TENANT, replacement.id, AssignmentStatus.CONFIRMED)
        assert service.analyze_coverage(TENANT, MONDAY, MONDAY)[0].assigned_workers == 2

        assert [e.event_name for e in event_bus.get_event_history()] == [
            "schedule.generated",
            "shift.swapped",
            "assignment.status.updated",
        ]

    def test_pattern_then_conflicts(self, service, add_shift, event_bus):
        add_shift(shift_code="LATE", start_time=time(14, 0), end_time=time(22, 0))
        add_shift(shift_code="EARLY", start_time=time(6, 0), end_time=time(14, 0))

        created = service.apply_shift_pattern(
            TENANT,
            ShiftPattern(name="late-early", shift_codes=("LATE", "EARLY")),
            ["ana"],
            MONDAY,
            MONDAY + timedelta(days=1),
        )
        assert len(created) == 2

        # 22:00 to 06:00 leaves eight hours, exactly the minimum
        assert service.detect_conflicts(TENANT, "ana", MONDAY, SUNDAY) == []


class TestQueries:
    def test_worker_schedule_rejects_reversed_range(self, service):
        with pytest.raises(InvalidDateRangeError):
            service.get_worker_schedule(TENANT, "ana", FRIDAY, MONDAY)

    def test_available_workers_exclude_booked(self, service, crew, morning, add_assignment):
        add_assignment(morning, MONDAY, "ben")

        available = service.get_available_workers(TENANT, morning.id, MONDAY)

        assert [w.id for w in available] == ["ana", "cho", "dev"]

    def test_available_workers_unknown_shift(self, service):
        with pytest.raises(ShiftNotFoundError):
            service.get_available_workers(TENANT, uuid4(), MONDAY)

    def test_no_workers_when_shift_not_running(
        self, service, crew, morning, add_calendar_day
    ):
        assert service.get_available_workers(TENANT, morning.id, SUNDAY) == []

        add_calendar_day(
            CalendarDay(
                date=FRIDAY,
                shift_overrides=[ShiftOverride(shift_id=morning.id, cancelled=True)],
            )
        )
        assert service.get_available_workers(TENANT, morning.id, FRIDAY) == []

    def test_available_workers_respect_effective_window(
        self, service, add_worker, morning, add_exception
    ):
        add_worker("ana")
        add_worker(
            "ben",
            availability={"monday": {"start_time": time(8, 0), "end_time": time(16, 0)}},
        )
        add_exception(
            morning, MONDAY, alternate_start_time=time(8, 0), alternate_end_time=time(18, 0)
        )

        available = service.get_available_workers(TENANT, morning.id, MONDAY)

        assert [w.id for w in available] == ["ana"]
