"""
Tests for ConflictDetector.

Rest-period and overtime checks run against the database; double bookings
cannot be stored because of the live-booking index, so they are checked
with a stubbed unit of work.
"""

from contextlib import nullcontext
from datetime import time, timedelta
from unittest.mock import Mock

import pytest

from shiftcore.domain.scheduling.entities.assignment import ShiftAssignment
from shiftcore.domain.scheduling.repositories.interfaces import TransactionManager
from shiftcore.domain.scheduling.services.conflict_detector import ConflictDetector
from shiftcore.domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    ConflictType,
    DayOfWeek,
)
from shiftcore.tests.factories import MONDAY, TENANT, make_shift

ALL_DAYS = list(DayOfWeek)


@pytest.fixture
def detector(uow_manager):
    return ConflictDetector(uow_manager, min_rest_hours=8, max_weekly_hours=40)


@pytest.fixture
def shifts(add_shift):
    return {
        "early": add_shift(
            shift_code="EARLY", start_time=time(6, 0), end_time=time(14, 0), work_days=ALL_DAYS
        ),
        "evening": add_shift(
            shift_code="EVENING", start_time=time(14, 0), end_time=time(22, 0), work_days=ALL_DAYS
        ),
        "late": add_shift(
            shift_code="LATE", start_time=time(15, 0), end_time=time(23, 0), work_days=ALL_DAYS
        ),
        "night": add_shift(
            shift_code="NIGHT",
            start_time=time(22, 0),
            end_time=time(6, 0),
            is_overnight=True,
            work_days=ALL_DAYS,
        ),
    }


def _types(conflicts):
    return [c.conflict_type for c in conflicts]


class TestRestPeriod:
    """Test minimum rest between consecutive assignments."""

    def test_exactly_eight_hours_is_fine(self, detector, shifts, add_assignment):
        add_assignment(shifts["evening"], MONDAY, "w1")
        add_assignment(shifts["early"], MONDAY + timedelta(days=1), "w1")

        assert detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=1)) == []

    def test_seven_hours_is_a_violation(self, detector, shifts, add_assignment):
        add_assignment(shifts["late"], MONDAY, "w1")
        later = add_assignment(shifts["early"], MONDAY + timedelta(days=1), "w1")

        conflicts = detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=1))

        assert len(conflicts) == 1
        conflict = conflicts[0]
        assert conflict.conflict_type == ConflictType.REST_PERIOD
        assert conflict.date == MONDAY + timedelta(days=1)
        assert conflict.worker_id == "w1"
        assert "Only 7 hours rest" in conflict.details
        assert later.id in conflict.assignment_ids

    def test_overnight_end_rolls_over(self, detector, shifts, add_assignment):
        add_assignment(shifts["night"], MONDAY, "w1")
        add_assignment(shifts["early"], MONDAY + timedelta(days=1), "w1")

        conflicts = detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=1))

        assert _types(conflicts) == [ConflictType.REST_PERIOD]
        assert "Only 0 hours rest" in conflicts[0].details

    def test_cancelled_and_other_workers_ignored(self, detector, shifts, add_assignment):
        add_assignment(shifts["late"], MONDAY, "w1", status=AssignmentStatus.CANCELLED)
        add_assignment(shifts["late"], MONDAY, "w2")
        add_assignment(shifts["early"], MONDAY + timedelta(days=1), "w1")

        assert detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=1)) == []

    def test_custom_threshold(self, uow_manager, shifts, add_assignment):
        add_assignment(shifts["evening"], MONDAY, "w1")
        add_assignment(shifts["early"], MONDAY + timedelta(days=1), "w1")

        strict = ConflictDetector(uow_manager, min_rest_hours=11)
        assert _types(strict.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=1))) == [
            ConflictType.REST_PERIOD
        ]


class TestOvertime:
    """Test weekly overtime detection."""

    def test_five_days_is_not_overtime(self, detector, shifts, add_assignment):
        for offset in range(5):
            add_assignment(shifts["early"], MONDAY + timedelta(days=offset), "w1")

        assert detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=6)) == []

    def test_every_shift_of_an_overtime_week_is_flagged(self, detector, shifts, add_assignment):
        for offset in range(6):
            add_assignment(shifts["early"], MONDAY + timedelta(days=offset), "w1")

        conflicts = detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=6))

        assert _types(conflicts) == [ConflictType.OVERTIME_VIOLATION] * 6
        assert [c.date for c in conflicts] == [MONDAY + timedelta(days=i) for i in range(6)]
        assert all("48 hours" in c.details for c in conflicts)

    def test_only_the_overtime_week_is_flagged(self, detector, shifts, add_assignment):
        for offset in range(6):
            add_assignment(shifts["early"], MONDAY + timedelta(days=offset), "w1")
        next_monday = MONDAY + timedelta(days=7)
        add_assignment(shifts["early"], next_monday, "w1")

        conflicts = detector.detect(TENANT, "w1", MONDAY, next_monday)

        assert next_monday not in {c.date for c in conflicts}
        assert len(conflicts) == 6

    def test_hours_before_range_count(self, detector, shifts, add_assignment):
        for offset in range(6):
            add_assignment(shifts["early"], MONDAY + timedelta(days=offset), "w1")
        saturday = MONDAY + timedelta(days=5)

        conflicts = detector.detect(TENANT, "w1", saturday, saturday)

        assert _types(conflicts) == [ConflictType.OVERTIME_VIOLATION]
        assert conflicts[0].date == saturday

    def test_weeks_counted_separately(self, detector, shifts, add_assignment):
        # Thursday to Wednesday: 4 shifts in one ISO week, 3 in the next
        for offset in range(3, 10):
            add_assignment(shifts["early"], MONDAY + timedelta(days=offset), "w1")

        assert detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=13)) == []

    def test_break_minutes_reduce_hours(self, detector, add_shift, add_assignment):
        shift = add_shift(
            shift_code="LONG",
            start_time=time(6, 0),
            end_time=time(15, 0),
            total_break_minutes=60,
            work_days=ALL_DAYS,
        )
        for offset in range(5):
            add_assignment(shift, MONDAY + timedelta(days=offset), "w1")

        assert detector.detect(TENANT, "w1", MONDAY, MONDAY + timedelta(days=6)) == []


class TestDoubleBooking:
    """Test double booking detection on data the index would reject."""

    def _detector(self, assignments, shifts):
        uow = Mock()
        uow.assignments.find_for_worker.return_value = assignments
        uow.shifts.find.return_value = shifts
        manager = Mock(spec=TransactionManager)
        manager.transaction.side_effect = lambda: nullcontext(uow)
        return ConflictDetector(manager)

    def test_one_record_per_date(self):
        early = make_shift(shift_code="EARLY", start_time=time(6, 0), end_time=time(10, 0))
        late = make_shift(shift_code="LATE", start_time=time(18, 0), end_time=time(22, 0))
        first = ShiftAssignment(tenant_id=TENANT, shift_id=early.id, date=MONDAY, worker_id="w1")
        second = ShiftAssignment(tenant_id=TENANT, shift_id=late.id, date=MONDAY, worker_id="w1")

        conflicts = self._detector([second, first], [early, late]).detect(
            TENANT, "w1", MONDAY, MONDAY
        )

        assert _types(conflicts) == [ConflictType.DOUBLE_BOOKING]
        assert set(conflicts[0].assignment_ids) == {first.id, second.id}
        assert conflicts[0].date == MONDAY

    def test_overlapping_same_day_also_short_rest(self):
        shift = make_shift()
        first = ShiftAssignment(tenant_id=TENANT, shift_id=shift.id, date=MONDAY, worker_id="w1")
        second = ShiftAssignment(tenant_id=TENANT, shift_id=shift.id, date=MONDAY, worker_id="w1")

        conflicts = self._detector([first, second], [shift]).detect(
            TENANT, "w1", MONDAY, MONDAY
        )

        assert sorted(_types(conflicts)) == [
            ConflictType.DOUBLE_BOOKING,
            ConflictType.REST_PERIOD,
        ]
