from datetime import date

import pytest
from pydantic import ValidationError

from shiftcore.domain.scheduling.events.domain_events import (
    EventSink,
    PatternApplied,
    ScheduleGenerated,
)
from shiftcore.infrastructure.dependencies import create_event_bus
from shiftcore.infrastructure.events.event_bus import InMemoryEventBus

TENANT = "tenant-a"


def _generated(count: int = 3) -> ScheduleGenerated:
    return ScheduleGenerated(
        tenant_id=TENANT,
        start_date=date(2024, 1, 8),
        end_date=date(2024, 1, 14),
        assignment_count=count,
    )


def _pattern() -> PatternApplied:
    return PatternApplied(
        tenant_id=TENANT,
        pattern_name="alternate",
        worker_count=2,
        assignment_count=4,
        start_date=date(2024, 1, 8),
        end_date=date(2024, 1, 9),
    )


@pytest.fixture
def bus():
    return InMemoryEventBus(max_history_size=3)


class TestSubscriptions:
    def test_class_and_name_handlers_both_run(self, bus):
        calls = []
        bus.subscribe(ScheduleGenerated, lambda e: calls.append(("class", e.event_id)))
        bus.subscribe("schedule.generated", lambda e: calls.append(("name", e.event_id)))

        event = _generated()
        bus.publish(event)

        assert calls == [("class", event.event_id), ("name", event.event_id)]

    def test_handlers_only_receive_their_events(self, bus):
        received = []
        bus.subscribe(PatternApplied, received.append)

        bus.publish(_generated())
        bus.publish(_pattern())

        assert [e.event_name for e in received] == ["pattern.applied"]

    def test_duplicate_subscription_ignored(self, bus):
        received = []
        bus.subscribe(ScheduleGenerated, received.append)
        bus.subscribe(ScheduleGenerated, received.append)

        bus.publish(_generated())

        assert len(received) == 1
        assert bus.get_handler_count(ScheduleGenerated) == 1

    def test_unsubscribe(self, bus):
        received = []
        bus.subscribe("schedule.generated", received.append)
        bus.unsubscribe("schedule.generated", received.append)
        bus.unsubscribe("schedule.generated", received.append)

        bus.publish(_generated())

        assert received == []

    def test_clear_handlers(self, bus):
        bus.subscribe(ScheduleGenerated, lambda e: None)
        bus.subscribe(PatternApplied, lambda e: None)

        bus.clear_handlers(ScheduleGenerated)
        assert bus.get_handler_count(ScheduleGenerated) == 0
        assert bus.get_handler_count(PatternApplied) == 1

        bus.clear_handlers()
        assert bus.get_handler_count(PatternApplied) == 0

    def test_failing_handler_does_not_stop_delivery(self, bus, caplog):
        received = []

        def broken(event):
            raise RuntimeError("subscriber down")

        bus.subscribe(ScheduleGenerated, broken)
        bus.subscribe(ScheduleGenerated, received.append)

        bus.publish(_generated())

        assert len(received) == 1
        assert "subscriber down" in caplog.text


class TestHistory:
    def test_history_is_bounded(self, bus):
        events = [_generated(count) for count in range(5)]
        for event in events:
            bus.publish(event)

        assert [e.assignment_count for e in bus.get_event_history()] == [2, 3, 4]

    def test_history_filters(self, bus):
        bus.publish(_generated())
        bus.publish(_pattern())

        assert len(bus.get_event_history(PatternApplied)) == 1
        assert len(bus.get_event_history("schedule.generated")) == 1

        bus.clear_event_history()
        assert bus.get_event_history() == []

    def test_events_are_immutable(self):
        event = _generated()
        with pytest.raises(ValidationError):
            event.assignment_count = 10
        assert event.event_id != _generated().event_id


def test_bus_is_the_shipped_event_sink(settings):
    bus = create_event_bus(settings)

    assert isinstance(bus, EventSink)
    event = _generated()
    bus.publish(event)
    assert bus.get_event_history(ScheduleGenerated) == [event]
