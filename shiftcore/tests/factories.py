"""Builders for scheduling test data."""

from datetime import date, time

from shiftcore.domain.scheduling.entities.shift import Shift
from shiftcore.domain.scheduling.entities.worker import Worker
from shiftcore.domain.scheduling.value_objects.enums import WorkerStatus

TENANT = "tenant-a"

# 2024-01-08 is a Monday
MONDAY = date(2024, 1, 8)


def make_shift(**overrides) -> Shift:
    fields = {
        "tenant_id": TENANT,
        "shift_code": "MORNING",
        "name": "Morning",
        "start_time": time(8, 0),
        "end_time": time(16, 0),
        "min_workers": 1,
        "target_workers": 2,
        "max_workers": 3,
    }
    fields.update(overrides)
    return Shift(**fields)


def make_worker(worker_id: str, **overrides) -> Worker:
    fields = {
        "id": worker_id,
        "name": worker_id.title(),
        "status": WorkerStatus.AVAILABLE,
        "department_id": "assembly",
    }
    fields.update(overrides)
    return Worker(**fields)
