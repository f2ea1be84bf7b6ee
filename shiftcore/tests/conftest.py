from collections.abc import Generator
from datetime import date

import pytest
from sqlalchemy.engine import Engine

from shiftcore.core.config import Settings
from shiftcore.core.db import build_engine, drop_db, init_db
from shiftcore.domain.scheduling.entities.assignment import ShiftAssignment
from shiftcore.domain.scheduling.entities.shift import Shift
from shiftcore.domain.scheduling.entities.shift_exception import ShiftException
from shiftcore.domain.scheduling.entities.worker import Worker
from shiftcore.domain.scheduling.services.availability_gate import AvailabilityGate
from shiftcore.domain.scheduling.value_objects.calendar import CalendarDay
from shiftcore.infrastructure.adapters.worker_directory import InMemoryWorkerDirectory
from shiftcore.infrastructure.database.unit_of_work import UnitOfWorkManager
from shiftcore.infrastructure.events.event_bus import InMemoryEventBus
from shiftcore.tests.factories import TENANT, make_shift, make_worker


@pytest.fixture
def settings() -> Settings:
    return Settings(DATABASE_URL="sqlite://", _env_file=None)


@pytest.fixture
def engine(settings: Settings) -> Generator[Engine, None, None]:
    """Fresh in-memory database per test."""
    engine = build_engine(settings)
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def uow_manager(engine: Engine) -> UnitOfWorkManager:
    return UnitOfWorkManager(engine)


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def worker_directory() -> InMemoryWorkerDirectory:
    return InMemoryWorkerDirectory()


@pytest.fixture
def gate(worker_directory: InMemoryWorkerDirectory) -> AvailabilityGate:
    return AvailabilityGate(worker_directory)


@pytest.fixture
def tenant_id() -> str:
    return TENANT


@pytest.fixture
def add_shift(uow_manager: UnitOfWorkManager):
    """Persist a shift built from defaults plus overrides."""

    def _add(**overrides) -> Shift:
        shift = make_shift(**overrides)
        with uow_manager.transaction() as uow:
            uow.shifts.add(shift)
        return shift

    return _add


@pytest.fixture
def add_assignment(uow_manager: UnitOfWorkManager):
    def _add(shift: Shift, on_date: date, worker_id: str | None = None, **overrides):
        assignment = ShiftAssignment(
            tenant_id=shift.tenant_id,
            shift_id=shift.id,
            date=on_date,
            worker_id=worker_id,
            **overrides,
        )
        with uow_manager.transaction() as uow:
            uow.assignments.add(assignment)
        return assignment

    return _add


@pytest.fixture
def add_calendar_day(uow_manager: UnitOfWorkManager):
    def _add(day: CalendarDay, tenant_id: str = TENANT) -> CalendarDay:
        with uow_manager.transaction() as uow:
            uow.calendar.add(tenant_id, day)
        return day

    return _add


@pytest.fixture
def add_exception(uow_manager: UnitOfWorkManager):
    def _add(shift: Shift, on_date: date, **overrides) -> ShiftException:
        fields = {"reason": "Planner override"}
        fields.update(overrides)
        exception = ShiftException(
            tenant_id=shift.tenant_id, shift_id=shift.id, date=on_date, **fields
        )
        with uow_manager.transaction() as uow:
            uow.exceptions.add(exception)
        return exception

    return _add


@pytest.fixture
def add_worker(worker_directory: InMemoryWorkerDirectory):
    def _add(worker_id: str, **overrides) -> Worker:
        worker = make_worker(worker_id, **overrides)
        worker_directory.put(TENANT, worker)
        return worker

    return _add


@pytest.fixture
def load_assignments(uow_manager: UnitOfWorkManager):
    """Every assignment of the default tenant in a range, cancelled included."""

    def _load(start: date, end: date, live_only: bool = False) -> list[ShiftAssignment]:
        with uow_manager.transaction() as uow:
            return uow.assignments.find_in_range(TENANT, start, end, live_only=live_only)

    return _load
