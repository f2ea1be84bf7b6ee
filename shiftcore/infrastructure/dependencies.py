"""
Composition helpers for embedding the scheduling core.

These functions build the shipped adapters from ``Settings`` and wire them
into a ``ShiftSchedulingService``. Hosts with their own engine, worker
directory or event sink pass them in instead.
"""

import logging

from sqlalchemy.engine import Engine

from shiftcore.core.config import Settings, get_settings
from shiftcore.core.db import build_engine, init_db
from shiftcore.core.logging import configure_logging
from shiftcore.domain.scheduling.events.domain_events import EventSink
from shiftcore.domain.scheduling.repositories.interfaces import WorkerDirectory
from shiftcore.domain.scheduling.services.scheduling_service import ShiftSchedulingService

from .adapters.worker_directory import InMemoryWorkerDirectory
from .database.unit_of_work import UnitOfWorkManager
from .events.event_bus import InMemoryEventBus

logger = logging.getLogger(__name__)


def create_event_bus(settings: Settings | None = None) -> InMemoryEventBus:
    """
    Get an event bus sized from settings.

    Args:
        settings: Settings to read ``EVENT_HISTORY_SIZE`` from

    Returns:
        InMemoryEventBus: Bus with bounded history
    """
    settings = settings or get_settings()
    return InMemoryEventBus(max_history_size=settings.EVENT_HISTORY_SIZE)


def create_scheduling_service(
    settings: Settings | None = None,
    engine: Engine | None = None,
    worker_directory: WorkerDirectory | None = None,
    events: EventSink | None = None,
    create_schema: bool = True,
) -> ShiftSchedulingService:
    """
    Build a fully wired scheduling service.

    Args:
        settings: Settings to use; the cached process settings by default
        engine: Existing engine; one is built from settings when omitted
        worker_directory: Worker collaborator; an empty in-memory one by default
        events: Event sink; an in-memory bus by default
        create_schema: Create missing scheduling tables on the engine

    Returns:
        ShiftSchedulingService: Service ready for use
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if engine is None:
        engine = build_engine(settings)
    if create_schema:
        init_db(engine)

    service = ShiftSchedulingService.from_settings(
        UnitOfWorkManager(engine),
        worker_directory if worker_directory is not None else InMemoryWorkerDirectory(),
        events if events is not None else create_event_bus(settings),
        settings=settings,
    )
    logger.info(
        f"Scheduling service ready ({settings.ENVIRONMENT}, "
        f"{settings.GENERATION_TRANSACTION_POLICY.value})"
    )
    return service
