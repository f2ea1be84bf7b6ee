"""In-memory worker directory, standing in for the worker-management service."""

import logging
from collections.abc import Iterable

from shiftcore.domain.scheduling.entities.worker import Worker
from shiftcore.domain.scheduling.repositories.interfaces import WorkerDirectory
from shiftcore.domain.scheduling.value_objects.enums import WorkerStatus

logger = logging.getLogger(__name__)


class InMemoryWorkerDirectory(WorkerDirectory):
    """
    Worker profiles held per tenant in process memory.

    Useful for tests and for embedding the scheduling core where worker
    data is already loaded by the caller.
    """

    def __init__(self, workers: dict[str, Iterable[Worker]] | None = None):
        self._workers: dict[str, dict[str, Worker]] = {}
        for tenant_id, tenant_workers in (workers or {}).items():
            for worker in tenant_workers:
                self.put(tenant_id, worker)

    def put(self, tenant_id: str, worker: Worker) -> None:
        """Add or replace a worker profile."""
        self._workers.setdefault(tenant_id, {})[worker.id] = worker

    def remove(self, tenant_id: str, worker_id: str) -> None:
        self._workers.get(tenant_id, {}).pop(worker_id, None)

    def get_worker(self, tenant_id: str, worker_id: str) -> Worker | None:
        return self._workers.get(tenant_id, {}).get(worker_id)

    def find_workers(
        self,
        tenant_id: str,
        department_id: str | None = None,
        statuses: Iterable[WorkerStatus] | None = None,
    ) -> list[Worker]:
        wanted = set(statuses) if statuses is not None else None
        workers = [
            worker
            for worker in self._workers.get(tenant_id, {}).values()
            if (department_id is None or worker.department_id == department_id)
            and (wanted is None or worker.status in wanted)
        ]
        logger.debug(
            f"Worker lookup for tenant {tenant_id} department {department_id}: "
            f"{len(workers)} found"
        )
        return sorted(workers, key=lambda w: w.id)
