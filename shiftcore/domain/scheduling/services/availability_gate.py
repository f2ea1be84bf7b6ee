"""
AvailabilityGate Domain Service

Wraps the worker-management collaborator and answers availability and
skill questions about workers.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, time

from ..entities.worker import Worker
from ..repositories.interfaces import WorkerDirectory
from ..value_objects.enums import DayOfWeek, WorkerStatus
from ..value_objects.skill_requirement import SkillRequirement
from ..value_objects.time_window import ShiftWindow

logger = logging.getLogger(__name__)

SCHEDULABLE_STATUSES = (WorkerStatus.AVAILABLE, WorkerStatus.WORKING)


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of an availability check; ``reason`` explains a refusal."""

    available: bool
    reason: str | None = None


@dataclass(frozen=True)
class SkillMatch:
    """How well one worker covers a set of skill requirements."""

    worker: Worker
    match_score: float
    matched_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)

    @property
    def meets_all(self) -> bool:
        return not self.missing_skills


class AvailabilityGate:
    """Availability and skill lookups over a ``WorkerDirectory``."""

    def __init__(self, directory: WorkerDirectory):
        self._directory = directory

    def get_worker(self, tenant_id: str, worker_id: str) -> Worker | None:
        return self._directory.get_worker(tenant_id, worker_id)

    def workers_in_department(
        self, tenant_id: str, department_id: str | None
    ) -> list[Worker]:
        """Schedulable workers of a department (all departments when None)."""
        return self._directory.find_workers(
            tenant_id, department_id=department_id, statuses=SCHEDULABLE_STATUSES
        )

    def check_availability(
        self,
        tenant_id: str,
        worker_id: str,
        on_date: date,
        start_time: time,
        end_time: time,
        hours_needed: float | None = None,
    ) -> AvailabilityResult:
        """
        Check whether a worker is free for a window on a date.

        A window ending at or before its start is treated as overnight.
        """
        worker = self._directory.get_worker(tenant_id, worker_id)
        if worker is None:
            return AvailabilityResult(False, f"Worker {worker_id} not found")
        return self.check_worker(
            worker, on_date, ShiftWindow.spanning(start_time, end_time), hours_needed
        )

    @staticmethod
    def check_worker(
        worker: Worker,
        on_date: date,
        window: ShiftWindow,
        hours_needed: float | None = None,
    ) -> AvailabilityResult:
        """Availability check against an already loaded worker profile."""
        if not worker.is_schedulable:
            return AvailabilityResult(False, f"Worker status is {worker.status.value}")

        day = DayOfWeek.of(on_date)
        declared = worker.availability_on(day)
        if not declared.available:
            return AvailabilityResult(False, f"Worker not available on {day.value}")

        available_window = declared.window
        if available_window is not None and not window.fits_within(available_window):
            return AvailabilityResult(
                False,
                f"Shift window {window} outside availability {available_window}",
            )

        if hours_needed is not None and declared.hours < hours_needed:
            return AvailabilityResult(
                False, f"Insufficient capacity ({declared.hours:g} hours available)"
            )

        return AvailabilityResult(True)

    def find_workers_with_skills(
        self,
        tenant_id: str,
        requirements: Iterable[SkillRequirement],
        department_id: str | None = None,
        minimum_match_score: float | None = None,
    ) -> list[SkillMatch]:
        """
        Schedulable workers ranked by how well they cover the requirements.

        Returns:
            Matches sorted by score descending, then worker id
        """
        reqs = list(requirements)
        matches = [
            self.evaluate(worker, reqs)
            for worker in self.workers_in_department(tenant_id, department_id)
        ]
        if minimum_match_score is not None:
            matches = [m for m in matches if m.match_score >= minimum_match_score]
        matches.sort(key=lambda m: (-m.match_score, m.worker.id))
        return matches

    @staticmethod
    def evaluate(worker: Worker, requirements: list[SkillRequirement]) -> SkillMatch:
        """
        Score a worker against requirements on a 0-100 scale.

        Each requirement scores 1.0 when met, plus 0.1 per level above the
        required one; a held skill below the required level scores half its
        level ratio; a missing skill scores 0. The score is the average
        times 100. A skill is only "matched" when its level is met.
        """
        matched: list[str] = []
        missing: list[str] = []
        total = 0.0

        for requirement in requirements:
            skill = worker.skill_named(requirement.skill)
            if skill is None:
                missing.append(requirement.skill)
                continue

            if requirement.level is None:
                total += 1.0
                matched.append(requirement.skill)
            elif skill.level.meets(requirement.level):
                total += 1.0 + (skill.level.rank - requirement.level.rank) * 0.1
                matched.append(requirement.skill)
            else:
                total += 0.5 * skill.level.rank / requirement.level.rank
                missing.append(requirement.skill)

        score = total / len(requirements) * 100 if requirements else 0.0
        return SkillMatch(worker, score, matched, missing)
