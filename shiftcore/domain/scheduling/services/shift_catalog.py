"""Resolution of active shift definitions for scheduling runs."""

import logging
from collections.abc import Iterable
from datetime import date
from uuid import UUID

from ...shared.exceptions import NoShiftsMatchError, ShiftCodeNotFoundError
from ..entities.shift import Shift
from ..repositories.interfaces import ShiftRepository
from ..value_objects.enums import DayOfWeek

logger = logging.getLogger(__name__)


class ShiftCatalog:
    """Looks up active shifts by filter or by code."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def resolve(
        self,
        tenant_id: str,
        shift_ids: Iterable[UUID] | None = None,
        department_id: str | None = None,
        work_center_id: str | None = None,
    ) -> list[Shift]:
        """
        Active shifts matching every given filter.

        Returns:
            Shifts ordered by priority, then code

        Raises:
            NoShiftsMatchError: If the filters select nothing
        """
        ids = list(shift_ids) if shift_ids is not None else None
        shifts = self._shifts.find(
            tenant_id,
            shift_ids=ids,
            department_id=department_id,
            work_center_id=work_center_id,
            active_only=True,
        )
        if not shifts:
            raise NoShiftsMatchError(ids, department_id, work_center_id)
        logger.debug(f"Resolved {len(shifts)} shifts for tenant {tenant_id}")
        return sorted(shifts, key=lambda s: (s.priority, s.shift_code))

    def by_codes(
        self, tenant_id: str, codes: Iterable[str], pattern_name: str = ""
    ) -> dict[str, Shift]:
        """
        Shifts keyed by normalised code.

        Raises:
            ShiftCodeNotFoundError: If any code is unknown or inactive
        """
        wanted = {code.strip().upper() for code in codes}
        found = {
            shift.shift_code: shift
            for shift in self._shifts.find_by_codes(tenant_id, wanted)
            if shift.is_active
        }
        missing = sorted(wanted - found.keys())
        if missing:
            raise ShiftCodeNotFoundError(pattern_name, missing)
        return found

    @staticmethod
    def is_active_on(shift: Shift, on_date: date) -> bool:
        """Shift runs on the date's weekday and inside its effective range."""
        return (
            shift.is_active
            and shift.is_active_on_day(DayOfWeek.of(on_date))
            and shift.is_effective_on(on_date)
        )
