"""ShiftException entity: a planner's override of one shift on one date."""

from datetime import date, time
from uuid import UUID

from pydantic import Field

from ...shared.base import Entity
from ..value_objects.enums import ExceptionType


class ShiftException(Entity):
    """Cancellation, capacity reduction or alternate window for a shift/date."""

    tenant_id: str = Field(min_length=1)
    shift_id: UUID
    date: date
    type: ExceptionType = ExceptionType.SPECIAL_EVENT
    reason: str = Field(min_length=1, max_length=255)
    is_cancelled: bool = False
    reduced_capacity: int | None = Field(default=None, ge=0, le=100)
    alternate_start_time: time | None = None
    alternate_end_time: time | None = None
    notes: str | None = None
    created_by_id: str | None = None

    def is_valid(self) -> bool:
        # Alternate times come as a pair
        return (self.alternate_start_time is None) == (self.alternate_end_time is None)

    @property
    def has_alternate_window(self) -> bool:
        return self.alternate_start_time is not None and self.alternate_end_time is not None
