"""Base classes for domain entities, value objects and events."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Entity(BaseModel, ABC):
    """Base class for entities (have identity, can change over time)."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def mark_updated(self) -> None:
        """Mark the entity as updated."""
        self.updated_at = utcnow()

    @abstractmethod
    def is_valid(self) -> bool:
        """Validate business rules for this entity."""

    def validate_rules(self) -> None:
        """Raise if the entity breaks its business rules."""
        if not self.is_valid():
            raise ValueError(
                f"Entity {self.__class__.__name__} with ID {self.id} is invalid"
            )


class DomainEvent(BaseModel):
    """
    Base class for domain events.

    ``event_name`` is the dotted routing key consumers subscribe to
    (for example ``schedule.generated``).
    """

    model_config = ConfigDict(frozen=True)

    event_name: ClassVar[str] = "domain.event"

    event_id: UUID = Field(default_factory=uuid4)
    tenant_id: str
    timestamp: datetime = Field(default_factory=utcnow)

    def payload(self) -> dict[str, Any]:
        """Logical payload without the envelope fields."""
        return self.model_dump(exclude={"event_id", "tenant_id"})
