"""Skill value objects shared by shifts and workers."""

from pydantic import Field, field_validator

from ...shared.base import ValueObject
from .enums import SkillLevel


class SkillRequirement(ValueObject):
    """A skill a shift needs, how many workers should hold it, and at what level."""

    skill: str = Field(min_length=1, max_length=100)
    min_count: int = Field(default=1, ge=0)
    level: SkillLevel | None = None

    @field_validator("skill")
    @classmethod
    def strip_skill(cls, v: str) -> str:
        return v.strip()


class WorkerSkill(ValueObject):
    """A skill held by a worker."""

    name: str = Field(min_length=1, max_length=100)
    level: SkillLevel = SkillLevel.BEGINNER

    def matches(self, requirement: SkillRequirement) -> bool:
        """Same skill (case-insensitive) at or above the required level."""
        if self.name.strip().lower() != requirement.skill.lower():
            return False
        return requirement.level is None or self.level.meets(requirement.level)
