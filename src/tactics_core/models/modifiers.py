"""Stat modifiers: timed or permanent deltas attached to a unit.

A modifier is created when an ability grants a buff or debuff and is owned
by exactly one unit. Temporary modifiers count down once per turn of their
owner and are removed when they reach zero; permanent modifiers (duration
-1) stay until their source removes them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tactics_core.core.constants import PERMANENT_DURATION
from tactics_core.models.enums import StatType


class StatModifier(BaseModel):
    """A signed delta to one stat, tagged with the ability that created it.

    Attributes:
        id: Unique modifier id.
        stat: The stat being modified.
        value: Signed delta added to the effective stat.
        duration: Turns remaining, or -1 for permanent.
        source: Id of the ability that created the modifier.
        source_name: Display name of the source.
        icon: Optional icon sprite id.

    Example:
        >>> haste = StatModifier(
        ...     id="haste-1", stat=StatType.SPEED, value=3, duration=2,
        ...     source="haste", source_name="Haste",
        ... )
        >>> haste.tick()
        False
        >>> haste.tick()
        True
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(min_length=1)
    stat: StatType
    value: int
    duration: int = Field(default=PERMANENT_DURATION)
    source: str = Field(default="")
    source_name: str = Field(default="")
    icon: str | None = Field(default=None)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Accept -1 (permanent), 0 (expired) or a positive number of turns."""
        if value < PERMANENT_DURATION:
            msg = f"Modifier duration must be -1 or greater, got {value}"
            raise ValueError(msg)
        return value

    @property
    def is_permanent(self) -> bool:
        """Check whether the modifier never decays."""
        return self.duration == PERMANENT_DURATION

    @property
    def is_expired(self) -> bool:
        """Check whether the modifier has run out and no longer applies."""
        return self.duration == 0

    def tick(self) -> bool:
        """Count one turn off a temporary modifier.

        The owning unit removes the modifier when this returns True.

        Returns:
            True if the modifier has just reached zero.
        """
        if self.is_permanent or self.is_expired:
            return False
        self.duration -= 1
        return self.duration == 0


__all__ = ["StatModifier"]
