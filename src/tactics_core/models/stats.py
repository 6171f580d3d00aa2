"""Per-stat records shared by equipment, classes, and units.

Three fixed-shape records cover the ten stats:

    StatDeltas: flat additions (equipment modifiers, class base-stat grants).
    StatMultipliers: multiplicative factors (class multipliers).
    BaseStats: a unit's unmodified base values.

Every field has a default (0 for deltas, 1.0 for multipliers), so a partial
mapping from a content file always produces a complete record. Fields accept
snake_case names, the camelCase wire names, and the short ``health`` /
``mana`` aliases used by content authors.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tactics_core.models.enums import StatType


def _stat_field(default: Any, stat: StatType, *extra_aliases: str, **kwargs: Any) -> Any:
    """Build a Field accepting every spelling of a stat name."""
    choices = [stat.field_name, stat.value, *extra_aliases]
    return Field(
        default=default,
        validation_alias=AliasChoices(*dict.fromkeys(choices)),
        serialization_alias=stat.value,
        **kwargs,
    )


class StatRecord(BaseModel):
    """Base class for the fixed-shape per-stat records."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def get(self, stat: StatType) -> Any:
        """Get the value recorded for a stat."""
        return getattr(self, stat.field_name)

    def items(self) -> list[tuple[StatType, Any]]:
        """Get (stat, value) pairs in StatType order."""
        return [(stat, self.get(stat)) for stat in StatType]


class StatDeltas(StatRecord):
    """Flat per-stat additions. Unspecified stats contribute 0."""

    max_health: int = _stat_field(0, StatType.MAX_HEALTH, "health")
    max_mana: int = _stat_field(0, StatType.MAX_MANA, "mana")
    physical_power: int = _stat_field(0, StatType.PHYSICAL_POWER)
    magic_power: int = _stat_field(0, StatType.MAGIC_POWER)
    speed: int = _stat_field(0, StatType.SPEED)
    movement: int = _stat_field(0, StatType.MOVEMENT)
    physical_evade: int = _stat_field(0, StatType.PHYSICAL_EVADE)
    magic_evade: int = _stat_field(0, StatType.MAGIC_EVADE)
    courage: int = _stat_field(0, StatType.COURAGE)
    attunement: int = _stat_field(0, StatType.ATTUNEMENT)

    @property
    def is_empty(self) -> bool:
        """Check whether every delta is zero."""
        return all(value == 0 for _, value in self.items())

    def summary(self) -> str:
        """Summarize the non-zero deltas for display.

        Example:
            >>> StatDeltas(health=20, speed=-1).summary()
            'maxHealth +20, speed -1'
        """
        parts = [f"{stat.value} {value:+d}" for stat, value in self.items() if value != 0]
        return ", ".join(parts) if parts else "No modifiers"


class StatMultipliers(StatRecord):
    """Per-stat multiplicative factors. Unspecified stats multiply by 1.0."""

    max_health: float = _stat_field(1.0, StatType.MAX_HEALTH, "health", ge=0)
    max_mana: float = _stat_field(1.0, StatType.MAX_MANA, "mana", ge=0)
    physical_power: float = _stat_field(1.0, StatType.PHYSICAL_POWER, ge=0)
    magic_power: float = _stat_field(1.0, StatType.MAGIC_POWER, ge=0)
    speed: float = _stat_field(1.0, StatType.SPEED, ge=0)
    movement: float = _stat_field(1.0, StatType.MOVEMENT, ge=0)
    physical_evade: float = _stat_field(1.0, StatType.PHYSICAL_EVADE, ge=0)
    magic_evade: float = _stat_field(1.0, StatType.MAGIC_EVADE, ge=0)
    courage: float = _stat_field(1.0, StatType.COURAGE, ge=0)
    attunement: float = _stat_field(1.0, StatType.ATTUNEMENT, ge=0)

    def summary(self) -> str:
        """Summarize the multipliers that differ from 1.0."""
        parts = [f"{stat.value} x{value:g}" for stat, value in self.items() if value != 1.0]
        return ", ".join(parts) if parts else "No multipliers"


class BaseStats(BaseModel):
    """A unit's unmodified base values, the inputs of the stat pipeline."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    health: int = Field(default=0, ge=0, description="Feeds maxHealth")
    mana: int = Field(default=0, ge=0, description="Feeds maxMana")
    physical_power: int = Field(default=0, ge=0)
    magic_power: int = Field(default=0, ge=0)
    speed: int = Field(default=0, ge=0)
    movement: int = Field(default=0, ge=0)
    physical_evade: int = Field(default=0, ge=0)
    magic_evade: int = Field(default=0, ge=0)
    courage: int = Field(default=0, ge=0)
    attunement: int = Field(default=0, ge=0)

    def get(self, stat: StatType) -> int:
        """Get the base value feeding a stat."""
        return getattr(self, stat.base_field)


__all__ = [
    "StatRecord",
    "StatDeltas",
    "StatMultipliers",
    "BaseStats",
]
