"""Combat ability definitions.

An ability belongs conceptually to the classes whose learnable list names
it; the ability itself holds no back-pointer to any class.
"""

from __future__ import annotations

from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tactics_core.core.constants import PASSIVE_EFFECT_TYPES
from tactics_core.models.enums import AbilityCategory


EffectType = Literal[
    "stat-permanent",
    "stat-bonus",
    "stat-penalty",
    "damage-physical",
    "damage-magical",
    "heal",
    "mana-restore",
    "action-timer-modify",
]

EffectTarget = Literal["self", "target", "ally", "enemy", "all-allies", "all-enemies"]


class AbilityEffect(BaseModel):
    """An effect produced by an ability.

    Only stat effects are interpreted by this engine (a passive ability's
    ``stat-permanent``/``stat-bonus`` effects become permanent modifiers);
    damage and healing effects are carried for the combat resolver.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: EffectType
    target: EffectTarget = "self"
    value: int | str = 0
    duration: int | None = None
    chance: float | None = Field(default=None, ge=0, le=1, description="Hit chance multiplier")
    stat: str | None = Field(default=None, description="Stat name for stat effects")

    @model_validator(mode="before")
    @classmethod
    def lift_params_stat(cls, data: Any) -> Any:
        """Accept the stat nested under ``params`` as older content files write it."""
        if isinstance(data, dict) and "stat" not in data and isinstance(data.get("params"), dict):
            stat = data["params"].get("stat")
            if stat is not None:
                data = {**data, "stat": stat}
        return data

    @property
    def is_passive_stat_effect(self) -> bool:
        """Check whether a passive slot turns this effect into a modifier."""
        return self.type in PASSIVE_EFFECT_TYPES


class CombatAbility(BaseModel):
    """An immutable ability definition.

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: What the ability does.
        category: Action, Reaction, Movement, or Passive.
        experience_price: Class experience needed to learn it.
        tags: Categorization tags (e.g., 'attack', 'heal').
        effects: Effects applied when used or, for passives, while assigned.
        icon: Optional icon sprite id.
        range: Targeting range in tiles (None = adjacent, 0 = self).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    category: AbilityCategory
    experience_price: int = Field(default=0, ge=0)
    tags: frozenset[str] = Field(default_factory=frozenset)
    effects: tuple[AbilityEffect, ...] = ()
    icon: str | None = None
    range: int | None = Field(default=None, ge=0)

    def has_tag(self, tag: str) -> bool:
        """Check whether this ability carries a tag."""
        return tag in self.tags


__all__ = [
    "EffectType",
    "EffectTarget",
    "AbilityEffect",
    "CombatAbility",
]
