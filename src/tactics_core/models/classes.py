"""Unit class definitions and unlock requirements."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tactics_core.models.abilities import CombatAbility
from tactics_core.models.stats import BaseStats, StatDeltas, StatMultipliers


if TYPE_CHECKING:
    from tactics_core.models.equipment import Equipment


class UnmetRequirement(BaseModel):
    """A prerequisite class whose experience requirement is not yet met."""

    model_config = ConfigDict(frozen=True)

    class_id: str
    required: int
    current: int

    @property
    def missing(self) -> int:
        """Experience still needed in the prerequisite class."""
        return self.required - self.current


class StarterConfig(BaseModel):
    """Starting state for a new character of a class.

    Content references are ids, resolved against a ContentRepository when
    the character is created.

    Attributes:
        base_stats: Base values of the new character.
        left_hand_id: Starting left hand item.
        right_hand_id: Starting right hand item.
        head_id: Starting head item.
        body_id: Starting body item.
        accessory_id: Starting accessory.
        learned_ability_ids: Abilities the character starts with, for free.
        reaction_ability_id: Starting reaction slot.
        movement_ability_id: Starting movement slot.
        passive_ability_id: Starting passive slot.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_stats: BaseStats = Field(default_factory=BaseStats)
    left_hand_id: str | None = None
    right_hand_id: str | None = None
    head_id: str | None = None
    body_id: str | None = None
    accessory_id: str | None = None
    learned_ability_ids: tuple[str, ...] = ()
    reaction_ability_id: str | None = None
    movement_ability_id: str | None = None
    passive_ability_id: str | None = None


class UnitClass(BaseModel):
    """A class archetype: stat grants, multipliers, learnable abilities.

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: Flavor text.
        tags: Categorization tags.
        learnable_abilities: Abilities a unit may buy with this class's
            experience, in menu order.
        base_stat_grants: Flat additions to the unit's base values.
        stat_multipliers: Factors applied to the base value before grants
            are added.
        requirements: Prerequisite class id -> experience that must have been
            earned in it before this class can be used.
        allowed_equipment_types: Equipment type tags the class may use.
            Empty means unrestricted.
        starter_config: Starting state for new characters of this class.

    Classes hash by id, so they can be used as set members and dict keys.

    Example:
        >>> squire = UnitClass(id="squire", name="Squire")
        >>> knight = UnitClass(id="knight", name="Knight", requirements={"squire": 100})
        >>> knight.meets_requirements({"squire": 120})
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    tags: frozenset[str] = Field(default_factory=frozenset)
    learnable_abilities: tuple[CombatAbility, ...] = ()
    base_stat_grants: StatDeltas = Field(default_factory=StatDeltas)
    stat_multipliers: StatMultipliers = Field(default_factory=StatMultipliers)
    requirements: dict[str, int] = Field(default_factory=dict)
    allowed_equipment_types: frozenset[str] = Field(default_factory=frozenset)
    starter_config: StarterConfig | None = None

    def __hash__(self) -> int:
        return hash(self.id)

    @model_validator(mode="after")
    def validate_requirements(self) -> UnitClass:
        """Reject self-requirements and negative experience thresholds."""
        if self.id in self.requirements:
            msg = f"Class {self.id!r} cannot require experience in itself"
            raise ValueError(msg)
        for class_id, amount in self.requirements.items():
            if amount < 0:
                msg = f"Requirement for {class_id!r} must be non-negative, got {amount}"
                raise ValueError(msg)
        return self

    def can_learn(self, ability: CombatAbility) -> bool:
        """Check whether this class offers an ability."""
        return any(candidate.id == ability.id for candidate in self.learnable_abilities)

    def can_use_equipment(self, equipment: Equipment) -> bool:
        """Check the class's equipment type restriction.

        Items without type tags, and classes without allowed types, are
        unrestricted. Otherwise the item needs at least one allowed tag.
        """
        if not self.allowed_equipment_types or not equipment.type_tags:
            return True
        return not self.allowed_equipment_types.isdisjoint(equipment.type_tags)

    def meets_requirements(self, class_experience: Mapping[str, int]) -> bool:
        """Check the class's unlock requirements.

        Args:
            class_experience: Class id -> experience earned in that class.

        Returns:
            True if every prerequisite's earned experience is high enough.
        """
        return not self.get_unmet_requirements(class_experience)

    def get_unmet_requirements(self, class_experience: Mapping[str, int]) -> list[UnmetRequirement]:
        """List the prerequisites that are not yet satisfied.

        Args:
            class_experience: Class id -> experience earned in that class.

        Returns:
            One entry per unmet prerequisite, in declaration order.
        """
        unmet: list[UnmetRequirement] = []
        for class_id, required in self.requirements.items():
            current = class_experience.get(class_id, 0)
            if current < required:
                unmet.append(UnmetRequirement(class_id=class_id, required=required, current=current))
        return unmet


__all__ = [
    "UnmetRequirement",
    "StarterConfig",
    "UnitClass",
]
