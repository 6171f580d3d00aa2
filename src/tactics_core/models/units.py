"""Combat units: the mutable per-character state the engine operates on.

Two unit kinds share the CombatUnit capability set:

    HumanoidUnit: five equipment slots and a per-class experience economy.
    MonsterUnit: no equipment, no secondary class, no experience.

Units hold direct references to content (classes, abilities, equipment) that
was loaded into a ContentRepository. Effective stats are derived on every
read through ``tactics_core.engine.stats``; nothing derived is stored.

Callers that need to branch on the variant use ``has_experience_economy()``
and ``has_equipment_slots()`` rather than probing for attributes.

Example:
    >>> unit = HumanoidUnit(name="Aria", unit_class=squire, base_stats=BaseStats(health=30, speed=6))
    >>> unit.add_experience(25, squire)
    >>> unit.learn_ability(focus, squire)
    True
    >>> unit.get_unspent_class_experience(squire)
    5
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tactics_core.core.config import get_settings
from tactics_core.core.constants import DEFAULT_HUMANOID_SPRITE, DEFAULT_MONSTER_SPRITE
from tactics_core.core.exceptions import ProgressionError
from tactics_core.core.logging import get_logger
from tactics_core.models.abilities import CombatAbility
from tactics_core.models.classes import UnitClass
from tactics_core.models.enums import AbilityCategory, AbilitySlot, EquipmentSlot, StatType, UnitKind
from tactics_core.models.equipment import Equipment
from tactics_core.models.experience import ExperienceLedger
from tactics_core.models.modifiers import StatModifier
from tactics_core.models.stats import BaseStats


if TYPE_CHECKING:
    from tactics_core.content.repository import ContentRepository
    from tactics_core.engine.equipment_rules import EquipmentResult
    from tactics_core.engine.stats import StatBreakdown


logger = get_logger(__name__)


class CombatUnit(BaseModel, ABC):
    """State and behavior shared by every unit kind.

    Attributes:
        name: Display name.
        unit_class: Primary class; drives grants and multipliers.
        secondary_class: Optional second class offering extra actions.
        sprite_id: Sprite used to render the unit.
        base_stats: Unmodified base values.
        learned_abilities: Learned abilities keyed by id, in learn order.
        reaction_ability: Ability assigned to the reaction slot.
        movement_ability: Ability assigned to the movement slot.
        passive_ability: Ability assigned to the passive slot.
        wounds: Damage taken; health is max_health minus wounds.
        mana_used: Mana spent; mana is max_mana minus mana_used.
        turn_gauge: Turn-order accumulator read by the scheduler.
        is_player_controlled: Whether the player issues this unit's orders.
        stat_modifiers: Active buffs and debuffs.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    kind: UnitKind
    name: str = Field(min_length=1)
    unit_class: UnitClass
    secondary_class: UnitClass | None = None
    sprite_id: str = DEFAULT_HUMANOID_SPRITE
    base_stats: BaseStats = Field(default_factory=BaseStats)

    learned_abilities: dict[str, CombatAbility] = Field(default_factory=dict)
    reaction_ability: CombatAbility | None = None
    movement_ability: CombatAbility | None = None
    passive_ability: CombatAbility | None = None

    wounds: int = Field(default=0, ge=0)
    mana_used: int = Field(default=0, ge=0)
    turn_gauge: float = Field(default=0.0, ge=0)
    is_player_controlled: bool = False

    stat_modifiers: list[StatModifier] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    def has_experience_economy(self) -> bool:
        """Check whether this unit earns and spends class experience."""
        return False

    def has_equipment_slots(self) -> bool:
        """Check whether this unit can wear equipment."""
        return False

    def equipped_items(self) -> list[Equipment]:
        """Items currently worn, in slot order."""
        return []

    # -------------------------------------------------------------------------
    # Effective stats
    # -------------------------------------------------------------------------

    def get_stat(self, stat: StatType | str) -> int:
        """Compute one effective stat.

        Raises:
            ValidationError: If ``stat`` names no known stat.
        """
        from tactics_core.engine.stats import compute_stat

        return compute_stat(self, stat)

    def stat_breakdown(self, stat: StatType | str) -> StatBreakdown:
        """Explain how one effective stat is composed."""
        from tactics_core.engine.stats import stat_breakdown

        return stat_breakdown(self, stat)

    @property
    def max_health(self) -> int:
        return self.get_stat(StatType.MAX_HEALTH)

    @property
    def max_mana(self) -> int:
        return self.get_stat(StatType.MAX_MANA)

    @property
    def health(self) -> int:
        """Current health: max_health minus wounds, never below 0."""
        from tactics_core.engine.stats import remaining

        return remaining(self.max_health, self.wounds)

    @property
    def mana(self) -> int:
        """Current mana: max_mana minus mana used, never below 0."""
        from tactics_core.engine.stats import remaining

        return remaining(self.max_mana, self.mana_used)

    @property
    def physical_power(self) -> int:
        return self.get_stat(StatType.PHYSICAL_POWER)

    @property
    def magic_power(self) -> int:
        return self.get_stat(StatType.MAGIC_POWER)

    @property
    def speed(self) -> int:
        return self.get_stat(StatType.SPEED)

    @property
    def movement(self) -> int:
        return self.get_stat(StatType.MOVEMENT)

    @property
    def physical_evade(self) -> int:
        return self.get_stat(StatType.PHYSICAL_EVADE)

    @property
    def magic_evade(self) -> int:
        return self.get_stat(StatType.MAGIC_EVADE)

    @property
    def courage(self) -> int:
        return self.get_stat(StatType.COURAGE)

    @property
    def attunement(self) -> int:
        return self.get_stat(StatType.ATTUNEMENT)

    @property
    def is_knocked_out(self) -> bool:
        """Check whether accumulated wounds have reached max health."""
        return self.wounds >= self.max_health

    # -------------------------------------------------------------------------
    # Classes
    # -------------------------------------------------------------------------

    def set_primary_class(self, unit_class: UnitClass) -> None:
        """Change the primary class. Requirements are not checked."""
        self.unit_class = unit_class

    def set_secondary_class(self, unit_class: UnitClass | None) -> None:
        """Change or clear the secondary class. Requirements are not checked."""
        self.secondary_class = unit_class

    # -------------------------------------------------------------------------
    # Abilities
    # -------------------------------------------------------------------------

    @abstractmethod
    def learn_ability(self, ability: CombatAbility, unit_class: UnitClass | None = None) -> bool:
        """Learn an ability offered by a class."""

    @abstractmethod
    def forget_ability(self, ability: CombatAbility, unit_class: UnitClass | None = None) -> bool:
        """Forget a learned ability."""

    def has_ability(self, ability: CombatAbility) -> bool:
        """Check whether an ability has been learned."""
        return ability.id in self.learned_abilities

    def get_learned_abilities(self) -> list[CombatAbility]:
        """Learned abilities in the order they were learned."""
        return list(self.learned_abilities.values())

    def add_learned_ability(self, ability: CombatAbility) -> bool:
        """Grant an ability with no class or experience checks.

        Used for starter characters whose abilities predate the save.

        Returns:
            False if the ability was already learned.
        """
        if self.has_ability(ability):
            return False
        self.learned_abilities[ability.id] = ability
        return True

    def get_primary_actions(self) -> list[CombatAbility]:
        """Learned Action abilities offered by the primary class."""
        return self._learned_actions_from(self.unit_class)

    def get_secondary_actions(self) -> list[CombatAbility]:
        """Learned Action abilities offered by the secondary class, if any."""
        if self.secondary_class is None:
            return []
        return self._learned_actions_from(self.secondary_class)

    def _learned_actions_from(self, unit_class: UnitClass) -> list[CombatAbility]:
        return [
            ability
            for ability in unit_class.learnable_abilities
            if ability.category is AbilityCategory.ACTION and self.has_ability(ability)
        ]

    # -------------------------------------------------------------------------
    # Ability slots
    # -------------------------------------------------------------------------

    def get_assigned_ability(self, slot: AbilitySlot) -> CombatAbility | None:
        """Get the ability assigned to a slot."""
        return getattr(self, f"{slot.value}_ability")

    def can_assign(self, slot: AbilitySlot, ability: CombatAbility) -> bool:
        """Check whether an ability may be put in a slot.

        The ability must be learned. Its category must match the slot unless
        ``EngineSettings.enforce_slot_categories`` is off.
        """
        if not self.has_ability(ability):
            return False
        if get_settings().engine.enforce_slot_categories and ability.category is not slot.category:
            return False
        return True

    def assign_ability(self, slot: AbilitySlot, ability: CombatAbility | None) -> bool:
        """Assign an ability to a slot, or clear the slot with None.

        Assigning to the passive slot swaps the passive stat modifiers: those
        from the previous passive are removed and the new passive's
        ``stat-permanent``/``stat-bonus`` effects become permanent modifiers.

        Returns:
            False, leaving the unit untouched, if the ability cannot go there.
        """
        if ability is not None and not self.can_assign(slot, ability):
            return False

        if slot is AbilitySlot.PASSIVE:
            if self.passive_ability is not None:
                self.remove_stat_modifiers_by_source(self.passive_ability.id)
            if ability is not None:
                self._apply_passive_modifiers(ability)

        setattr(self, f"{slot.value}_ability", ability)
        return True

    def assign_reaction_ability(self, ability: CombatAbility | None) -> bool:
        """Assign a learned Reaction ability, or clear the slot."""
        return self.assign_ability(AbilitySlot.REACTION, ability)

    def assign_movement_ability(self, ability: CombatAbility | None) -> bool:
        """Assign a learned Movement ability, or clear the slot."""
        return self.assign_ability(AbilitySlot.MOVEMENT, ability)

    def assign_passive_ability(self, ability: CombatAbility | None) -> bool:
        """Assign a learned Passive ability, or clear the slot."""
        return self.assign_ability(AbilitySlot.PASSIVE, ability)

    def _apply_passive_modifiers(self, ability: CombatAbility) -> None:
        for effect in ability.effects:
            if not effect.is_passive_stat_effect:
                continue
            if effect.stat is None:
                logger.warning("Passive stat effect missing stat", ability_id=ability.id)
                continue
            stat = StatType.parse(effect.stat)
            if stat is None:
                logger.warning("Passive stat effect has unknown stat", ability_id=ability.id, stat=effect.stat)
                continue
            self.add_stat_modifier(
                StatModifier(
                    id=f"{ability.id}-{stat.value}",
                    stat=stat,
                    value=effect.value if isinstance(effect.value, int) else 0,
                    source=ability.id,
                    source_name=ability.name,
                    icon=ability.icon,
                )
            )

    # -------------------------------------------------------------------------
    # Stat modifiers
    # -------------------------------------------------------------------------

    def add_stat_modifier(self, modifier: StatModifier) -> None:
        """Attach a buff or debuff."""
        self.stat_modifiers.append(modifier)

    def remove_stat_modifier(self, modifier_id: str) -> StatModifier | None:
        """Remove a modifier by id.

        Returns:
            The removed modifier, or None if no modifier had that id.
        """
        for index, modifier in enumerate(self.stat_modifiers):
            if modifier.id == modifier_id:
                return self.stat_modifiers.pop(index)
        return None

    def remove_stat_modifiers_by_source(self, source: str) -> list[StatModifier]:
        """Remove every modifier created by one ability.

        Returns:
            The removed modifiers.
        """
        removed = [m for m in self.stat_modifiers if m.source == source]
        self.stat_modifiers = [m for m in self.stat_modifiers if m.source != source]
        return removed

    def get_modifiers_for_stat(self, stat: StatType) -> list[StatModifier]:
        """Active modifiers affecting one stat."""
        return [m for m in self.stat_modifiers if m.stat == stat and not m.is_expired]

    def decrement_modifier_durations(self) -> list[StatModifier]:
        """Count one turn off every temporary modifier.

        Called at the end of this unit's turn. Permanent modifiers are left
        alone; modifiers that reach zero are removed, as are any that were
        attached already expired.

        Returns:
            The modifiers removed this turn.
        """
        expired = [m for m in self.stat_modifiers if m.is_expired or m.tick()]
        if expired:
            self.stat_modifiers = [m for m in self.stat_modifiers if not m.is_expired]
            logger.debug("Modifiers expired", unit=self.name, modifier_ids=[m.id for m in expired])
        return expired

    def clear_all_stat_modifiers(self) -> None:
        """Remove every modifier, including passive ones."""
        self.stat_modifiers = []

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        """Build the save record for this unit."""
        from tactics_core.serialization.codec import to_record

        return to_record(self)


class HumanoidUnit(CombatUnit):
    """A character with equipment slots and a per-class experience economy.

    Attributes:
        left_hand: Left hand item.
        right_hand: Right hand item.
        head: Head item.
        body: Body item.
        accessory: Accessory item.
        can_dual_wield: Whether two one-handed weapons may be held at once.
        experience: Earned and spent experience per class.
    """

    kind: Literal[UnitKind.HUMANOID] = UnitKind.HUMANOID

    left_hand: Equipment | None = None
    right_hand: Equipment | None = None
    head: Equipment | None = None
    body: Equipment | None = None
    accessory: Equipment | None = None
    can_dual_wield: bool = False

    experience: ExperienceLedger = Field(default_factory=ExperienceLedger)

    def has_experience_economy(self) -> bool:
        return True

    def has_equipment_slots(self) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Equipment
    # -------------------------------------------------------------------------

    def get_equipment(self, slot: EquipmentSlot) -> Equipment | None:
        """Get the item in a slot."""
        return getattr(self, slot.value)

    def equipped_items(self) -> list[Equipment]:
        return [item for slot in EquipmentSlot if (item := self.get_equipment(slot)) is not None]

    def get_equipped_weapons(self) -> list[Equipment]:
        """Weapons held in the hand slots (0-2 items)."""
        return [item for item in (self.left_hand, self.right_hand) if item is not None and item.is_weapon()]

    def equip(self, slot: EquipmentSlot, equipment: Equipment | None) -> Equipment | None:
        """Put an item in a slot unconditionally.

        No rules are checked; use ``try_equip`` for validated equipping.

        Returns:
            The item previously in the slot, if any.
        """
        previous = self.get_equipment(slot)
        setattr(self, slot.value, equipment)
        return previous

    def unequip(self, slot: EquipmentSlot) -> Equipment | None:
        """Empty a slot and return what was in it."""
        return self.equip(slot, None)

    def try_equip(self, slot: EquipmentSlot, equipment: Equipment | None) -> EquipmentResult:
        """Equip an item only if the equipment rules allow it.

        Passing None empties the slot and always succeeds.

        Returns:
            The outcome; on failure the slot is unchanged.
        """
        from tactics_core.engine.equipment_rules import check_equip, success_result

        if equipment is not None:
            failure = check_equip(self, slot, equipment)
            if failure is not None:
                logger.debug("Equip rejected", unit=self.name, slot=slot.value, reason=failure.reason)
                return failure
        previous = self.equip(slot, equipment)
        return success_result(self.name, equipment, previous)

    def equip_left_hand(self, equipment: Equipment | None) -> Equipment | None:
        return self.equip(EquipmentSlot.LEFT_HAND, equipment)

    def equip_right_hand(self, equipment: Equipment | None) -> Equipment | None:
        return self.equip(EquipmentSlot.RIGHT_HAND, equipment)

    def equip_head(self, equipment: Equipment | None) -> Equipment | None:
        return self.equip(EquipmentSlot.HEAD, equipment)

    def equip_body(self, equipment: Equipment | None) -> Equipment | None:
        return self.equip(EquipmentSlot.BODY, equipment)

    def equip_accessory(self, equipment: Equipment | None) -> Equipment | None:
        return self.equip(EquipmentSlot.ACCESSORY, equipment)

    def unequip_left_hand(self) -> Equipment | None:
        return self.unequip(EquipmentSlot.LEFT_HAND)

    def unequip_right_hand(self) -> Equipment | None:
        return self.unequip(EquipmentSlot.RIGHT_HAND)

    def unequip_head(self) -> Equipment | None:
        return self.unequip(EquipmentSlot.HEAD)

    def unequip_body(self) -> Equipment | None:
        return self.unequip(EquipmentSlot.BODY)

    def unequip_accessory(self) -> Equipment | None:
        return self.unequip(EquipmentSlot.ACCESSORY)

    # -------------------------------------------------------------------------
    # Experience
    # -------------------------------------------------------------------------

    @property
    def total_experience(self) -> int:
        return self.experience.total_experience

    @property
    def class_experience(self) -> dict[str, int]:
        """Copy of class id -> experience earned."""
        return dict(self.experience.class_experience)

    @property
    def class_experience_spent(self) -> dict[str, int]:
        """Copy of class id -> experience spent."""
        return dict(self.experience.class_experience_spent)

    @property
    def unspent_experience(self) -> int:
        """Total experience minus everything spent in any class."""
        return self.experience.unspent_total

    def add_experience(self, amount: int, unit_class: UnitClass | None = None) -> None:
        """Earn experience, optionally attributing it to a class.

        Raises:
            ExperienceError: If amount is negative.
        """
        self.experience.add(amount, unit_class.id if unit_class is not None else None)

    def get_class_experience(self, unit_class: UnitClass) -> int:
        return self.experience.earned(unit_class.id)

    def get_class_experience_spent(self, unit_class: UnitClass) -> int:
        return self.experience.spent(unit_class.id)

    def get_unspent_class_experience(self, unit_class: UnitClass) -> int:
        return self.experience.unspent(unit_class.id)

    def can_afford_ability(self, ability: CombatAbility, unit_class: UnitClass) -> bool:
        """Check whether a class has enough unspent experience for an ability."""
        return self.experience.can_spend(unit_class.id, ability.experience_price)

    def can_use_class(self, unit_class: UnitClass) -> bool:
        """Check a class's unlock requirements against earned experience."""
        return unit_class.meets_requirements(self.experience.class_experience)

    def learn_ability(self, ability: CombatAbility, unit_class: UnitClass | None = None) -> bool:
        """Buy an ability with one class's unspent experience.

        Args:
            ability: The ability to learn.
            unit_class: The class paying for it; defaults to the primary class.

        Returns:
            False, with no change, if the ability is already learned, the
            class does not offer it, or the class cannot afford it.
        """
        source = unit_class if unit_class is not None else self.unit_class
        if self.has_ability(ability):
            return False
        if not source.can_learn(ability):
            logger.debug("Ability not offered by class", ability_id=ability.id, class_id=source.id)
            return False
        if not self.experience.spend(source.id, ability.experience_price):
            return False

        self.learned_abilities[ability.id] = ability
        logger.info(
            "Ability learned",
            unit=self.name,
            ability_id=ability.id,
            class_id=source.id,
            price=ability.experience_price,
        )
        return True

    def forget_ability(self, ability: CombatAbility, unit_class: UnitClass | None = None) -> bool:
        """Forget an ability and refund its price to a class.

        Slots holding the ability are left as they are.

        Args:
            ability: The ability to forget.
            unit_class: The class to refund; defaults to the primary class.

        Returns:
            False if the ability was not learned.
        """
        source = unit_class if unit_class is not None else self.unit_class
        if self.learned_abilities.pop(ability.id, None) is None:
            return False
        self.experience.refund(source.id, ability.experience_price)
        logger.info("Ability forgotten", unit=self.name, ability_id=ability.id, class_id=source.id)
        return True

    @classmethod
    def from_json(cls, record: dict[str, Any], repository: ContentRepository) -> HumanoidUnit | None:
        """Rebuild a unit from a save record.

        Returns:
            The unit, or None if its primary class cannot be resolved.
        """
        from tactics_core.serialization.codec import from_record

        unit = from_record(record, repository)
        if unit is not None and not isinstance(unit, cls):
            return None
        return unit


class MonsterUnit(CombatUnit):
    """An enemy unit with no equipment, secondary class, or experience.

    Monsters learn any ability their class offers for free.
    """

    kind: Literal[UnitKind.MONSTER] = UnitKind.MONSTER
    sprite_id: str = DEFAULT_MONSTER_SPRITE

    @model_validator(mode="after")
    def validate_no_secondary_class(self) -> MonsterUnit:
        """Monsters never carry a secondary class."""
        if self.secondary_class is not None:
            msg = "Monster units cannot have a secondary class"
            raise ValueError(msg)
        return self

    def set_secondary_class(self, unit_class: UnitClass | None) -> None:
        """Monsters have no secondary class; only clearing is allowed.

        Raises:
            ProgressionError: If a class is given.
        """
        if unit_class is not None:
            raise ProgressionError(
                "Monster units cannot have a secondary class",
                details={"unit": self.name, "class_id": unit_class.id},
            )

    def learn_ability(self, ability: CombatAbility, unit_class: UnitClass | None = None) -> bool:
        """Learn an ability offered by the monster's class, at no cost.

        Returns:
            False if already learned or not offered by the class.
        """
        source = unit_class if unit_class is not None else self.unit_class
        if self.has_ability(ability) or not source.can_learn(ability):
            return False
        self.learned_abilities[ability.id] = ability
        return True

    def forget_ability(self, ability: CombatAbility, unit_class: UnitClass | None = None) -> bool:
        """Forget an ability. Returns False if it was not learned."""
        return self.learned_abilities.pop(ability.id, None) is not None


Unit = Annotated[HumanoidUnit | MonsterUnit, Field(discriminator="kind")]
"""Either unit kind, discriminated by ``kind``."""


__all__ = [
    "CombatUnit",
    "HumanoidUnit",
    "MonsterUnit",
    "Unit",
]
