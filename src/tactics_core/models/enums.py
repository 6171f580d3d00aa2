"""Enumeration types for the tactics combat-unit engine.

Enum values double as the wire strings used in content files and save
records, so they keep the camelCase / PascalCase spelling of those formats.
"""

from __future__ import annotations

from enum import StrEnum


class StatType(StrEnum):
    """The ten stats a modifier, equipment piece, or class can affect."""

    MAX_HEALTH = "maxHealth"
    MAX_MANA = "maxMana"
    PHYSICAL_POWER = "physicalPower"
    MAGIC_POWER = "magicPower"
    SPEED = "speed"
    MOVEMENT = "movement"
    PHYSICAL_EVADE = "physicalEvade"
    MAGIC_EVADE = "magicEvade"
    COURAGE = "courage"
    ATTUNEMENT = "attunement"

    @property
    def field_name(self) -> str:
        """Snake-case attribute name used on stat records.

        Returns:
            Attribute name (e.g., 'max_health' for MAX_HEALTH).
        """
        return self.name.lower()

    @property
    def base_field(self) -> str:
        """Name of the unit base stat feeding this stat.

        ``maxHealth`` and ``maxMana`` are fed by the ``health`` and ``mana``
        base values; every other stat is fed by the same-named base value.

        Returns:
            Attribute name on BaseStats.
        """
        if self is StatType.MAX_HEALTH:
            return "health"
        if self is StatType.MAX_MANA:
            return "mana"
        return self.field_name

    @classmethod
    def parse(cls, value: str) -> StatType | None:
        """Look up a stat by wire name, snake-case name, or base-stat alias.

        Args:
            value: A string such as 'maxHealth', 'max_health' or 'health'.

        Returns:
            The matching StatType, or None if the name is unknown.
        """
        for stat in cls:
            if value in (stat.value, stat.field_name, stat.base_field):
                return stat
        return None


class AbilityCategory(StrEnum):
    """When and how an ability can be used."""

    ACTION = "Action"
    REACTION = "Reaction"
    MOVEMENT = "Movement"
    PASSIVE = "Passive"


class AbilitySlot(StrEnum):
    """Assignable ability slots and the category each one accepts."""

    REACTION = "reaction"
    MOVEMENT = "movement"
    PASSIVE = "passive"

    @property
    def category(self) -> AbilityCategory:
        """Get the ability category this slot accepts."""
        return AbilityCategory(self.value.capitalize())


class EquipmentType(StrEnum):
    """Equipment slot categories."""

    ONE_HANDED_WEAPON = "OneHandedWeapon"
    TWO_HANDED_WEAPON = "TwoHandedWeapon"
    SHIELD = "Shield"
    HELD = "Held"
    HEAD = "Head"
    BODY = "Body"
    ACCESSORY = "Accessory"

    @property
    def is_weapon(self) -> bool:
        """Check whether this type is a weapon."""
        return self in (EquipmentType.ONE_HANDED_WEAPON, EquipmentType.TWO_HANDED_WEAPON)

    @property
    def is_hand_item(self) -> bool:
        """Check whether this type belongs in a hand slot."""
        return self in (
            EquipmentType.ONE_HANDED_WEAPON,
            EquipmentType.TWO_HANDED_WEAPON,
            EquipmentType.SHIELD,
            EquipmentType.HELD,
        )


class EquipmentSlot(StrEnum):
    """Equipment containers on a humanoid unit."""

    LEFT_HAND = "left_hand"
    RIGHT_HAND = "right_hand"
    HEAD = "head"
    BODY = "body"
    ACCESSORY = "accessory"

    @property
    def is_hand(self) -> bool:
        """Check whether this is one of the two hand slots."""
        return self in (EquipmentSlot.LEFT_HAND, EquipmentSlot.RIGHT_HAND)

    @property
    def label(self) -> str:
        """Human-readable slot name (e.g., 'Left Hand')."""
        return self.value.replace("_", " ").title()


class UnitKind(StrEnum):
    """Discriminator for the unit variants."""

    HUMANOID = "humanoid"
    MONSTER = "monster"


__all__ = [
    "StatType",
    "AbilityCategory",
    "AbilitySlot",
    "EquipmentType",
    "EquipmentSlot",
    "UnitKind",
]
