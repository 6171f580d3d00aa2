"""Pydantic V2 schemas for the tactics combat-unit engine.

Content models (classes, abilities, equipment) are frozen and shared by
every unit that references them. Unit models are mutable and own their
modifiers and experience ledger.

Submodules:
    enums: Stat, ability, equipment and unit kind enumerations.
    stats: Fixed-shape per-stat records (deltas, multipliers, base stats).
    modifiers: Timed and permanent stat modifiers.
    equipment: Equipment definitions.
    abilities: Combat ability definitions and their effects.
    classes: Unit class definitions and unlock requirements.
    experience: Per-class experience ledger.
    units: HumanoidUnit and MonsterUnit.

Example:
    >>> from tactics_core.models import HumanoidUnit, UnitClass, BaseStats
    >>> squire = UnitClass(id="squire", name="Squire")
    >>> unit = HumanoidUnit(name="Aria", unit_class=squire, base_stats=BaseStats(speed=6))
    >>> unit.speed
    6
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from tactics_core.models.enums import (
    AbilityCategory,
    AbilitySlot,
    EquipmentSlot,
    EquipmentType,
    StatType,
    UnitKind,
)

# =============================================================================
# Content
# =============================================================================
from tactics_core.models.abilities import AbilityEffect, CombatAbility
from tactics_core.models.classes import StarterConfig, UnitClass, UnmetRequirement
from tactics_core.models.equipment import Equipment
from tactics_core.models.modifiers import StatModifier
from tactics_core.models.stats import BaseStats, StatDeltas, StatMultipliers

# =============================================================================
# Units
# =============================================================================
from tactics_core.models.experience import ExperienceLedger
from tactics_core.models.units import CombatUnit, HumanoidUnit, MonsterUnit, Unit


__all__ = [
    # Enums
    "StatType",
    "AbilityCategory",
    "AbilitySlot",
    "EquipmentType",
    "EquipmentSlot",
    "UnitKind",
    # Stat records
    "StatDeltas",
    "StatMultipliers",
    "StarterConfig",
    "BaseStats",
    "StatModifier",
    # Content
    "Equipment",
    "AbilityEffect",
    "CombatAbility",
    "UnitClass",
    "UnmetRequirement",
    # Units
    "ExperienceLedger",
    "CombatUnit",
    "HumanoidUnit",
    "MonsterUnit",
    "Unit",
]
