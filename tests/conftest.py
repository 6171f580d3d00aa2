"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the tactics_core test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tactics_core.content.repository import ContentRepository
from tactics_core.models import (
    AbilityCategory,
    AbilityEffect,
    BaseStats,
    CombatAbility,
    Equipment,
    EquipmentType,
    HumanoidUnit,
    MonsterUnit,
    StatDeltas,
    StatMultipliers,
    UnitClass,
)


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset the settings cache and strip engine env vars around each test."""
    import os

    from tactics_core.core.config import clear_settings_cache

    for key in list(os.environ):
        if key.startswith("TACTICS_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "TACTICS_DEBUG": "true",
        "TACTICS_LOG_LEVEL": "DEBUG",
        "TACTICS_ENGINE_SECONDARY_CLASS_BLENDING": "multiply",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Ability Fixtures
# =============================================================================


@pytest.fixture
def power_strike() -> CombatAbility:
    """A 20-cost Action ability."""
    return CombatAbility(
        id="power-strike",
        name="Power Strike",
        category=AbilityCategory.ACTION,
        experience_price=20,
        tags=frozenset({"attack", "physical"}),
    )


@pytest.fixture
def focus() -> CombatAbility:
    """A 15-cost Action ability."""
    return CombatAbility(
        id="focus",
        name="Focus",
        category=AbilityCategory.ACTION,
        experience_price=15,
        tags=frozenset({"buff"}),
    )


@pytest.fixture
def counter() -> CombatAbility:
    """A 30-cost Reaction ability."""
    return CombatAbility(
        id="counter",
        name="Counter",
        category=AbilityCategory.REACTION,
        experience_price=30,
    )


@pytest.fixture
def move_plus_one() -> CombatAbility:
    """A 40-cost Movement ability."""
    return CombatAbility(
        id="move-plus-one",
        name="Move +1",
        category=AbilityCategory.MOVEMENT,
        experience_price=40,
    )


@pytest.fixture
def toughness() -> CombatAbility:
    """A Passive ability granting +10 maxHealth and +1 physicalEvade."""
    return CombatAbility(
        id="toughness",
        name="Toughness",
        category=AbilityCategory.PASSIVE,
        experience_price=50,
        icon="icon-toughness",
        effects=(
            AbilityEffect(type="stat-permanent", value=10, stat="maxHealth"),
            AbilityEffect(type="stat-permanent", value=1, stat="physicalEvade"),
        ),
    )


@pytest.fixture
def fire() -> CombatAbility:
    """A 25-cost Action ability offered by the apprentice class."""
    return CombatAbility(
        id="fire",
        name="Fire",
        category=AbilityCategory.ACTION,
        experience_price=25,
        tags=frozenset({"attack", "magic"}),
    )


# =============================================================================
# Class Fixtures
# =============================================================================


@pytest.fixture
def squire(
    power_strike: CombatAbility,
    focus: CombatAbility,
    counter: CombatAbility,
    move_plus_one: CombatAbility,
    toughness: CombatAbility,
) -> UnitClass:
    """Starter physical class: +10 health, +2 physicalPower, maxHealth x1.1."""
    return UnitClass(
        id="squire",
        name="Squire",
        learnable_abilities=(power_strike, focus, counter, move_plus_one, toughness),
        base_stat_grants=StatDeltas(health=10, physical_power=2),
        stat_multipliers=StatMultipliers(max_health=1.1),
    )


@pytest.fixture
def apprentice(fire: CombatAbility) -> UnitClass:
    """Starter magic class: +15 mana, maxMana x1.2."""
    return UnitClass(
        id="apprentice",
        name="Apprentice",
        learnable_abilities=(fire,),
        base_stat_grants=StatDeltas(mana=15),
        stat_multipliers=StatMultipliers(max_mana=1.2),
    )


@pytest.fixture
def knight(power_strike: CombatAbility) -> UnitClass:
    """Advanced class requiring 100 squire experience."""
    return UnitClass(
        id="knight",
        name="Knight",
        learnable_abilities=(power_strike,),
        base_stat_grants=StatDeltas(health=25),
        requirements={"squire": 100},
    )


# =============================================================================
# Equipment Fixtures
# =============================================================================


@pytest.fixture
def iron_sword() -> Equipment:
    """One-handed melee weapon, +4 physicalPower."""
    return Equipment(
        id="iron-sword",
        name="Iron Sword",
        type=EquipmentType.ONE_HANDED_WEAPON,
        modifiers=StatDeltas(physical_power=4),
        min_range=1,
        max_range=1,
    )


@pytest.fixture
def dagger() -> Equipment:
    """One-handed melee weapon, +2 physicalPower, +1 speed."""
    return Equipment(
        id="dagger",
        name="Dagger",
        type=EquipmentType.ONE_HANDED_WEAPON,
        modifiers=StatDeltas(physical_power=2, speed=1),
        min_range=1,
        max_range=1,
    )


@pytest.fixture
def throwing_knife() -> Equipment:
    """One-handed ranged weapon, range 2-4."""
    return Equipment(
        id="throwing-knife",
        name="Throwing Knife",
        type=EquipmentType.ONE_HANDED_WEAPON,
        modifiers=StatDeltas(physical_power=1),
        min_range=2,
        max_range=4,
    )


@pytest.fixture
def broadsword() -> Equipment:
    """Two-handed weapon, +8 physicalPower, -1 speed."""
    return Equipment(
        id="broadsword",
        name="Broadsword",
        type=EquipmentType.TWO_HANDED_WEAPON,
        modifiers=StatDeltas(physical_power=8, speed=-1),
        min_range=1,
        max_range=1,
    )


@pytest.fixture
def wooden_shield() -> Equipment:
    """Shield, +5 physicalEvade."""
    return Equipment(
        id="wooden-shield",
        name="Wooden Shield",
        type=EquipmentType.SHIELD,
        modifiers=StatDeltas(physical_evade=5),
    )


@pytest.fixture
def leather_cap() -> Equipment:
    """Head item, +5 maxHealth."""
    return Equipment(
        id="leather-cap",
        name="Leather Cap",
        type=EquipmentType.HEAD,
        modifiers=StatDeltas(max_health=5),
    )


@pytest.fixture
def plate_armor() -> Equipment:
    """Knight-only body armor, +30 maxHealth, -2 speed."""
    return Equipment(
        id="plate-armor",
        name="Plate Armor",
        type=EquipmentType.BODY,
        modifiers=StatDeltas(max_health=30, speed=-2),
        allowed_classes=frozenset({"knight"}),
    )


@pytest.fixture
def swift_ring() -> Equipment:
    """Accessory, +1 speed."""
    return Equipment(
        id="swift-ring",
        name="Swift Ring",
        type=EquipmentType.ACCESSORY,
        modifiers=StatDeltas(speed=1),
    )


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def repository(
    power_strike: CombatAbility,
    focus: CombatAbility,
    counter: CombatAbility,
    move_plus_one: CombatAbility,
    toughness: CombatAbility,
    fire: CombatAbility,
    squire: UnitClass,
    apprentice: UnitClass,
    knight: UnitClass,
    iron_sword: Equipment,
    dagger: Equipment,
    broadsword: Equipment,
    wooden_shield: Equipment,
    leather_cap: Equipment,
    plate_armor: Equipment,
    swift_ring: Equipment,
) -> ContentRepository:
    """Create a ContentRepository holding every fixture definition.

    Returns:
        A populated repository.
    """
    repo = ContentRepository()
    for ability in (power_strike, focus, counter, move_plus_one, toughness, fire):
        repo.abilities.register(ability)
    for unit_class in (squire, apprentice, knight):
        repo.classes.register(unit_class)
    for item in (iron_sword, dagger, broadsword, wooden_shield, leather_cap, plate_armor, swift_ring):
        repo.equipment.register(item)
    return repo


# =============================================================================
# Unit Fixtures
# =============================================================================


@pytest.fixture
def sample_base_stats() -> BaseStats:
    """Provide sample base stats.

    Returns:
        BaseStats with distinct values per stat.
    """
    return BaseStats(
        health=30,
        mana=10,
        physical_power=5,
        magic_power=3,
        speed=6,
        movement=4,
        physical_evade=5,
        magic_evade=3,
        courage=50,
        attunement=40,
    )


@pytest.fixture
def sample_unit(squire: UnitClass, sample_base_stats: BaseStats) -> HumanoidUnit:
    """Create a squire with no experience, equipment, or abilities.

    Effective stats: maxHealth 43, maxMana 10, physicalPower 7, speed 6.
    """
    return HumanoidUnit(name="Aria", unit_class=squire, base_stats=sample_base_stats)


@pytest.fixture
def sample_monster(squire: UnitClass, sample_base_stats: BaseStats) -> MonsterUnit:
    """Create a monster sharing the squire class."""
    return MonsterUnit(name="Goblin", unit_class=squire, base_stats=sample_base_stats)
