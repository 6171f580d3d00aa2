"""Tests for equipment, ability and class definitions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tactics_core.models import (
    AbilityCategory,
    AbilityEffect,
    CombatAbility,
    Equipment,
    EquipmentType,
    UnitClass,
)


class TestEquipment:
    """Tests for Equipment."""

    def test_is_weapon(self, iron_sword: Equipment, broadsword: Equipment, wooden_shield: Equipment) -> None:
        """Both weapon types count as weapons."""
        assert iron_sword.is_weapon()
        assert broadsword.is_weapon()
        assert not wooden_shield.is_weapon()

    def test_generated_id(self) -> None:
        """An id is generated when none is given."""
        item = Equipment(name="Rock", type=EquipmentType.HELD)
        assert item.id

    def test_class_restriction(self, plate_armor: Equipment, iron_sword: Equipment) -> None:
        """Restricted items only allow listed classes."""
        assert plate_armor.can_be_equipped_by("knight")
        assert not plate_armor.can_be_equipped_by("squire")
        assert iron_sword.can_be_equipped_by("squire")

    def test_range_order_validated(self) -> None:
        """min_range may not exceed max_range."""
        with pytest.raises(ValidationError):
            Equipment(name="Odd Bow", type=EquipmentType.TWO_HANDED_WEAPON, min_range=5, max_range=2)

    def test_frozen(self, iron_sword: Equipment) -> None:
        """Equipment is immutable."""
        with pytest.raises(ValidationError):
            iron_sword.name = "Rusty Sword"  # type: ignore[misc]


class TestCombatAbility:
    """Tests for CombatAbility."""

    def test_has_tag(self, power_strike: CombatAbility) -> None:
        """Tags are queried by membership."""
        assert power_strike.has_tag("attack")
        assert not power_strike.has_tag("heal")

    def test_negative_price_rejected(self) -> None:
        """Experience price must be non-negative."""
        with pytest.raises(ValidationError):
            CombatAbility(name="Bad", category=AbilityCategory.ACTION, experience_price=-1)

    def test_unknown_category_rejected(self) -> None:
        """Category must be one of the four kinds."""
        with pytest.raises(ValidationError):
            CombatAbility(name="Bad", category="Ultimate")  # type: ignore[arg-type]

    def test_passive_effect_detection(self, toughness: CombatAbility) -> None:
        """stat-permanent effects are passive stat effects."""
        assert all(effect.is_passive_stat_effect for effect in toughness.effects)
        assert not AbilityEffect(type="heal", value=5).is_passive_stat_effect

    def test_effect_stat_under_params(self) -> None:
        """A stat nested under params is lifted to the effect."""
        effect = AbilityEffect.model_validate({"type": "stat-bonus", "value": 2, "params": {"stat": "speed"}})
        assert effect.stat == "speed"


class TestUnitClass:
    """Tests for UnitClass."""

    def test_can_learn(self, squire: UnitClass, power_strike: CombatAbility, fire: CombatAbility) -> None:
        """Only listed abilities are learnable."""
        assert squire.can_learn(power_strike)
        assert not squire.can_learn(fire)

    def test_self_requirement_rejected(self) -> None:
        """A class cannot require experience in itself."""
        with pytest.raises(ValidationError):
            UnitClass(id="knight", name="Knight", requirements={"knight": 10})

    def test_negative_requirement_rejected(self) -> None:
        """Requirement thresholds are non-negative."""
        with pytest.raises(ValidationError):
            UnitClass(id="knight", name="Knight", requirements={"squire": -10})

    def test_meets_requirements(self, knight: UnitClass) -> None:
        """Requirements compare earned class experience."""
        assert not knight.meets_requirements({})
        assert not knight.meets_requirements({"squire": 99})
        assert knight.meets_requirements({"squire": 100})

    def test_unmet_requirements(self, knight: UnitClass) -> None:
        """Unmet requirements report what is missing."""
        unmet = knight.get_unmet_requirements({"squire": 40})

        assert len(unmet) == 1
        assert unmet[0].class_id == "squire"
        assert unmet[0].required == 100
        assert unmet[0].current == 40
        assert unmet[0].missing == 60

    def test_no_requirements(self, squire: UnitClass) -> None:
        """A class with no requirements is always usable."""
        assert squire.meets_requirements({})
        assert squire.get_unmet_requirements({}) == []

    def test_hashable(self, squire: UnitClass, knight: UnitClass) -> None:
        """Classes hash by id and work as set members."""
        renamed = squire.model_copy(update={"description": "Another squire"})

        assert hash(squire) == hash(renamed)
        assert len({squire, knight, squire.model_copy()}) == 2
        assert knight in {squire: 1, knight: 2}

    def test_can_use_equipment(self, iron_sword: Equipment, wooden_shield: Equipment) -> None:
        """Allowed equipment types must share a tag with the item."""
        duelist = UnitClass(id="duelist", name="Duelist", allowed_equipment_types=frozenset({"sword"}))
        sword = iron_sword.model_copy(update={"type_tags": frozenset({"sword"})})
        shield = wooden_shield.model_copy(update={"type_tags": frozenset({"shield"})})

        assert duelist.can_use_equipment(sword)
        assert not duelist.can_use_equipment(shield)
        assert duelist.can_use_equipment(wooden_shield)

    def test_unrestricted_class_uses_anything(self, squire: UnitClass, wooden_shield: Equipment) -> None:
        """A class without allowed types accepts every item."""
        shield = wooden_shield.model_copy(update={"type_tags": frozenset({"shield"})})
        assert squire.can_use_equipment(shield)

    def test_starter_config_optional(self, squire: UnitClass) -> None:
        """Classes need not define a starter config; unknown keys are rejected."""
        assert squire.starter_config is None
        with pytest.raises(ValidationError):
            UnitClass(id="brawler", name="Brawler", starter_config={"off_hand_id": "club"})
