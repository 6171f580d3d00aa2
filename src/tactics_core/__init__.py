"""Tactics Core - combat-unit progression and stat-resolution engine.

Derives each combat unit's effective stats from base values, class,
equipment and temporary modifiers, and gates ability acquisition behind a
per-class experience economy.

Example:
    >>> from tactics_core import HumanoidUnit, load_default_content
    >>>
    >>> repository = load_default_content()
    >>> squire = repository.classes.get_by_id("squire")
    >>> unit = HumanoidUnit(name="Aria", unit_class=squire)
    >>> unit.add_experience(25, squire)
    >>> unit.learn_ability(repository.abilities.get_by_id("power-strike"), squire)
    True
    >>> record = unit.to_json()

Modules:
    core: Configuration, logging, exceptions and constants.
    models: Pydantic V2 content and unit models.
    engine: Stat composition pipeline and equipment rules.
    content: Content repository and YAML loader.
    serialization: Save-record codec.
"""

from __future__ import annotations

# Core
from tactics_core.core.config import Settings, get_settings
from tactics_core.core.exceptions import TacticsError
from tactics_core.core.logging import configure_logging, get_logger

# Models
from tactics_core.models import (
    AbilityCategory,
    AbilitySlot,
    BaseStats,
    CombatAbility,
    CombatUnit,
    Equipment,
    EquipmentSlot,
    EquipmentType,
    HumanoidUnit,
    MonsterUnit,
    StatDeltas,
    StatModifier,
    StatMultipliers,
    StarterConfig,
    StatType,
    UnitClass,
)

# Engine
from tactics_core.engine import EquipmentResult, StatBreakdown

# Content
from tactics_core.content import ContentLoader, ContentRepository, load_default_content

# Serialization
from tactics_core.serialization import (
    RestoreResult,
    RestoreWarning,
    create_starter_unit,
    dumps,
    from_record,
    loads,
    restore_unit,
    to_record,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "TacticsError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "StatType",
    "AbilityCategory",
    "AbilitySlot",
    "EquipmentType",
    "EquipmentSlot",
    "StatDeltas",
    "StatMultipliers",
    "BaseStats",
    "StatModifier",
    "Equipment",
    "CombatAbility",
    "UnitClass",
    "StarterConfig",
    "CombatUnit",
    "HumanoidUnit",
    "MonsterUnit",
    # Engine
    "StatBreakdown",
    "EquipmentResult",
    # Content
    "ContentRepository",
    "ContentLoader",
    "load_default_content",
    # Serialization
    "RestoreWarning",
    "RestoreResult",
    "to_record",
    "restore_unit",
    "from_record",
    "dumps",
    "loads",
    "create_starter_unit",
]
