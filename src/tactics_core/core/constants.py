"""Engine-wide constants for the tactics combat-unit engine."""

from __future__ import annotations

# =============================================================================
# Stat Modifiers
# =============================================================================

PERMANENT_DURATION = -1
"""Modifier duration that never decays."""

PASSIVE_EFFECT_TYPES = frozenset({"stat-permanent", "stat-bonus"})
"""Ability effect types turned into permanent modifiers by a passive slot."""

# =============================================================================
# Units
# =============================================================================

DEFAULT_HUMANOID_SPRITE = "default-humanoid"
"""Sprite id used when a humanoid record carries none."""

DEFAULT_MONSTER_SPRITE = "default-monster"
"""Sprite id used when a monster record carries none."""

# =============================================================================
# Content Files
# =============================================================================

ABILITIES_FILE = "abilities.yaml"
EQUIPMENT_FILE = "equipment.yaml"
CLASSES_FILE = "classes.yaml"


__all__ = [
    "PERMANENT_DURATION",
    "PASSIVE_EFFECT_TYPES",
    "DEFAULT_HUMANOID_SPRITE",
    "DEFAULT_MONSTER_SPRITE",
    "ABILITIES_FILE",
    "EQUIPMENT_FILE",
    "CLASSES_FILE",
]
