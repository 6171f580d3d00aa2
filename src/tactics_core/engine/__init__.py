"""Rules engine: stat composition and equipment validation.

Submodules:
    stats: Effective stat pipeline and per-stat breakdowns.
    equipment_rules: Slot, two-handed and dual-wield rules for try_equip.
"""

from __future__ import annotations

from tactics_core.engine.equipment_rules import (
    EquipmentFailureReason,
    EquipmentResult,
    check_equip,
    slot_accepts,
)
from tactics_core.engine.stats import (
    StatBreakdown,
    compute_all_stats,
    compute_stat,
    round_half_up,
    stat_breakdown,
)


__all__ = [
    "StatBreakdown",
    "round_half_up",
    "stat_breakdown",
    "compute_stat",
    "compute_all_stats",
    "EquipmentFailureReason",
    "EquipmentResult",
    "check_equip",
    "slot_accepts",
]
