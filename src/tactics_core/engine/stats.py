"""Effective stat composition.

Every effective stat is derived on read, never cached:

    effective = round_half_up(base * class multiplier) + class grant
                + sum(equipment deltas) + sum(active modifier values)

clamped at zero. ``health`` and ``mana`` are the corresponding maximum minus
accumulated wounds or mana used, also clamped at zero.

The secondary class does not contribute unless
``EngineSettings.secondary_class_blending`` is ``"multiply"``, in which case
its grant is added to the primary grant and its multiplier is applied after
the primary multiplier. Class multipliers scale the base value only; flat
grants are never multiplied. Expired modifiers (duration 0) are ignored.

Example:
    >>> from tactics_core.engine.stats import compute_stat
    >>> compute_stat(unit, StatType.SPEED)
    7
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from tactics_core.core.config import EngineSettings, get_settings
from tactics_core.core.exceptions import ValidationError
from tactics_core.models.enums import StatType


if TYPE_CHECKING:
    from tactics_core.models.units import CombatUnit


class StatBreakdown(BaseModel):
    """Every term that went into one effective stat, for UI display.

    Attributes:
        stat: The stat described.
        base: The unit's base value.
        class_grant: Flat grant from the class(es) counted by the policy.
        multiplier: Combined class multiplier.
        scaled: ``round_half_up(base * multiplier)``; the grant is added after.
        equipment: Sum of equipped item deltas.
        modifiers: Sum of active modifier values.
        total: The effective value after clamping.
    """

    model_config = ConfigDict(frozen=True)

    stat: StatType
    base: int
    class_grant: int
    multiplier: float
    scaled: int
    equipment: int
    modifiers: int
    total: int

    @property
    def unclamped(self) -> int:
        """The effective value before clamping at zero."""
        return self.scaled + self.class_grant + self.equipment + self.modifiers


def round_half_up(value: float) -> int:
    """Round to the nearest integer, rounding halves up.

    Python's built-in ``round`` rounds halves to even; stat math rounds
    ``2.5`` to ``3``.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(2.4)
        2
    """
    return math.floor(value + 0.5)


def coerce_stat(stat: StatType | str) -> StatType:
    """Resolve a stat given by enum member or by name.

    Args:
        stat: A StatType, or a wire / snake-case / base-field name.

    Returns:
        The matching StatType.

    Raises:
        ValidationError: If the name is not a known stat.
    """
    if isinstance(stat, StatType):
        return stat
    parsed = StatType.parse(stat)
    if parsed is None:
        raise ValidationError(
            f"Unknown stat: {stat}",
            field_name="stat",
            invalid_value=stat,
        )
    return parsed


def _resolve_settings(settings: EngineSettings | None) -> EngineSettings:
    return settings if settings is not None else get_settings().engine


def stat_breakdown(
    unit: CombatUnit,
    stat: StatType | str,
    *,
    settings: EngineSettings | None = None,
) -> StatBreakdown:
    """Compute every term of one effective stat.

    Args:
        unit: The unit to inspect.
        stat: The stat to compute.
        settings: Engine policies; defaults to the application settings.

    Returns:
        A StatBreakdown whose ``total`` is the effective stat.
    """
    stat = coerce_stat(stat)
    policy = _resolve_settings(settings)

    base = unit.base_stats.get(stat)
    grant = unit.unit_class.base_stat_grants.get(stat)
    multiplier = unit.unit_class.stat_multipliers.get(stat)

    secondary = unit.secondary_class
    if policy.secondary_class_blending == "multiply" and secondary is not None:
        grant += secondary.base_stat_grants.get(stat)
        multiplier *= secondary.stat_multipliers.get(stat)

    scaled = round_half_up(base * multiplier)
    equipment = sum(item.modifiers.get(stat) for item in unit.equipped_items())
    modifiers = sum(
        modifier.value
        for modifier in unit.stat_modifiers
        if modifier.stat == stat and not modifier.is_expired
    )

    total = scaled + grant + equipment + modifiers
    if policy.clamp_stats_at_zero:
        total = max(0, total)

    return StatBreakdown(
        stat=stat,
        base=base,
        class_grant=grant,
        multiplier=multiplier,
        scaled=scaled,
        equipment=equipment,
        modifiers=modifiers,
        total=total,
    )


def compute_stat(
    unit: CombatUnit,
    stat: StatType | str,
    *,
    settings: EngineSettings | None = None,
) -> int:
    """Compute one effective stat of a unit."""
    return stat_breakdown(unit, stat, settings=settings).total


def compute_all_stats(
    unit: CombatUnit,
    *,
    settings: EngineSettings | None = None,
) -> dict[StatType, int]:
    """Compute all ten effective stats, keyed by StatType."""
    policy = _resolve_settings(settings)
    return {stat: compute_stat(unit, stat, settings=policy) for stat in StatType}


def remaining(maximum: int, used: int) -> int:
    """Current pool value: a maximum minus what has been used, never below 0."""
    return max(0, maximum - used)


__all__ = [
    "StatBreakdown",
    "round_half_up",
    "coerce_stat",
    "stat_breakdown",
    "compute_stat",
    "compute_all_stats",
    "remaining",
]
