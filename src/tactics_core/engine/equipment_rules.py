"""Validation rules for equipping items on a humanoid unit.

``HumanoidUnit.equip_*`` replaces a slot unconditionally. UI callers that
want the game rules enforced go through ``HumanoidUnit.try_equip``, which
asks ``check_equip`` first and reports the outcome as an EquipmentResult.

Rules, checked in order:

1. The item's type must fit the slot (hand items in hands, Head on head...).
2. The item's class restriction must allow the unit's primary class.
3. The primary class's allowed equipment types must include one of the
   item's type tags (untagged items and unrestricted classes always pass).
4. A two-handed weapon in the other hand blocks the slot.
5. A two-handed weapon needs the other hand empty.
6. A second one-handed weapon needs dual wield and a matching range.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from tactics_core.models.enums import EquipmentSlot, EquipmentType
from tactics_core.models.equipment import Equipment


if TYPE_CHECKING:
    from tactics_core.models.units import HumanoidUnit


class EquipmentFailureReason(StrEnum):
    """Machine-readable reason an equip attempt was rejected."""

    SLOT_TYPE_MISMATCH = "slot-type-mismatch"
    CLASS_RESTRICTION = "class-restriction"
    EQUIPMENT_TYPE_RESTRICTION = "equipment-type-restriction"
    TWO_HANDED_BLOCKS_LEFT = "two-handed-blocks-left"
    TWO_HANDED_BLOCKS_RIGHT = "two-handed-blocks-right"
    TWO_HANDED_NEEDS_EMPTY_LEFT = "two-handed-needs-empty-left"
    TWO_HANDED_NEEDS_EMPTY_RIGHT = "two-handed-needs-empty-right"
    CANNOT_DUAL_WIELD = "cannot-dual-wield"
    DUAL_WIELD_RANGE_MISMATCH = "dual-wield-range-mismatch"


class EquipmentResult(BaseModel):
    """Outcome of a validated equip or unequip.

    Attributes:
        success: Whether the slot changed.
        message: User-facing description of the outcome.
        reason: Failure reason, None on success.
        previous: The item that left the slot, if any.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    reason: EquipmentFailureReason | None = None
    previous: Equipment | None = None

    def __bool__(self) -> bool:
        return self.success


_SLOT_TYPES: dict[EquipmentSlot, frozenset[EquipmentType]] = {
    EquipmentSlot.LEFT_HAND: frozenset(t for t in EquipmentType if t.is_hand_item),
    EquipmentSlot.RIGHT_HAND: frozenset(t for t in EquipmentType if t.is_hand_item),
    EquipmentSlot.HEAD: frozenset({EquipmentType.HEAD}),
    EquipmentSlot.BODY: frozenset({EquipmentType.BODY}),
    EquipmentSlot.ACCESSORY: frozenset({EquipmentType.ACCESSORY}),
}


def slot_accepts(slot: EquipmentSlot, equipment_type: EquipmentType) -> bool:
    """Check whether a slot can hold an equipment type."""
    return equipment_type in _SLOT_TYPES[slot]


def _failure(reason: EquipmentFailureReason, message: str) -> EquipmentResult:
    return EquipmentResult(success=False, message=message, reason=reason)


def _format_range(item: Equipment) -> str:
    return f"{item.min_range}-{item.max_range}"


def check_equip(
    unit: HumanoidUnit,
    slot: EquipmentSlot,
    equipment: Equipment,
) -> EquipmentResult | None:
    """Validate putting an item into a slot.

    Args:
        unit: The unit being equipped.
        slot: Target slot.
        equipment: The item to equip.

    Returns:
        A failed EquipmentResult describing the first broken rule, or None
        if the item may be equipped.
    """
    if not slot_accepts(slot, equipment.type):
        return _failure(
            EquipmentFailureReason.SLOT_TYPE_MISMATCH,
            f"Cannot equip {equipment.name} in {slot.label} slot",
        )

    if not equipment.can_be_equipped_by(unit.unit_class.id):
        return _failure(
            EquipmentFailureReason.CLASS_RESTRICTION,
            f"{unit.unit_class.name} cannot equip {equipment.name}",
        )

    if not unit.unit_class.can_use_equipment(equipment):
        return _failure(
            EquipmentFailureReason.EQUIPMENT_TYPE_RESTRICTION,
            f"{unit.unit_class.name} cannot use {equipment.name}",
        )

    if not slot.is_hand:
        return None

    if slot is EquipmentSlot.LEFT_HAND:
        other = unit.right_hand
        blocks, needs_empty = (
            EquipmentFailureReason.TWO_HANDED_BLOCKS_LEFT,
            EquipmentFailureReason.TWO_HANDED_NEEDS_EMPTY_RIGHT,
        )
    else:
        other = unit.left_hand
        blocks, needs_empty = (
            EquipmentFailureReason.TWO_HANDED_BLOCKS_RIGHT,
            EquipmentFailureReason.TWO_HANDED_NEEDS_EMPTY_LEFT,
        )

    if other is not None and other.type is EquipmentType.TWO_HANDED_WEAPON:
        return _failure(blocks, f"Cannot equip {equipment.name}: {other.name} requires both hands")

    if equipment.type is EquipmentType.TWO_HANDED_WEAPON and other is not None:
        return _failure(
            needs_empty,
            f"{equipment.name} requires 2 hands: remove {other.name} first",
        )

    if equipment.type is EquipmentType.ONE_HANDED_WEAPON and other is not None and other.is_weapon():
        if not unit.can_dual_wield:
            return _failure(
                EquipmentFailureReason.CANNOT_DUAL_WIELD,
                f"{unit.name} requires Dual Wield to equip {equipment.name} with {other.name}",
            )
        if (equipment.min_range, equipment.max_range) != (other.min_range, other.max_range):
            return _failure(
                EquipmentFailureReason.DUAL_WIELD_RANGE_MISMATCH,
                f"Dual-wield range mismatch: {equipment.name} ({_format_range(equipment)}) "
                f"vs {other.name} ({_format_range(other)})",
            )

    return None


def success_result(unit_name: str, equipment: Equipment | None, previous: Equipment | None) -> EquipmentResult:
    """Describe a slot change that went through."""
    if equipment is None:
        message = f"{unit_name} removed {previous.name}" if previous else f"{unit_name} unequipped nothing"
    elif previous is not None:
        message = f"{unit_name} equipped {equipment.name}, removed {previous.name}"
    else:
        message = f"{unit_name} equipped {equipment.name}"
    return EquipmentResult(success=True, message=message, previous=previous)


__all__ = [
    "EquipmentFailureReason",
    "EquipmentResult",
    "slot_accepts",
    "check_equip",
    "success_result",
]
