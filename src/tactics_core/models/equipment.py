"""Equipment definitions.

Equipment is content: it is defined once at load time, registered by id in
a ContentRepository, and never mutated. A piece of equipment has no
back-reference to the unit wearing it; ownership is whichever slot
currently references it.
"""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tactics_core.models.enums import EquipmentType
from tactics_core.models.stats import StatDeltas


class Equipment(BaseModel):
    """An immutable item with flat stat deltas and a slot category.

    Attributes:
        id: Unique identifier.
        name: Display name.
        type: Slot category; one- and two-handed weapons are distinct types.
        modifiers: Flat per-stat deltas applied while equipped.
        type_tags: Free-form tags (e.g., 'heavy-armor', 'sword').
        min_range: Minimum attack range in tiles (weapons only).
        max_range: Maximum attack range in tiles (weapons only).
        allowed_classes: Class ids allowed to equip this item. Empty means
            any class.

    Example:
        >>> sword = Equipment(
        ...     name="Iron Sword",
        ...     type=EquipmentType.ONE_HANDED_WEAPON,
        ...     modifiers=StatDeltas(physical_power=4),
        ...     min_range=1, max_range=1,
        ... )
        >>> sword.is_weapon()
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = Field(min_length=1)
    type: EquipmentType
    modifiers: StatDeltas = Field(default_factory=StatDeltas)
    type_tags: frozenset[str] = Field(default_factory=frozenset)
    min_range: int | None = Field(default=None, ge=0)
    max_range: int | None = Field(default=None, ge=0)
    allowed_classes: frozenset[str] = Field(default_factory=frozenset)

    @model_validator(mode="after")
    def validate_range(self) -> Equipment:
        """Ensure a weapon's range bounds are ordered."""
        if self.min_range is not None and self.max_range is not None and self.min_range > self.max_range:
            msg = f"min_range ({self.min_range}) exceeds max_range ({self.max_range})"
            raise ValueError(msg)
        return self

    def is_weapon(self) -> bool:
        """Check whether this item is a one- or two-handed weapon."""
        return self.type.is_weapon

    def has_tag(self, tag: str) -> bool:
        """Check whether this item carries a type tag."""
        return tag in self.type_tags

    def can_be_equipped_by(self, class_id: str) -> bool:
        """Check the item's class restriction.

        Args:
            class_id: Id of the wearer's primary class.

        Returns:
            True if the item is unrestricted or allows that class.
        """
        return not self.allowed_classes or class_id in self.allowed_classes


__all__ = ["Equipment"]
