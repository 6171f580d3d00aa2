"""Character creation from a class's starter configuration.

A new character is described as a save record built from the class's
StarterConfig and restored through the codec, so starting equipment and
abilities resolve exactly like saved ones: ids that are not in the
repository are dropped and reported as RestoreWarnings.

Only classes without requirements that carry a starter configuration can
start a character.

Example:
    >>> result = create_starter_unit("Aria", "squire", repository)
    >>> result.unit.right_hand.id
    'iron-sword'
"""

from __future__ import annotations

from typing import Any

from tactics_core.content.repository import ContentRepository
from tactics_core.core.constants import DEFAULT_HUMANOID_SPRITE
from tactics_core.core.logging import get_logger
from tactics_core.models.classes import StarterConfig
from tactics_core.models.enums import EquipmentSlot, StatType
from tactics_core.serialization.codec import RestoreResult, RestoreWarning, restore_unit


logger = get_logger(__name__)


def starter_record(
    name: str,
    class_id: str,
    config: StarterConfig,
    *,
    sprite_id: str = DEFAULT_HUMANOID_SPRITE,
) -> dict[str, Any]:
    """Build the save record of a fresh character from a starter config."""
    record: dict[str, Any] = {
        "kind": "humanoid",
        "name": name,
        "unit_class_id": class_id,
        "sprite_id": sprite_id,
        "learned_ability_ids": list(config.learned_ability_ids),
        "reaction_ability_id": config.reaction_ability_id,
        "movement_ability_id": config.movement_ability_id,
        "passive_ability_id": config.passive_ability_id,
        "is_player_controlled": True,
    }
    for stat in StatType:
        record[f"base_{stat.base_field}"] = config.base_stats.get(stat)
    for slot in EquipmentSlot:
        record[f"{slot.value}_id"] = getattr(config, f"{slot.value}_id")
    return record


def create_starter_unit(
    name: str,
    class_id: str,
    repository: ContentRepository,
    *,
    sprite_id: str = DEFAULT_HUMANOID_SPRITE,
    starting_ability_id: str | None = None,
) -> RestoreResult:
    """Create a new player character of a starter class.

    A starting ability, if given, is learned on top of the configured ones
    and paid for with class experience granted for the purpose: the class
    is credited and debited the ability's price, leaving total experience
    at zero.

    Args:
        name: Character name.
        class_id: Primary class id.
        repository: Content to resolve the class and starter ids against.
        sprite_id: Sprite of the new character.
        starting_ability_id: Optional extra ability chosen at creation.

    Returns:
        The new unit with any dropped references. ``unit`` is None if the
        class is unknown, has requirements, or has no starter config.

    Raises:
        SerializationError: If the name is empty.
    """
    unit_class = repository.classes.get_by_id(class_id)
    if unit_class is None:
        logger.error("Cannot create character: class not found", unit=name, class_id=class_id)
        return RestoreResult(unit=None, warnings=[RestoreWarning(field="unitClassId", reference_id=class_id)])

    if unit_class.requirements:
        logger.error("Cannot create character: class has requirements", unit=name, class_id=class_id)
        return RestoreResult(unit=None)

    config = unit_class.starter_config
    if config is None:
        logger.error("Cannot create character: class has no starter config", unit=name, class_id=class_id)
        return RestoreResult(unit=None)

    record = starter_record(name, class_id, config, sprite_id=sprite_id)
    warnings: list[RestoreWarning] = []

    if starting_ability_id is not None:
        ability = repository.abilities.get_by_id(starting_ability_id)
        if ability is None:
            logger.warning("Starting ability not found", unit=name, ability_id=starting_ability_id)
            warnings.append(RestoreWarning(field="startingAbilityId", reference_id=starting_ability_id))
        else:
            if ability.id not in record["learned_ability_ids"]:
                record["learned_ability_ids"].append(ability.id)
            record["class_experience"] = {class_id: ability.experience_price}
            record["class_experience_spent"] = {class_id: ability.experience_price}

    result = restore_unit(record, repository)
    logger.info("Character created", unit=name, class_id=class_id, warnings=len(warnings) + len(result.warnings))
    return RestoreResult(unit=result.unit, warnings=warnings + result.warnings)


__all__ = [
    "starter_record",
    "create_starter_unit",
]
